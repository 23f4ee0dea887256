"""Configuration source reading the process environment."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from ..core.keys import expand_namespaced
from ..core.types import ConfigDict, Options

logger = logging.getLogger(__name__)


class EnvSource:
    """Expose environment variables as configuration.

    Values are kept as strings. A variable name containing a dot, such as
    ``db.host``, is nested into ``{"db": {"host": ...}}``.
    """

    name = "env"

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """Initialize EnvSource.

        Args:
            environ: Mapping to read instead of ``os.environ``.
        """
        self._environ = environ

    def snapshot(self) -> ConfigDict:
        environ = os.environ if self._environ is None else self._environ
        return dict(environ)

    def load(self, options: Options) -> ConfigDict:
        flat = self.snapshot()
        logger.debug("Read %d environment variables", len(flat))
        return expand_namespaced(flat)
