"""Configuration source reading a directory of config files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..core.errors import FileSystemError
from ..core.merge import deep_merge
from ..core.types import ConfigDict, Options
from .loaders import is_config_file, load_file

logger = logging.getLogger(__name__)


class FileSource:
    """Load every recognised config file directly inside ``options.path``.

    Files are read in filename order. When ``options.env`` is set, a file of
    the same name inside ``<path>/<env>/`` is merged over the base file. With
    ``options.namespace`` each file's values are nested under its stem, so
    ``db.json`` contributes ``{"db": {...}}``.
    """

    name = "file"

    def list_files(self, directory: Path) -> List[Path]:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise FileSystemError(directory, e.strerror or str(e)) from e
        return [p for p in entries if is_config_file(p) and p.is_file()]

    def read_file(self, path: Path, options: Options) -> ConfigDict:
        logger.debug("Reading config file %s", path)
        fragment = load_file(path)

        if options.env:
            env_file = path.parent / options.env / path.name
            if env_file.is_file():
                logger.debug("Merging %s overrides from %s", options.env, env_file)
                fragment = deep_merge(fragment, load_file(env_file))

        if options.namespace:
            fragment = {path.stem: fragment}
        return fragment

    def load(self, options: Options) -> ConfigDict:
        directory = Path(options.path)
        fragments = [self.read_file(p, options) for p in self.list_files(directory)]
        return deep_merge(*fragments)
