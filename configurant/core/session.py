"""Composition of configuration sources into one configuration."""

from __future__ import annotations

import logging
import os
import threading
from copy import deepcopy
from typing import Any, List, Mapping, Optional, Union

from .errors import ConfigPathNotFoundError
from .merge import deep_merge
from .source import Source, SourceRegistry, default_registry
from .types import DEFAULT_OPTIONS, ConfigDict, Options, SourceKind

logger = logging.getLogger(__name__)


class Session:
    """Hold the options and the composed configuration of one application.

    A session composes its configured sources in order, caches the result
    and can be reset to the default options. Calls on one session are
    serialised, so a single composition is in effect at any time.
    """

    def __init__(self, registry: Optional[SourceRegistry] = None):
        """Initialize a Session.

        Args:
            registry: Sources available to this session. Defaults to the
                built-in file, env and argv sources.
        """
        self.registry = registry if registry is not None else default_registry()
        self._options: Options = DEFAULT_OPTIONS
        self._config: Optional[ConfigDict] = None
        self._lock = threading.RLock()

    @property
    def config(self) -> Optional[ConfigDict]:
        """The last composed configuration, or None before (or after a failed) run."""
        with self._lock:
            return deepcopy(self._config) if self._config is not None else None

    def get_options(self) -> Options:
        """Return the options used by the last composition."""
        return self._options

    def build_options(
        self,
        options: Union[Options, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> Options:
        """Apply ``options`` and ``overrides`` to the defaults and resolve the path.

        Raises:
            TypeError: If an unknown option name is given.
        """
        if isinstance(options, Options):
            base = options.with_overrides(overrides)
        else:
            base = DEFAULT_OPTIONS.with_overrides(options, **overrides)
        return base.resolved()

    def compose(
        self,
        options: Union[Options, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> ConfigDict:
        """Compose the configured sources into one configuration.

        Sources are loaded in the order of ``sources``; later sources override
        earlier ones wherever keys collide.

        Args:
            options: An ``Options`` instance or a mapping of option fields.
            **overrides: Option fields taking precedence over ``options``.

        Returns:
            The composed configuration.

        Raises:
            ConfigPathNotFoundError: If the file source is requested and the
                config path does not exist.
            UnknownSourceError: If a source name is not registered.
            FileSystemError: If a config file or directory cannot be read.
            ConfigParseError: If a config file cannot be parsed.
        """
        with self._lock:
            self._config = None
            self._options = self.build_options(options, **overrides)
            logger.debug("Composing configuration with %s", self._options.as_dict())

            sources = self.registry.resolve(list(self._options.sources))
            self._check_path()
            fragments = self._load_sources(sources)

            self._config = deep_merge(*fragments)
            return deepcopy(self._config)

    def _check_path(self) -> None:
        opts = self._options
        if SourceKind.FILE.value in opts.sources and not os.path.exists(opts.path):
            raise ConfigPathNotFoundError(opts.path)

    def _load_sources(self, sources: List[Source]) -> List[ConfigDict]:
        fragments: List[ConfigDict] = []
        for name, source in zip(self._options.sources, sources):
            fragment = source.load(self._options)
            logger.debug("Loaded %d top-level keys from source %r", len(fragment), name)
            fragments.append(fragment)
        return fragments

    def reset(self) -> None:
        """Forget the composed configuration and restore the default options."""
        with self._lock:
            self._config = None
            self._options = DEFAULT_OPTIONS

    def add_source(self, name: str, source: Optional[Source] = None) -> None:
        """Register a custom source.

        Custom sources are not supported yet; the call is accepted and ignored.
        """
        logger.debug("Ignoring custom config source %r; custom sources are not supported", name)
