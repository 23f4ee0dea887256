"""Configurant - compose application configuration from ordered sources.

Config files, environment variables and command-line arguments are loaded
in order and deep-merged into one nested dictionary, later sources winning.

    >>> import configurant
    >>> config = configurant.compose(path="./config", sources=["file", "env"])
"""

from typing import Any, Mapping, Optional, Union

from .core.errors import (
    ConfigParseError,
    ConfigPathNotFoundError,
    ConfigurantError,
    FileSystemError,
    UnknownSourceError,
)
from .core.keys import expand_key, is_namespaced
from .core.merge import deep_merge
from .core.session import Session
from .core.source import Source, SourceRegistry
from .core.types import DEFAULT_OPTIONS, ConfigDict, Options, SourceKind
from .sources import ArgvSource, EnvSource, FileSource

_session = Session()


def compose(
    options: Union[Options, Mapping[str, Any], None] = None, **overrides: Any
) -> ConfigDict:
    """Compose configuration with the module-level session."""
    return _session.compose(options, **overrides)


def get_options() -> Options:
    return _session.get_options()


def get_config() -> Optional[ConfigDict]:
    return _session.config


def reset() -> None:
    _session.reset()


def add_source(name: str, source: Optional[Source] = None) -> None:
    _session.add_source(name, source)


__all__ = [
    "ArgvSource",
    "ConfigDict",
    "ConfigParseError",
    "ConfigPathNotFoundError",
    "ConfigurantError",
    "DEFAULT_OPTIONS",
    "EnvSource",
    "FileSource",
    "FileSystemError",
    "Options",
    "Session",
    "Source",
    "SourceKind",
    "SourceRegistry",
    "UnknownSourceError",
    "add_source",
    "compose",
    "deep_merge",
    "expand_key",
    "get_config",
    "get_options",
    "is_namespaced",
    "reset",
]
