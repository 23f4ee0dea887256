from .errors import (
    ConfigParseError,
    ConfigPathNotFoundError,
    ConfigurantError,
    FileSystemError,
    UnknownSourceError,
)
from .keys import expand_key, expand_namespaced, is_namespaced
from .merge import deep_merge
from .session import Session
from .source import Source, SourceRegistry, default_registry
from .types import DEFAULT_OPTIONS, ConfigDict, Options, SourceKind

__all__ = [
    "ConfigDict",
    "ConfigParseError",
    "ConfigPathNotFoundError",
    "ConfigurantError",
    "DEFAULT_OPTIONS",
    "FileSystemError",
    "Options",
    "Session",
    "Source",
    "SourceKind",
    "SourceRegistry",
    "UnknownSourceError",
    "deep_merge",
    "default_registry",
    "expand_key",
    "expand_namespaced",
    "is_namespaced",
]
