"""Built-in configuration sources.

This package contains the sources a session can compose: a directory of
config files (json, yaml, ini, py), the process environment and the
command-line arguments.
"""

from .argv import ArgvSource, parse_argv
from .environ import EnvSource
from .file import FileSource

__all__ = [
    "ArgvSource",
    "EnvSource",
    "FileSource",
    "parse_argv",
]
