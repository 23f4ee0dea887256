"""Exception hierarchy for configuration composition."""

from __future__ import annotations

from pathlib import Path
from typing import Union


class ConfigurantError(Exception):
    """Base class for every error raised while composing configuration."""


class ConfigPathNotFoundError(ConfigurantError, FileNotFoundError):
    """The file source was requested but the config directory does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"config path {self.path} not found")

    def __str__(self) -> str:
        return f"config path {self.path} not found"


class FileSystemError(ConfigurantError, OSError):
    """Listing the config directory or reading a config file failed."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = str(path)
        self.reason = reason
        super().__init__(self._message())

    def _message(self) -> str:
        if self.reason:
            return f"cannot read {self.path}: {self.reason}"
        return f"cannot read {self.path}"

    def __str__(self) -> str:
        return self._message()


class ConfigParseError(ConfigurantError, ValueError):
    """A config file's content could not be interpreted as a mapping."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"cannot parse {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownSourceError(ConfigurantError, LookupError):
    """A requested source name has no registered provider."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown config source {name!r}")
