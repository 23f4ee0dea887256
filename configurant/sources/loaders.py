"""Parsers turning a single configuration file into a mapping."""

from __future__ import annotations

import configparser
import copy
import json
import runpy
from pathlib import Path
from types import BuiltinFunctionType, FunctionType, ModuleType
from typing import Any, Callable, Dict

import yaml

from ..core.errors import ConfigParseError, FileSystemError
from ..core.types import ConfigDict


def _read_text(path: Path) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise FileSystemError(path, e.strerror or str(e)) from e


def load_json(path: Path) -> Any:
    text = _read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(path, str(e)) from e


def load_yaml(path: Path) -> Any:
    text = _read_text(path)
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(path, str(e)) from e


def load_ini(path: Path) -> ConfigDict:
    """Read an INI file; each section becomes a nested mapping of strings."""
    text = _read_text(path)
    parser = configparser.ConfigParser(interpolation=None)
    data: ConfigDict = {}
    try:
        parser.read_string(text, source=str(path))
        for section in parser.sections():
            data[section] = dict(parser.items(section))
    except configparser.Error as e:
        raise ConfigParseError(path, str(e)) from e
    return data


def load_python(path: Path) -> ConfigDict:
    """Execute a Python config file and collect its public top-level values.

    Names starting with an underscore, imported modules, functions and
    classes are left out. Values must be copyable, since composition
    copies every value it merges.
    """
    if not path.is_file():
        raise FileSystemError(path, "not a regular file")
    try:
        namespace = runpy.run_path(str(path))
    except OSError as e:
        raise FileSystemError(path, e.strerror or str(e)) from e
    except Exception as e:
        raise ConfigParseError(path, f"{type(e).__name__}: {e}") from e
    data = {
        name: value
        for name, value in namespace.items()
        if not name.startswith("_")
        and not isinstance(value, (ModuleType, FunctionType, BuiltinFunctionType, type))
    }
    try:
        return copy.deepcopy(data)
    except (TypeError, copy.Error) as e:
        raise ConfigParseError(path, f"value cannot be copied: {e}") from e


LOADERS: Dict[str, Callable[[Path], Any]] = {
    ".json": load_json,
    ".yaml": load_yaml,
    ".yml": load_yaml,
    ".ini": load_ini,
    ".py": load_python,
}


def is_config_file(path: Path) -> bool:
    return path.suffix.lower() in LOADERS


def load_file(path: Path) -> ConfigDict:
    """Load ``path`` with the parser matching its extension.

    Raises:
        FileSystemError: If the file cannot be read.
        ConfigParseError: If the content is not a mapping.
    """
    loader = LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ConfigParseError(path, f"unsupported extension {path.suffix!r}")
    data = loader(path)
    if not isinstance(data, dict):
        raise ConfigParseError(
            path, f"expected a mapping at top level, got {type(data).__name__}"
        )
    return data
