"""Type definitions for the configurant composition system."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

ConfigDict = Dict[str, Any]


class SourceKind(str, Enum):
    """Names of the built-in configuration sources."""

    FILE = "file"
    ENV = "env"
    ARGV = "argv"

    def __str__(self) -> str:
        return self.value


def _source_names(sources: Union[str, Iterable[Any]]) -> Tuple[str, ...]:
    if isinstance(sources, SourceKind):
        return (sources.value,)
    if isinstance(sources, str):
        return (sources,)
    return tuple(s.value if isinstance(s, SourceKind) else str(s) for s in sources)


@dataclass(frozen=True)
class Options:
    """Options controlling a single composition run.

    Attributes:
        env: Environment name; selects the ``<path>/<env>/`` override files.
        path: Directory holding the configuration files.
        namespace: Nest each file's values under its filename stem.
        sources: Source names, lowest precedence first.
    """

    env: Optional[str] = None
    path: str = "./config"
    namespace: bool = False
    sources: Tuple[str, ...] = field(default=(SourceKind.FILE.value,))

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "sources", _source_names(self.sources))
        object.__setattr__(self, "path", str(self.path))
        object.__setattr__(self, "namespace", bool(self.namespace))

    def with_overrides(
        self, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> "Options":
        """Return a copy with the given fields replaced.

        Raises:
            TypeError: If an override names an unknown option.
        """
        changes: Dict[str, Any] = dict(overrides or {})
        changes.update(kwargs)
        return replace(self, **changes)

    def resolved(self) -> "Options":
        """Return a copy whose ``path`` is absolute, relative to the cwd."""
        path = Path(self.path).expanduser()
        if not path.is_absolute():
            path = Path(os.getcwd()) / path
        return replace(self, path=os.path.normpath(str(path)))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "env": self.env,
            "path": self.path,
            "namespace": self.namespace,
            "sources": list(self.sources),
        }


DEFAULT_OPTIONS = Options()
