"""Source protocol and registry for configuration sources."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Protocol, Union

from .errors import UnknownSourceError
from .types import ConfigDict, Options, SourceKind

logger = logging.getLogger(__name__)


class Source(Protocol):
    """Protocol every configuration source implements.

    A source produces one partial configuration for a composition run. It
    receives the resolved options of that run and must not keep state that
    changes the result of a later run.
    """

    name: str

    def load(self, options: Options) -> ConfigDict:
        """Load this source's configuration.

        Args:
            options: Resolved options of the current composition.

        Returns:
            A nested configuration dictionary.
        """
        ...


class SourceRegistry:
    """Mapping from source names to source instances."""

    def __init__(self, sources: Optional[Mapping[str, Source]] = None):
        self._sources: Dict[str, Source] = {}
        for name, source in (sources or {}).items():
            self.register(name, source)

    def register(self, name: Union[str, SourceKind], source: Source) -> None:
        key = str(name)
        logger.debug("Registering config source %r", key)
        self._sources[key] = source

    def get(self, name: Union[str, SourceKind]) -> Source:
        """Return the source registered under ``name``.

        Raises:
            UnknownSourceError: If nothing is registered under that name.
        """
        try:
            return self._sources[str(name)]
        except KeyError:
            raise UnknownSourceError(str(name)) from None

    def resolve(self, names: List[str]) -> List[Source]:
        """Look up every name up front so an unknown name fails before loading."""
        return [self.get(name) for name in names]

    def names(self) -> List[str]:
        return list(self._sources)

    def __contains__(self, name: object) -> bool:
        return str(name) in self._sources

    def __iter__(self) -> Iterator[str]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)


def default_registry() -> SourceRegistry:
    """Build a registry holding the built-in file, env and argv sources."""
    from ..sources.argv import ArgvSource
    from ..sources.environ import EnvSource
    from ..sources.file import FileSource

    return SourceRegistry(
        {
            SourceKind.FILE.value: FileSource(),
            SourceKind.ENV.value: EnvSource(),
            SourceKind.ARGV.value: ArgvSource(),
        }
    )
