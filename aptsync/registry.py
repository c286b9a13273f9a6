import logging
import uuid
from typing import Iterable

from .models import AptSource

logger = logging.getLogger(__name__)

def derive_repo_uris(sources: Iterable[AptSource]) -> list[str]:
    """
    Returns one repository URI per (source, component), in source order then component order.
    URI format: <source uri>/dists/<suite>/<component>
    """
    return [
        f"{source.uri}/dists/{source.suite}/{component}"
        for source in sources
        for component in source.components
    ]


class SourceRegistry:
    """
    Insertion-ordered collection of AptSource entries.
    Repository URIs are derived from the current entries on every read, never cached.
    """

    def __init__(self, sources: Iterable[AptSource] = ()):
        self._sources: list[AptSource] = list(sources)

    def add(self, source: AptSource) -> None:
        self._sources.append(source)

    def add_all(self, sources: Iterable[AptSource]) -> None:
        self._sources.extend(sources)

    def remove(self, source: AptSource) -> None:
        """Removes the first entry that is `source` itself. Does nothing if it is absent."""
        for i, existing in enumerate(self._sources):
            if existing is source:
                del self._sources[i]
                return
        logger.debug(f"Source {source.id} not in registry, nothing removed")

    def remove_by_id(self, source_id: uuid.UUID) -> None:
        """Removes the first entry with the given id. Does nothing if there is none."""
        for i, existing in enumerate(self._sources):
            if existing.id == source_id:
                del self._sources[i]
                return
        logger.debug(f"No source with id {source_id} in registry, nothing removed")

    def regenerate_uris(self) -> list[str]:
        return derive_repo_uris(self._sources)

    @property
    def repo_uris(self) -> list[str]:
        return derive_repo_uris(self._sources)

    @property
    def sources(self) -> list[AptSource]:
        return list(self._sources)

    def __len__(self):
        return len(self._sources)

    def __iter__(self):
        return iter(list(self._sources))
