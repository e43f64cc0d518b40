"""Explicit registry of content sources, with entry-point discovery."""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from content_source.errors import ContentSourceNotFoundError, DuplicateContentSourceError
from content_source.matchers import PatternUrlMatcher
from content_source.source import ContentSource

if TYPE_CHECKING:
    from content_source.config.models import ContentSourcesConfig

logger = logging.getLogger(__name__)


class ContentSourceRegistry:
    """Content sources keyed by id.

    Owned by whoever wires the host application together and passed to the
    components that need to look sources up.
    """

    # Entry point group; each entry point is a zero-arg factory returning a ContentSource
    GROUP = "content_source.sources"

    def __init__(self) -> None:
        self._sources: dict[str, ContentSource] = {}

    @classmethod
    def from_config(cls, config: ContentSourcesConfig) -> ContentSourceRegistry:
        """Build pattern-matched sources for every source in ``config``."""
        registry = cls()
        for sc in config.sources:
            matcher = PatternUrlMatcher(
                sc.base_urls,
                [(rule.pattern, rule.content_type) for rule in sc.rules],
            )
            registry.register(
                ContentSource(
                    sc.id,
                    matcher,
                    entity_types=sc.entity_types,
                    capabilities=sc.capabilities,
                )
            )
        return registry

    def register(self, source: ContentSource, *, replace: bool = False) -> None:
        if source.id in self._sources and not replace:
            raise DuplicateContentSourceError(source.id)
        self._sources[source.id] = source
        logger.debug("Registered content source %s", source.id)

    def unregister(self, source_id: str) -> None:
        if self._sources.pop(source_id, None) is not None:
            logger.debug("Unregistered content source %s", source_id)

    def get(self, source_id: str) -> ContentSource:
        try:
            return self._sources[source_id]
        except KeyError:
            raise ContentSourceNotFoundError(source_id) from None

    def ids(self) -> list[str]:
        return list(self._sources)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._sources

    def __iter__(self) -> Iterator[ContentSource]:
        return iter(list(self._sources.values()))

    def __len__(self) -> int:
        return len(self._sources)

    # -- Entry points -----------------------------------------------------------

    def discover(self) -> list[str]:
        """Names of source factories installed under the entry point group."""
        return [ep.name for ep in importlib.metadata.entry_points(group=self.GROUP)]

    def load(self, name: str, *, replace: bool = False) -> ContentSource:
        """Load the named factory, build its source, and register it."""
        for ep in importlib.metadata.entry_points(group=self.GROUP):
            if ep.name == name:
                factory = ep.load()
                source = factory()
                self.register(source, replace=replace)
                return source
        raise ContentSourceNotFoundError(name)
