"""ContentSource: the shared, read-only half of a content source backend."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from content_source.errors import EntityTypeNotConfiguredError
from content_source.interfaces.matcher import UrlMatcher
from content_source.links import LinkRewriter, get_content_path, get_rendered_title
from content_source.models import (
    DEFAULT_CAPABILITIES,
    DEFAULT_ENTITY_TYPES,
    ContentRef,
    ContentType,
    Intent,
)
from content_source.utils import build_in_placeholders, parse_json_int_array

logger = logging.getLogger(__name__)


class ContentSource:
    """Link rewriting, rendering, and lookup tables for one content source.

    Built once with its URL matcher injected; read-only afterwards. Concrete
    backends hold one of these next to their :class:`ContentBackend`
    implementation.
    """

    def __init__(
        self,
        id: str,
        matcher: UrlMatcher,
        *,
        entity_types: Mapping[str, str | None] | None = None,
        capabilities: Mapping[str, Mapping[str, str | None]] | None = None,
    ) -> None:
        if not id:
            raise ValueError("Content source id cannot be empty")
        self.id = id
        self.matcher = matcher
        self._rewriter = LinkRewriter(matcher)
        self._entity_types = _merge_entity_types(entity_types or {})
        self._capabilities = _merge_capabilities(capabilities or {})

    def __repr__(self) -> str:
        return f"ContentSource(id={self.id!r})"

    # -- Lookup tables ----------------------------------------------------------

    def get_entity_types(self) -> Mapping[ContentType, str | None]:
        return self._entity_types

    def get_entity_type(self, content_type: ContentType | str) -> str:
        """Backend entity type for ``content_type``.

        Raises EntityTypeNotConfiguredError if the type is unknown or its
        entity type is missing or empty.
        """
        try:
            key = ContentType(content_type)
        except ValueError:
            raise EntityTypeNotConfiguredError(content_type) from None
        value = self._entity_types.get(key)
        if not isinstance(value, str) or value == "":
            raise EntityTypeNotConfiguredError(content_type)
        return value

    def get_capabilities(self) -> Mapping[ContentType, Mapping[Intent, str | None]]:
        return self._capabilities

    def supports(self, content_type: ContentType | str, intent: Intent | str) -> bool:
        """Whether ``intent`` is declared for ``content_type``."""
        try:
            return Intent(intent) in self._capabilities.get(ContentType(content_type), {})
        except ValueError:
            return False

    def get_capability(self, content_type: ContentType | str, intent: Intent | str) -> str | None:
        """Capability-check identifier for an intent, or None when unset or undeclared."""
        if not self.supports(content_type, intent):
            return None
        return self._capabilities[ContentType(content_type)][Intent(intent)]

    # -- Links and rendering ----------------------------------------------------

    def owns_url(self, url: str) -> bool:
        return self.matcher.url_match_checker(url)

    def resolve_incoming_url(self, url: str) -> ContentRef | None:
        return self._rewriter.resolve(url)

    def rewrite_internal_links(self, content: str, home_url: str) -> str:
        return self._rewriter.rewrite_internal_links(content, home_url)

    def get_rendered_content(self, content: str, home_url: str) -> str:
        return self._rewriter.get_rendered_content(content, home_url)

    def get_content_url(self, content_type: ContentType | str, id: int, home_url: str) -> str:
        """Absolute app URL, the same form the rewriter produces."""
        return home_url.rstrip("/") + get_content_path(content_type, id)

    get_content_path = staticmethod(get_content_path)
    get_rendered_title = staticmethod(get_rendered_title)
    parse_json_int_array = staticmethod(parse_json_int_array)
    build_in_placeholders = staticmethod(build_in_placeholders)


def _merge_entity_types(overrides: Mapping[str, str | None]) -> Mapping[ContentType, str | None]:
    merged = dict(DEFAULT_ENTITY_TYPES)
    for key, value in overrides.items():
        merged[ContentType.parse(key)] = value
    return MappingProxyType(merged)


def _merge_capabilities(
    overrides: Mapping[str, Mapping[str, str | None]],
) -> Mapping[ContentType, Mapping[Intent, str | None]]:
    merged = {ct: dict(intents) for ct, intents in DEFAULT_CAPABILITIES.items()}
    for key, intents in overrides.items():
        target = merged.setdefault(ContentType.parse(key), {})
        for intent, capability in intents.items():
            try:
                target[Intent(intent)] = capability
            except ValueError:
                raise ValueError(
                    f"Unknown intent: {intent!r} (valid: {[i.value for i in Intent]})"
                ) from None
    logger.debug("Capabilities resolved: %s", merged)
    return MappingProxyType({ct: MappingProxyType(intents) for ct, intents in merged.items()})
