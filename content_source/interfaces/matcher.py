"""URL matcher interface consumed by the link rewriter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from content_source.models import ContentRef


@runtime_checkable
class UrlMatcher(Protocol):
    """Host-supplied capability that recognises URLs owned by one content source."""

    def url_match_checker(self, url: str) -> bool: ...

    def resolve_incoming_url(self, url: str) -> ContentRef | Mapping[str, Any] | None: ...
