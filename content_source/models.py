"""Content types, intents, and the resolved content reference."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, PositiveInt

from content_source.errors import InvalidContentRefError, UnrecognizedContentTypeError


class ContentType(str, Enum):
    """Kinds of content every source exposes."""

    section = "section"
    post = "post"
    comment = "comment"

    @classmethod
    def parse(cls, value: object) -> ContentType:
        """Coerce a raw key to a member, raising on anything outside the table."""
        try:
            return cls(value)
        except ValueError:
            raise UnrecognizedContentTypeError(value) from None


class Intent(str, Enum):
    """Permission intents a capability check can be keyed by."""

    view = "view"
    post = "post"
    edit = "edit"
    comment = "comment"


# Plural path segment used in app-relative URLs.
COLLECTIONS: Mapping[ContentType, str] = MappingProxyType({
    ContentType.section: "sections",
    ContentType.post: "posts",
    ContentType.comment: "comments",
})

DEFAULT_CAPABILITIES: Mapping[ContentType, Mapping[Intent, str | None]] = MappingProxyType({
    ContentType.section: MappingProxyType({Intent.view: None, Intent.post: None}),
    ContentType.post: MappingProxyType({Intent.view: None, Intent.edit: None, Intent.comment: None}),
    ContentType.comment: MappingProxyType({Intent.edit: None}),
})

DEFAULT_ENTITY_TYPES: Mapping[ContentType, str | None] = MappingProxyType({
    ContentType.section: None,
    ContentType.post: None,
    ContentType.comment: None,
})

_NUMERIC_ID_RE = re.compile(r"\s*\d+\s*", re.ASCII)


class ContentRef(BaseModel):
    """Resolved identity of a content item."""

    model_config = ConfigDict(frozen=True)

    content_type: ContentType
    id: PositiveInt

    @classmethod
    def from_resolved(cls, value: ContentRef | Mapping[str, Any]) -> ContentRef:
        """Build a reference from a resolver result.

        Resolvers may hand back a mapping with ``content_type`` and ``id``
        keys, the id possibly as a numeric string.
        """
        if isinstance(value, ContentRef):
            return value
        if not isinstance(value, Mapping):
            raise InvalidContentRefError(f"Resolver returned {type(value).__name__}, expected a mapping")
        content_type = ContentType.parse(value.get("content_type"))
        return cls(content_type=content_type, id=_coerce_id(value.get("id")))


def _coerce_id(raw: object) -> int:
    if isinstance(raw, bool):
        raise InvalidContentRefError(f"Content id must be a positive integer, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _NUMERIC_ID_RE.fullmatch(raw):
        value = int(raw)
    else:
        raise InvalidContentRefError(f"Content id must be a positive integer, got {raw!r}")
    if value <= 0:
        raise InvalidContentRefError(f"Content id must be a positive integer, got {raw!r}")
    return value
