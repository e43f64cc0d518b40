"""Backend contract a concrete content source implements."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from content_source.models import ContentRef, ContentType, Intent


@runtime_checkable
class ContentBackend(Protocol):
    """Permissions, content lookup, and URL semantics of one underlying system.

    Backends compose a :class:`~content_source.source.ContentSource` for the
    shared link and rendering helpers instead of inheriting them.
    """

    def user_can(
        self, user_id: int, intent: Intent, content_type: ContentType, content_id: int
    ) -> bool: ...

    def current_user_can(self, intent: Intent, content_type: ContentType, content_id: int) -> bool: ...

    def get_content(self, content_type: ContentType, id: int) -> Any: ...

    def get_content_type(self, obj: Any) -> ContentType: ...

    def get_root_section_id(self) -> int: ...

    def get_root_parent_id(self) -> int: ...

    def get_link(self, content_type: ContentType, id: int) -> str: ...

    def resolve_incoming_url(self, url: str) -> ContentRef | Mapping[str, Any] | None: ...

    def get_options_data(self) -> dict[str, Any]: ...

    def get_features_data(self) -> dict[str, Any]: ...

    def register(self) -> None: ...
