"""Exception taxonomy for content sources.

Configuration errors propagate to the caller. A URL that no content source
owns is not an error: resolvers report it as ``None``.
"""

from __future__ import annotations


class ContentSourceError(Exception):
    """Base class for content source errors."""


class UnrecognizedContentTypeError(ContentSourceError):
    """Raised when a content type is outside the collection table."""

    def __init__(self, content_type: object):
        self.content_type = content_type
        super().__init__(f"Unrecognized content type: {content_type!r}")


class EntityTypeNotConfiguredError(ContentSourceError):
    """Raised when a content type has no usable backend entity type."""

    def __init__(self, content_type: object):
        self.content_type = content_type
        super().__init__(f"Entity type not configured for content type: {content_type!r}")


class InvalidContentRefError(ContentSourceError):
    """Raised when a resolver returns an id that is not a positive integer."""


class ContentSourceNotFoundError(ContentSourceError):
    """Raised when a registry lookup misses."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"No content source registered with id '{source_id}'")


class DuplicateContentSourceError(ContentSourceError):
    """Raised when registering a second source under an existing id."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"Content source '{source_id}' is already registered")
