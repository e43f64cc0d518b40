"""Content Source - pluggable content backends with cross-source link rewriting."""

from content_source.errors import (
    ContentSourceError,
    ContentSourceNotFoundError,
    DuplicateContentSourceError,
    EntityTypeNotConfiguredError,
    InvalidContentRefError,
    UnrecognizedContentTypeError,
)
from content_source.interfaces import ContentBackend, UrlMatcher
from content_source.links import LinkRewriter, get_content_path, get_rendered_title
from content_source.matchers import PatternUrlMatcher
from content_source.models import COLLECTIONS, ContentRef, ContentType, Intent
from content_source.registry import ContentSourceRegistry
from content_source.source import ContentSource
from content_source.utils import build_in_placeholders, parse_json_int_array

__version__ = "0.1.0"

__all__ = [
    "COLLECTIONS",
    "ContentBackend",
    "ContentRef",
    "ContentSource",
    "ContentSourceError",
    "ContentSourceNotFoundError",
    "ContentSourceRegistry",
    "ContentType",
    "DuplicateContentSourceError",
    "EntityTypeNotConfiguredError",
    "Intent",
    "InvalidContentRefError",
    "LinkRewriter",
    "PatternUrlMatcher",
    "UnrecognizedContentTypeError",
    "UrlMatcher",
    "build_in_placeholders",
    "get_content_path",
    "get_rendered_title",
    "parse_json_int_array",
]
