"""Interfaces content source backends implement."""

from content_source.interfaces.backend import ContentBackend
from content_source.interfaces.matcher import UrlMatcher

__all__ = [
    "ContentBackend",
    "UrlMatcher",
]
