"""Rewrites absolute URLs owned by a content source into app-relative paths."""

from __future__ import annotations

import html
import logging
import re
from html.entities import html5

from content_source.errors import InvalidContentRefError
from content_source.interfaces.matcher import UrlMatcher
from content_source.models import COLLECTIONS, ContentRef, ContentType

logger = logging.getLogger(__name__)

# Candidate absolute URLs, bounded by whitespace and the usual HTML delimiters.
# Deliberately loose: it may clip a URL at a parenthesis.
_ABSOLUTE_URL_RE = re.compile(r"""https?://[^\s<>"'()]+""", re.IGNORECASE | re.ASCII)

# Only semicolon-terminated references; "&region=eu" in a query string stays as written.
_ENTITY_RE = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def _decode_entity(m: re.Match) -> str:
    ref = m.group(0)
    if ref[1] == "#":
        return html.unescape(ref)
    return html5.get(ref[1:], ref)


def _decode_entities(text: str) -> str:
    """Decode named (HTML5) and numeric character references that end in ``;``."""
    if "&" not in text:
        return text
    return _ENTITY_RE.sub(_decode_entity, text)


def get_content_path(content_type: ContentType | str, id: int) -> str:
    """App path for a content item, e.g. ``/posts/42``."""
    collection = COLLECTIONS[ContentType.parse(content_type)]
    return f"/{collection}/{id}"


def get_rendered_title(title: str) -> str:
    """Decode HTML entities in a title for display."""
    return _decode_entities(title)


class LinkRewriter:
    """Rewrites links in HTML using the URL matcher of one content source."""

    def __init__(self, matcher: UrlMatcher):
        self.matcher = matcher

    def rewrite_internal_links(self, content: str, home_url: str) -> str:
        """Replace every URL the matcher resolves with ``home_url`` + its app path.

        URLs the matcher does not resolve, or resolves to an unusable id, are
        left exactly as they were. An unknown content type still raises.
        """
        if content == "":
            return content

        base = home_url.rstrip("/")

        def _replace(m: re.Match) -> str:
            try:
                ref = self.resolve(_decode_entities(m.group(0)))
            except InvalidContentRefError as e:
                logger.warning("Leaving %s unchanged: %s", m.group(0), e)
                return m.group(0)
            if ref is None:
                return m.group(0)
            rewritten = base + get_content_path(ref.content_type, ref.id)
            logger.debug("Rewrote %s -> %s", m.group(0), rewritten)
            return rewritten

        return _ABSOLUTE_URL_RE.sub(_replace, content)

    def resolve(self, url: str) -> ContentRef | None:
        """Ask the matcher for the content behind ``url``."""
        resolved = self.matcher.resolve_incoming_url(url)
        if resolved is None:
            return None
        return ContentRef.from_resolved(resolved)

    def get_rendered_content(self, content: str, home_url: str) -> str:
        """Rewrite internal links, then decode HTML entities for display.

        Links are rewritten first so the matcher sees each URL as it appears
        in the markup; decoding happens per match inside the rewrite.
        """
        if content != "":
            content = self.rewrite_internal_links(content, home_url)
        return _decode_entities(content)
