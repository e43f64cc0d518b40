"""Regex-driven URL matcher for sources whose permalinks follow fixed patterns."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from urllib.parse import SplitResult, urlsplit

from content_source.errors import InvalidContentRefError
from content_source.models import ContentRef, ContentType

logger = logging.getLogger(__name__)


class PatternUrlMatcher:
    """Matches URLs under a set of base URLs and resolves them through path rules.

    Each rule is ``(pattern, content_type)`` and must define a named group
    ``id``. A rule has to match the whole part of the URL after the base:
    first the path with ``?query``, then the bare path, one trailing slash
    ignored. Anything the scan swept up past the permalink, such as a comma
    in prose, makes the URL unresolved so the text stays as written. The
    scheme is ignored so that http and https links to the same host are
    treated alike.

        matcher = PatternUrlMatcher(
            ["https://forum.example.com"],
            [(r"/thread/(?P<id>\\d+)", "post")],
        )
    """

    def __init__(
        self,
        base_urls: Iterable[str],
        rules: Iterable[tuple[str, ContentType | str]] = (),
    ) -> None:
        self._bases: list[SplitResult] = [urlsplit(u) for u in base_urls]
        self._rules: list[tuple[re.Pattern, ContentType]] = []
        for pattern, content_type in rules:
            compiled = re.compile(pattern)
            if "id" not in compiled.groupindex:
                logger.warning("URL rule %r has no 'id' group, skipping", pattern)
                continue
            self._rules.append((compiled, ContentType.parse(content_type)))

    def url_match_checker(self, url: str) -> bool:
        return self._split(url) is not None

    def resolve_incoming_url(self, url: str) -> ContentRef | None:
        split = self._split(url)
        if split is None:
            return None
        path, query = split
        if len(path) > 1:
            path = path.removesuffix("/")
        candidates = [f"{path}?{query}", path] if query else [path]
        for pattern, content_type in self._rules:
            for candidate in candidates:
                m = pattern.fullmatch(candidate)
                if m is None:
                    continue
                try:
                    return ContentRef.from_resolved({"content_type": content_type, "id": m.group("id")})
                except InvalidContentRefError:
                    return None
        return None

    def _split(self, url: str) -> tuple[str, str] | None:
        """Path below the first base URL ``url`` falls under, and its query."""
        try:
            parts = urlsplit(url)
        except ValueError:
            return None
        for base in self._bases:
            if parts.netloc.lower() != base.netloc.lower():
                continue
            prefix = base.path.rstrip("/")
            if parts.path != prefix and not parts.path.startswith(prefix + "/"):
                continue
            return parts.path[len(prefix):], parts.query
        return None
