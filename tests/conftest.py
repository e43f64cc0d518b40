"""Shared test fixtures for content-source."""

from __future__ import annotations

import pytest

from content_source.config.models import ContentSourcesConfig, SourceConfig, UrlRuleConfig
from content_source.matchers import PatternUrlMatcher
from content_source.models import ContentRef, ContentType
from content_source.source import ContentSource


class DictMatcher:
    """Resolves URLs from a fixed table and records every lookup."""

    def __init__(self, table: dict):
        self.table = table
        self.calls: list[str] = []

    def url_match_checker(self, url: str) -> bool:
        return url in self.table

    def resolve_incoming_url(self, url: str):
        self.calls.append(url)
        return self.table.get(url)


@pytest.fixture
def dict_matcher():
    return DictMatcher({
        "https://old.example.com/thread/42": ContentRef(content_type=ContentType.post, id=42),
        "https://old.example.com/forum/3": {"content_type": "section", "id": "3"},
        "https://old.example.com/reply/9?page=2&x=1": {"content_type": "comment", "id": 9},
    })


@pytest.fixture
def forum_matcher():
    return PatternUrlMatcher(
        ["https://old.example.com"],
        [
            (r"/forum/(?P<id>\d+)", "section"),
            (r"/thread/(?P<id>\d+)", "post"),
            (r"/reply/(?P<id>\d+)", "comment"),
        ],
    )


@pytest.fixture
def forum_source(forum_matcher):
    return ContentSource(
        "forum",
        forum_matcher,
        entity_types={"section": "forum", "post": "topic", "comment": "reply"},
    )


@pytest.fixture
def sample_config():
    return ContentSourcesConfig(
        home_url="https://new.example.com/",
        default_source="forum",
        sources=[
            SourceConfig(
                id="forum",
                base_urls=["https://old.example.com"],
                rules=[
                    UrlRuleConfig(pattern=r"/forum/(?P<id>\d+)", content_type="section"),
                    UrlRuleConfig(pattern=r"/thread/(?P<id>\d+)", content_type="post"),
                ],
                entity_types={"post": "topic"},
            ),
            SourceConfig(id="blog", base_urls=["https://blog.example.com"]),
        ],
    )


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    """Keep a CONTENT_SOURCE_CONFIG from the outer environment out of the tests."""
    monkeypatch.delenv("CONTENT_SOURCE_CONFIG", raising=False)
