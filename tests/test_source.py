"""Tests for ContentSource — lookup tables and delegated link helpers."""

from __future__ import annotations

import pytest

from content_source.errors import EntityTypeNotConfiguredError, UnrecognizedContentTypeError
from content_source.models import ContentRef, ContentType, Intent
from content_source.source import ContentSource

HOME = "https://new.example.com"


# -- Entity types -------------------------------------------------------------


def test_get_entity_type(forum_source: ContentSource):
    assert forum_source.get_entity_type("post") == "topic"
    assert forum_source.get_entity_type(ContentType.section) == "forum"


def test_get_entity_types_full_map(forum_source: ContentSource):
    assert dict(forum_source.get_entity_types()) == {
        ContentType.section: "forum",
        ContentType.post: "topic",
        ContentType.comment: "reply",
    }


def test_entity_types_read_only(forum_source: ContentSource):
    with pytest.raises(TypeError):
        forum_source.get_entity_types()[ContentType.post] = "other"  # type: ignore[index]


def test_unset_entity_type_raises(forum_matcher):
    source = ContentSource("partial", forum_matcher, entity_types={"post": "topic"})
    with pytest.raises(EntityTypeNotConfiguredError) as exc_info:
        source.get_entity_type("comment")
    assert exc_info.value.content_type == "comment"


def test_empty_entity_type_raises(forum_matcher):
    source = ContentSource("empty", forum_matcher, entity_types={"post": ""})
    with pytest.raises(EntityTypeNotConfiguredError):
        source.get_entity_type("post")


def test_non_string_entity_type_raises(forum_matcher):
    source = ContentSource("odd", forum_matcher, entity_types={"post": 5})  # type: ignore[dict-item]
    with pytest.raises(EntityTypeNotConfiguredError):
        source.get_entity_type("post")


def test_unknown_entity_type_key_raises(forum_source: ContentSource):
    with pytest.raises(EntityTypeNotConfiguredError):
        forum_source.get_entity_type("page")


def test_constructor_rejects_unknown_content_type(forum_matcher):
    with pytest.raises(UnrecognizedContentTypeError):
        ContentSource("bad", forum_matcher, entity_types={"page": "page"})


def test_constructor_rejects_empty_id(forum_matcher):
    with pytest.raises(ValueError):
        ContentSource("", forum_matcher)


# -- Capabilities -------------------------------------------------------------


def test_default_capabilities(forum_source: ContentSource):
    caps = forum_source.get_capabilities()
    assert set(caps[ContentType.post]) == {Intent.view, Intent.edit, Intent.comment}
    assert all(v is None for intents in caps.values() for v in intents.values())


def test_supports(forum_source: ContentSource):
    assert forum_source.supports("section", "post") is True
    assert forum_source.supports("comment", "view") is False
    assert forum_source.supports("page", "view") is False
    assert forum_source.supports("post", "delete") is False


def test_capability_overrides_merge_onto_defaults(forum_matcher):
    source = ContentSource(
        "custom",
        forum_matcher,
        capabilities={"post": {"edit": "edit_topic"}, "comment": {"view": "read_reply"}},
    )
    assert source.get_capability("post", "edit") == "edit_topic"
    assert source.get_capability("post", "view") is None
    assert source.supports("post", "comment") is True
    assert source.get_capability(ContentType.comment, Intent.view) == "read_reply"
    assert source.supports("comment", "edit") is True


def test_get_capability_undeclared(forum_source: ContentSource):
    assert forum_source.get_capability("comment", "post") is None


def test_unknown_intent_rejected(forum_matcher):
    with pytest.raises(ValueError, match="Unknown intent"):
        ContentSource("bad", forum_matcher, capabilities={"post": {"delete": "x"}})


def test_capabilities_read_only(forum_source: ContentSource):
    with pytest.raises(TypeError):
        forum_source.get_capabilities()[ContentType.post][Intent.view] = "x"  # type: ignore[index]


# -- Links ---------------------------------------------------------------------


def test_rewrite_internal_links(forum_source: ContentSource):
    html = '<a href="https://old.example.com/thread/42">x</a>'
    assert forum_source.rewrite_internal_links(html, HOME + "/") == '<a href="https://new.example.com/posts/42">x</a>'


def test_resolve_incoming_url(forum_source: ContentSource):
    assert forum_source.resolve_incoming_url("https://old.example.com/reply/8") == ContentRef(
        content_type=ContentType.comment, id=8
    )
    assert forum_source.resolve_incoming_url("https://elsewhere.example.com/reply/8") is None


def test_owns_url(forum_source: ContentSource):
    assert forum_source.owns_url("https://old.example.com/anything") is True
    assert forum_source.owns_url("https://new.example.com/posts/1") is False


def test_get_content_url(forum_source: ContentSource):
    assert forum_source.get_content_url("section", 3, HOME + "//") == "https://new.example.com/sections/3"


def test_get_rendered_content(forum_source: ContentSource):
    content = "&lt;Read&gt; https://old.example.com/forum/2"
    assert forum_source.get_rendered_content(content, HOME) == "<Read> https://new.example.com/sections/2"


def test_static_helpers_exposed(forum_source: ContentSource):
    assert forum_source.get_content_path("comment", 5) == "/comments/5"
    assert forum_source.get_rendered_title("A &amp; B") == "A & B"
    assert forum_source.parse_json_int_array("[3, 3, 1]") == [3, 1]
    assert forum_source.build_in_placeholders([1, 2]) == "%d,%d"


def test_repr(forum_source: ContentSource):
    assert repr(forum_source) == "ContentSource(id='forum')"
