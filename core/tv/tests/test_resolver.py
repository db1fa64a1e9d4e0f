# core/tv/tests/test_resolver.py
"""Tests for resolving pages into TV configuration trees."""

import dataclasses
from datetime import datetime, timezone

import pytest

from core.content.loader import SEED_PATH, load_store
from core.content.types import BlockType, MediaItem, Platform, SourceProvider
from core.errors import EmptyResultError, MissingStreamError, NotFoundError
from core.tv.resolver import ContentResolver, normalize_media_item
from core.tv.serialize import serialize_tree

DEFAULT_STREAM = "https://streams.example.com/default.m3u8"
FIXED_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return load_store(SEED_PATH)


@pytest.fixture
def resolver(store):
    return ContentResolver(
        store, version="2.0.0", default_stream=DEFAULT_STREAM, clock=lambda: FIXED_TIME
    )


def _media(**overrides):
    fields = dict(
        id="x",
        provider_id="x",
        provider=SourceProvider.CUSTOM,
        title="X",
        duration=5400,
        poster="poster.jpg",
        backdrop="backdrop.jpg",
        video_url="https://cdn/x.m3u8",
        tags=("A", "B", "C"),
        year=2021,
    )
    fields.update(overrides)
    return MediaItem(**fields)


class TestNormalizeMediaItem:
    def test_portrait_block_uses_poster(self):
        item = normalize_media_item(_media(), BlockType.RAIL_PORTRAIT, DEFAULT_STREAM)
        assert item.image == "poster.jpg"

    def test_landscape_block_uses_backdrop(self):
        item = normalize_media_item(_media(), BlockType.HERO, DEFAULT_STREAM)
        assert item.image == "backdrop.jpg"

    def test_metadata(self):
        item = normalize_media_item(_media(), BlockType.HERO, DEFAULT_STREAM)
        assert item.action_url == "/player/x"
        assert item.metadata.duration_str == "1h 30m"
        assert item.metadata.year == "2021"
        assert item.metadata.badges == ("A", "B")

    def test_unknown_year_is_empty(self):
        item = normalize_media_item(_media(year=None), BlockType.HERO, DEFAULT_STREAM)
        assert item.metadata.year == ""

    def test_missing_stream_uses_default(self):
        item = normalize_media_item(_media(video_url=""), BlockType.HERO, DEFAULT_STREAM)
        assert item.stream_url == DEFAULT_STREAM

    def test_missing_stream_without_default_raises(self):
        with pytest.raises(MissingStreamError):
            normalize_media_item(_media(video_url=""), BlockType.HERO, "")


class TestResolve:
    def test_home_on_tv(self, resolver):
        """TV sees all four home sections in display order."""
        tree = resolver.resolve("home", Platform.TV)
        assert [s.id for s in tree.sections] == ["b1", "b2", "b3", "b4"]
        assert tree.find_section("b4").requires_auth is True
        assert tree.find_section("b1").requires_auth is False

    def test_home_on_web_filters_tv_only_blocks(self, resolver):
        tree = resolver.resolve("home", Platform.WEB)
        assert [s.id for s in tree.sections] == ["b1", "b2"]

    def test_mobile_sees_no_sections(self, resolver):
        tree = resolver.resolve("home", Platform.MOBILE)
        assert tree.sections == ()

    def test_section_items_follow_playlist(self, resolver):
        tree = resolver.resolve("home", Platform.TV)
        trending = tree.find_section("b2")
        assert [i.id for i in trending.items] == ["m4", "m5", "m6", "m1", "m2"]
        assert trending.items[0].image.endswith("w=1080")
        assert tree.find_section("b1").items[0].image.endswith("w=1920")

    def test_every_item_has_a_stream(self, resolver, store):
        store.media["m3"] = dataclasses.replace(store.media["m3"], video_url="")
        tree = resolver.resolve("home", Platform.TV)
        for section in tree.sections:
            for item in section.items:
                assert item.stream_url
        assert tree.find_section("b3").items[0].stream_url == DEFAULT_STREAM

    def test_meta_and_page(self, resolver):
        tree = resolver.resolve("series", Platform.TV)
        assert tree.meta.version == "2.0.0"
        assert tree.meta.platform == Platform.TV
        assert tree.meta.generated_at == FIXED_TIME.isoformat()
        assert (tree.page_id, tree.page_slug, tree.page_title) == (
            "series",
            "series",
            "TV Series",
        )
        assert [n.target for n in tree.navigation] == [
            "home",
            "movies",
            "series",
            "settings",
        ]

    def test_layout_attached_by_block_type(self, resolver):
        tree = resolver.resolve("movies", Platform.TV)
        assert tree.find_section("b5").layout.item_width == 1920
        assert tree.find_section("b6").layout.item_width == 300

    def test_unknown_page_raises_not_found(self, resolver):
        with pytest.raises(NotFoundError):
            resolver.resolve("nonexistent", Platform.TV)

    def test_empty_navigation_raises(self, resolver, store):
        store.config.navigation = []
        with pytest.raises(EmptyResultError):
            resolver.resolve("home", Platform.TV)

    def test_duplicate_section_ids_raise(self, resolver, store):
        store.blocks.append(dataclasses.replace(store.get_block("b1"), display_order=9))
        with pytest.raises(EmptyResultError):
            resolver.resolve("home", Platform.TV)

    def test_block_without_playlist_resolves_empty(self, resolver, store):
        store.get_block("b3").playlist_id = None
        tree = resolver.resolve("home", Platform.TV)
        assert tree.find_section("b3").items == ()

    def test_tree_is_a_snapshot(self, resolver, store):
        """Later store edits don't leak into an already resolved tree."""
        tree = resolver.resolve("home", Platform.TV)
        store.update_block_title("b2", "Renamed")
        store.add_media_to_block("b4", "m6")

        assert tree.find_section("b2").title == "Trending Now"
        assert [i.id for i in tree.find_section("b4").items] == ["m1", "m2"]
        with pytest.raises(dataclasses.FrozenInstanceError):
            tree.sections[0].title = "Mutated"

    def test_edits_show_on_next_resolve(self, resolver, store):
        store.update_block_title("b2", "Renamed")
        tree = resolver.resolve("home", Platform.TV)
        assert tree.find_section("b2").title == "Renamed"


class TestSerializeTree:
    def test_shape(self, resolver):
        data = serialize_tree(resolver.resolve("home", Platform.TV))

        assert data["meta"] == {
            "generatedAt": FIXED_TIME.isoformat(),
            "version": "2.0.0",
            "platform": "TV",
        }
        assert data["theme"]["primaryColor"] == "#e50914"
        assert data["navigation"][3] == {
            "id": "n4",
            "label": "Settings",
            "action": "MODAL",
            "target": "settings",
        }
        assert data["page"]["slug"] == "home"

        section = data["page"]["sections"][0]
        assert section["type"] == "HERO"
        assert section["requiresAuth"] is False
        assert section["layout"] == {
            "itemWidth": 1920,
            "itemHeight": 600,
            "gap": 0,
            "titleY": 50,
            "rowY": 100,
        }
        item = section["items"][0]
        assert item["actionUrl"] == "/player/m1"
        assert item["metadata"] == {
            "durationStr": "1h 30m",
            "year": "2023",
            "badges": ["Sci-Fi"],
        }
