# core/content/tests/test_ingest.py
"""Tests for JW Player playlist ingestion."""

import httpx
import pytest

from core.content.ingest import import_jw_playlist, parse_jw_item, pick_stream_url
from core.content.loader import SEED_PATH, load_store
from core.errors import ExternalServiceError

FEED_URL = "https://cdn.example.com/v2/playlists/abc"


def _client_for(payload=None, status_code=200, text=None):
    """Build an AsyncClient whose transport returns a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=payload)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _entry(media_id, **extra):
    return {"mediaid": media_id, "title": f"Title {media_id}", **extra}


@pytest.fixture
def store():
    return load_store(SEED_PATH)


class TestPickStreamUrl:
    def test_prefers_hls_by_type(self):
        item = _entry(
            "x",
            sources=[
                {"type": "video/mp4", "file": "https://cdn/x.mp4"},
                {"type": "application/vnd.apple.mpegurl", "file": "https://cdn/x/manifest"},
            ],
        )
        assert pick_stream_url(item) == "https://cdn/x/manifest"

    def test_prefers_hls_by_extension(self):
        item = _entry(
            "x",
            sources=[
                {"type": "video/mp4", "file": "https://cdn/x.mp4"},
                {"type": "unknown", "file": "https://cdn/x.m3u8"},
            ],
        )
        assert pick_stream_url(item) == "https://cdn/x.m3u8"

    def test_falls_back_to_mp4(self):
        item = _entry(
            "x",
            sources=[
                {"type": "audio/mp4", "file": "https://cdn/x.m4a"},
                {"type": "video/mp4", "file": "https://cdn/x.mp4"},
            ],
        )
        assert pick_stream_url(item) == "https://cdn/x.mp4"

    def test_falls_back_to_first_source(self):
        item = _entry("x", sources=[{"type": "video/webm", "file": "https://cdn/x.webm"}])
        assert pick_stream_url(item) == "https://cdn/x.webm"

    def test_computed_manifest_when_no_sources(self):
        assert (
            pick_stream_url(_entry("abc123"))
            == "https://cdn.jwplayer.com/manifests/abc123.m3u8"
        )


class TestParseJwItem:
    def test_maps_fields(self):
        item = parse_jw_item(
            _entry(
                "abc",
                description="Desc",
                duration=125.7,
                image="https://img/abc.jpg",
                tags="Drama, Thriller",
            )
        )
        assert item.id == "abc"
        assert item.provider_id == "abc"
        assert item.duration == 125
        assert item.poster == item.backdrop == "https://img/abc.jpg"
        assert item.tags == ("Drama", "Thriller")

    def test_tags_list_and_missing_fields(self):
        item = parse_jw_item(_entry("abc", tags=["A", "B"]))
        assert item.tags == ("A", "B")
        assert item.description == ""
        assert item.duration == 0

    def test_missing_mediaid_raises(self):
        with pytest.raises(KeyError):
            parse_jw_item({"title": "No id"})


class TestImportJwPlaylist:
    @pytest.mark.asyncio
    async def test_imports_two_new_items(self, store):
        """Two new ids increase the count by exactly two."""
        async with _client_for({"playlist": [_entry("n1"), _entry("n2")]}) as client:
            count = await import_jw_playlist(store, FEED_URL, client=client)

        assert count == 2
        assert store.has_media("n1")
        assert store.has_media("n2")

    @pytest.mark.asyncio
    async def test_existing_id_not_duplicated_or_counted(self, store):
        before = len(store.list_media())
        async with _client_for({"playlist": [_entry("m1"), _entry("n1")]}) as client:
            count = await import_jw_playlist(store, FEED_URL, client=client)

        assert count == 1
        assert len(store.list_media()) == before + 1
        assert store.get_media("m1").title == "Cyberpunk Horizons"

    @pytest.mark.asyncio
    async def test_http_error_raises_external_service_error(self, store):
        async with _client_for({"error": "nope"}, status_code=500) as client:
            with pytest.raises(ExternalServiceError):
                await import_jw_playlist(store, FEED_URL, client=client)

    @pytest.mark.asyncio
    async def test_non_json_response_raises(self, store):
        async with _client_for(text="<html>oops</html>") as client:
            with pytest.raises(ExternalServiceError):
                await import_jw_playlist(store, FEED_URL, client=client)

    @pytest.mark.asyncio
    async def test_missing_playlist_array_raises(self, store):
        async with _client_for({"items": []}) as client:
            with pytest.raises(ExternalServiceError, match="Invalid JW playlist format"):
                await import_jw_playlist(store, FEED_URL, client=client)

    @pytest.mark.asyncio
    async def test_partial_success_keeps_earlier_items(self, store):
        """Items before a malformed entry stay imported."""
        payload = {"playlist": [_entry("n1"), {"title": "broken"}, _entry("n2")]}
        async with _client_for(payload) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await import_jw_playlist(store, FEED_URL, client=client)

        assert exc_info.value.imported == 1
        assert store.has_media("n1")
        assert not store.has_media("n2")
