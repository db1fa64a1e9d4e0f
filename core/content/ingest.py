# core/content/ingest.py
"""
Import JW Player playlist feeds into the media catalog.

The feed is a JSON document with a top-level "playlist" array. Each entry is
mapped to a MediaItem and added to the store unless its id already exists.
"""

import logging

import httpx
import sentry_sdk

from core.errors import ExternalServiceError

from .store import ContentStore
from .types import MediaItem, SourceProvider

logger = logging.getLogger(__name__)

HLS_MIME_TYPE = "application/vnd.apple.mpegurl"
MP4_MIME_TYPE = "video/mp4"
JW_MANIFEST_URL = "https://cdn.jwplayer.com/manifests/{media_id}.m3u8"

FETCH_TIMEOUT_SECONDS = 10


def pick_stream_url(item: dict) -> str:
    """Choose the best playable source for a feed entry.

    Preference: HLS manifest, then progressive MP4, then whatever source comes
    first, then the computed JW manifest URL.
    """
    sources = item.get("sources") or []

    for source in sources:
        file = source.get("file") or ""
        if file and (source.get("type") == HLS_MIME_TYPE or file.endswith(".m3u8")):
            return file

    for source in sources:
        if source.get("type") == MP4_MIME_TYPE and source.get("file"):
            return source["file"]

    if sources and sources[0].get("file"):
        return sources[0]["file"]

    return JW_MANIFEST_URL.format(media_id=item["mediaid"])


def _parse_tags(raw) -> tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, str):
        return tuple(tag.strip() for tag in raw.split(",") if tag.strip())
    return tuple(raw)


def parse_jw_item(item: dict) -> MediaItem:
    """Map one JW feed entry to a MediaItem.

    Raises:
        KeyError: If the entry has no mediaid or title
    """
    media_id = item["mediaid"]
    return MediaItem(
        id=media_id,
        provider_id=media_id,
        provider=SourceProvider.JWPLAYER,
        title=item["title"],
        description=item.get("description") or "",
        duration=int(item.get("duration") or 0),
        poster=item.get("image") or "",
        backdrop=item.get("image") or "",
        video_url=pick_stream_url(item),
        tags=_parse_tags(item.get("tags")),
    )


async def _fetch_feed(url: str, client: httpx.AsyncClient) -> list[dict]:
    try:
        response = await client.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        raise ExternalServiceError(f"Playlist fetch failed: {e}") from e
    except ValueError as e:
        raise ExternalServiceError(f"Playlist response is not JSON: {e}") from e

    playlist = data.get("playlist") if isinstance(data, dict) else None
    if not isinstance(playlist, list):
        raise ExternalServiceError("Invalid JW playlist format")

    return playlist


async def import_jw_playlist(
    store: ContentStore,
    url: str,
    client: httpx.AsyncClient | None = None,
) -> int:
    """
    Fetch a JW playlist feed and add its new items to the catalog.

    Args:
        store: Content store to add items to
        url: Feed URL
        client: Optional httpx client (a short-lived one is created otherwise)

    Returns:
        Number of items added (existing ids are skipped and not counted)

    Raises:
        ExternalServiceError: On fetch or format failures. Items added before
            a malformed entry stay in the catalog; the count is on `imported`.
    """
    logger.info("Importing JW playlist from %s", url)

    if client is None:
        async with httpx.AsyncClient(timeout=FETCH_TIMEOUT_SECONDS) as own_client:
            playlist = await _fetch_feed(url, own_client)
    else:
        playlist = await _fetch_feed(url, client)

    imported = 0
    for index, entry in enumerate(playlist):
        try:
            item = parse_jw_item(entry)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error("Malformed playlist entry %d: %s", index, e)
            sentry_sdk.capture_exception(e)
            raise ExternalServiceError(
                f"Malformed playlist entry at position {index}", imported=imported
            ) from e

        if store.add_media(item):
            imported += 1
        else:
            logger.debug("Skipping existing media %s", item.id)

    logger.info("Imported %d new items from %s", imported, url)
    return imported
