"""
Content management API routes.

Endpoints:
- GET /api/cms/pages - List pages with their blocks
- GET /api/cms/library - List the media catalog
- PATCH /api/cms/blocks/{block_id} - Rename a block
- POST /api/cms/blocks/{block_id}/media - Add media to a block's playlist
- DELETE /api/cms/blocks/{block_id}/media/{media_id} - Remove media from a block
- POST /api/cms/import - Import a JW Player playlist feed
- POST /api/cms/assist - Draft a synopsis with the LLM
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from core.assist import generate_creative_metadata
from core.config import get_jw_playlist_url
from core.content import BlockNotFoundError, MediaNotFoundError, get_store
from core.content.ingest import import_jw_playlist
from core.content.types import Block, MediaItem
from core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cms", tags=["cms"])


class BlockUpdateRequest(BaseModel):
    """Request body for renaming a block."""

    title: str


class BlockMediaRequest(BaseModel):
    """Request body for adding media to a block."""

    mediaId: str


class ImportRequest(BaseModel):
    """Request body for playlist import. Defaults to JW_PLAYLIST_URL."""

    url: str | None = None


class AssistRequest(BaseModel):
    """Request body for the synopsis assistant."""

    title: str
    tags: list[str] = []


def serialize_block(block: Block, playlist: list[str]) -> dict:
    return {
        "id": block.id,
        "type": block.type.value,
        "title": block.title,
        "displayOrder": block.display_order,
        "playlistId": block.playlist_id,
        "mediaIds": playlist,
        "visibility": {
            "platforms": sorted(p.value for p in block.visibility.platforms),
            "requiresAuth": block.visibility.requires_auth,
        },
    }


def serialize_media(item: MediaItem) -> dict:
    return {
        "id": item.id,
        "providerId": item.provider_id,
        "provider": item.provider.value,
        "title": item.title,
        "description": item.description,
        "duration": item.duration,
        "poster": item.poster,
        "backdrop": item.backdrop,
        "videoUrl": item.video_url,
        "tags": list(item.tags),
        "year": item.year,
    }


def _block_payload(block: Block) -> dict:
    store = get_store()
    playlist = store.get_playlist_ids(block.playlist_id) if block.playlist_id else []
    return serialize_block(block, playlist)


@router.get("/pages")
async def list_pages():
    store = get_store()
    return {
        "pages": [
            {
                "id": page.id,
                "slug": page.slug,
                "title": page.title,
                "blocks": [_block_payload(b) for b in page.blocks],
            }
            for page in store.list_pages()
        ]
    }


@router.get("/library")
async def list_library():
    return {"media": [serialize_media(m) for m in get_store().list_media()]}


@router.patch("/blocks/{block_id}")
async def update_block(block_id: str, request: BlockUpdateRequest):
    try:
        block = get_store().update_block_title(block_id, request.title)
    except BlockNotFoundError:
        raise HTTPException(status_code=404, detail=f"Block not found: {block_id}")
    return _block_payload(block)


@router.post("/blocks/{block_id}/media")
async def add_block_media(block_id: str, request: BlockMediaRequest):
    """Append media to the block's playlist. Duplicates are ignored."""
    store = get_store()
    try:
        added = store.add_media_to_block(block_id, request.mediaId)
    except BlockNotFoundError:
        raise HTTPException(status_code=404, detail=f"Block not found: {block_id}")
    except MediaNotFoundError:
        raise HTTPException(
            status_code=404, detail=f"Media not found: {request.mediaId}"
        )
    return {"added": added, "block": _block_payload(store.get_block(block_id))}


@router.delete("/blocks/{block_id}/media/{media_id}")
async def remove_block_media(block_id: str, media_id: str):
    """Remove media from the block's playlist. Absent ids are a no-op."""
    store = get_store()
    try:
        removed = store.remove_media_from_block(block_id, media_id)
    except BlockNotFoundError:
        raise HTTPException(status_code=404, detail=f"Block not found: {block_id}")
    return {"removed": removed, "block": _block_payload(store.get_block(block_id))}


@router.post("/import")
async def import_playlist(request: ImportRequest):
    """Import new items from a JW Player playlist feed."""
    url = request.url or get_jw_playlist_url()
    try:
        count = await import_jw_playlist(get_store(), url)
    except ExternalServiceError as e:
        logger.error(f"Import from {url} failed: {e}")
        raise HTTPException(
            status_code=502,
            detail={"message": f"Import failed: {e}", "imported": e.imported},
        )
    return {"imported": count}


@router.post("/assist")
async def assist(request: AssistRequest):
    try:
        text = await generate_creative_metadata(request.title, request.tags)
    except ExternalServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"text": text}
