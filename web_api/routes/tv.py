"""
TV client API routes.

Endpoints:
- GET /api/tv/config/{page_slug} - Resolved configuration tree for a page
- POST /api/tv/sessions - Start a navigation session on the default page
- GET /api/tv/sessions/{session_id} - Current focus snapshot
- POST /api/tv/sessions/{session_id}/keys - Send a remote-control action
- POST /api/tv/sessions/{session_id}/player/close - Player closed signal
- POST /api/tv/sessions/{session_id}/retry - Retry after a failed load
- POST /api/tv/sessions/{session_id}/pages/{page_slug} - Load a page
- DELETE /api/tv/sessions/{session_id} - End a session
"""

import logging

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from core.config import get_default_page, get_default_platform, get_resolve_latency
from core.content import get_store
from core.content.types import Platform
from core.errors import NotFoundError, ResolutionError
from core.tv import (
    ContentResolver,
    InputAction,
    NavigationEngine,
    make_tree_fetcher,
    serialize_tree,
)
from core.tv.sessions import (
    SessionNotFoundError,
    close_session,
    create_session,
    get_session,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tv", tags=["tv"])


class KeyRequest(BaseModel):
    """Request body for a remote-control action."""

    key: InputAction


def _build_engine(platform: Platform) -> NavigationEngine:
    resolver = ContentResolver(get_store())
    fetch = make_tree_fetcher(resolver, platform, latency=get_resolve_latency())
    return NavigationEngine(fetch, default_page=get_default_page())


def _get_engine(session_id: str) -> NavigationEngine:
    try:
        return get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")


def _session_payload(session_id: str, engine: NavigationEngine) -> dict:
    return {"sessionId": session_id, **engine.snapshot()}


@router.get("/config/{page_slug}")
async def get_tv_config(
    page_slug: str,
    platform: Platform | None = Query(None, description="Target platform"),
):
    """Resolve a page into the TV configuration tree."""
    target = platform or Platform(get_default_platform())
    resolver = ContentResolver(get_store())

    try:
        tree = resolver.resolve(page_slug, target)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"Page not found: {page_slug}")
    except ResolutionError as e:
        logger.error(f"Resolution failed for {page_slug}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return serialize_tree(tree)


@router.post("/sessions")
async def start_session(
    platform: Platform | None = Query(None, description="Target platform"),
):
    """Create a navigation session and load the default page."""
    target = platform or Platform(get_default_platform())
    session_id, engine = create_session(lambda: _build_engine(target))
    await engine.load_page(engine.default_page)
    return _session_payload(session_id, engine)


@router.get("/sessions/{session_id}")
async def get_session_state(session_id: str):
    engine = _get_engine(session_id)
    return _session_payload(session_id, engine)


@router.post("/sessions/{session_id}/keys")
async def send_key(session_id: str, request: KeyRequest):
    """Apply one remote-control action to the session."""
    engine = _get_engine(session_id)
    await engine.handle(request.key)
    return _session_payload(session_id, engine)


@router.post("/sessions/{session_id}/player/close")
async def close_player(session_id: str):
    engine = _get_engine(session_id)
    engine.close_player()
    return _session_payload(session_id, engine)


@router.post("/sessions/{session_id}/retry")
async def retry_load(session_id: str):
    engine = _get_engine(session_id)
    await engine.retry()
    return _session_payload(session_id, engine)


@router.post("/sessions/{session_id}/pages/{page_slug}")
async def load_page(session_id: str, page_slug: str):
    """Load a page into the session. Failures show up in the snapshot's error."""
    engine = _get_engine(session_id)
    await engine.load_page(page_slug)
    return _session_payload(session_id, engine)


@router.delete("/sessions/{session_id}")
async def end_session(session_id: str):
    try:
        close_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return {"status": "ok"}
