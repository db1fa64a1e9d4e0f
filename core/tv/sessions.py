# core/tv/sessions.py
"""In-memory registry of navigation sessions, one engine per TV client.

Sessions untouched for longer than SESSION_IDLE_TIMEOUT_S are evicted when a
new one is created. At MAX_SESSIONS the least recently used session makes
room for the new one.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable

from core.config import get_max_sessions, get_session_idle_timeout

from .navigation import NavigationEngine

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """Raised when a navigation session id is unknown."""

    pass


@dataclass
class _Session:
    engine: NavigationEngine
    last_seen: float


_sessions: dict[str, _Session] = {}


def _now() -> float:
    return time.monotonic()


def _evict(now: float) -> None:
    timeout = get_session_idle_timeout()
    idle = [sid for sid, s in _sessions.items() if now - s.last_seen > timeout]
    for session_id in idle:
        del _sessions[session_id]
        logger.info("Evicted idle navigation session %s", session_id)

    limit = get_max_sessions()
    while len(_sessions) >= limit:
        oldest = min(_sessions, key=lambda sid: _sessions[sid].last_seen)
        del _sessions[oldest]
        logger.warning("Session limit %d reached, evicted %s", limit, oldest)


def create_session(engine_factory: Callable[[], NavigationEngine]) -> tuple[str, NavigationEngine]:
    """Create and register a new engine. Returns (session_id, engine)."""
    now = _now()
    _evict(now)

    session_id = str(uuid.uuid4())
    engine = engine_factory()
    _sessions[session_id] = _Session(engine=engine, last_seen=now)
    logger.info("Created navigation session %s", session_id)
    return session_id, engine


def get_session(session_id: str) -> NavigationEngine:
    try:
        session = _sessions[session_id]
    except KeyError:
        raise SessionNotFoundError(f"Session not found: {session_id}") from None
    session.last_seen = _now()
    return session.engine


def close_session(session_id: str) -> None:
    if _sessions.pop(session_id, None) is None:
        raise SessionNotFoundError(f"Session not found: {session_id}")
    logger.info("Closed navigation session %s", session_id)


def session_count() -> int:
    return len(_sessions)


def clear_sessions() -> None:
    _sessions.clear()
