# core/tv/navigation.py
"""
Spatial navigation for the TV client.

NavigationEngine interprets remote-control actions against the currently
loaded ResolvedConfigurationTree. It owns the focus zone (menu or content),
the menu index, one item index per section and the now-playing item.

Reloads are asynchronous. Every reload is stamped with a generation number
and only the response for the most recently issued request is applied;
responses that arrive for older requests are discarded.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable

from core.content.types import NavigationItem, Platform
from core.errors import NotFoundError

from .layout import column_offset, row_offset
from .resolver import ContentResolver
from .serialize import serialize_item, serialize_navigation_item
from .types import ResolvedConfigurationTree, ResolvedMediaItem, ResolvedSection

logger = logging.getLogger(__name__)

TreeFetcher = Callable[[str], Awaitable[ResolvedConfigurationTree]]


class FocusZone(str, Enum):
    MENU = "MENU"
    CONTENT = "CONTENT"


class EngineState(str, Enum):
    LOADING = "LOADING"
    ERROR = "ERROR"
    ZONE_MENU = "ZONE_MENU"
    ZONE_CONTENT = "ZONE_CONTENT"
    PLAYING = "PLAYING"


class InputAction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    SELECT = "SELECT"
    CANCEL = "CANCEL"


@dataclass
class NavigationState:
    focus_zone: FocusZone = FocusZone.CONTENT
    active_menu_index: int = 0
    active_section_index: int = 0
    # Section id -> focused item index within that section
    active_item_indices: dict[str, int] = field(default_factory=dict)
    now_playing: ResolvedMediaItem | None = None


def clamp(value: int, low: int, high: int) -> int:
    """Restrict value to [low, high]. An empty range collapses to low."""
    return max(low, min(value, max(low, high)))


def make_tree_fetcher(
    resolver: ContentResolver, platform: Platform, latency: float = 0.0
) -> TreeFetcher:
    """Wrap a resolver as an async fetcher with optional network-like latency."""

    async def fetch(page_slug: str) -> ResolvedConfigurationTree:
        if latency > 0:
            await asyncio.sleep(latency)
        return resolver.resolve(page_slug, platform)

    return fetch


class NavigationEngine:
    """Focus state machine for one TV client."""

    def __init__(self, fetch_tree: TreeFetcher, default_page: str = "home"):
        self._fetch_tree = fetch_tree
        self.default_page = default_page

        self.tree: ResolvedConfigurationTree | None = None
        self.current_page: str | None = None
        self.state = NavigationState()
        self.loading = False
        self.error: str | None = None
        # Menu items the engine doesn't handle itself (LINK / MODAL), left for
        # an external router to pick up
        self.external_action: NavigationItem | None = None

        self._generation = 0
        self._last_requested = default_page
        self._last_failure_not_found = False

    # --- State queries ---

    @property
    def status(self) -> EngineState:
        if self.loading or (self.tree is None and self.error is None):
            return EngineState.LOADING
        if self.error is not None:
            return EngineState.ERROR
        if self.state.now_playing is not None:
            return EngineState.PLAYING
        if self.state.focus_zone == FocusZone.MENU:
            return EngineState.ZONE_MENU
        return EngineState.ZONE_CONTENT

    @property
    def active_section(self) -> ResolvedSection | None:
        if self.tree is None or not self.tree.sections:
            return None
        return self.tree.sections[self.state.active_section_index]

    def item_index(self, section_id: str) -> int:
        return self.state.active_item_indices.get(section_id, 0)

    @property
    def focused_item(self) -> ResolvedMediaItem | None:
        section = self.active_section
        if section is None or not section.items:
            return None
        return section.items[self.item_index(section.id)]

    # --- Reload protocol ---

    async def load_page(self, page_slug: str) -> bool:
        """
        Resolve and load a page.

        Reloads are refused while PLAYING; the player has to be closed first.

        Returns:
            True if this request's tree was applied. False if it was refused,
            failed, or was superseded by a newer request before its response
            arrived.
        """
        if self.status == EngineState.PLAYING:
            logger.info("Ignoring reload of %r while playing", page_slug)
            return False

        self._generation += 1
        generation = self._generation
        self._last_requested = page_slug
        self.loading = True
        self.error = None
        logger.info("Loading page %r (request %d)", page_slug, generation)

        try:
            tree = await self._fetch_tree(page_slug)
        except asyncio.CancelledError:
            if generation == self._generation:
                logger.info("Load of %r cancelled (request %d)", page_slug, generation)
                self.loading = False
            raise
        except Exception as e:
            if generation != self._generation:
                logger.info(
                    "Discarding stale failure for %r (request %d)", page_slug, generation
                )
                return False
            logger.error("Failed to load page %r: %s", page_slug, e)
            self.loading = False
            self.error = str(e) or "Failed to load TV config"
            self._last_failure_not_found = isinstance(e, NotFoundError)
            return False

        if generation != self._generation:
            logger.info(
                "Discarding stale response for %r (request %d, latest %d)",
                page_slug,
                generation,
                self._generation,
            )
            return False

        self._apply_tree(page_slug, tree)
        return True

    def _apply_tree(self, page_slug: str, tree: ResolvedConfigurationTree) -> None:
        self.tree = tree
        self.current_page = page_slug
        self.loading = False
        self.error = None
        self._last_failure_not_found = False

        self.state.active_section_index = 0
        self.state.active_item_indices = {s.id: 0 for s in tree.sections}

        for i, nav in enumerate(tree.navigation):
            if nav.target == page_slug:
                self.state.active_menu_index = i
                break
        else:
            self.state.active_menu_index = clamp(
                self.state.active_menu_index, 0, len(tree.navigation) - 1
            )

        self.state.focus_zone = FocusZone.CONTENT

    async def retry(self) -> bool:
        """Re-issue the last request; fall back to the default page if it didn't exist."""
        slug = self.default_page if self._last_failure_not_found else self._last_requested
        return await self.load_page(slug)

    # --- Input handling ---

    async def handle(self, action: InputAction) -> EngineState:
        """Apply one input action and return the resulting state."""
        self.external_action = None
        status = self.status

        if status in (EngineState.LOADING, EngineState.ERROR):
            logger.debug("Ignoring %s while %s", action.value, status.value)
        elif status == EngineState.PLAYING:
            if action == InputAction.CANCEL:
                self.close_player()
        elif status == EngineState.ZONE_MENU:
            await self._handle_menu(action)
        else:
            self._handle_content(action)

        return self.status

    def close_player(self) -> None:
        """Player CLOSE signal: clear the playing item, keep every index."""
        if self.state.now_playing is None:
            return
        logger.info("Closing player for %s", self.state.now_playing.id)
        self.state.now_playing = None
        self.state.focus_zone = FocusZone.CONTENT

    async def _handle_menu(self, action: InputAction) -> None:
        nav = self.tree.navigation
        state = self.state

        if action == InputAction.UP:
            state.active_menu_index = clamp(state.active_menu_index - 1, 0, len(nav) - 1)
        elif action == InputAction.DOWN:
            state.active_menu_index = clamp(state.active_menu_index + 1, 0, len(nav) - 1)
        elif action == InputAction.RIGHT:
            state.focus_zone = FocusZone.CONTENT
        elif action == InputAction.SELECT:
            item = nav[state.active_menu_index]
            if item.action != "PAGE":
                logger.info("Handing off %s action for %r", item.action, item.target)
                self.external_action = item
            elif item.target != self.current_page:
                await self.load_page(item.target)
            else:
                state.focus_zone = FocusZone.CONTENT

    def _handle_content(self, action: InputAction) -> None:
        sections = self.tree.sections
        state = self.state

        if action == InputAction.UP:
            state.active_section_index = clamp(
                state.active_section_index - 1, 0, len(sections) - 1
            )
            return
        if action == InputAction.DOWN:
            state.active_section_index = clamp(
                state.active_section_index + 1, 0, len(sections) - 1
            )
            return
        if action == InputAction.CANCEL:
            state.focus_zone = FocusZone.MENU
            return

        section = self.active_section
        if section is None:
            if action == InputAction.LEFT:
                state.focus_zone = FocusZone.MENU
            return

        current = self.item_index(section.id)
        last = len(section.items) - 1

        if action == InputAction.LEFT:
            if current == 0:
                # Left edge hands focus to the menu
                state.focus_zone = FocusZone.MENU
            else:
                state.active_item_indices[section.id] = clamp(current - 1, 0, last)
        elif action == InputAction.RIGHT:
            state.active_item_indices[section.id] = clamp(current + 1, 0, last)
        elif action == InputAction.SELECT:
            item = self.focused_item
            if item is not None and item.stream_url:
                logger.info("Playing %s", item.id)
                state.now_playing = item

    # --- Presentation ---

    def snapshot(self) -> dict:
        """Current focus coordinates and scroll offsets, JSON-ready."""
        state = self.state
        section = self.active_section
        scroll_x = row_offset(section.layout, self.item_index(section.id)) if section else 0

        return {
            "status": self.status.value,
            "currentPage": self.current_page,
            "error": self.error,
            "focusZone": state.focus_zone.value,
            "activeMenuIndex": state.active_menu_index,
            "activeSectionIndex": state.active_section_index,
            "activeItemIndices": dict(state.active_item_indices),
            "scrollX": scroll_x,
            "scrollY": column_offset(state.active_section_index),
            "nowPlaying": (
                serialize_item(state.now_playing) if state.now_playing else None
            ),
            "externalAction": (
                serialize_navigation_item(self.external_action)
                if self.external_action
                else None
            ),
        }
