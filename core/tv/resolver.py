# core/tv/resolver.py
"""Resolve a page of the content graph into a TV configuration tree.

Fetches the page, filters blocks by platform, expands playlists into media,
normalizes each item and attaches layout metrics, so the low-power TV client
doesn't have to.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from core.config import get_config_version, get_default_stream_url
from core.content.store import ContentStore
from core.content.types import Block, BlockType, MediaItem, Platform
from core.errors import EmptyResultError, MissingStreamError, NotFoundError

from .layout import calculate_layout, format_duration, uses_poster
from .types import (
    ItemMetadata,
    ResolvedConfigurationTree,
    ResolvedMediaItem,
    ResolvedSection,
    TreeMeta,
)

logger = logging.getLogger(__name__)

MAX_BADGES = 2


def normalize_media_item(
    item: MediaItem, block_type: BlockType, default_stream: str
) -> ResolvedMediaItem:
    """Normalize a catalog item into a lightweight TV item."""
    stream_url = item.video_url or default_stream
    if not stream_url:
        raise MissingStreamError(f"No playable stream for media {item.id}")

    return ResolvedMediaItem(
        id=item.id,
        title=item.title,
        image=item.poster if uses_poster(block_type) else item.backdrop,
        action_url=f"/player/{item.id}",
        stream_url=stream_url,
        metadata=ItemMetadata(
            duration_str=format_duration(item.duration),
            year=str(item.year) if item.year else "",
            badges=tuple(item.tags[:MAX_BADGES]),
        ),
    )


class ContentResolver:
    """Read-only view over a ContentStore that produces resolved trees."""

    def __init__(
        self,
        store: ContentStore,
        *,
        version: str | None = None,
        default_stream: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.version = version or get_config_version()
        self.default_stream = (
            default_stream if default_stream is not None else get_default_stream_url()
        )
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _resolve_section(self, block: Block) -> ResolvedSection:
        raw_items = (
            self.store.get_playlist_items(block.playlist_id) if block.playlist_id else []
        )
        return ResolvedSection(
            id=block.id,
            type=block.type,
            title=block.title,
            requires_auth=block.visibility.requires_auth,
            layout=calculate_layout(block.type, block.layout_options),
            items=tuple(
                normalize_media_item(item, block.type, self.default_stream)
                for item in raw_items
            ),
        )

    def resolve(self, page_slug: str, platform: Platform) -> ResolvedConfigurationTree:
        """
        Resolve one page for one platform.

        Args:
            page_slug: Slug of the page to resolve
            platform: Target platform used for block visibility

        Returns:
            Frozen ResolvedConfigurationTree

        Raises:
            NotFoundError: No page matches the slug
            EmptyResultError: The assembled tree is structurally invalid
            MissingStreamError: An item has no stream and no default is configured
        """
        page = self.store.get_page(page_slug)
        if page is None:
            logger.error("Page %r not found", page_slug)
            raise NotFoundError(f"Page '{page_slug}' not found")

        sections = tuple(
            self._resolve_section(block)
            for block in page.blocks
            if block.visibility.allows(platform)
        )

        config = self.store.config
        tree = ResolvedConfigurationTree(
            meta=TreeMeta(
                generated_at=self._clock().isoformat(),
                version=self.version,
                platform=platform,
            ),
            theme=config.theme,
            navigation=tuple(config.navigation),
            page_id=page.id,
            page_slug=page.slug,
            page_title=page.title,
            sections=sections,
        )
        _check_tree(tree)

        logger.debug(
            "Resolved page %s for %s: %d sections",
            page_slug,
            platform.value,
            len(sections),
        )
        return tree


def _check_tree(tree: ResolvedConfigurationTree) -> None:
    """Reject trees the navigation engine cannot drive."""
    if not tree.navigation:
        raise EmptyResultError(f"Resolved page '{tree.page_slug}' has no navigation")

    section_ids = [s.id for s in tree.sections]
    if len(section_ids) != len(set(section_ids)):
        raise EmptyResultError(
            f"Resolved page '{tree.page_slug}' has duplicate section ids"
        )
