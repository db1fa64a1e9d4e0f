# core/content/store.py
"""In-memory content graph store.

Holds pages, blocks, playlist bindings, the media catalog and the global
configuration. Editorial operations and ingestion mutate the store through
the methods below; the resolver only reads from it.
"""

import logging
from dataclasses import dataclass

from .types import Block, GlobalConfig, MediaItem, Page

logger = logging.getLogger(__name__)


class StoreNotInitializedError(Exception):
    """Raised when the process store is accessed before it has been set."""

    pass


class BlockNotFoundError(Exception):
    """Raised when an editorial operation targets an unknown block."""

    pass


class MediaNotFoundError(Exception):
    """Raised when a media id is not present in the catalog."""

    pass


@dataclass
class PageRecord:
    """Page metadata as stored; blocks are kept separately, keyed by page_id."""

    id: str
    slug: str
    title: str


@dataclass
class ContentStore:
    """Keyed collections backing the content graph."""

    pages: list[PageRecord]
    blocks: list[Block]
    playlists: dict[str, list[str]]
    media: dict[str, MediaItem]
    config: GlobalConfig

    # --- Pages & blocks ---

    def list_pages(self) -> list[Page]:
        return [self._build_page(record) for record in self.pages]

    def get_page(self, slug: str) -> Page | None:
        """Look up a page by slug with its blocks in display order."""
        for record in self.pages:
            if record.slug == slug:
                return self._build_page(record)
        logger.debug("Page %r not found", slug)
        return None

    def _build_page(self, record: PageRecord) -> Page:
        blocks = sorted(
            (b for b in self.blocks if b.page_id == record.id),
            key=lambda b: b.display_order,
        )
        return Page(id=record.id, slug=record.slug, title=record.title, blocks=blocks)

    def get_block(self, block_id: str) -> Block:
        for block in self.blocks:
            if block.id == block_id:
                return block
        raise BlockNotFoundError(f"Block not found: {block_id}")

    def update_block_title(self, block_id: str, title: str) -> Block:
        block = self.get_block(block_id)
        block.title = title
        logger.info('Updated block %s title to "%s"', block_id, title)
        return block

    # --- Playlists ---

    def get_playlist_ids(self, playlist_id: str) -> list[str]:
        return list(self.playlists.get(playlist_id, []))

    def get_playlist_items(self, playlist_id: str) -> list[MediaItem]:
        """Resolve a playlist into catalog items, preserving binding order.

        Unknown playlists resolve to an empty list; ids missing from the
        catalog are skipped.
        """
        return [
            self.media[media_id]
            for media_id in self.playlists.get(playlist_id, [])
            if media_id in self.media
        ]

    def add_media_to_block(self, block_id: str, media_id: str) -> bool:
        """Append a media id to the block's playlist.

        Returns:
            True if the id was appended, False if the block has no playlist
            or the id was already bound.

        Raises:
            BlockNotFoundError: Unknown block
            MediaNotFoundError: Unknown media id
        """
        block = self.get_block(block_id)
        if not self.has_media(media_id):
            raise MediaNotFoundError(f"Media not found: {media_id}")
        if not block.playlist_id:
            return False

        bound = self.playlists.setdefault(block.playlist_id, [])
        if media_id in bound:
            return False

        bound.append(media_id)
        logger.info("Added media %s to block %s", media_id, block_id)
        return True

    def remove_media_from_block(self, block_id: str, media_id: str) -> bool:
        """Remove a media id from the block's playlist. No-op if absent."""
        block = self.get_block(block_id)
        if not block.playlist_id:
            return False

        bound = self.playlists.get(block.playlist_id)
        if not bound or media_id not in bound:
            return False

        self.playlists[block.playlist_id] = [m for m in bound if m != media_id]
        logger.info("Removed media %s from block %s", media_id, block_id)
        return True

    # --- Media catalog ---

    def list_media(self) -> list[MediaItem]:
        return list(self.media.values())

    def has_media(self, media_id: str) -> bool:
        return media_id in self.media

    def get_media(self, media_id: str) -> MediaItem:
        try:
            return self.media[media_id]
        except KeyError:
            raise MediaNotFoundError(f"Media not found: {media_id}") from None

    def add_media(self, item: MediaItem) -> bool:
        """Add an item to the catalog. Existing ids are left untouched."""
        if item.id in self.media:
            return False
        self.media[item.id] = item
        return True


# Process-wide store used by the API layer
_store: ContentStore | None = None


def get_store() -> ContentStore:
    if _store is None:
        raise StoreNotInitializedError("Content store has not been initialized")
    return _store


def set_store(store: ContentStore) -> None:
    global _store
    _store = store


def clear_store() -> None:
    global _store
    _store = None
