# core/tv/types.py
"""Resolved configuration types.

These represent the final, client-ready structure that a TV client renders.
Everything here is frozen: a resolved tree is a snapshot and is replaced
wholesale rather than mutated.
"""

from dataclasses import dataclass

from core.content.types import BlockType, NavigationItem, Platform, Theme


@dataclass(frozen=True)
class Layout:
    item_width: int
    item_height: int
    gap: int
    title_y: int
    row_y: int


@dataclass(frozen=True)
class ItemMetadata:
    duration_str: str
    year: str
    badges: tuple[str, ...]


@dataclass(frozen=True)
class ResolvedMediaItem:
    """A media item normalized for the TV client."""

    id: str
    title: str
    image: str  # Poster or backdrop, chosen by block type
    action_url: str
    stream_url: str  # Never empty once resolved
    metadata: ItemMetadata


@dataclass(frozen=True)
class ResolvedSection:
    id: str
    type: BlockType
    title: str
    requires_auth: bool  # Carried through, not enforced
    layout: Layout
    items: tuple[ResolvedMediaItem, ...]


@dataclass(frozen=True)
class TreeMeta:
    generated_at: str  # ISO-8601, UTC
    version: str
    platform: Platform


@dataclass(frozen=True)
class ResolvedConfigurationTree:
    """One page resolved for one platform."""

    meta: TreeMeta
    theme: Theme
    navigation: tuple[NavigationItem, ...]
    page_id: str
    page_slug: str
    page_title: str
    sections: tuple[ResolvedSection, ...]

    def find_section(self, section_id: str) -> ResolvedSection | None:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None
