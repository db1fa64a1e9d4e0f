"""
Type definitions for the content graph: media, playlists, blocks and pages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class Platform(str, Enum):
    TV = "TV"
    WEB = "WEB"
    MOBILE = "MOBILE"


class BlockType(str, Enum):
    HERO = "HERO"
    RAIL_LANDSCAPE = "RAIL_LANDSCAPE"
    RAIL_PORTRAIT = "RAIL_PORTRAIT"
    GRID = "GRID"
    CONTINUE_WATCHING = "CONTINUE_WATCHING"
    LIVE_STRIP = "LIVE_STRIP"


class SourceProvider(str, Enum):
    JWPLAYER = "JWPLAYER"
    CLOUDFLARE = "CLOUDFLARE"
    CUSTOM = "CUSTOM"


NavigationAction = Literal["PAGE", "LINK", "MODAL"]


@dataclass(frozen=True)
class MediaItem:
    """A playable catalog entry."""

    id: str
    provider_id: str  # External id (e.g. JW mediaid)
    provider: SourceProvider
    title: str
    description: str = ""
    duration: int = 0  # Seconds
    poster: str = ""
    backdrop: str = ""
    video_url: str = ""  # HLS or DASH
    tags: tuple[str, ...] = ()
    year: int | None = None


@dataclass
class LayoutOptions:
    aspect_ratio: Literal["16:9", "2:3", "1:1"] | None = None
    item_height: int | None = None
    autoplay: bool = False
    lazy_load: bool = False


@dataclass
class Visibility:
    platforms: frozenset[Platform]
    requires_auth: bool = False

    def allows(self, platform: Platform) -> bool:
        return platform in self.platforms


@dataclass
class Block:
    """A configured content unit on a page. Mutable by editorial operations."""

    id: str
    page_id: str
    type: BlockType
    title: str
    display_order: int
    visibility: Visibility
    playlist_id: str | None = None
    layout_options: LayoutOptions = field(default_factory=LayoutOptions)


@dataclass
class Page:
    """A page with its blocks sorted by display order."""

    id: str
    slug: str
    title: str
    blocks: list[Block] = field(default_factory=list)


@dataclass(frozen=True)
class NavigationItem:
    id: str
    label: str
    action: NavigationAction
    target: str  # Page slug for PAGE, URL or modal id otherwise


@dataclass(frozen=True)
class Theme:
    primary_color: str
    focus_color: str
    background_color: str
    font_family: str
    radius: int


@dataclass
class GlobalConfig:
    theme: Theme
    navigation: list[NavigationItem]
    feature_flags: dict[str, bool] = field(default_factory=dict)
