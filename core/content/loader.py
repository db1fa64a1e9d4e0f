# core/content/loader.py
"""Load the content graph from a JSON seed file."""

import json
from pathlib import Path

from core.config import get_content_seed_path

from .store import ContentStore, PageRecord
from .types import (
    Block,
    BlockType,
    GlobalConfig,
    LayoutOptions,
    MediaItem,
    NavigationItem,
    Platform,
    SourceProvider,
    Theme,
    Visibility,
)


class SeedNotFoundError(Exception):
    """Raised when the content seed file cannot be found."""
    pass


# Seed shipped with the package
SEED_PATH = Path(__file__).parent / "data" / "seed.json"


def _parse_block(data: dict) -> Block:
    """Parse a block dict into a Block dataclass."""
    options = data.get("layoutOptions", {})
    visibility = data.get("visibility", {})

    return Block(
        id=data["id"],
        page_id=data["pageId"],
        type=BlockType(data["type"]),
        title=data["title"],
        display_order=data["displayOrder"],
        playlist_id=data.get("playlistId"),
        layout_options=LayoutOptions(
            aspect_ratio=options.get("aspectRatio"),
            item_height=options.get("itemHeight"),
            autoplay=options.get("autoplay", False),
            lazy_load=options.get("lazyLoad", False),
        ),
        visibility=Visibility(
            platforms=frozenset(Platform(p) for p in visibility.get("platforms", [])),
            requires_auth=visibility.get("requiresAuth", False),
        ),
    )


def parse_media_item(data: dict) -> MediaItem:
    """Parse a catalog entry dict into a MediaItem."""
    return MediaItem(
        id=data["id"],
        provider_id=data.get("providerId", data["id"]),
        provider=SourceProvider(data.get("provider", "CUSTOM")),
        title=data["title"],
        description=data.get("description", ""),
        duration=int(data.get("duration") or 0),
        poster=data.get("poster", ""),
        backdrop=data.get("backdrop", ""),
        video_url=data.get("videoUrl", ""),
        tags=tuple(data.get("tags", [])),
        year=data.get("year"),
    )


def _parse_config(data: dict) -> GlobalConfig:
    theme = data["theme"]
    return GlobalConfig(
        theme=Theme(
            primary_color=theme["primaryColor"],
            focus_color=theme["focusColor"],
            background_color=theme["backgroundColor"],
            font_family=theme["fontFamily"],
            radius=theme["radius"],
        ),
        navigation=[
            NavigationItem(
                id=n["id"],
                label=n["label"],
                action=n["action"],
                target=n["target"],
            )
            for n in data.get("navigation", [])
        ],
        feature_flags=dict(data.get("featureFlags", {})),
    )


def build_store(data: dict) -> ContentStore:
    """Build a ContentStore from an already-decoded seed document."""
    media = {}
    for raw in data.get("media", []):
        item = parse_media_item(raw)
        media[item.id] = item

    return ContentStore(
        pages=[
            PageRecord(id=p["id"], slug=p["slug"], title=p["title"])
            for p in data.get("pages", [])
        ],
        blocks=[_parse_block(b) for b in data.get("blocks", [])],
        playlists={pl: list(ids) for pl, ids in data.get("playlists", {}).items()},
        media=media,
        config=_parse_config(data["config"]),
    )


def load_store(path: str | Path | None = None) -> ContentStore:
    """
    Load the content store from a JSON seed file.

    Args:
        path: Seed file path. Defaults to CONTENT_SEED_PATH, then the
              bundled seed.

    Returns:
        A freshly built ContentStore

    Raises:
        SeedNotFoundError: If the seed file doesn't exist
    """
    seed_path = Path(path or get_content_seed_path() or SEED_PATH)

    if not seed_path.exists():
        raise SeedNotFoundError(f"Content seed not found: {seed_path}")

    with open(seed_path) as f:
        data = json.load(f)

    return build_store(data)
