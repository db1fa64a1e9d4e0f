# core/tv/layout.py
"""Layout metrics for TV sections (1080p canvas).

LAYOUTS is the single lookup used by both the resolver and the navigation
engine's scroll math. Every BlockType has an entry.
"""

from core.content.types import BlockType, LayoutOptions

from .types import Layout

_SQUARE = Layout(item_width=300, item_height=300, gap=40, title_y=0, row_y=60)

LAYOUTS: dict[BlockType, Layout] = {
    BlockType.HERO: Layout(item_width=1920, item_height=600, gap=0, title_y=50, row_y=100),
    BlockType.RAIL_PORTRAIT: Layout(item_width=250, item_height=375, gap=40, title_y=0, row_y=60),
    BlockType.RAIL_LANDSCAPE: Layout(item_width=400, item_height=225, gap=40, title_y=0, row_y=60),
    BlockType.GRID: _SQUARE,
    BlockType.CONTINUE_WATCHING: _SQUARE,
    BlockType.LIVE_STRIP: _SQUARE,
}

# Block types that show poster (portrait) artwork instead of the backdrop
PORTRAIT_BLOCK_TYPES: frozenset[BlockType] = frozenset(
    {BlockType.RAIL_PORTRAIT, BlockType.GRID}
)

# Vertical pitch between stacked sections, and how much of the previous
# section stays visible above the focused one
SECTION_PITCH = 380
SECTION_PEEK = 120


def calculate_layout(block_type: BlockType, options: LayoutOptions | None = None) -> Layout:
    """Return the layout for a block type.

    Options are accepted for forward compatibility but do not change the
    metrics: the table is the only input.
    """
    return LAYOUTS[block_type]


def uses_poster(block_type: BlockType) -> bool:
    return block_type in PORTRAIT_BLOCK_TYPES


def row_offset(layout: Layout, item_index: int) -> int:
    """Horizontal shift (px) that brings item_index to the start of its row."""
    return item_index * (layout.item_width + layout.gap)


def column_offset(section_index: int) -> int:
    """Vertical shift (px) of the section stack for the focused section."""
    if section_index == 0:
        return 0
    return -(section_index * SECTION_PITCH) + SECTION_PEEK


def format_duration(seconds: int) -> str:
    """Format seconds as "1h 30m", or "5m" when under an hour."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"
