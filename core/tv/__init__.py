"""TV configuration resolution and spatial navigation."""

from .navigation import (
    EngineState,
    FocusZone,
    InputAction,
    NavigationEngine,
    NavigationState,
    make_tree_fetcher,
)
from .resolver import ContentResolver
from .serialize import serialize_tree
from .types import (
    Layout,
    ResolvedConfigurationTree,
    ResolvedMediaItem,
    ResolvedSection,
)

__all__ = [
    "EngineState",
    "FocusZone",
    "InputAction",
    "NavigationEngine",
    "NavigationState",
    "make_tree_fetcher",
    "ContentResolver",
    "serialize_tree",
    "Layout",
    "ResolvedConfigurationTree",
    "ResolvedMediaItem",
    "ResolvedSection",
]
