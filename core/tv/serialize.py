# core/tv/serialize.py
"""Serialize resolved trees to the camelCase JSON shape the TV client reads."""

from core.content.types import NavigationItem, Theme

from .types import Layout, ResolvedConfigurationTree, ResolvedMediaItem, ResolvedSection


def serialize_theme(theme: Theme) -> dict:
    return {
        "primaryColor": theme.primary_color,
        "focusColor": theme.focus_color,
        "backgroundColor": theme.background_color,
        "fontFamily": theme.font_family,
        "radius": theme.radius,
    }


def serialize_navigation_item(item: NavigationItem) -> dict:
    return {
        "id": item.id,
        "label": item.label,
        "action": item.action,
        "target": item.target,
    }


def serialize_layout(layout: Layout) -> dict:
    return {
        "itemWidth": layout.item_width,
        "itemHeight": layout.item_height,
        "gap": layout.gap,
        "titleY": layout.title_y,
        "rowY": layout.row_y,
    }


def serialize_item(item: ResolvedMediaItem) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "image": item.image,
        "actionUrl": item.action_url,
        "streamUrl": item.stream_url,
        "metadata": {
            "durationStr": item.metadata.duration_str,
            "year": item.metadata.year,
            "badges": list(item.metadata.badges),
        },
    }


def serialize_section(section: ResolvedSection) -> dict:
    return {
        "id": section.id,
        "type": section.type.value,
        "title": section.title,
        "requiresAuth": section.requires_auth,
        "layout": serialize_layout(section.layout),
        "items": [serialize_item(i) for i in section.items],
    }


def serialize_tree(tree: ResolvedConfigurationTree) -> dict:
    """Serialize a resolved tree into a JSON-ready dict."""
    return {
        "meta": {
            "generatedAt": tree.meta.generated_at,
            "version": tree.meta.version,
            "platform": tree.meta.platform.value,
        },
        "theme": serialize_theme(tree.theme),
        "navigation": [serialize_navigation_item(n) for n in tree.navigation],
        "page": {
            "id": tree.page_id,
            "slug": tree.page_slug,
            "title": tree.page_title,
            "sections": [serialize_section(s) for s in tree.sections],
        },
    }
