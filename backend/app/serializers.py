from __future__ import annotations

from typing import Any

from .search.types import FilterTokens


def get_attr(o: Any, key: str, default=None):
    if isinstance(o, dict):
        return o.get(key, default)
    return getattr(o, key, default)


def tag_projection(tags: Any) -> list[dict[str, str]]:
    """Name-only view of a tag collection, sorted for stable output."""
    names = sorted(str(get_attr(tag, "name")) for tag in tags or [])
    return [{"name": name} for name in names]


def place_to_dict(r: Any) -> dict[str, Any]:
    return {
        "id": str(get_attr(r, "id")),
        "name": get_attr(r, "name"),
        "description": get_attr(r, "description"),
        "image_url": get_attr(r, "image_url"),
        "price": float(get_attr(r, "price", 0.0) or 0.0),
        "address": get_attr(r, "address"),
        "latitude": get_attr(r, "latitude"),
        "longitude": get_attr(r, "longitude"),
        "time_open": get_attr(r, "time_open"),
        "time_close": get_attr(r, "time_close"),
        "distance": float(get_attr(r, "distance", 0.0) or 0.0),
        "rating": float(get_attr(r, "rating", 0.0) or 0.0),
        "region": get_attr(r, "region"),
        "created_at": get_attr(r, "created_at"),
        "updated_at": get_attr(r, "updated_at"),
        "categories": tag_projection(get_attr(r, "categories")),
        "platforms": tag_projection(get_attr(r, "platforms")),
        "payment_methods": tag_projection(get_attr(r, "payment_methods")),
    }


def tokens_to_filters(tokens: FilterTokens) -> dict[str, Any]:
    def _as_list(values: tuple[str, ...] | None) -> list[str] | None:
        return list(values) if values is not None else None

    return {
        "categories": _as_list(tokens.categories),
        "price_min": tokens.price_min,
        "price_max": tokens.price_max,
        "platforms": _as_list(tokens.platforms),
        "payment_methods": _as_list(tokens.payment_methods),
        "search": tokens.search_term,
    }
