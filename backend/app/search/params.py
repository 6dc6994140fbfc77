"""Decode raw search request parameters into validated filter tokens."""

from __future__ import annotations

import re
from collections.abc import Mapping

from ..validators import LIST_DELIMITER, dedupe_casefold, split_delimited
from .errors import NotFoundError, ValidationError
from .types import FilterTokens, Region, SortDirection, SortField

# plain decimals only; no signs, exponents or digit separators
PRICE_PATTERN = re.compile(r"\d+(?:\.\d+)?|\.\d+", re.ASCII)


class ParameterParser:
    """
    Parser for the query string of a place search.

    Every value arrives as an optional string. Absent and empty values mean
    "no constraint" for filter dimensions; only values outside a closed domain
    are rejected.
    """

    CATEGORY_PARAM = "filter_category"
    PRICE_PARAM = "filter_price"
    PLATFORM_PARAM = "filter_platform"
    PAYMENT_PARAM = "filter_payment"
    SEARCH_PARAM = "search"
    SORT_DIRECTION_PARAM = "sort_status"
    SORT_FIELD_PARAM = "sort_data"

    PRICE_COMPONENTS_MAX = 2

    @classmethod
    def parse(cls, raw_params: Mapping[str, str | None], route_region: str) -> FilterTokens:
        """
        Build the token set for one request.

        Args:
            raw_params: Query parameters by name; missing keys are treated as absent
            route_region: Region path segment, case-insensitive

        Raises:
            NotFoundError: If the region is not a known campus
            ValidationError: If a sort or price parameter is malformed
        """
        region = cls.parse_region(route_region)
        price_min, price_max = cls.parse_price_range(raw_params.get(cls.PRICE_PARAM))
        return FilterTokens(
            region=region,
            sort_field=cls.parse_sort_field(raw_params.get(cls.SORT_FIELD_PARAM)),
            sort_direction=cls.parse_sort_direction(raw_params.get(cls.SORT_DIRECTION_PARAM)),
            categories=cls.parse_list(raw_params.get(cls.CATEGORY_PARAM)),
            platforms=cls.parse_list(raw_params.get(cls.PLATFORM_PARAM)),
            payment_methods=cls.parse_list(raw_params.get(cls.PAYMENT_PARAM)),
            price_min=price_min,
            price_max=price_max,
            search_term=cls.parse_search(raw_params.get(cls.SEARCH_PARAM)),
        )

    @classmethod
    def parse_region(cls, value: str | None) -> Region:
        if not isinstance(value, str) or not value.isascii():
            raise NotFoundError(f"Unknown region '{value}'", param="region")
        try:
            return Region(value.upper())
        except ValueError as exc:
            raise NotFoundError(f"Unknown region '{value}'", param="region") from exc

    @classmethod
    def parse_list(cls, raw: str | None) -> tuple[str, ...] | None:
        """Split a `;`-delimited filter. Nothing left after splitting means no filter."""
        items = dedupe_casefold(split_delimited(raw))
        return tuple(items) or None

    @classmethod
    def parse_price_range(cls, raw: str | None) -> tuple[float | None, float | None]:
        if not raw:
            return None, None
        parts = raw.split(LIST_DELIMITER)
        if len(parts) > cls.PRICE_COMPONENTS_MAX:
            raise ValidationError(
                f"Invalid price range '{raw}': expected 'min;max'",
                param=cls.PRICE_PARAM,
            )
        bounds = [cls._parse_price_component(part) for part in parts]
        bounds += [None] * (cls.PRICE_COMPONENTS_MAX - len(bounds))
        return bounds[0], bounds[1]

    @classmethod
    def _parse_price_component(cls, part: str) -> float | None:
        text = part.strip()
        if not text:
            return None
        if not PRICE_PATTERN.fullmatch(text):
            raise ValidationError(
                f"Invalid price '{text}': must be a non-negative decimal number",
                param=cls.PRICE_PARAM,
            )
        return float(text)

    @classmethod
    def parse_search(cls, raw: str | None) -> str | None:
        # literal substring; no trimming
        return raw or None

    @classmethod
    def parse_sort_direction(cls, raw: str | None) -> SortDirection | None:
        if not raw:
            return None
        try:
            return SortDirection(raw)
        except ValueError as exc:
            allowed = ", ".join(member.value for member in SortDirection)
            raise ValidationError(
                f"Invalid sort direction '{raw}': expected one of {allowed}",
                param=cls.SORT_DIRECTION_PARAM,
            ) from exc

    @classmethod
    def parse_sort_field(cls, raw: str | None) -> SortField:
        if not raw:
            return SortField.RATING
        try:
            return SortField(raw)
        except ValueError as exc:
            allowed = ", ".join(member.value for member in SortField)
            raise ValidationError(
                f"Invalid sort field '{raw}': expected one of {allowed}",
                param=cls.SORT_FIELD_PARAM,
            ) from exc


def parse_params(raw_params: Mapping[str, str | None], route_region: str) -> FilterTokens:
    """Shorthand for ParameterParser.parse."""
    return ParameterParser.parse(raw_params, route_region)


__all__ = ["ParameterParser", "parse_params"]
