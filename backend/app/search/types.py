"""Closed vocabularies and immutable value types shared by the parser, compiler and store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Region(str, Enum):
    GANESHA = "GANESHA"
    JATINANGOR = "JATINANGOR"


class SortField(str, Enum):
    # first member is the default ordering
    RATING = "rating"
    DISTANCE = "distance"
    PRICE = "price"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TagRelation(str, Enum):
    CATEGORIES = "categories"
    PLATFORMS = "platforms"
    PAYMENT_METHODS = "payment_methods"


class SearchTarget(str, Enum):
    NAME = "name"
    DESCRIPTION = "description"
    CATEGORY = "category"


DEFAULT_SEARCH_TARGETS = (SearchTarget.NAME, SearchTarget.DESCRIPTION, SearchTarget.CATEGORY)


@dataclass(frozen=True)
class FilterTokens:
    """Typed view of one search request, before it is compiled into a query."""

    region: Region
    sort_field: SortField = SortField.RATING
    sort_direction: SortDirection | None = None
    categories: tuple[str, ...] | None = None
    platforms: tuple[str, ...] | None = None
    payment_methods: tuple[str, ...] | None = None
    price_min: float | None = None
    price_max: float | None = None
    search_term: str | None = None


@dataclass(frozen=True)
class SearchClause:
    """Case-insensitive substring match; a place matches if any target contains the term."""

    term: str
    targets: tuple[SearchTarget, ...] = DEFAULT_SEARCH_TARGETS


@dataclass(frozen=True)
class MembershipClause:
    """At least one tag of `relation` has a name in `names` (lower-cased)."""

    relation: TagRelation
    names: frozenset[str]


@dataclass(frozen=True)
class PriceRange:
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True)
class Ordering:
    field: SortField
    # None leaves the direction to the store's default
    direction: SortDirection | None = None


@dataclass(frozen=True)
class QuerySpec:
    region: Region
    ordering: Ordering
    search: SearchClause | None = None
    categories: MembershipClause | None = None
    platforms: MembershipClause | None = None
    payment_methods: MembershipClause | None = None
    price: PriceRange | None = None

    @property
    def membership_clauses(self) -> tuple[MembershipClause, ...]:
        clauses = (self.categories, self.platforms, self.payment_methods)
        return tuple(clause for clause in clauses if clause is not None)

    def describe(self) -> dict[str, Any]:
        """Flat summary for structured logs."""
        summary: dict[str, Any] = {
            "region": self.region.value,
            "sort_field": self.ordering.field.value,
            "sort_direction": self.ordering.direction.value if self.ordering.direction else None,
        }
        if self.search is not None:
            summary["search"] = self.search.term
        for clause in self.membership_clauses:
            summary[clause.relation.value] = sorted(clause.names)
        if self.price is not None:
            summary["price_min"] = self.price.minimum
            summary["price_max"] = self.price.maximum
        return summary


__all__ = [
    "Region",
    "SortField",
    "SortDirection",
    "TagRelation",
    "SearchTarget",
    "FilterTokens",
    "SearchClause",
    "MembershipClause",
    "PriceRange",
    "Ordering",
    "QuerySpec",
]
