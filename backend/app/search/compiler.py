"""Compile parsed filter tokens into a store-agnostic QuerySpec."""

from __future__ import annotations

from .types import (
    FilterTokens,
    MembershipClause,
    Ordering,
    PriceRange,
    QuerySpec,
    SearchClause,
    TagRelation,
)


class FilterCompiler:
    """
    Pure translation from FilterTokens to QuerySpec.

    The region clause is always present. Every other dimension is compiled only
    when its token is present, so an empty request selects the whole region and
    each extra parameter can only narrow the result.
    """

    @classmethod
    def compile(cls, tokens: FilterTokens) -> QuerySpec:
        return QuerySpec(
            region=tokens.region,
            ordering=Ordering(field=tokens.sort_field, direction=tokens.sort_direction),
            search=cls._search_clause(tokens.search_term),
            categories=cls._membership_clause(TagRelation.CATEGORIES, tokens.categories),
            platforms=cls._membership_clause(TagRelation.PLATFORMS, tokens.platforms),
            payment_methods=cls._membership_clause(
                TagRelation.PAYMENT_METHODS, tokens.payment_methods
            ),
            price=cls._price_range(tokens.price_min, tokens.price_max),
        )

    @staticmethod
    def _search_clause(term: str | None) -> SearchClause | None:
        if not term:
            return None
        return SearchClause(term=term)

    @staticmethod
    def _membership_clause(
        relation: TagRelation, names: tuple[str, ...] | None
    ) -> MembershipClause | None:
        if not names:
            return None
        return MembershipClause(relation=relation, names=frozenset(n.lower() for n in names))

    @staticmethod
    def _price_range(minimum: float | None, maximum: float | None) -> PriceRange | None:
        if minimum is None and maximum is None:
            return None
        return PriceRange(minimum=minimum, maximum=maximum)


def compile_query(tokens: FilterTokens) -> QuerySpec:
    """Shorthand for FilterCompiler.compile."""
    return FilterCompiler.compile(tokens)


__all__ = ["FilterCompiler", "compile_query"]
