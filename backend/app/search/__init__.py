"""Request-to-query translation for place search."""

from .compiler import FilterCompiler, compile_query
from .errors import NotFoundError, QueryError, ValidationError
from .params import ParameterParser, parse_params
from .types import (
    FilterTokens,
    MembershipClause,
    Ordering,
    PriceRange,
    QuerySpec,
    Region,
    SearchClause,
    SearchTarget,
    SortDirection,
    SortField,
    TagRelation,
)

__all__ = [
    "FilterCompiler",
    "FilterTokens",
    "MembershipClause",
    "NotFoundError",
    "Ordering",
    "ParameterParser",
    "PriceRange",
    "QueryError",
    "QuerySpec",
    "Region",
    "SearchClause",
    "SearchTarget",
    "SortDirection",
    "SortField",
    "TagRelation",
    "ValidationError",
    "compile_query",
    "parse_params",
]
