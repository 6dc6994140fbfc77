from __future__ import annotations

from typing import Annotated

from fastapi import Query

CategoryFilter = Annotated[
    str | None,
    Query(description="Categories separated by ';' (e.g. ayam;nasi)"),
]

PriceFilter = Annotated[
    str | None,
    Query(description="Inclusive price bounds as 'min;max'; either side may be empty"),
]

PlatformFilter = Annotated[
    str | None,
    Query(description="Ordering platforms separated by ';'"),
]

PaymentFilter = Annotated[
    str | None,
    Query(description="Payment methods separated by ';'"),
]

SearchTerm = Annotated[
    str | None,
    Query(description="Case-insensitive substring matched against name, description and categories"),
]

SortStatus = Annotated[
    str | None,
    Query(description="Sort direction: asc, desc, or empty for the store default"),
]

SortData = Annotated[
    str | None,
    Query(description="Sort field: rating (default), distance or price"),
]
