from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from .contracts import PlaceCreate
from .db.core import IS_SQLITE, ensure_db_initialized, get_session
from .db.models import TAG_MODELS, CategoryRecord, PlaceRecord
from .logging_config import get_logger
from .metrics import track_db_operation
from .search.types import (
    MembershipClause,
    Ordering,
    PriceRange,
    QuerySpec,
    SearchClause,
    SearchTarget,
    SortDirection,
    SortField,
)
from .serializers import place_to_dict

logger = get_logger(__name__)

SORT_COLUMNS = {
    SortField.RATING: PlaceRecord.rating,
    SortField.DISTANCE: PlaceRecord.distance,
    SortField.PRICE: PlaceRecord.price,
}

RELATIONS = {
    "categories": PlaceRecord.categories,
    "platforms": PlaceRecord.platforms,
    "payment_methods": PlaceRecord.payment_methods,
}


def _escape_like(term: str) -> str:
    return term.replace("/", "//").replace("%", "/%").replace("_", "/_")


def _contains_ci(column, term: str):
    """Case-insensitive substring test with LIKE wildcards taken literally."""
    if IS_SQLITE:
        pattern = f"%{_escape_like(term.casefold())}%"
        return func.casefold(column).like(pattern, escape="/")
    return column.icontains(term, autoescape=True)


def _search_condition(clause: SearchClause):
    targets = {
        SearchTarget.NAME: _contains_ci(PlaceRecord.name, clause.term),
        SearchTarget.DESCRIPTION: _contains_ci(PlaceRecord.description, clause.term),
        SearchTarget.CATEGORY: PlaceRecord.categories.any(
            _contains_ci(CategoryRecord.name, clause.term)
        ),
    }
    return or_(*(targets[target] for target in clause.targets))


def _membership_condition(clause: MembershipClause):
    tag_model = TAG_MODELS[clause.relation.value]
    relation = RELATIONS[clause.relation.value]
    return relation.any(func.lower(tag_model.name).in_(sorted(clause.names)))


def _price_conditions(price: PriceRange) -> list[Any]:
    conditions = []
    if price.minimum is not None:
        conditions.append(PlaceRecord.price >= price.minimum)
    if price.maximum is not None:
        conditions.append(PlaceRecord.price <= price.maximum)
    return conditions


def _order_by(ordering: Ordering) -> list[Any]:
    column = SORT_COLUMNS[ordering.field]
    if ordering.direction is SortDirection.DESC:
        primary = column.desc()
    elif ordering.direction is SortDirection.ASC:
        primary = column.asc()
    else:
        primary = column
    # primary key keeps ties stable across calls
    return [primary, PlaceRecord.id]


def build_statement(spec: QuerySpec):
    """Translate a QuerySpec into a SELECT over places."""
    stmt = select(PlaceRecord).where(PlaceRecord.region == spec.region.value)
    if spec.search is not None:
        stmt = stmt.where(_search_condition(spec.search))
    for clause in spec.membership_clauses:
        stmt = stmt.where(_membership_condition(clause))
    if spec.price is not None:
        for condition in _price_conditions(spec.price):
            stmt = stmt.where(condition)
    return stmt.order_by(*_order_by(spec.ordering))


_UPSERT_INSERTS = {"sqlite": sqlite_insert, "postgresql": postgresql_insert}


async def _resolve_tags(session: AsyncSession, relation: str, names: list[str]) -> list[Any]:
    """Load tag records by name, creating the missing ones."""
    if not names:
        return []
    tag_model = TAG_MODELS[relation]
    insert = _UPSERT_INSERTS[session.bind.dialect.name]
    # concurrent writers may add the same tag; the loser keeps the winner's row
    await session.execute(
        insert(tag_model)
        .values([{"name": name} for name in names])
        .on_conflict_do_nothing(index_elements=["name"])
    )
    rows = (await session.execute(select(tag_model).where(tag_model.name.in_(names)))).scalars()
    by_name = {row.name: row for row in rows}
    return [by_name[name] for name in names]


class PlaceStore:
    """Place catalog persisted in SQL via `backend/app/db`."""

    def __init__(self) -> None:
        ensure_db_initialized()

    async def find_places(self, spec: QuerySpec) -> list[dict[str, Any]]:
        with track_db_operation("find_places"):
            async with get_session() as session:
                rows = (await session.execute(build_statement(spec))).scalars().all()
                return [place_to_dict(row) for row in rows]

    async def get_place(self, place_id: str) -> dict[str, Any] | None:
        with track_db_operation("get_place"):
            async with get_session() as session:
                record = await session.get(PlaceRecord, str(place_id))
                return place_to_dict(record) if record else None

    async def count_places(self) -> int:
        with track_db_operation("count_places"):
            async with get_session() as session:
                result = await session.execute(select(func.count()).select_from(PlaceRecord))
                return int(result.scalar_one())

    async def create_place(self, payload: PlaceCreate) -> dict[str, Any]:
        with track_db_operation("create_place"):
            async with get_session() as session:
                record = PlaceRecord(
                    name=payload.name,
                    description=payload.description,
                    image_url=payload.image_url,
                    price=payload.price,
                    address=payload.address,
                    latitude=payload.latitude,
                    longitude=payload.longitude,
                    time_open=payload.time_open,
                    time_close=payload.time_close,
                    distance=payload.distance,
                    rating=payload.rating,
                    region=payload.region.value,
                )
                record.categories = await _resolve_tags(session, "categories", payload.category)
                record.platforms = await _resolve_tags(session, "platforms", payload.platform)
                record.payment_methods = await _resolve_tags(
                    session, "payment_methods", payload.payment_method
                )
                session.add(record)
                await session.commit()
                logger.info(
                    "place_created", place_id=record.id, region=record.region, name=record.name
                )
                return place_to_dict(record)

    async def delete_place(self, place_id: str) -> bool:
        with track_db_operation("delete_place"):
            async with get_session() as session:
                record = await session.get(PlaceRecord, str(place_id))
                if record is None:
                    return False
                await session.delete(record)
                await session.commit()
                logger.info("place_deleted", place_id=str(place_id))
                return True


DB = PlaceStore()
