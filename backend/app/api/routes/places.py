from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, HTTPException, Response, status

from ...contracts import PlaceCreate, PlaceOut, PlaceSearchResponse
from ...logging_config import get_logger
from ...metrics import place_search_results, place_searches_total, places_written_total
from ...search import QueryError, Region, compile_query, parse_params
from ...serializers import tokens_to_filters
from ...storage import DB
from ..types import (
    CategoryFilter,
    PaymentFilter,
    PlatformFilter,
    PriceFilter,
    SearchTerm,
    SortData,
    SortStatus,
)

router = APIRouter(tags=["places"])
logger = get_logger(__name__)

KNOWN_REGIONS = frozenset(member.value for member in Region)


@router.get("/places/{region}", response_model=PlaceSearchResponse)
async def search_places(
    region: str,
    filter_category: CategoryFilter = None,
    filter_price: PriceFilter = None,
    filter_platform: PlatformFilter = None,
    filter_payment: PaymentFilter = None,
    search: SearchTerm = None,
    sort_status: SortStatus = None,
    sort_data: SortData = None,
):
    raw_params = {
        "filter_category": filter_category,
        "filter_price": filter_price,
        "filter_platform": filter_platform,
        "filter_payment": filter_payment,
        "search": search,
        "sort_status": sort_status,
        "sort_data": sort_data,
    }
    try:
        tokens = parse_params(raw_params, region)
    except QueryError as exc:
        region_label = region.upper() if region.upper() in KNOWN_REGIONS else "unknown"
        place_searches_total.labels(region=region_label, outcome=type(exc).__name__).inc()
        logger.info("place_query_rejected", region=region, param=exc.param, reason=exc.message)
        raise

    spec = compile_query(tokens)
    places = await DB.find_places(spec)

    place_searches_total.labels(region=spec.region.value, outcome="ok").inc()
    place_search_results.labels(region=spec.region.value).observe(len(places))
    logger.info("place_search", results=len(places), **spec.describe())
    return {"places": places, "filters": tokens_to_filters(tokens)}


@router.post("/places", response_model=PlaceOut, status_code=status.HTTP_201_CREATED)
async def create_place(payload: PlaceCreate):
    place = await DB.create_place(payload)
    places_written_total.labels(action="create").inc()
    return place


@router.delete("/places/{place_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_place(place_id: UUID):
    if not await DB.delete_place(str(place_id)):
        raise HTTPException(404, "Place not found")
    places_written_total.labels(action="delete").inc()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
