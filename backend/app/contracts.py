from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .search.types import Region
from .validators import normalize_clock_time, normalize_display_name, normalize_tag_names


# --- Tags ---
class TagOut(BaseModel):
    name: str


# --- Places ---
class PlaceCreate(BaseModel):
    name: str
    description: str | None = None
    image_url: str | None = None
    price: float = Field(ge=0)
    region: Region
    address: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    time_open: str | None = None
    time_close: str | None = None
    distance: float = Field(default=0.0, ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)
    # `;`-delimited string or list of names
    category: list[str] = Field(default_factory=list)
    platform: list[str] = Field(default_factory=list)
    payment_method: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return normalize_display_name(value)

    @field_validator("region", mode="before")
    @classmethod
    def _region_upper(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("time_open", "time_close")
    @classmethod
    def _clock(cls, value: str | None, info) -> str | None:
        return normalize_clock_time(value, field=info.field_name)

    @field_validator("category", "platform", "payment_method", mode="before")
    @classmethod
    def _tags(cls, value: Any, info) -> list[str]:
        return normalize_tag_names(value, field=info.field_name)


class PlaceOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    image_url: str | None = None
    price: float
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    time_open: str | None = None
    time_close: str | None = None
    distance: float
    rating: float
    region: Region
    created_at: datetime | None = None
    updated_at: datetime | None = None
    categories: list[TagOut] = Field(default_factory=list)
    platforms: list[TagOut] = Field(default_factory=list)
    payment_methods: list[TagOut] = Field(default_factory=list)


# --- Search ---
class ActiveFilters(BaseModel):
    """Echo of the parsed request so clients can render the filters in effect."""

    categories: list[str] | None = None
    price_min: float | None = None
    price_max: float | None = None
    platforms: list[str] | None = None
    payment_methods: list[str] | None = None
    search: str | None = None


class PlaceSearchResponse(BaseModel):
    places: list[PlaceOut]
    filters: ActiveFilters
