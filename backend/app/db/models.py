from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .core import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _association(name: str, tag_table: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column("place_id", String(36), ForeignKey("places.id", ondelete="CASCADE"), primary_key=True),
        Column("tag_id", Integer, ForeignKey(f"{tag_table}.id", ondelete="CASCADE"), primary_key=True),
    )


place_categories = _association("place_categories", "categories")
place_platforms = _association("place_platforms", "platforms")
place_payment_methods = _association("place_payment_methods", "payment_methods")


class CategoryRecord(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)


class PlatformRecord(Base):
    __tablename__ = "platforms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)


class PaymentMethodRecord(Base):
    __tablename__ = "payment_methods"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)


class PlaceRecord(Base):
    __tablename__ = "places"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_place_price"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_place_rating"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(512), nullable=True)
    price = Column(Float, nullable=False, index=True)
    address = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    time_open = Column(String(5), nullable=True)
    time_close = Column(String(5), nullable=True)
    distance = Column(Float, nullable=False, default=0.0, index=True)
    rating = Column(Float, nullable=False, default=0.0, index=True)
    region = Column(String(16), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    categories = relationship(CategoryRecord, secondary=place_categories, lazy="selectin")
    platforms = relationship(PlatformRecord, secondary=place_platforms, lazy="selectin")
    payment_methods = relationship(
        PaymentMethodRecord, secondary=place_payment_methods, lazy="selectin"
    )


TAG_MODELS = {
    "categories": CategoryRecord,
    "platforms": PlatformRecord,
    "payment_methods": PaymentMethodRecord,
}
