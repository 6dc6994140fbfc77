"""Versioned router for service endpoints exposed both at the root and under /v1."""

from __future__ import annotations

from fastapi import APIRouter

v1_router = APIRouter(prefix="/v1", tags=["service"])

__all__ = ["v1_router"]
