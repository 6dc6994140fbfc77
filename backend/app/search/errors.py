"""Errors raised while turning request parameters into a place query."""

from __future__ import annotations


class QueryError(Exception):
    """Base class for malformed search requests. Never retried: parsing is deterministic."""

    status_code = 400

    def __init__(self, message: str, *, param: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.param = param

    def to_dict(self) -> dict[str, str | None]:
        return {"detail": self.message, "param": self.param}


class ValidationError(QueryError):
    """A parameter value is outside its enumerated or numeric domain."""

    status_code = 400


class NotFoundError(QueryError):
    """The route targets a region that does not exist."""

    status_code = 404


__all__ = ["QueryError", "ValidationError", "NotFoundError"]
