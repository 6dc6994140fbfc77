"""Health check module with dependency verification."""

from __future__ import annotations

import time
from typing import Any

from .settings import settings


def _is_configured(value: str | None) -> bool:
    """Return True when a config string is non-empty after trimming."""
    if value is None:
        return False
    return bool(value.strip())


class HealthChecker:
    """Health checker for monitoring service dependencies."""

    async def check_all(self) -> dict[str, Any]:
        """
        Check health of all dependencies.

        Returns:
            Dict with overall status and individual component checks
        """
        checks = {
            "database": await self._check_database(),
            "sentry": self._check_sentry(),
        }
        all_ok = all(check.get("status") in {"ok", "disabled"} for check in checks.values())
        return {
            "status": "healthy" if all_ok else "degraded",
            "timestamp": time.time(),
            "checks": checks,
        }

    async def _check_database(self) -> dict[str, Any]:
        """Check that the places table is reachable."""
        try:
            from .storage import DB

            place_count = await DB.count_places()
        except Exception as exc:
            return {
                "status": "error",
                "error": str(exc),
                "error_type": type(exc).__name__,
            }
        return {"status": "ok", "place_count": place_count}

    def _check_sentry(self) -> dict[str, Any]:
        """Check if Sentry is configured (doesn't actually test connectivity)."""
        if not _is_configured(settings.SENTRY_DSN):
            return {"status": "disabled", "reason": "SENTRY_DSN not configured"}
        dsn = settings.SENTRY_DSN or ""
        if "@" in dsn and "//" in dsn:
            return {
                "status": "ok",
                "environment": settings.SENTRY_ENVIRONMENT,
                "release": settings.SENTRY_RELEASE or "unset",
            }
        return {"status": "error", "error": "Invalid SENTRY_DSN format"}


health_checker = HealthChecker()
