from contextlib import asynccontextmanager
from typing import Any

import sentry_sdk
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration

from .api.routes import places as places_routes
from .api_v1 import v1_router
from .db.core import init_db
from .health import health_checker
from .logging_config import configure_structlog, get_logger
from .metrics import PrometheusMiddleware, get_metrics
from .search.errors import QueryError
from .seed import seed
from .settings import settings
from .utils import add_cors, add_request_id_tracing, add_security_headers

# Configure structured logging (must be done before any logging calls)
configure_structlog(json_logs=not settings.DEBUG)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        release=settings.SENTRY_RELEASE or "campus-eats@dev",
        integrations=[FastApiIntegration()],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
    )

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    await init_db()
    if settings.SEED_DEMO_DATA:
        await seed()
    logger.info("service_started", database=settings.async_database_url.split("://", 1)[0])
    yield


app = FastAPI(
    title="Campus Eats API",
    version="0.1.0",
    description="Search food places around the Ganesha and Jatinangor campuses",
    lifespan=lifespan,
)
add_cors(app)
add_security_headers(app)
add_request_id_tracing(app)
app.add_middleware(PrometheusMiddleware)

API_PREFIX = "/v1"

app.include_router(places_routes.router, prefix=API_PREFIX)


@app.exception_handler(QueryError)
async def query_error_handler(request: Request, exc: QueryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_on_both(method: str, path: str, **kwargs):
    """Register endpoint on the unversioned app and the /v1 router."""

    def decorator(func):
        getattr(app, method)(path, **kwargs)(func)
        getattr(v1_router, method)(path, **kwargs)(func)
        return func

    return decorator


@register_on_both("get", "/health")
async def health():
    """Return service health including dependency checks."""
    health_status = await health_checker.check_all()
    status_code = 200 if health_status["status"] == "healthy" else 503
    checks = health_status.get("checks", {})
    if not settings.DEBUG:
        checks = _scrub_health_details(checks)
    body: dict[str, Any] = {
        "status": health_status["status"],
        "timestamp": health_status.get("timestamp"),
        "checks": checks,
        "service": "campus-eats",
        "version": "0.1.0",
    }
    return JSONResponse(content=body, status_code=status_code)


# after register_on_both so /v1/health is part of the copied routes
app.include_router(v1_router)


@app.get("/metrics")
def metrics():
    """Expose Prometheus metrics."""
    try:
        return get_metrics()
    except Exception:  # pragma: no cover - registry failures only
        logger.exception("Metrics export failed")
        raise HTTPException(status_code=503, detail="metrics unavailable")


@app.get("/", include_in_schema=False)
def root_redirect():
    return RedirectResponse(url="/docs", status_code=307)


def _scrub_health_details(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove error internals before returning health details outside DEBUG."""

    def _scrub(value: Any) -> Any:
        if isinstance(value, dict):
            cleaned: dict[str, Any] = {}
            for key, inner in value.items():
                if key in {"error", "error_type", "traceback"}:
                    continue
                cleaned[key] = _scrub(inner)
            return cleaned
        if isinstance(value, list):
            return [_scrub(item) for item in value]
        return value

    return _scrub(payload)
