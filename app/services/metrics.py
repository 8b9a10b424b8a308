"""
Prometheus metrics for the poster gallery API
"""

import time
import os
from fastapi import Request
from fastapi.responses import Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

REQUESTS_TOTAL = Counter(
    "kydy_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"]
)

REQUEST_DURATION = Histogram(
    "kydy_http_request_seconds",
    "Request duration in seconds",
    ["method", "path"]
)

UPLOADS_TOTAL = Counter(
    "kydy_uploads_total",
    "Image uploads by outcome",
    ["status", "code", "context"]
)

RATINGS_TOTAL = Counter(
    "kydy_ratings_total",
    "Ratings submitted"
)

COMMENTS_TOTAL = Counter(
    "kydy_comments_total",
    "Comments posted"
)


def metrics_enabled() -> bool:
    return os.getenv("METRICS_ENABLED") == "1"


async def metrics_endpoint():
    """Prometheus metrics endpoint"""
    if not metrics_enabled():
        return Response(b"metrics disabled", media_type="text/plain")
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


UNMATCHED_PATH = "<unmatched>"


def route_label(request: Request) -> str:
    """Route template for the request; unmatched URLs share one label."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_PATH


def metrics_middleware(app):
    """Add metrics middleware to FastAPI app"""
    if not metrics_enabled():
        return

    @app.middleware("http")
    async def _metrics(request: Request, call_next):
        start = time.time()
        response = await call_next(request)

        # Route template keeps label cardinality bounded
        path = route_label(request)
        REQUESTS_TOTAL.labels(
            method=request.method,
            path=path,
            status=str(response.status_code)
        ).inc()

        REQUEST_DURATION.labels(
            method=request.method,
            path=path
        ).observe(time.time() - start)

        return response


def record_upload(status: str, code: str = "", context: str = "poster"):
    """Record upload outcome: accepted, rejected or failed"""
    UPLOADS_TOTAL.labels(status=status, code=code, context=context).inc()


def record_rating():
    RATINGS_TOTAL.inc()


def record_comment():
    COMMENTS_TOTAL.inc()
