# Top imports
import logging
import os
import uuid
from contextlib import asynccontextmanager
from datetime import datetime

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings
from app.core.errors import UploadRejected, UploadFailed, upload_rejected_handler, upload_failed_handler
from app.core.middleware import SecurityHeadersMiddleware, ErrorEnvelopeMiddleware
from app.core.rate_limit import limiter
from app.db import init_db, close_db
from app.routers import router
from app.services.metrics import metrics_middleware, metrics_endpoint

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Initialize Sentry if DSN is provided
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
if SENTRY_DSN:
    sentry_sdk.init(dsn=SENTRY_DSN, traces_sample_rate=0.1)

WEAK_SECRETS = ("", "dev", "CHANGE_ME")


def check_production_secrets() -> None:
    env = (settings.APP_ENV or "").strip().lower()
    if env != "production":
        return
    v = settings.JWT_SECRET or ""
    if v in WEAK_SECRETS or len(v) < 32:
        raise RuntimeError("Insecure JWT_SECRET; set a real secret in production")


# Method: lifespan()
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.info("Starting poster gallery API...")
    check_production_secrets()
    os.makedirs(settings.UPLOADS_DIR, exist_ok=True)
    await init_db()

    yield

    # Shutdown
    logging.info("Shutting down poster gallery API...")
    await close_db()
    logging.info("Database connections closed")


app = FastAPI(
    title="Kydy Poster Gallery API",
    description="Upload, browse, rate and comment on political campaign posters",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
# Applies the limiter default_limits to routes without their own @limiter.limit
app.add_middleware(SlowAPIMiddleware)

# Upload error envelopes
app.add_exception_handler(UploadRejected, upload_rejected_handler)
app.add_exception_handler(UploadFailed, upload_failed_handler)

app.include_router(router)
logging.info("Registered routes count: %s", len(app.routes))

# Middleware setup
app.add_middleware(GZipMiddleware, minimum_size=1024)
app.add_middleware(ErrorEnvelopeMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# After middleware setup
app.add_middleware(SecurityHeadersMiddleware)

# Enable Prometheus metrics if METRICS_ENABLED=1
metrics_middleware(app)


# Correlation ID middleware
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id", str(uuid.uuid4())[:8])
    request.state.rid = rid
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


@app.get("/metrics")
async def prometheus_metrics():
    return await metrics_endpoint()


# Universal health endpoint (always present)
@app.get("/health")
async def health():
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
