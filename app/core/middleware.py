# SecurityHeadersMiddleware, ErrorEnvelopeMiddleware
import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from app.config import settings

log = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "same-origin"
        # Add HSTS in production
        if (settings.APP_ENV or "").strip().lower() == "production":
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains; preload"

        # Allow Swagger UI/ReDoc to load assets from jsDelivr
        if request.url.path.startswith(("/docs", "/redoc")):
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                "img-src 'self' data: https:; "
                "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "font-src 'self' data:; "
                "connect-src 'self';"
            )
        else:
            # Served uploads are images only; nothing here may execute
            response.headers["Content-Security-Policy"] = (
                "default-src 'none'; "
                "img-src 'self' data: blob:; "
                "frame-ancestors 'none'; "
                "base-uri 'none';"
            )
        return response


class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        start = time.time()
        request_id = request.headers.get("x-request-id", str(uuid.uuid4())[:8])
        try:
            response: Response = await call_next(request)
        except Exception:
            log.exception("Unhandled error on %s %s (rid=%s)", request.method, request.url.path, request_id)
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "path": request.url.path},
                headers={"x-request-id": request_id},
            )
        response.headers.setdefault("x-request-id", request_id)
        response.headers["server-timing"] = f"total;dur={(time.time() - start) * 1000:.2f}"
        return response
