"""
Decision Suite API — Main Application

POST /artifacts  — Classify a decision artifact and return feedback
GET  /artifacts  — The caller's most recent stored artifacts
GET  /patterns   — Pattern catalogue, keyword rules and band thresholds
GET  /health     — Health check
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from decisionsuite.auth import optional_identity, require_identity
from decisionsuite.config import settings
from decisionsuite.errors import ArtifactValidationError, DecisionSuiteError, InternalError, PersistenceError
from decisionsuite.logging import describe_error, get_logger, setup_logging
from decisionsuite.outbox import Outbox, get_sink
from decisionsuite.patterns import patterns_catalogue
from decisionsuite.rate_limit import check_rate_limit
from decisionsuite.schemas.responses import (
    ArtifactListResponse,
    ArtifactResponse,
    ErrorResponse,
    HealthResponse,
    PatternsResponse,
)
from decisionsuite.scorer import NO_HINT_BELOW, UNCLEAR_ABOVE
from decisionsuite.security import check_origin
from decisionsuite.suite import SUITE_VERSION, decision_suite
from decisionsuite.vocabulary import rules_catalogue

logger = get_logger("api")

RECENT_ARTIFACTS_LIMIT = 10


# Lazy outbox: built on startup, or on first use when no lifespan ran
_outbox: Optional[Outbox] = None


def get_outbox() -> Outbox:
    global _outbox
    if _outbox is None:
        _outbox = Outbox(
            get_sink(settings.PERSISTENCE, settings.DB_PATH),
            production=settings.is_production,
        )
    return _outbox


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire up dependencies on startup, flush the outbox on shutdown."""
    setup_logging()

    if settings.is_production and not settings.APP_URL:
        logger.warning(
            "DECISIONSUITE_APP_URL is not set; every POST will fail the origin check."
        )

    outbox = get_outbox()
    logger.info(
        "Decision Suite API starting",
        extra={"suite_version": SUITE_VERSION},
    )
    yield
    await outbox.drain()
    logger.info("Decision Suite API shutting down")


app = FastAPI(
    title="Decision Suite API",
    description="Deterministic structural feedback for decision artifacts",
    version=f"{settings.APP_VERSION} (suite {SUITE_VERSION})",
    lifespan=lifespan,
)

# CORS: set DECISIONSUITE_CORS_ORIGINS in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["X-API-Key", "Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# ERROR HANDLERS
# ============================================================

@app.exception_handler(DecisionSuiteError)
async def suite_error_handler(request: Request, exc: DecisionSuiteError):
    """Known errors carry their own code, status and headers."""
    if exc.status_code >= 500:
        logger.error(
            f"Request failed: {exc.error_code}",
            extra={"error": describe_error(exc, settings.is_production),
                   "path": request.url.path, "method": request.method},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers or None,
    )


@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions — return structured error, don't leak internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": describe_error(exc, settings.is_production),
               "path": request.url.path, "method": request.method},
        exc_info=not settings.is_production,
    )
    return JSONResponse(status_code=500, content=InternalError().to_dict())


def _client_key(request: Request) -> str:
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"


# ============================================================
# ROUTES
# ============================================================

@app.post(
    "/artifacts",
    response_model=ArtifactResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    dependencies=[Depends(check_origin)],
)
async def create_artifact(
    request: Request,
    user_id: Optional[str] = Depends(optional_identity),
):
    """Classify a decision artifact. Deterministic, no model involved."""
    window = check_rate_limit(user_id or _client_key(request))
    start = time.time()

    try:
        payload = await request.json()
    except ValueError:
        raise ArtifactValidationError(["Request body must be valid JSON"])

    evaluation = decision_suite.classify(payload)
    result = evaluation.result

    # Anonymous results are not stored
    if user_id:
        get_outbox().submit(user_id, evaluation.artifact, result, evaluation.copy)

    duration = round((time.time() - start) * 1000, 1)
    logger.info(
        f"Artifact classified: band={result.hint_band.value}",
        extra={
            "hint_band": result.hint_band.value,
            "hint_intensity": result.hint_intensity,
            "primary_pattern": result.primary_pattern.value if result.primary_pattern else None,
            "patterns_count": len(result.patterns_detected),
            "base_pattern": evaluation.breakdown.get("base_pattern"),
            "boosts": evaluation.breakdown.get("boosts") or None,
            "locale": evaluation.locale.value,
            "user_id": user_id,
            "duration_ms": duration,
        },
    )

    response = JSONResponse(evaluation.to_response())
    if window is not None:
        response.headers.update(window.headers())
    return response


@app.get(
    "/artifacts",
    response_model=ArtifactListResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def list_artifacts(user_id: str = Depends(require_identity)):
    """The caller's most recent artifacts with their results, newest first."""
    sink = get_outbox().sink
    try:
        artifacts = await asyncio.to_thread(sink.recent, user_id, RECENT_ARTIFACTS_LIMIT)
    except PersistenceError as e:
        logger.error(
            "Failed to load artifacts",
            extra={"error": describe_error(e, settings.is_production), "user_id": user_id},
        )
        raise PersistenceError("Failed to load artifacts") from e
    return {"artifacts": artifacts}


@app.get("/patterns", response_model=PatternsResponse)
async def get_patterns():
    """Expose the full detection surface for review."""
    return {
        "suite_version": SUITE_VERSION,
        "patterns": patterns_catalogue(),
        "keyword_rules": rules_catalogue(),
        "band_thresholds": {
            "NO_HINT": f"< {NO_HINT_BELOW}",
            "CLARIFICATION_NEEDED": f"{NO_HINT_BELOW} - {UNCLEAR_ABOVE}",
            "STRUCTURALLY_UNCLEAR": f"> {UNCLEAR_ABOVE}",
        },
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check — no auth required."""
    return {
        "status": "operational",
        "version": settings.APP_VERSION,
        "suite_version": SUITE_VERSION,
        "persistence": settings.PERSISTENCE,
        "outbox": get_outbox().stats,
        "rate_limit_enabled": settings.RATE_LIMIT_ENABLED,
    }


# --- Security + Version Headers Middleware ---
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security and version headers to all responses."""
    response = await call_next(request)
    response.headers["X-DecisionSuite-Version"] = settings.APP_VERSION
    response.headers["X-Suite-Version"] = SUITE_VERSION
    response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains; preload"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"
    return response


# --- Body Size Limit Middleware ---
_MAX_BODY_BYTES = 1_048_576  # 1 MB


@app.middleware("http")
async def enforce_body_size_limit(request: Request, call_next):
    """Reject requests exceeding 1MB — guards both Content-Length and chunked bodies."""
    too_large = JSONResponse(
        status_code=413,
        content={"error_code": "PAYLOAD_TOO_LARGE", "message": "Request body too large."},
    )
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            if int(content_length) > _MAX_BODY_BYTES:
                return too_large
        except ValueError:
            pass  # Malformed content-length; let the framework handle it

    if request.method in ("POST", "PUT", "PATCH"):
        body = await request.body()
        if len(body) > _MAX_BODY_BYTES:
            return too_large

    return await call_next(request)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with method, path, status, duration."""
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} → {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


def run():
    """Console entry point."""
    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
