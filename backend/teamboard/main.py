"""FastAPI application entry point."""
from __future__ import annotations
import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from teamboard.api import auth, team_requests, teams, users
from teamboard.api.responses import error_body
from teamboard.core import config
from teamboard.core.logging import configure_logging
from teamboard.domain.common.result import Result
from teamboard.persistence.db import init_db

configure_logging(level=config.LOG_LEVEL, log_json=config.LOG_JSON, log_dir=config.LOG_DIR)
log = structlog.get_logger("teamboard.http")

# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
_docs_enabled = config.ENVIRONMENT == "development"

app = FastAPI(
    title="Teamboard API",
    description="Team leaderboard: users, teams and join requests",
    version="1.0.0",
    docs_url="/api/documentation" if _docs_enabled else None,
    redoc_url=None,
    openapi_url="/api/openapi.json" if _docs_enabled else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------
# Request logging
# ------------------------------------------------------------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=str(uuid.uuid4()),
        method=request.method,
        path=request.url.path,
    )
    start = time.perf_counter()
    response = await call_next(request)
    log.info(
        "request",
        url=str(request.url),
        status_code=response.status_code,
        duration=f"{(time.perf_counter() - start) * 1000:.0f}ms",
    )
    return response


# ------------------------------------------------------------------
# Error handlers: every failure leaves as a [{code, message}] array
# ------------------------------------------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"code": 400, "message": f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=errors or error_body(400, "Bad request."))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    Result.fail_if(
        True,
        "Internal server error.",
        500,
        f"Internal server error: {exc}",
        cause=exc,
        context={"method": request.method, "url": str(request.url)},
    )
    return JSONResponse(status_code=500, content=error_body(500, "Internal server error."))


# ------------------------------------------------------------------
# Startup: initialise DB schema
# ------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    init_db()


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(teams.router)
app.include_router(team_requests.router)
