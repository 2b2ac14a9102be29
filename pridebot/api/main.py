"""
pridebot.api.main — FastAPI application entry point
====================================================

The bot serves this app on its own event loop (see
:meth:`pridebot.bot.core.PridebotBot.start_api`).  For local work on the
read-only endpoints it can also be run on its own::

    uvicorn pridebot.api.main:app --reload --port 2610

(webhooks and ``/api/stats`` need the bot and answer 500 without it).
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

load_dotenv()

from pridebot.api.routes.public import router as public_router  # noqa: E402
from pridebot.api.routes.webhooks import router as webhooks_router  # noqa: E402
from pridebot.errors import BadUpstream, NotFound, PridebotError  # noqa: E402
from pridebot.services.registry import CommandRegistry  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Allowed CORS origins from ``CORS_ALLOW_ORIGINS`` (comma-separated).

    Defaults to ``*``: the stats endpoints are public and read-only.
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — populate the command registry once."""
    if getattr(app.state, "registry", None) is None:
        app.state.registry = CommandRegistry.scan()
    logger.info("Pridebot API started")
    yield
    logger.info("Pridebot API shutting down")


app = FastAPI(
    title="Pridebot API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(public_router, prefix="/api")
app.include_router(webhooks_router)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
@app.exception_handler(NotFound)
async def _not_found(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"message": exc.message})


@app.exception_handler(BadUpstream)
async def _bad_upstream(request: Request, exc: BadUpstream):
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=400)


@app.exception_handler(PridebotError)
async def _internal_error(request: Request, exc: PridebotError):
    logger.error(
        "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc,
    )
    return PlainTextResponse("Internal Server Error", status_code=500)


@app.exception_handler(SQLAlchemyError)
async def _database_error(request: Request, exc: SQLAlchemyError):
    logger.error(
        "%s %s database error", request.method, request.url.path, exc_info=exc,
    )
    return PlainTextResponse("Internal Server Error", status_code=500)


# ---------------------------------------------------------------------------
# Index + health
# ---------------------------------------------------------------------------
@app.get("/")
def index():
    return JSONResponse(
        status_code=404,
        content={
            "message": "These are the API requests you can make:",
            "endpoints": {
                "stats": "/api/stats",
                "profiles": "/api/profiles/:userId",
                "votes": "/api/votes/:userId",
                "commands": "/api/commands/:command_type?/:command_name?",
            },
        },
    )


@app.get("/api/health")
def health():
    return {"status": "ok"}
