"""
Mural FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from mural.config import settings
from mural.errors import MuralError
from mural.logging_setup import configure_logging
from mural.routes import comments as comment_routes
from mural.routes import posts as post_routes
from mural.store import init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Startup configures logging and makes sure both data files exist.
    """
    configure_logging(settings.LOG_LEVEL)
    init_store()
    logger.info("Data directory ready at %s", settings.DATA_DIR.resolve())

    yield


app = FastAPI(
    title="Mural",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(post_routes.router)
app.include_router(comment_routes.router)


@app.exception_handler(MuralError)
async def mural_error_handler(request: Request, exc: MuralError) -> JSONResponse:
    """Domain errors become {"error": message} with their HTTP status."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are reported as 400 in the same {"error"} shape."""
    first = exc.errors()[0] if exc.errors() else {}
    message = first.get("msg", "Requisição inválida")
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}


# Serve frontend, must be after all API routes
_FRONTEND = Path(__file__).parent.parent / "frontend"

if _FRONTEND.is_dir():
    app.mount("/static", StaticFiles(directory=str(_FRONTEND)), name="static")

    @app.get("/")
    async def serve_index():
        """Serve the feed SPA."""
        return FileResponse(str(_FRONTEND / "index.html"))


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run("mural.main:app", host=settings.HOST, port=settings.PORT)
