"""TinyHouse: FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse

from tinyhouse.config import settings
from tinyhouse.database import connect_database, create_client
from tinyhouse.graphql.schema import router as graphql_router

# Configure root logger so all tinyhouse.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the Mongo client on startup and close it on shutdown."""
    client = create_client()
    app.state.db = connect_database(client)
    logger.info("%s listening on http://%s:%s", settings.app_name, settings.host, settings.port)
    yield
    await client.close()
    logger.info("MongoDB client closed")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="GraphQL API for listings, users and bookings of a home-sharing marketplace.",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Middleware is added in reverse execution order (last added runs first on request).
app.add_middleware(GZipMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graphql_router, prefix="/api")


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


def resolve_client_file(client_dir: Path, path: str) -> Path | None:
    """Map a request path to a file of the built client, falling back to ``index.html``.

    Paths escaping ``client_dir`` are treated as unknown routes.
    """
    root = client_dir.resolve()
    candidate = (root / path).resolve()
    if path and candidate.is_relative_to(root) and candidate.is_file():
        return candidate

    index = root / "index.html"
    return index if index.is_file() else None


@app.get("/{full_path:path}", include_in_schema=False)
async def serve_client(full_path: str) -> FileResponse:
    """Serve the single-page client for every non-API route."""
    file = resolve_client_file(settings.client_dir, full_path)
    if file is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not built")
    return FileResponse(file)


def run() -> None:
    uvicorn.run("tinyhouse.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
