"""Main FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from library_catalog import __version__
from library_catalog.api.authors import router as authors_router
from library_catalog.api.books import router as books_router
from library_catalog.api.errors import register_exception_handlers
from library_catalog.api.genres import router as genres_router
from library_catalog.api.health import router as health_router
from library_catalog.core.config import get_settings
from library_catalog.core.database import engine, init_db
from library_catalog.core.logging import configure_logging
from library_catalog.core.tracing import setup_tracing, shutdown_tracing


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_db()
    yield
    # Shutdown
    shutdown_tracing()
    await engine.dispose()


settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="Library Catalog",
    description="Authors, genres and books with their many-to-many links",
    version=__version__,
    lifespan=lifespan,
)

# Setup OpenTelemetry tracing (must be done before adding routes)
setup_tracing(app)

register_exception_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(authors_router)
app.include_router(genres_router)
app.include_router(books_router)


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "library_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
