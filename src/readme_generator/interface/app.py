"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from readme_generator.interface.dependencies import shutdown, startup
from readme_generator.interface.error_handlers import register_error_handlers
from readme_generator.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared HTTP / OpenAI clients for the lifetime of the app."""
    await startup()
    try:
        yield
    finally:
        await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="README Generator",
        version="1.0.0",
        description=(
            "Reads a GitHub repository (metadata, key files, contributors) and "
            "generates a README for it, optionally translated into other "
            "languages."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
