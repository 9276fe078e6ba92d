"""
omnivore-annotate - LLM tags and notes for Omnivore articles

FastAPI application entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from omnivore_annotate import __version__
from omnivore_annotate.app.api.webhooks import omnivore_router
from omnivore_annotate.app.dependencies import get_settings, shutdown_services

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Clients are created lazily on first request; shutdown closes them.
    """
    settings = get_settings()
    logger.info(
        f"Starting omnivore-annotate (trigger='{settings.annotate_label}', "
        f"provider={settings.llm_provider})"
    )

    yield

    logger.info("Shutting down omnivore-annotate services...")
    try:
        await shutdown_services()
    except Exception as e:
        logger.error(f"Error during shutdown: {e}", exc_info=True)


settings = get_settings()

app = FastAPI(
    title="omnivore-annotate",
    description="Generate tags and notes for Omnivore articles from label webhooks",
    version=__version__,
    lifespan=lifespan,
    debug=settings.debug,
)

app.include_router(omnivore_router, prefix="/api/v1")


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint with service info."""
    return {
        "service": settings.service_name,
        "version": __version__,
        "status": "running",
    }


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, Any]:
    """Report configuration readiness without calling external services."""
    current = get_settings()
    return {
        "status": "healthy",
        "trigger_label": current.annotate_label,
        "llm_provider": current.llm_provider,
        "omnivore_configured": bool(current.omnivore_api_key.get_secret_value()),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "omnivore_annotate.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
