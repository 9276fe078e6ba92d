"""Webhook routers."""

from .omnivore import router as omnivore_router

__all__ = ["omnivore_router"]
