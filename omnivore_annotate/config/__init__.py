"""
omnivore-annotate Configuration

Environment-sourced application settings.
"""

from .schemas import (
    DEFAULT_ANNOTATE_LABEL,
    DEFAULT_COMPLETED_LABEL,
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_OPENAI_MODEL,
    AppSettings,
)

__all__ = [
    "AppSettings",
    "DEFAULT_ANNOTATE_LABEL",
    "DEFAULT_COMPLETED_LABEL",
    "DEFAULT_ANTHROPIC_MODEL",
    "DEFAULT_OPENAI_MODEL",
]
