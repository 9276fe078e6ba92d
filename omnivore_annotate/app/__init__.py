"""FastAPI application for omnivore-annotate."""
