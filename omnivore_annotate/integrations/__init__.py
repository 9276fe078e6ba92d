"""
omnivore-annotate Integrations Layer.

Clients for the external services the automation writes to. Each
integration follows the same pattern:

1. Client: Handles authentication and API communication
2. Schemas: Pydantic models for request/response validation

Directory Structure:
    integrations/
    ├── base.py           # Base client and exceptions
    └── omnivore/         # Omnivore read-it-later service
        ├── client.py     # OmnivoreClient
        ├── queries.py    # GraphQL documents
        └── schemas.py    # Pydantic models
"""

from omnivore_annotate.integrations.base import (
    AuthenticationError,
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "IntegrationClient",
    "IntegrationConfig",
    "IntegrationError",
    "NotFoundError",
    "ValidationError",
]
