# ==============================================================================
# Infrastructure Adapters
# ==============================================================================
"""
Adapters for external services (ports-and-adapters architecture).

This module contains concrete implementations of the storage ports:
- cache/ - Key-value adapters (Valkey/Redis timestamp store)
- repositories/ - Document store adapters (OpenSearch session repository)

Client handles are created by the get_*_client factories at the
composition root and injected into the adapters.
"""

from sessionstore.infrastructure.cache import (
    ValkeyTimestampStore,
    get_valkey_client,
)
from sessionstore.infrastructure.repositories import (
    OpenSearchSessionRepository,
    get_opensearch_client,
)

__all__ = [
    # Cache
    "ValkeyTimestampStore",
    "get_valkey_client",
    # Repositories
    "OpenSearchSessionRepository",
    "get_opensearch_client",
]
