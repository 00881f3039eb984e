# ==============================================================================
# Repository Adapters
# ==============================================================================
"""
Document store adapters implementing the SessionRepository interface from
base/repositories.py.

Currently supported:
- OpenSearch (opensearch.py)
"""

from sessionstore.infrastructure.repositories.opensearch import (
    LATEST_FIRST,
    SESSION_INDEX_BODY,
    STORE_ORDER,
    OpenSearchSessionRepository,
    get_opensearch_client,
    session_filter,
)

__all__ = [
    "LATEST_FIRST",
    "SESSION_INDEX_BODY",
    "STORE_ORDER",
    "OpenSearchSessionRepository",
    "get_opensearch_client",
    "session_filter",
]
