# ==============================================================================
# Cache Infrastructure
# ==============================================================================
"""
Key-value adapters for the ports-and-adapters architecture.

Available implementations:
- ValkeyTimestampStore: Valkey/Redis-backed first-seen timestamps with TTL
"""

from sessionstore.infrastructure.cache.valkey import (
    ValkeyTimestampStore,
    get_valkey_client,
)

__all__ = [
    "ValkeyTimestampStore",
    "get_valkey_client",
]
