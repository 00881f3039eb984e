# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes defining the storage contracts for the
ports-and-adapters architecture.

Adapters live in sessionstore.infrastructure and receive their client
handles through their constructors.
"""

from sessionstore.base.repositories import SessionRepository
from sessionstore.base.timestamps import TimestampStore

__all__ = [
    "SessionRepository",
    "TimestampStore",
]
