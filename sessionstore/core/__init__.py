# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Domain models, errors and session tracking logic.

This module contains:
- Domain models (Session, SessionMetadata, Event, TokenDetails)
- The error taxonomy shared by every component
- SessionTracker, which records events against the storage ports

Nothing here talks to a backend directly; stores are injected.
"""

from sessionstore.core.errors import (
    InvalidSignatureMethodError,
    InvalidTokenError,
    MalformedOrExpiredTokenError,
    MissingClaimError,
    NotFoundError,
    SessionStoreError,
    StoreError,
    StoreUnavailableError,
    TimestampParseError,
    TokenError,
    WriteError,
)
from sessionstore.core.models import Event, Session, SessionMetadata, TokenDetails
from sessionstore.core.session_tracker import SessionTracker

__all__ = [
    # Errors
    "InvalidSignatureMethodError",
    "InvalidTokenError",
    "MalformedOrExpiredTokenError",
    "MissingClaimError",
    "NotFoundError",
    "SessionStoreError",
    "StoreError",
    "StoreUnavailableError",
    "TimestampParseError",
    "TokenError",
    "WriteError",
    # Models
    "Event",
    "Session",
    "SessionMetadata",
    "TokenDetails",
    # Tracking
    "SessionTracker",
]
