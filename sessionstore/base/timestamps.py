# ==============================================================================
# Timestamp Store Abstract Base Class
# ==============================================================================
"""
Abstract interface for remembering when a session was first seen.

This is a key-value association (session id -> epoch seconds) with a fixed
expiry, used to compute "duration since first event" for later events of
the same session. Entries are never deleted explicitly; they expire.

Implementations: Valkey/Redis (infrastructure/cache/valkey.py).
"""

from abc import ABC, abstractmethod


class TimestampStore(ABC):
    """Store of first-seen timestamps keyed by session id."""

    @abstractmethod
    def record_first_timestamp(self, session_id: str, epoch_seconds: int) -> None:
        """
        Store the first-seen time, replacing any existing value and resetting TTL.

        Args:
            session_id: Session identifier
            epoch_seconds: Unix timestamp in seconds

        Raises:
            StoreUnavailableError: Backend unreachable or failed
        """
        ...

    @abstractmethod
    def get_first_timestamp(self, session_id: str) -> int:
        """
        Get the first-seen time of a session.

        Args:
            session_id: Session identifier

        Returns:
            Unix timestamp in seconds

        Raises:
            NotFoundError: No entry, or the entry expired
            TimestampParseError: Stored value is not an integer
            StoreUnavailableError: Backend unreachable or failed
        """
        ...
