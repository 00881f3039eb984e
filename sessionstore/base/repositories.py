# ==============================================================================
# Repository Abstract Base Classes
# ==============================================================================
"""
Repository ABC for session document persistence.

This defines the "what" (query and insert session documents) not the "how"
(query DSL, cursors, index layout). Concrete implementations in
infrastructure/ handle the specifics.

Every query is scoped to a user, and where relevant a website, so data
belonging to another user is never returned.

Note: TimestampStore is in a separate module (timestamps.py) since it is a
key-value association, not a collection of domain objects.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from sessionstore.core.models import Event, Session


class SessionRepository(ABC):
    """Repository for session documents (one embedded event per document)."""

    @abstractmethod
    def get_session(self, user_id: str, session_id: str) -> Session:
        """
        Get any one document of a session.

        No order is defined when several documents share the session id.

        Raises:
            NotFoundError: No document matches
            StoreError: Backend or decode failure
        """
        ...

    @abstractmethod
    def get_all_sessions(
        self, user_id: str, website_id: str, session_ids: Sequence[str]
    ) -> list[Session]:
        """
        Get the most recently inserted document for each session id.

        Each id is resolved with a single query, so a concurrent insert is
        either fully visible or not visible at all.

        Args:
            user_id: Owning user
            website_id: Tracked website
            session_ids: Session ids to resolve; duplicates are resolved again

        Returns:
            One Session per input id, in input order

        Raises:
            NotFoundError: Any session id has no document
            StoreError: Backend or decode failure
        """
        ...

    @abstractmethod
    def get_all_session_ids(self, user_id: str, website_id: str) -> list[str]:
        """
        Get every distinct session id of a website, in first-seen order.

        Raises:
            StoreError: Backend or decode failure
        """
        ...

    @abstractmethod
    def get_session_ids_today(self, user_id: str, website_id: str) -> list[str]:
        """
        Get distinct session ids whose time_report falls in the current UTC day.

        Raises:
            StoreError: Backend or decode failure
        """
        ...

    @abstractmethod
    def get_session_count(self, user_id: str, session_id: str) -> int:
        """
        Count stored documents of a session.

        Raises:
            StoreError: Backend failure
        """
        ...

    @abstractmethod
    def insert_session(self, session: Session, event: Event) -> None:
        """
        Insert one new document built from the session fields and the event.

        Raises:
            WriteError: Backend rejected the write
        """
        ...

    @abstractmethod
    def get_events_paged(
        self, user_id: str, session_id: str, limit: int, skip: int
    ) -> list[Event]:
        """
        Get embedded events of a session page by page, in insertion order.

        Args:
            user_id: Owning user
            session_id: Session id
            limit: Maximum number of events to return; 0 means no limit
            skip: Number of matching documents to skip first

        Returns:
            Up to `limit` events (every remaining event when limit is 0);
            empty when `skip` is past the end

        Raises:
            ValueError: limit or skip is negative
            StoreError: Backend or decode failure
        """
        ...
