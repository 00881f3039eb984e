# ==============================================================================
# Session Tracker
# ==============================================================================
"""
Records incoming events as session documents.

Ties the two stores together:
- The first event of a session stores its first-seen time in the
  TimestampStore and is written with a duration of 0
- Later events compute their duration from that first-seen time
- If the first-seen entry has expired, the session starts counting again

The two stores are not updated atomically; a crash between recording the
timestamp and inserting the document leaves only the timestamp behind,
which expires on its own.
"""

import logging
from typing import TYPE_CHECKING

from sessionstore.core.errors import NotFoundError
from sessionstore.core.models import Event, Session
from sessionstore.utils.clock import Clock, SystemClock

if TYPE_CHECKING:
    from sessionstore.base.repositories import SessionRepository
    from sessionstore.base.timestamps import TimestampStore

logger = logging.getLogger(__name__)


class SessionTracker:
    """
    Appends events to sessions, maintaining the elapsed duration.

    Durations are stored in milliseconds; first-seen timestamps have
    second resolution.
    """

    def __init__(
        self,
        repository: "SessionRepository",
        timestamps: "TimestampStore",
        clock: Clock | None = None,
    ):
        """
        Initialize the tracker.

        Args:
            repository: Session document repository
            timestamps: First-seen timestamp store
            clock: Time source. If None, uses the system clock.
        """
        self._repository = repository
        self._timestamps = timestamps
        self._clock = clock or SystemClock()

    def track(self, session: Session, event: Event) -> Session:
        """
        Record one event of a session.

        Args:
            session: Session carrying the metadata to store; its duration and
                time_report are replaced
            event: Event to embed

        Returns:
            The session document as inserted
        """
        now = self._clock.now()
        now_seconds = int(now.timestamp())
        metadata = session.metadata

        count = self._repository.get_session_count(metadata.user_id, metadata.id)
        if count == 0:
            self._timestamps.record_first_timestamp(metadata.id, now_seconds)
            duration_ms = 0
        else:
            try:
                first_seen = self._timestamps.get_first_timestamp(metadata.id)
                duration_ms = max(now_seconds - first_seen, 0) * 1000
            except NotFoundError:
                logger.debug("First-seen timestamp expired for session %s", metadata.id)
                self._timestamps.record_first_timestamp(metadata.id, now_seconds)
                duration_ms = 0

        document = session.model_copy(
            update={"duration": duration_ms, "time_report": now, "event": event}
        )
        self._repository.insert_session(document, event)
        logger.debug(
            "Tracked event for session %s (documents=%d, duration_ms=%d)",
            metadata.id,
            count + 1,
            duration_ms,
        )
        return document
