# ==============================================================================
# OpenSearch Session Repository Implementation
# ==============================================================================
"""
OpenSearch implementation of the SessionRepository interface.

Provides:
- OpenSearchSessionRepository: query and insert session documents
- get_opensearch_client: client factory for the composition root

Every document carries `inserted_at` (epoch microseconds from the repository
clock) and `insert_id` (random hex). Ascending (inserted_at, insert_id) is
the store-native order used for scans and paging; insert_id only breaks ties
between documents written in the same microsecond.

OpenSearch has no natural insertion order, so the latest document of a
session is fetched with one query sorted by that order descending. Documents
without inserted_at sort as the oldest.

Paging depth is limited by the index's max_result_window (10,000 by
default); deeper offsets fail with a StoreError. An unbounded page
(limit 0) is read with a scroll scan instead.
"""

import logging
import uuid
from collections.abc import Iterator, Sequence
from contextlib import closing
from datetime import datetime, timedelta, timezone
from itertools import islice

from opensearchpy import OpenSearch
from opensearchpy.exceptions import OpenSearchException
from opensearchpy.helpers import scan
from pydantic import ValidationError

from sessionstore.base.repositories import SessionRepository
from sessionstore.core.errors import NotFoundError, StoreError, WriteError
from sessionstore.core.models import Event, Session
from sessionstore.utils.clock import Clock, SystemClock, utc_day_bounds
from sessionstore.utils.config import Settings, get_settings
from sessionstore.utils.strings import remove_duplicates

logger = logging.getLogger(__name__)

# Store-native order: oldest insert first
STORE_ORDER = [
    {"inserted_at": {"order": "asc", "missing": "_first"}},
    {"insert_id": {"order": "asc", "missing": "_first"}},
]

# Reverse of STORE_ORDER: newest insert first
LATEST_FIRST = [
    {"inserted_at": {"order": "desc", "missing": "_last"}},
    {"insert_id": {"order": "desc", "missing": "_last"}},
]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_KEYWORD = {"type": "keyword"}

SESSION_INDEX_BODY = {
    "mappings": {
        "properties": {
            "meta_data": {
                "properties": {
                    "id": _KEYWORD,
                    "user_id": _KEYWORD,
                    "website_id": _KEYWORD,
                    "country": _KEYWORD,
                    "city": _KEYWORD,
                    "device": _KEYWORD,
                    "os": _KEYWORD,
                    "browser": _KEYWORD,
                    "version": _KEYWORD,
                    "created_at": {"type": "date"},
                }
            },
            "duration": {"type": "long"},
            # Event payload is opaque; store it without indexing
            "event": {"type": "object", "enabled": False},
            "time_report": {"type": "date"},
            "inserted_at": {"type": "long"},
            "insert_id": _KEYWORD,
        }
    }
}


def session_filter(
    user_id: str, session_id: str | None = None, website_id: str | None = None
) -> dict:
    """
    Build the bool/filter query scoping documents to a user.

    Args:
        user_id: Owning user (always required)
        session_id: Optional session id
        website_id: Optional website id

    Returns:
        OpenSearch query clause
    """
    terms = [{"term": {"meta_data.user_id": user_id}}]
    if website_id is not None:
        terms.append({"term": {"meta_data.website_id": website_id}})
    if session_id is not None:
        terms.append({"term": {"meta_data.id": session_id}})
    return {"bool": {"filter": terms}}


def _epoch_micros(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(microseconds=1)


def _isoformat(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


class OpenSearchSessionRepository(SessionRepository):
    """
    OpenSearch implementation of SessionRepository.

    The client is injected and never closed here; it is a thread-safe,
    process-wide handle owned by the caller.
    """

    def __init__(
        self,
        client: OpenSearch,
        index_name: str = "analytics-sessions",
        clock: Clock | None = None,
        scroll: str = "2m",
        scan_size: int = 500,
        refresh: str = "wait_for",
    ):
        """
        Initialize the repository.

        Args:
            client: OpenSearch client
            index_name: Sessions index
            clock: Time source for inserted_at and "today". Defaults to system clock.
            scroll: Scroll keep-alive used by session id scans
            scan_size: Documents fetched per scroll page
            refresh: Refresh policy for inserts ("true", "false", "wait_for")
        """
        self._client = client
        self._index = index_name
        self._clock = clock or SystemClock()
        self._scroll = scroll
        self._scan_size = scan_size
        self._refresh = refresh

    @classmethod
    def from_settings(
        cls,
        client: OpenSearch,
        settings: Settings | None = None,
        clock: Clock | None = None,
    ) -> "OpenSearchSessionRepository":
        """Build a repository using index and query settings."""
        os_settings = (settings or get_settings()).opensearch
        return cls(
            client,
            index_name=os_settings.sessions_index,
            clock=clock,
            scroll=os_settings.scroll,
            scan_size=os_settings.scan_size,
            refresh=os_settings.refresh,
        )

    @property
    def index_name(self) -> str:
        """Get the index name."""
        return self._index

    @property
    def client(self) -> OpenSearch:
        """Get the OpenSearch client."""
        return self._client

    # --------------------------------------------------------------------------
    # Index management
    # --------------------------------------------------------------------------

    def ensure_index(self) -> bool:
        """
        Create the sessions index with its mapping if it does not exist.

        Returns:
            True if the index was created, False if it already existed
        """
        try:
            if self._client.indices.exists(index=self._index):
                return False
            self._client.indices.create(index=self._index, body=SESSION_INDEX_BODY)
        except OpenSearchException as e:
            raise StoreError(f"Failed to create index {self._index}: {e}") from e
        logger.info("Created sessions index %s", self._index)
        return True

    def delete_index(self) -> bool:
        """
        Delete the sessions index and every document in it.

        Returns:
            True if the index existed and was deleted
        """
        try:
            if not self._client.indices.exists(index=self._index):
                return False
            self._client.indices.delete(index=self._index)
        except OpenSearchException as e:
            raise StoreError(f"Failed to delete index {self._index}: {e}") from e
        logger.info("Deleted sessions index %s", self._index)
        return True


    # --------------------------------------------------------------------------
    # Low-level helpers
    # --------------------------------------------------------------------------

    def _count(self, query: dict) -> int:
        try:
            response = self._client.count(index=self._index, body={"query": query})
        except OpenSearchException as e:
            raise StoreError(f"Count on {self._index} failed: {e}") from e
        return int(response["count"])

    def _search(
        self, query: dict, skip: int = 0, size: int = 1, sort: list | None = STORE_ORDER
    ) -> list[dict]:
        body: dict = {"query": query, "from": skip, "size": size}
        if sort:
            body["sort"] = sort
        try:
            response = self._client.search(index=self._index, body=body)
        except OpenSearchException as e:
            raise StoreError(f"Search on {self._index} failed: {e}") from e
        return response.get("hits", {}).get("hits", [])

    def _decode(self, hit: dict) -> Session:
        try:
            return Session.model_validate(hit["_source"])
        except (KeyError, ValidationError) as e:
            raise StoreError(f"Undecodable session document {hit.get('_id')}: {e}") from e

    def _scan(self, query: dict, source: list[str] | None = None) -> Iterator[dict]:
        """Scroll over every match in store-native order.

        Callers wrap the returned generator in contextlib.closing; closing it
        clears the server-side scroll context even when iteration stops early.
        """
        body: dict = {"query": query, "sort": STORE_ORDER}
        if source is not None:
            body["_source"] = source
        try:
            with closing(
                scan(
                    self._client,
                    query=body,
                    index=self._index,
                    scroll=self._scroll,
                    size=self._scan_size,
                    preserve_order=True,
                )
            ) as hits:
                yield from hits
        except OpenSearchException as e:
            raise StoreError(f"Scan on {self._index} failed: {e}") from e

    def _scan_session_ids(self, query: dict) -> list[str]:
        session_ids = []
        with closing(self._scan(query, source=["meta_data.id"])) as hits:
            for hit in hits:
                try:
                    session_ids.append(hit["_source"]["meta_data"]["id"])
                except (KeyError, TypeError) as e:
                    raise StoreError(f"Session document {hit.get('_id')} has no meta_data.id") from e

        logger.debug("Scanned %d session documents", len(session_ids))
        return remove_duplicates(session_ids)

    # --------------------------------------------------------------------------
    # SessionRepository
    # --------------------------------------------------------------------------

    def get_session(self, user_id: str, session_id: str) -> Session:
        hits = self._search(session_filter(user_id, session_id=session_id), sort=None)
        if not hits:
            raise NotFoundError(f"Session {session_id} not found")
        return self._decode(hits[0])

    def get_all_sessions(
        self, user_id: str, website_id: str, session_ids: Sequence[str]
    ) -> list[Session]:
        sessions = []
        for session_id in session_ids:
            query = session_filter(user_id, session_id=session_id, website_id=website_id)
            hits = self._search(query, size=1, sort=LATEST_FIRST)
            if not hits:
                raise NotFoundError(f"Session {session_id} not found")
            sessions.append(self._decode(hits[0]))
        return sessions

    def get_all_session_ids(self, user_id: str, website_id: str) -> list[str]:
        return self._scan_session_ids(session_filter(user_id, website_id=website_id))

    def get_session_ids_today(self, user_id: str, website_id: str) -> list[str]:
        start, end = utc_day_bounds(self._clock.now())
        query = session_filter(user_id, website_id=website_id)
        query["bool"]["filter"].append(
            {"range": {"time_report": {"gte": start.isoformat(), "lt": end.isoformat()}}}
        )
        logger.debug("Scanning sessions reported in [%s, %s)", start, end)
        return self._scan_session_ids(query)

    def get_session_count(self, user_id: str, session_id: str) -> int:
        return self._count(session_filter(user_id, session_id=session_id))

    def insert_session(self, session: Session, event: Event) -> None:
        metadata = session.metadata
        document = {
            "meta_data": {
                "id": metadata.id,
                "user_id": metadata.user_id,
                "website_id": metadata.website_id,
                "country": metadata.country,
                "city": metadata.city,
                "device": metadata.device,
                "os": metadata.os,
                "browser": metadata.browser,
                "version": metadata.version,
                "created_at": _isoformat(metadata.created_at),
            },
            "duration": session.duration,
            "event": event.model_dump(mode="json"),
            "time_report": _isoformat(session.time_report),
            "inserted_at": _epoch_micros(self._clock.now()),
            "insert_id": uuid.uuid4().hex,
        }
        try:
            self._client.index(index=self._index, body=document, refresh=self._refresh)
        except OpenSearchException as e:
            raise WriteError(f"Failed to insert session {metadata.id}: {e}") from e
        logger.debug("Inserted document for session %s", metadata.id)

    def get_events_paged(
        self, user_id: str, session_id: str, limit: int, skip: int
    ) -> list[Event]:
        if limit < 0 or skip < 0:
            raise ValueError("limit and skip must be non-negative")
        query = session_filter(user_id, session_id=session_id)
        if limit > 0:
            return [self._decode(hit).event for hit in self._search(query, skip=skip, size=limit)]

        # No limit: every event after the first `skip`
        with closing(self._scan(query)) as hits:
            return [self._decode(hit).event for hit in islice(hits, skip, None)]


def get_opensearch_client(settings: Settings | None = None) -> OpenSearch:
    """
    Create an OpenSearch client from settings.

    Client-side retries are disabled so failures reach the caller
    immediately. The client is thread-safe; create one per process.

    Args:
        settings: Application settings. If None, uses get_settings().

    Returns:
        OpenSearch client
    """
    os_settings = (settings or get_settings()).opensearch
    return OpenSearch(
        hosts=os_settings.hosts,
        http_auth=(os_settings.user, os_settings.password),
        use_ssl=os_settings.use_ssl,
        verify_certs=os_settings.verify_certs,
        ssl_show_warn=False,
        timeout=os_settings.timeout,
        max_retries=0,
        retry_on_timeout=False,
    )
