# ==============================================================================
# Session Domain Models
# ==============================================================================
"""
Pydantic models for analytics sessions, events and token identity.

These models are used for:
- Building session documents before they are written to the document store
- Decoding documents read back from the store
- Carrying the identity extracted from a verified access token

Stored documents keep the legacy "meta_data" key so existing data remains
readable; Python code refers to it as Session.metadata.

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Event(BaseModel):
    """
    One recorded interaction within a session (page view, click, ...).

    The field set belongs to the tracking client and is opaque here: every
    field present on input is kept and written back unchanged.
    """

    model_config = ConfigDict(extra="allow")


class SessionMetadata(BaseModel):
    """
    Descriptive fields of a session.

    Attributes:
        id: Session identifier generated by the tracking client
        user_id: Owner of the tracked website
        website_id: Tracked website
        country, city: Geolocation of the visitor
        device, os, browser, version: Client description
        created_at: When the tracking client created the session
    """

    id: str = Field(..., description="Session identifier")
    user_id: str = Field(..., description="Owning user identifier")
    website_id: str = Field(..., description="Website identifier")
    country: str = Field(default="", description="Visitor country")
    city: str = Field(default="", description="Visitor city")
    device: str = Field(default="", description="Client device")
    os: str = Field(default="", description="Client operating system")
    browser: str = Field(default="", description="Client browser")
    version: str = Field(default="", description="Client browser version")
    created_at: Optional[datetime] = Field(default=None, description="Session creation time")

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


class Session(BaseModel):
    """
    One stored session document.

    Each document embeds exactly one event; a logical session is the set of
    documents sharing metadata.id for a given user and website.

    Attributes:
        metadata: Session metadata (stored as "meta_data")
        duration: Elapsed visit time in milliseconds when the event was recorded
        event: The embedded event
        time_report: Timestamp used for day-window reporting
    """

    model_config = ConfigDict(populate_by_name=True)

    metadata: SessionMetadata = Field(..., alias="meta_data")
    duration: int = Field(default=0, ge=0, description="Elapsed time in milliseconds")
    event: Event = Field(default_factory=Event)
    time_report: datetime = Field(..., description="Reporting timestamp")

    @field_validator("time_report")
    @classmethod
    def normalize_time_report(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def session_id(self) -> str:
        """Shortcut for metadata.id."""
        return self.metadata.id

    def to_document(self) -> dict:
        """Serialize to the stored document layout."""
        return self.model_dump(mode="json", by_alias=True)


class TokenDetails(BaseModel):
    """
    Identity claims extracted from a verified token. Never persisted.

    Access tokens fill access_uuid; refresh tokens fill refresh_uuid.
    """

    user_id: str
    access_uuid: Optional[str] = None
    refresh_uuid: Optional[str] = None
