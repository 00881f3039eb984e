# ==============================================================================
# Shared CLI Utilities
# ==============================================================================
"""
Shared utilities for the sessionstore CLI.

Contains:
- Terminal colors and icons
- Composition helpers that build repositories from settings
- Error reporting helper used by every command
"""

from typing import NoReturn

import typer

from sessionstore.infrastructure.cache import ValkeyTimestampStore, get_valkey_client
from sessionstore.infrastructure.repositories import (
    OpenSearchSessionRepository,
    get_opensearch_client,
)
from sessionstore.utils.config import get_settings


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"


class Icons:
    """Status icons using Unicode symbols."""

    CHECK = "✓"
    CROSS = "✗"


# Module-level aliases for convenience
C, I = Colors, Icons


# ==============================================================================
# Composition Helpers
# ==============================================================================


def build_session_repository() -> OpenSearchSessionRepository:
    """Create an OpenSearch session repository from settings.

    The caller owns the new client and closes it via repository.client.close().
    """
    settings = get_settings()
    return OpenSearchSessionRepository.from_settings(get_opensearch_client(settings), settings)


def build_timestamp_store() -> ValkeyTimestampStore:
    """Create a Valkey timestamp store from settings; the caller closes store.client."""
    settings = get_settings()
    return ValkeyTimestampStore.from_settings(get_valkey_client(settings), settings)


def fail(message: str, detail: object | None = None) -> NoReturn:
    """Print an error line (and optional detail) and exit with status 1."""
    print(f"  {C.BRIGHT_RED}{I.CROSS}{C.RESET} {message}")
    if detail is not None:
        print(f"    {C.DIM}{detail}{C.RESET}")
    raise typer.Exit(1)
