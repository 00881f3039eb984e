# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for the sessionstore package.

Commands are organized into separate modules for maintainability:
- shared.py: Colors, icons and composition helpers
- status.py: Service connectivity status
- config.py: Configuration display
- index.py: Sessions index management
- sessions.py: Read-only session lookups
"""

from sessionstore.cli.shared import (
    C,
    Colors,
    I,
    Icons,
    build_session_repository,
    build_timestamp_store,
    fail,
)

__all__ = [
    "C",
    "Colors",
    "I",
    "Icons",
    "build_session_repository",
    "build_timestamp_store",
    "fail",
]
