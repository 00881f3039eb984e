"""FastAPI boundary helpers."""

from sessionstore.api.deps import (
    get_current_user_id,
    get_token_details,
    register_exception_handlers,
)

__all__ = [
    "get_current_user_id",
    "get_token_details",
    "register_exception_handlers",
]
