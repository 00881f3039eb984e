# ==============================================================================
# Error Taxonomy
# ==============================================================================
"""
Exceptions raised by the session store, timestamp store and token verifier.

Store errors:
- NotFoundError: a query matched nothing (recoverable, "no such session")
- StoreError: backend connectivity or decode failure
- WriteError: an insert was rejected by the backend
- StoreUnavailableError: the key-value backend could not be reached
- TimestampParseError: a stored timestamp is not an integer

Authentication errors (all map to an access-denied outcome at the boundary):
- InvalidSignatureMethodError
- MalformedOrExpiredTokenError
- MissingClaimError
- InvalidTokenError
"""


class SessionStoreError(Exception):
    """Base class for session and timestamp store failures."""


class NotFoundError(SessionStoreError):
    """The query matched no stored record."""


class StoreError(SessionStoreError):
    """The backend failed to execute a request or returned undecodable data."""


class WriteError(StoreError):
    """The backend rejected a write."""


class StoreUnavailableError(StoreError):
    """The key-value backend is unreachable or returned an error."""


class TimestampParseError(SessionStoreError):
    """A stored first-seen timestamp could not be parsed as an integer."""


class TokenError(Exception):
    """Base class for authentication failures."""


class InvalidSignatureMethodError(TokenError):
    """The token declares a signing algorithm other than HMAC."""


class MalformedOrExpiredTokenError(TokenError):
    """The token is missing, corrupt, expired or carries a bad signature."""


class MissingClaimError(TokenError):
    """A required claim is absent or has the wrong type."""


class InvalidTokenError(TokenError):
    """The token parsed but did not yield a usable claim set."""
