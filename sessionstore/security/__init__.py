"""Token verification for inbound requests."""

from sessionstore.security.tokens import (
    HMAC_ALGORITHMS,
    ParsedToken,
    TokenVerifier,
    access_token_verifier,
    refresh_token_verifier,
)

__all__ = [
    "HMAC_ALGORITHMS",
    "ParsedToken",
    "TokenVerifier",
    "access_token_verifier",
    "refresh_token_verifier",
]
