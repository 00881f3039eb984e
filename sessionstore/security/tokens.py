# ==============================================================================
# Token Verification
# ==============================================================================
"""
Verification of HMAC-signed JWTs carried in request cookies.

Provides:
- TokenVerifier: extract, verify and read identity claims from a cookie token
- access_token_verifier / refresh_token_verifier: configured verifiers

Only HS256, HS384 and HS512 are accepted. The algorithm declared in the
token header is checked before the signature, so a token claiming "none" or
an asymmetric algorithm is rejected even if its signature would match the
shared secret.

Of the registered claims only exp, nbf and iat are validated; an audience,
subject or token id does not affect verification.

Requests are any object exposing a `cookies` mapping (Starlette/FastAPI
Request qualifies).
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jose import jwt
from jose.exceptions import JOSEError

from sessionstore.core.errors import (
    InvalidSignatureMethodError,
    InvalidTokenError,
    MalformedOrExpiredTokenError,
    MissingClaimError,
)
from sessionstore.core.models import TokenDetails
from sessionstore.utils.config import AuthSettings, Settings, get_settings

logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")

# Only time-based claims are validated; aud, sub and jti are carried as data
DECODE_OPTIONS = {
    "verify_exp": True,
    "verify_nbf": True,
    "verify_iat": True,
    "verify_aud": False,
    "verify_sub": False,
    "verify_jti": False,
}

ACCESS_UUID_CLAIM = "access_uuid"
REFRESH_UUID_CLAIM = "refresh_uuid"
USER_ID_CLAIM = "user_id"


@dataclass(frozen=True)
class ParsedToken:
    """A token whose signature and expiry have been verified."""

    raw: str
    header: dict
    claims: Any = field(default_factory=dict)


class TokenVerifier:
    """
    Verifies one kind of token (access or refresh).

    The HMAC secret is read from the environment on every verification
    unless one is passed explicitly.
    """

    def __init__(
        self,
        cookie_name: str,
        uuid_claim: str,
        secret_setting: str,
        secret: str | None = None,
    ):
        """
        Initialize the verifier.

        Args:
            cookie_name: Cookie carrying the token
            uuid_claim: Claim holding the token's uuid ("access_uuid" or "refresh_uuid")
            secret_setting: AuthSettings field holding the secret when none is injected
            secret: Explicit HMAC secret, bypassing the environment
        """
        self.cookie_name = cookie_name
        self.uuid_claim = uuid_claim
        self._secret_setting = secret_setting
        self._secret = secret

    def _resolve_secret(self) -> str:
        if self._secret is not None:
            return self._secret
        return getattr(AuthSettings(), self._secret_setting)

    def extract_token(self, request: Any) -> str:
        """
        Get the raw token from the request cookie.

        Returns:
            Cookie value, or "" if the cookie is absent
        """
        cookies = getattr(request, "cookies", None) or {}
        return cookies.get(self.cookie_name) or ""

    def verify_token(self, request: Any) -> ParsedToken:
        """
        Parse the cookie token and verify its algorithm, signature and expiry.

        Raises:
            InvalidSignatureMethodError: Header declares a non-HMAC algorithm
            MalformedOrExpiredTokenError: Missing, corrupt, badly signed or expired token
        """
        raw = self.extract_token(request)
        if not raw:
            raise MalformedOrExpiredTokenError(f"Cookie {self.cookie_name!r} is missing")

        try:
            header = jwt.get_unverified_header(raw)
        except JOSEError as e:
            raise MalformedOrExpiredTokenError(f"Malformed token: {e}") from e

        algorithm = header.get("alg")
        if algorithm not in HMAC_ALGORITHMS:
            raise InvalidSignatureMethodError(f"Unexpected signing method: {algorithm}")

        secret = self._resolve_secret()
        if not secret:
            logger.warning("No secret configured for %s tokens", self.cookie_name)
            raise MalformedOrExpiredTokenError("Token cannot be verified without a secret")

        try:
            claims = jwt.decode(raw, secret, algorithms=[algorithm], options=DECODE_OPTIONS)
        except JOSEError as e:
            raise MalformedOrExpiredTokenError(str(e)) from e
        return ParsedToken(raw=raw, header=header, claims=claims)

    def validate_token(self, request: Any) -> None:
        """
        Check that the request carries a valid token.

        Raises:
            InvalidSignatureMethodError, MalformedOrExpiredTokenError: As verify_token
            InvalidTokenError: The token verified but carries no claim object
        """
        token = self.verify_token(request)
        if not isinstance(token.claims, Mapping):
            raise InvalidTokenError("Token does not carry a claim set")

    def extract_token_metadata(self, request: Any) -> TokenDetails:
        """
        Verify the token and read its identity claims.

        Returns:
            TokenDetails with user_id and the verifier's uuid claim filled

        Raises:
            MissingClaimError: uuid or user_id claim absent or not a string
            InvalidSignatureMethodError, MalformedOrExpiredTokenError: As verify_token
        """
        token = self.verify_token(request)
        claims = token.claims if isinstance(token.claims, Mapping) else {}

        token_uuid = claims.get(self.uuid_claim)
        if not isinstance(token_uuid, str):
            raise MissingClaimError(f"Claim {self.uuid_claim!r} is missing or not a string")
        user_id = claims.get(USER_ID_CLAIM)
        if not isinstance(user_id, str):
            raise MissingClaimError(f"Claim {USER_ID_CLAIM!r} is missing or not a string")

        return TokenDetails(user_id=user_id, **{self.uuid_claim: token_uuid})


def access_token_verifier(
    secret: str | None = None, settings: Settings | None = None
) -> TokenVerifier:
    """Build a verifier for access tokens (cookie from ACCESS_COOKIE, key ACCESS_SECRET)."""
    auth = (settings or get_settings()).auth
    return TokenVerifier(
        cookie_name=auth.access_cookie,
        uuid_claim=ACCESS_UUID_CLAIM,
        secret_setting="access_secret",
        secret=secret,
    )


def refresh_token_verifier(
    secret: str | None = None, settings: Settings | None = None
) -> TokenVerifier:
    """Build a verifier for refresh tokens (cookie from REFRESH_COOKIE, key REFRESH_SECRET)."""
    auth = (settings or get_settings()).auth
    return TokenVerifier(
        cookie_name=auth.refresh_cookie,
        uuid_claim=REFRESH_UUID_CLAIM,
        secret_setting="refresh_secret",
        secret=secret,
    )
