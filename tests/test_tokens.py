# ==============================================================================
# Tests for Token Verification
# ==============================================================================
"""
Tests for TokenVerifier and the access / refresh verifier factories.

Tokens are signed with python-jose. Tokens with a non-HMAC algorithm header
are built by hand and carry a correct HMAC-SHA256 signature, so the only
thing wrong with them is the declared algorithm.
"""

import base64
import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
from jose import jwt

from sessionstore.core.errors import (
    InvalidSignatureMethodError,
    InvalidTokenError,
    MalformedOrExpiredTokenError,
    MissingClaimError,
    TokenError,
)
from sessionstore.core.models import TokenDetails
from sessionstore.security import (
    ParsedToken,
    TokenVerifier,
    access_token_verifier,
    refresh_token_verifier,
)

SECRET = "s3cret"


def _request(**cookies) -> SimpleNamespace:
    return SimpleNamespace(cookies=cookies)


def _claims(**overrides) -> dict:
    claims = {
        "user_id": "u1",
        "access_uuid": "a-uuid",
        "exp": int(time.time()) + 600,
    }
    claims.update(overrides)
    return {k: v for k, v in claims.items() if v is not None}


def _sign(claims: dict, secret: str = SECRET, algorithm: str = "HS256") -> str:
    return jwt.encode(claims, secret, algorithm=algorithm)


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _forge(alg: str, claims: dict, secret: str = SECRET) -> str:
    """Build a token with the given header alg and an HMAC-SHA256 signature."""
    signing_input = f"{_b64({'alg': alg, 'typ': 'JWT'})}.{_b64(claims)}"
    digest = hmac.new(secret.encode(), signing_input.encode(), hashlib.sha256).digest()
    signature = base64.urlsafe_b64encode(digest).rstrip(b"=").decode()
    return f"{signing_input}.{signature}"


@pytest.fixture()
def verifier() -> TokenVerifier:
    return access_token_verifier(secret=SECRET)


# ==============================================================================
# extract_token
# ==============================================================================


class TestExtractToken:
    def test_reads_configured_cookie(self, verifier):
        assert verifier.extract_token(_request(access_token="abc")) == "abc"

    def test_missing_cookie_is_empty(self, verifier):
        assert verifier.extract_token(_request(other="abc")) == ""

    def test_request_without_cookies(self, verifier):
        assert verifier.extract_token(SimpleNamespace()) == ""

    def test_cookie_name_from_environment(self, monkeypatch):
        monkeypatch.setenv("ACCESS_COOKIE", "sid")
        verifier = access_token_verifier(secret=SECRET)
        assert verifier.extract_token(_request(sid="abc")) == "abc"


# ==============================================================================
# verify_token
# ==============================================================================


class TestVerifyToken:
    @pytest.mark.parametrize("algorithm", ["HS256", "HS384", "HS512"])
    def test_accepts_hmac_algorithms(self, verifier, algorithm):
        token = _sign(_claims(), algorithm=algorithm)
        parsed = verifier.verify_token(_request(access_token=token))
        assert parsed.header["alg"] == algorithm
        assert parsed.claims["user_id"] == "u1"
        assert parsed.raw == token

    def test_forged_hs256_token_verifies(self, verifier):
        token = _forge("HS256", _claims())
        assert verifier.verify_token(_request(access_token=token)).claims["user_id"] == "u1"

    @pytest.mark.parametrize("algorithm", ["RS256", "ES256", "none"])
    def test_rejects_non_hmac_algorithm(self, verifier, algorithm):
        token = _forge(algorithm, _claims())
        with pytest.raises(InvalidSignatureMethodError):
            verifier.verify_token(_request(access_token=token))

    def test_missing_cookie(self, verifier):
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.verify_token(_request())

    @pytest.mark.parametrize("raw", ["not-a-jwt", "a.b.c", "...."])
    def test_malformed(self, verifier, raw):
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.verify_token(_request(access_token=raw))

    def test_expired(self, verifier):
        token = _sign(_claims(exp=int(time.time()) - 60))
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.verify_token(_request(access_token=token))

    def test_wrong_secret(self, verifier):
        token = _sign(_claims(), secret="other-secret")
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.verify_token(_request(access_token=token))

    def test_secret_read_from_environment_per_call(self, monkeypatch):
        verifier = access_token_verifier()
        token = _sign(_claims(), secret="env-secret")

        monkeypatch.setenv("ACCESS_SECRET", "env-secret")
        assert verifier.verify_token(_request(access_token=token)).claims["user_id"] == "u1"

        monkeypatch.setenv("ACCESS_SECRET", "rotated")
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.verify_token(_request(access_token=token))

    def test_empty_secret_rejects_every_token(self, monkeypatch):
        monkeypatch.setenv("ACCESS_SECRET", "")
        verifier = access_token_verifier()
        token = _sign(_claims(), secret="issuer-secret")
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.verify_token(_request(access_token=token))

    def test_errors_share_base_class(self, verifier):
        with pytest.raises(TokenError):
            verifier.verify_token(_request(access_token=_forge("none", _claims())))


# ==============================================================================
# validate_token
# ==============================================================================


class TestValidateToken:
    def test_valid(self, verifier):
        assert verifier.validate_token(_request(access_token=_sign(_claims()))) is None

    def test_propagates_verification_errors(self, verifier):
        with pytest.raises(InvalidSignatureMethodError):
            verifier.validate_token(_request(access_token=_forge("RS256", _claims())))

    def test_claims_not_a_mapping(self, verifier, monkeypatch):
        monkeypatch.setattr(
            verifier,
            "verify_token",
            lambda request: ParsedToken(raw="x", header={"alg": "HS256"}, claims=["u1"]),
        )
        with pytest.raises(InvalidTokenError):
            verifier.validate_token(_request(access_token="x"))


# ==============================================================================
# extract_token_metadata
# ==============================================================================


class TestExtractTokenMetadata:
    def test_access_token(self, verifier):
        details = verifier.extract_token_metadata(_request(access_token=_sign(_claims())))
        assert details == TokenDetails(user_id="u1", access_uuid="a-uuid")
        assert details.refresh_uuid is None

    def test_missing_user_id(self, verifier):
        token = _sign(_claims(user_id=None))
        with pytest.raises(MissingClaimError):
            verifier.extract_token_metadata(_request(access_token=token))

    def test_non_string_user_id(self, verifier):
        token = _sign(_claims(user_id=42))
        with pytest.raises(MissingClaimError):
            verifier.extract_token_metadata(_request(access_token=token))

    def test_missing_uuid(self, verifier):
        token = _sign(_claims(access_uuid=None))
        with pytest.raises(MissingClaimError):
            verifier.extract_token_metadata(_request(access_token=token))

    def test_refresh_token(self):
        verifier = refresh_token_verifier(secret="refresh-secret")
        token = _sign(
            {"user_id": "u9", "refresh_uuid": "r-uuid", "exp": int(time.time()) + 600},
            secret="refresh-secret",
        )
        details = verifier.extract_token_metadata(_request(refresh_token=token))
        assert details == TokenDetails(user_id="u9", refresh_uuid="r-uuid")

    def test_refresh_verifier_ignores_access_cookie(self):
        verifier = refresh_token_verifier(secret=SECRET)
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.extract_token_metadata(_request(access_token=_sign(_claims())))

    def test_access_token_rejected_by_refresh_verifier(self):
        verifier = refresh_token_verifier(secret=SECRET)
        with pytest.raises(MissingClaimError):
            verifier.extract_token_metadata(_request(refresh_token=_sign(_claims())))

    @pytest.mark.parametrize(
        "extra",
        [
            {"aud": "web"},
            {"aud": ["web", "mobile"]},
            {"sub": 42},
            {"jti": 7},
            {"iss": "auth-service"},
        ],
    )
    def test_other_registered_claims_are_data(self, verifier, extra):
        token = _sign(_claims(**extra))
        details = verifier.extract_token_metadata(_request(access_token=token))
        assert details == TokenDetails(user_id="u1", access_uuid="a-uuid")

    def test_not_yet_valid(self, verifier):
        token = _sign(_claims(nbf=int(time.time()) + 600))
        with pytest.raises(MalformedOrExpiredTokenError):
            verifier.extract_token_metadata(_request(access_token=token))
