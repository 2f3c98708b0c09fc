# =============================================================================
# tests/test_auth.py - Supabase JWT Verification Tests
# =============================================================================
# Tokens are signed locally with the test SUPABASE_JWT_SECRET (HS256), the
# same way Supabase signs them with the legacy project secret.
# =============================================================================

import base64
import json
import time
from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest
from jose import jwt

from app.auth import dependencies
from app.auth.dependencies import _get_signing_key, decode_token
from app.config import settings
from app.exceptions import UnauthorizedError

from tests.conftest import USER_ID


def make_token(**overrides) -> str:
    claims = {
        "sub": USER_ID,
        "email": "jordan@example.com",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return jwt.encode(claims, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def unsigned_token(header: dict) -> str:
    """A token with the given header; only usable for header inspection."""
    def segment(data: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()
    return f"{segment(header)}.{segment({})}.c2ln"


# =============================================================================
# decode_token
# =============================================================================

class TestDecodeToken:
    """Test HS256 verification and claim checks."""

    def test_valid_token(self):
        user = decode_token(make_token())

        assert user.id == UUID(USER_ID)
        assert user.email == "jordan@example.com"

    def test_expired(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            decode_token(make_token(exp=int(time.time()) - 60))

        assert exc_info.value.status_code == 401
        assert exc_info.value.details["reason"] == "expired"

    def test_wrong_audience(self):
        with pytest.raises(UnauthorizedError):
            decode_token(make_token(aud="anon"))

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": USER_ID, "aud": "authenticated", "exp": int(time.time()) + 60},
            "some-other-secret",
            algorithm="HS256",
        )

        with pytest.raises(UnauthorizedError):
            decode_token(token)

    def test_missing_sub(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            decode_token(make_token(sub=None))

        assert exc_info.value.details["reason"] == "missing sub"

    def test_sub_not_uuid(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            decode_token(make_token(sub="user-123"))

        assert exc_info.value.details["reason"] == "malformed sub"

    def test_garbage(self):
        with pytest.raises(UnauthorizedError):
            decode_token("not.a.jwt")


# =============================================================================
# Signing Keys / JWKS
# =============================================================================

class TestSigningKey:
    """Test key selection for HS256 and JWKS-signed tokens."""

    @pytest.fixture(autouse=True)
    def reset_jwks_cache(self, monkeypatch):
        monkeypatch.setattr(dependencies, "_jwks_cache", {})
        monkeypatch.setattr(dependencies, "_jwks_cache_time", 0)

    @pytest.fixture
    def mock_httpx(self):
        with patch("app.auth.dependencies.httpx.get") as mock_get:
            response = MagicMock()
            response.json.return_value = {"keys": [{"kid": "key-1", "kty": "EC", "crv": "P-256"}]}
            mock_get.return_value = response
            yield mock_get

    def test_hs256_uses_secret(self, mock_httpx):
        key, algorithm = _get_signing_key(make_token())

        assert key == settings.SUPABASE_JWT_SECRET
        assert algorithm == "HS256"
        mock_httpx.assert_not_called()

    def test_jwks_key_by_kid(self, mock_httpx):
        key, algorithm = _get_signing_key(unsigned_token({"alg": "ES256", "kid": "key-1"}))

        assert key["kid"] == "key-1"
        assert algorithm == "ES256"
        mock_httpx.assert_called_once_with(
            "https://test-project.supabase.co/auth/v1/.well-known/jwks.json",
            timeout=10,
        )

    def test_jwks_is_cached(self, mock_httpx):
        token = unsigned_token({"alg": "ES256", "kid": "key-1"})

        _get_signing_key(token)
        _get_signing_key(token)

        mock_httpx.assert_called_once()

    def test_unknown_kid_falls_back_to_secret(self, mock_httpx):
        key, algorithm = _get_signing_key(unsigned_token({"alg": "ES256", "kid": "other"}))

        assert key == settings.SUPABASE_JWT_SECRET
        assert algorithm == "HS256"


# =============================================================================
# HTTP
# =============================================================================

class TestAuthRoutes:
    """Test the real dependency through the auth endpoints."""

    def test_verify(self, anonymous_client):
        response = anonymous_client.get(
            "/api/auth/verify",
            headers={"Authorization": f"Bearer {make_token()}"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "user_id": USER_ID,
            "email": "jordan@example.com",
        }

    def test_verify_expired(self, anonymous_client):
        response = anonymous_client.get(
            "/api/auth/verify",
            headers={"Authorization": f"Bearer {make_token(exp=int(time.time()) - 60)}"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
