"""
Vehicle Registry Backend — Bearer Token Gate Unit Tests
=========================================================

What:  Tests for role extraction, token decoding and the require_role gate.
How:   Calls the security helpers directly; verification mode is toggled
       with monkeypatch on the shared settings object.
"""

import time

import jwt
import pytest

from vehicle_api.config import settings
from vehicle_api.exceptions import AuthenticationError, AuthorizationError
from vehicle_api.security import (
    ROLE_CLAIM_URI,
    authenticate,
    extract_roles,
    issue_token,
    require_role,
)
from fastapi.security import HTTPAuthorizationCredentials

SECRET = "unit-test-secret-0123456789abcdef0123"


def credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.fixture
def verifying(monkeypatch):
    """Turn real token verification on for one test."""
    monkeypatch.setattr(settings, "auth_verify_tokens", True)
    monkeypatch.setattr(settings, "jwt_secret", SECRET)
    monkeypatch.setattr(settings, "jwt_issuer", None)
    monkeypatch.setattr(settings, "jwt_audience", None)


class TestExtractRoles:

    def test_single_role_string(self):
        assert extract_roles({"role": "admin"}) == ["admin"]

    def test_roles_list(self):
        assert extract_roles({"roles": ["a", "b"]}) == ["a", "b"]

    def test_long_claim_name(self):
        assert extract_roles({ROLE_CLAIM_URI: ["admin"]}) == ["admin"]

    def test_merges_keys_without_duplicates(self):
        claims = {"role": "admin", "roles": ["admin", "viewer"]}
        assert extract_roles(claims) == ["admin", "viewer"]

    def test_no_roles(self):
        assert extract_roles({"sub": "x"}) == []


class TestAuthenticateUnverified:
    """Default mode: nothing about the token is verified."""

    def test_opaque_token_becomes_anonymous_caller(self):
        caller = authenticate("faketoken")

        assert caller.decoded is False
        assert caller.verified is False
        assert caller.roles == []

    def test_claims_are_read_without_the_key(self):
        token = jwt.encode({"sub": "alice", "role": "admin"}, "other-key-0123456789abcdef0123", algorithm="HS256")

        caller = authenticate(token)

        assert caller.decoded is True
        assert caller.verified is False
        assert caller.subject == "alice"
        assert caller.has_role("admin")


class TestAuthenticateVerified:
    """AUTH_VERIFY_TOKENS=true."""

    def test_valid_token(self, verifying):
        token = issue_token("alice", roles=["admin"])

        caller = authenticate(token)

        assert caller.verified is True
        assert caller.roles == ["admin"]

    def test_wrong_signature_rejected(self, verifying):
        token = issue_token("mallory", roles=["admin"], secret="not-the-server-secret-0123456789")

        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(token)
        assert exc_info.value.reason == "InvalidSignatureError"

    def test_expired_token_rejected(self, verifying):
        token = jwt.encode(
            {"sub": "alice", "role": "admin", "exp": int(time.time()) - 60},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            authenticate(token)

    def test_token_without_expiry_rejected(self, verifying):
        token = jwt.encode({"sub": "alice", "role": "admin"}, SECRET, algorithm="HS256")

        with pytest.raises(AuthenticationError):
            authenticate(token)

    def test_opaque_token_rejected(self, verifying):
        with pytest.raises(AuthenticationError):
            authenticate("faketoken")

    def test_issuer_and_audience_checked_when_configured(self, verifying, monkeypatch):
        monkeypatch.setattr(settings, "jwt_issuer", "registry")
        monkeypatch.setattr(settings, "jwt_audience", "vehicles")
        good = issue_token("alice", roles=["admin"])
        bad = jwt.encode(
            {"sub": "alice", "role": "admin", "exp": int(time.time()) + 60, "iss": "elsewhere", "aud": "vehicles"},
            SECRET,
            algorithm="HS256",
        )

        assert authenticate(good).verified is True
        with pytest.raises(AuthenticationError):
            authenticate(bad)


class TestRequireRole:
    """The route dependency built by require_role()."""

    def test_missing_credentials(self):
        gate = require_role("admin")

        with pytest.raises(AuthenticationError):
            gate(None)

    def test_role_present(self):
        gate = require_role("admin")
        token = jwt.encode({"role": "admin"}, "k-0123456789abcdef0123456789", algorithm="HS256")

        assert gate(credentials(token)).has_role("admin")

    def test_role_missing(self):
        gate = require_role("admin")
        token = jwt.encode({"role": "viewer"}, "k-0123456789abcdef0123456789", algorithm="HS256")

        with pytest.raises(AuthorizationError) as exc_info:
            gate(credentials(token))
        assert exc_info.value.roles == ["viewer"]

    def test_opaque_token_passes_when_unverified(self):
        gate = require_role("admin")

        caller = gate(credentials("faketoken"))

        assert caller.token == "faketoken"

    def test_configured_role_name(self):
        gate = require_role("fleet-manager")
        token = jwt.encode({"roles": ["fleet-manager"]}, "k-0123456789abcdef0123456789", algorithm="HS256")

        assert gate(credentials(token)).has_role("fleet-manager")
