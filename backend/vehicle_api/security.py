"""
Vehicle Registry Backend — Bearer Token Gate
==============================================

What:  Reads the bearer token from the Authorization header, extracts its
       role claims, and enforces the role required by admin routes.
How:   FastAPI's HTTPBearer extracts the credentials; PyJWT decodes them.
Who:   `require_role(...)` is used as a route dependency.

Verification modes (settings.auth_verify_tokens):
    False (default)
        Signature, issuer, audience and lifetime are NOT checked. A token
        that decodes as a JWT must still carry the required role claim. A
        token that is not a JWT at all is let through as an unverified
        caller. In this mode the role check is advisory only: anyone can
        forge a claim, and the bypass is logged at WARNING.
    True
        Tokens are verified with JWT_SECRET / JWT_ALGORITHM, with lifetime
        always checked and issuer/audience checked when configured. An
        invalid token is a 401.

Role claims are read from `role`, `roles` and the long-form claim type used
by .NET identity (ROLE_CLAIM_URI); each may be a string or a list.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vehicle_api.config import settings
from vehicle_api.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

ROLE_CLAIM_URI = "http://schemas.microsoft.com/ws/2008/06/identity/claims/role"
ROLE_CLAIM_KEYS = ("role", "roles", ROLE_CLAIM_URI)

bearer_scheme = HTTPBearer(auto_error=False, description="Bearer token with an 'admin' role claim")


@dataclass
class Caller:
    """Identity extracted from a bearer token."""
    token: str
    subject: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    claims: Dict[str, Any] = field(default_factory=dict)
    verified: bool = False
    decoded: bool = False

    def has_role(self, role: str) -> bool:
        return role in self.roles


def extract_roles(claims: Dict[str, Any]) -> List[str]:
    """Collect role names from every supported claim key, preserving order."""
    roles: List[str] = []
    for key in ROLE_CLAIM_KEYS:
        value = claims.get(key)
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            name = str(item)
            if name not in roles:
                roles.append(name)
    return roles


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode a bearer token according to the configured verification mode.

    Raises:
        jwt.InvalidTokenError: The token is not a JWT, or (verification on)
            its signature, lifetime, issuer or audience is wrong.
    """
    if not settings.auth_verify_tokens:
        return jwt.decode(
            token,
            options={
                "verify_signature": False,
                "verify_exp": False,
                "verify_nbf": False,
                "verify_iat": False,
                "verify_iss": False,
                "verify_aud": False,
            },
        )

    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={
            "require": ["exp"],
            "verify_aud": settings.jwt_audience is not None,
            "verify_iss": settings.jwt_issuer is not None,
        },
    )


def authenticate(token: str) -> Caller:
    """
    Turn a raw bearer token into a Caller.

    Raises:
        AuthenticationError: Verification is on and the token is invalid.
    """
    try:
        claims = decode_token(token)
    except jwt.InvalidTokenError as e:
        if settings.auth_verify_tokens:
            logger.warning("Rejected bearer token: %s", str(e))
            raise AuthenticationError(
                message="The bearer token is invalid or expired",
                reason=type(e).__name__,
            )
        logger.warning(
            "Accepting opaque bearer token without verification (%s)",
            type(e).__name__,
        )
        return Caller(token=token)

    caller = Caller(
        token=token,
        subject=claims.get("sub"),
        roles=extract_roles(claims),
        claims=claims,
        verified=settings.auth_verify_tokens,
        decoded=True,
    )
    if not caller.verified:
        logger.warning(
            "Bearer token claims accepted without verification: sub=%s roles=%s",
            caller.subject,
            caller.roles,
        )
    return caller


def require_role(role: str) -> Callable[..., Caller]:
    """
    Build a route dependency that demands a bearer token carrying `role`.

    Usage:
        @router.post("/admin/vehicles")
        async def register(caller: Caller = Depends(require_role("admin"))):
            ...
    """

    def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Caller:
        if credentials is None or not credentials.credentials:
            raise AuthenticationError(reason="missing_bearer_token")

        caller = authenticate(credentials.credentials)

        # Opaque tokens carry no claims to check; only reachable with verification off
        if caller.decoded and not caller.has_role(role):
            logger.warning(
                "Caller sub=%s lacks role '%s' (roles=%s)",
                caller.subject,
                role,
                caller.roles,
            )
            raise AuthorizationError(required_role=role, roles=caller.roles)

        return caller

    return dependency


def issue_token(
    subject: str,
    roles: Optional[List[str]] = None,
    ttl_seconds: int = 3600,
    secret: Optional[str] = None,
) -> str:
    """
    Mint an HS-signed token for `subject` with the given roles.

    Uses settings.jwt_secret unless `secret` is given. Issuer and audience
    are added when configured. Intended for tests and local tooling.
    """
    now = int(time.time())
    payload: Dict[str, Any] = {"sub": subject, "iat": now, "exp": now + ttl_seconds}
    if roles:
        payload["role"] = roles[0] if len(roles) == 1 else list(roles)
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)
