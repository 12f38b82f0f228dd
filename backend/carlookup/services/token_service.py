"""
CarLookup Backend: Token Service
=================================

What:  Issues and checks HS256 bearer tokens with PyJWT.
Who:   AuthManager (issue) and the authentication dependency in security.py
       (read claims).

Claims written:
    sub, name, nameid  the username
    jti                random uuid4, unique per token
    iat, exp           issued-at and expiry (UTC epoch seconds)
    iss, aud           from configuration
    role               list with one entry per role

Validation checks signature, issuer, audience and expiry with zero leeway:
a token is rejected the second it expires.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

import jwt

from carlookup.config import Settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ROLE_CLAIM = "role"


@dataclass(frozen=True)
class TokenClaims:
    username: str
    roles: List[str] = field(default_factory=list)
    token_id: Optional[str] = None
    expires_at: Optional[datetime] = None


class TokenService:
    def __init__(
        self,
        key: str,
        issuer: str,
        audience: str,
        expiration_minutes: int = 60,
    ):
        if not key:
            raise ValueError("JWT signing key is required")
        self._key = key
        self.issuer = issuer
        self.audience = audience
        self.expiration_minutes = expiration_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            key=settings.jwt_key,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expiration_minutes=settings.jwt_expiration_minutes,
        )

    def generate_token(self, username: str, roles: Sequence[str]) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": username,
            "name": username,
            "nameid": username,
            "jti": str(uuid.uuid4()),
            "iat": now,
            "exp": now + timedelta(minutes=self.expiration_minutes),
            "iss": self.issuer,
            "aud": self.audience,
            ROLE_CLAIM: list(roles),
        }
        return jwt.encode(payload, self._key, algorithm=ALGORITHM)

    def _decode(self, token: str) -> Dict[str, Any]:
        return jwt.decode(
            token,
            self._key,
            algorithms=[ALGORITHM],
            audience=self.audience,
            issuer=self.issuer,
            leeway=0,
            options={"require": ["exp", "iss", "aud", "sub"]},
        )

    def validate_token(self, token: str) -> bool:
        return self.read_claims(token) is not None

    def read_claims(self, token: str) -> Optional[TokenClaims]:
        """Decoded claims of a valid token, or None for anything invalid."""
        if not token:
            return None
        try:
            payload = self._decode(token)
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return None

        roles = payload.get(ROLE_CLAIM) or []
        if isinstance(roles, str):
            roles = [roles]
        return TokenClaims(
            username=payload.get("name") or payload["sub"],
            roles=[str(r) for r in roles],
            token_id=payload.get("jti"),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    def get_expiration_seconds(self) -> int:
        return self.expiration_minutes * 60
