"""JWT token service for self-issued login tokens."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TypedDict

import jwt

from ..logging import get_logger

logger = get_logger(__name__)


class TokenPayload(TypedDict):
    """Identity carried by a login token."""

    username: str
    id: str


class AuthenticationError(Exception):
    """Raised when a request cannot be authenticated."""

    pass


class InvalidTokenError(AuthenticationError):
    """Raised when a token's signature or encoding is invalid."""

    pass


class TokenService:
    """Issues and verifies signed identity tokens.

    Tokens carry no expiry; they stay valid for as long as the signing secret does.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("JWT secret key is required. Set ADDRESSBOOK_JWT_SECRET.")
        self.secret_key = secret_key
        self.algorithm = algorithm

    async def issue_token(self, payload: TokenPayload) -> str:
        """Sign ``{username, id}`` together with the issuance time."""
        claims = {
            "username": payload["username"],
            "id": str(payload["id"]),
            "iat": datetime.now(UTC),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> TokenPayload:
        """Verify a token and return the identity it encodes."""
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["username", "id"], "verify_exp": False},
            )
        except jwt.InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise InvalidTokenError("Invalid token") from e

        username = claims.get("username")
        user_id = claims.get("id")
        if not isinstance(username, str) or not isinstance(user_id, str):
            raise InvalidTokenError("Malformed token claims")

        return TokenPayload(username=username, id=user_id)
