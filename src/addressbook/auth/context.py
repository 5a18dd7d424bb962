"""Authentication context for HTTP requests and WebSocket connections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..logging import get_logger
from .tokens import AuthenticationError

if TYPE_CHECKING:
    from ..services import AppServices

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Who a request or connection is authenticated as.

    Only the verified user id is kept. A WebSocket context lives as long as
    the connection, so resolvers load the user document per operation.
    """

    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = AuthContext()


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return the token from an ``Authorization: Bearer <token>`` value.

    Returns None when no header was sent.

    Raises:
        AuthenticationError: If the header is present but not a bearer credential
    """
    if not authorization:
        return None

    if not authorization.lower().startswith("bearer "):
        raise AuthenticationError("Invalid authorization format. Expected: Bearer <token>")

    token = authorization[7:].strip()
    if not token:
        raise AuthenticationError("Empty token")
    return token


async def get_auth_context(services: AppServices, authorization: str | None) -> AuthContext:
    """
    Build the auth context for an Authorization value.

    No credential yields an anonymous context. A valid token whose user no
    longer exists also yields an anonymous context.

    Raises:
        AuthenticationError: If the credential is malformed or the token is invalid
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return ANONYMOUS

    payload = await services.tokens.verify_token(token)
    user = await services.store.find_user_by_id(payload["id"])
    if user is None:
        logger.warning("Token refers to an unknown user", user_id=payload["id"])
        return ANONYMOUS

    return AuthContext(user_id=user.id)


async def authenticate_connection(
    services: AppServices, connection_params: dict[str, Any] | None
) -> AuthContext:
    """
    Authenticate a WebSocket connection from its ``connectionParams``.

    Subscriptions always require a user.

    Raises:
        AuthenticationError: If no valid credential resolves to a user
    """
    authorization = (connection_params or {}).get("Authorization")
    if authorization is not None and not isinstance(authorization, str):
        raise AuthenticationError("Invalid authorization format. Expected: Bearer <token>")

    auth = await get_auth_context(services, authorization)
    if not auth.is_authenticated:
        raise AuthenticationError("User is not authenticated")
    return auth
