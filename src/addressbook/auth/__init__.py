"""Authentication for the address book API."""

from .context import AuthContext, authenticate_connection, get_auth_context
from .tokens import AuthenticationError, InvalidTokenError, TokenPayload, TokenService

__all__ = [
    "AuthContext",
    "AuthenticationError",
    "InvalidTokenError",
    "TokenPayload",
    "TokenService",
    "authenticate_connection",
    "get_auth_context",
]
