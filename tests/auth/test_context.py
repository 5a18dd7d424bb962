"""Tests for building auth contexts from HTTP headers and WebSocket params."""

import pytest

from addressbook.auth.context import (
    AuthContext,
    authenticate_connection,
    extract_bearer_token,
    get_auth_context,
)
from addressbook.auth.tokens import AuthenticationError, InvalidTokenError, TokenPayload


async def bearer_for(services, user) -> str:
    token = await services.tokens.issue_token(TokenPayload(username=user.username, id=user.id))
    return f"Bearer {token}"


class TestExtractBearerToken:
    def test_missing_header(self):
        assert extract_bearer_token(None) is None
        assert extract_bearer_token("") is None

    def test_bearer_prefix_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc") == "abc"
        assert extract_bearer_token("Bearer abc") == "abc"

    def test_wrong_scheme(self):
        with pytest.raises(AuthenticationError, match="Expected: Bearer"):
            extract_bearer_token("Basic dXNlcjpwYXNz")

    def test_empty_token(self):
        with pytest.raises(AuthenticationError, match="Empty token"):
            extract_bearer_token("Bearer   ")


class TestGetAuthContext:
    @pytest.mark.asyncio
    async def test_no_header_is_anonymous(self, services):
        auth = await get_auth_context(services, None)

        assert not auth.is_authenticated
        assert auth.user_id is None

    @pytest.mark.asyncio
    async def test_valid_token_loads_user(self, services, alice):
        auth = await get_auth_context(services, await bearer_for(services, alice))

        assert auth.is_authenticated
        assert auth == AuthContext(user_id=alice.id)

    @pytest.mark.asyncio
    async def test_invalid_token_is_rejected(self, services):
        with pytest.raises(InvalidTokenError):
            await get_auth_context(services, "Bearer not-a-jwt")

    @pytest.mark.asyncio
    async def test_token_for_unknown_user_is_anonymous(self, services):
        token = await services.tokens.issue_token(
            TokenPayload(username="ghost", id="65f000000000000000000000")
        )

        auth = await get_auth_context(services, f"Bearer {token}")

        assert not auth.is_authenticated


class TestAuthenticateConnection:
    @pytest.mark.asyncio
    async def test_valid_connection_params(self, services, alice):
        params = {"Authorization": await bearer_for(services, alice)}

        auth = await authenticate_connection(services, params)

        assert auth.user_id == alice.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [None, {}, {"Authorization": ""}])
    async def test_missing_credentials_are_rejected(self, services, params):
        with pytest.raises(AuthenticationError, match="not authenticated"):
            await authenticate_connection(services, params)

    @pytest.mark.asyncio
    async def test_invalid_token_is_rejected(self, services):
        with pytest.raises(InvalidTokenError):
            await authenticate_connection(services, {"Authorization": "Bearer nope"})

    @pytest.mark.asyncio
    async def test_non_string_authorization_is_rejected(self, services):
        with pytest.raises(AuthenticationError, match="Expected: Bearer"):
            await authenticate_connection(services, {"Authorization": 123})
