from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.tokens import TokenPayload
from ...logging import get_logger
from ..access_control import get_current_user, get_services
from ..errors import BadUserInputError

if TYPE_CHECKING:
    from ..types.user import Token, User

logger = get_logger(__name__)


async def resolve_current_user(info: strawberry.Info) -> User | None:
    from ..types.user import User

    user = await get_current_user(info)
    return User.from_document(user) if user else None


async def login(info: strawberry.Info, username: str, password: str) -> Token:
    """
    Exchange a username and the shared demo password for a signed token.

    Passwords are not stored per user; every account accepts the configured
    demo password.
    """
    from ..types.user import Token

    services = get_services(info)
    user = await services.store.find_user_by_username(username)
    if user is None or password != services.settings.demo_password:
        logger.info("Login rejected", username=username)
        raise BadUserInputError("wrong credentials")

    value = await services.tokens.issue_token(TokenPayload(username=user.username, id=user.id))
    logger.info("Login succeeded", user_id=user.id)
    return Token(value=value)
