"""
Shared context access for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..auth.context import ANONYMOUS, AuthContext
from ..logging import get_logger
from .errors import UnauthenticatedError

if TYPE_CHECKING:
    from ..database.models import UserDocument
    from ..services import AppServices

logger = get_logger(__name__)


def get_services(info: strawberry.Info) -> "AppServices":
    """Return the process-wide collaborators placed in the context by the transport."""
    return info.context["services"]


def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """Return the operation's auth context; anonymous when the transport set none."""
    return info.context.get("auth") or ANONYMOUS


async def get_current_user(info: strawberry.Info) -> "UserDocument | None":
    """Load the authenticated user as stored now; None when anonymous or deleted."""
    user_id = get_auth_context_from_info(info).user_id
    if user_id is None:
        return None
    return await get_services(info).store.find_user_by_id(user_id)


async def require_current_user(info: strawberry.Info) -> "UserDocument":
    """
    Return the authenticated user or fail before any side effect happens.

    Raises:
        UnauthenticatedError: If the operation carries no authenticated user
    """
    user = await get_current_user(info)
    if user is None:
        logger.info("Unauthenticated access rejected", field=info.field_name)
        raise UnauthenticatedError()
    return user
