from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from pydantic import ValidationError

from ...database.models import UserDocument
from ...database.store import DocumentValidationError
from ...logging import get_logger
from ..access_control import get_services, require_current_user
from ..errors import NotFoundError, UnauthenticatedError, bad_user_input

if TYPE_CHECKING:
    from ..types.person import Person
    from ..types.user import User

logger = get_logger(__name__)


async def resolve_user_friends(user: User, info: strawberry.Info) -> list[Person | None]:
    from ..types.person import Person

    documents = await get_services(info).store.get_persons_by_ids(user.friend_ids)
    return [Person.from_document(doc) for doc in documents]


async def create_user(info: strawberry.Info, username: str) -> User:
    """Create an account with no friends and no stored password."""
    from ..types.user import User

    store = get_services(info).store
    try:
        user = UserDocument(username=username)
        await store.insert_user(user)
    except (ValidationError, DocumentValidationError) as e:
        logger.info("Rejected new user", username=username, error=str(e))
        raise bad_user_input("User", e) from e

    logger.info("User created", user_id=user.id, username=user.username)
    return User.from_document(user)


async def add_as_friend(info: strawberry.Info, name: str) -> User:
    """
    Add an existing contact to the current user's friends.

    Adding a contact that is already a friend leaves the user unchanged.
    """
    from ..types.user import User

    current_user = await require_current_user(info)
    store = get_services(info).store

    person = await store.find_person_by_name(name)
    if person is None:
        raise NotFoundError(f"Person {name!r} not found")

    if current_user.has_friend(person.id):
        return User.from_document(current_user)

    updated = await store.add_friend(current_user.id, person.id)
    if updated is None:
        raise UnauthenticatedError()
    logger.info("Friend added", user_id=current_user.id, person_id=person.id)
    return User.from_document(updated)
