from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import TYPE_CHECKING

import strawberry
from pydantic import ValidationError

from ...database.models import PersonDocument
from ...database.store import DocumentValidationError
from ...events import PERSON_ADDED
from ...logging import get_logger
from ..access_control import get_services, require_current_user
from ..errors import UnauthenticatedError, bad_user_input

if TYPE_CHECKING:
    from ..types.person import Address, Person, YesNo

logger = get_logger(__name__)


# Query resolvers
async def resolve_person_count(info: strawberry.Info) -> int:
    return await get_services(info).store.count_persons()


async def resolve_all_persons(info: strawberry.Info, phone: YesNo | None = None) -> list[Person]:
    """
    Resolve all contacts, optionally filtered by phone presence.

    YES keeps contacts with a phone, NO keeps those without one.
    """
    from ..types.person import Person, YesNo

    has_phone = None if phone is None else phone == YesNo.YES
    documents = await get_services(info).store.list_persons(has_phone=has_phone)
    return [Person.from_document(doc) for doc in documents]


async def resolve_find_person(info: strawberry.Info, name: str) -> Person | None:
    from ..types.person import Person

    doc = await get_services(info).store.find_person_by_name(name)
    return Person.from_document(doc) if doc else None


# Field resolvers
def resolve_person_address(person: Person) -> Address:
    from ..types.person import Address

    return Address(street=person.street, city=person.city)


# Mutation resolvers
async def add_person(
    info: strawberry.Info,
    name: str,
    street: str,
    city: str,
    phone: str | None = None,
) -> Person:
    """
    Create a contact and add it to the current user's friends.

    Order: validate, insert the contact, link it to the user, then publish
    PERSON_ADDED. If linking fails the contact insert is undone before the
    error propagates.
    """
    from ..types.person import Person

    current_user = await require_current_user(info)
    services = get_services(info)

    try:
        person = PersonDocument(name=name, phone=phone, street=street, city=city)
        await services.store.insert_person(person)
    except (ValidationError, DocumentValidationError) as e:
        logger.info("Rejected new person", name=name, error=str(e))
        raise bad_user_input("Person", e) from e

    try:
        linked = await services.store.add_friend(current_user.id, person.id)
        if linked is None:
            # User deleted since the operation started
            raise UnauthenticatedError()
    except Exception:
        logger.error(
            "Failed to link new person to user, removing it",
            person_id=person.id,
            user_id=current_user.id,
        )
        await services.store.delete_person(person.id)
        raise

    logger.info("Person added", person_id=person.id, user_id=current_user.id)

    created = Person.from_document(person)
    services.events.publish(PERSON_ADDED, created)
    return created


async def edit_number(info: strawberry.Info, name: str, phone: str) -> Person | None:
    """Set a contact's phone number; returns None if no contact has that name."""
    from ..types.person import Person

    store = get_services(info).store
    person = await store.find_person_by_name(name)
    if person is None:
        logger.info("Person not found for phone edit", name=name)
        return None

    try:
        person.phone = phone
    except ValidationError as e:
        raise bad_user_input("Person", e) from e

    await store.update_person_phone(person)
    return Person.from_document(person)


# Subscription resolvers
async def subscribe_person_added(info: strawberry.Info) -> AsyncGenerator[Person, None]:
    events = get_services(info).events
    async with aclosing(events.subscribe(PERSON_ADDED)) as stream:
        async for person in stream:
            yield person
