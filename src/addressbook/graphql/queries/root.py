"""
Root GraphQL query definitions
"""

import strawberry

from ..types.person import Person, YesNo
from ..types.rest import PersonREST
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="personCount")
    async def person_count(self, info: strawberry.Info) -> int:
        """Number of contacts in the address book."""
        from ..resolvers.person import resolve_person_count

        return await resolve_person_count(info)

    @strawberry.field(name="allPersons")
    async def all_persons(
        self, info: strawberry.Info, phone: YesNo | None = None
    ) -> list[Person | None]:
        """All contacts, optionally filtered by whether they have a phone."""
        from ..resolvers.person import resolve_all_persons

        return await resolve_all_persons(info, phone)

    @strawberry.field(name="findPerson")
    async def find_person(self, info: strawberry.Info, name: str) -> Person | None:
        """Find a contact by exact name."""
        from ..resolvers.person import resolve_find_person

        return await resolve_find_person(info, name)

    @strawberry.field(name="allPersonsREST")
    async def all_persons_rest(self, info: strawberry.Info) -> list[PersonREST | None]:
        """Persons served by the external REST service."""
        from ..resolvers.rest import resolve_all_persons_rest

        return await resolve_all_persons_rest(info)

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.auth import resolve_current_user

        return await resolve_current_user(info)
