"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.person import Person
from ..types.user import Token, User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Contact mutations
    @strawberry.mutation(name="addPerson")
    async def add_person(
        self,
        info: strawberry.Info,
        name: str,
        street: str,
        city: str,
        phone: str | None = None,
    ) -> Person | None:
        """Add a contact and link it to the current user (requires authentication)."""
        from ..resolvers.person import add_person

        return await add_person(info, name=name, street=street, city=city, phone=phone)

    @strawberry.mutation(name="editNumber")
    async def edit_number(self, info: strawberry.Info, name: str, phone: str) -> Person | None:
        """Change a contact's phone number."""
        from ..resolvers.person import edit_number

        return await edit_number(info, name, phone)

    # User mutations
    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, username: str) -> User | None:
        """Create a user account."""
        from ..resolvers.user import create_user

        return await create_user(info, username)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, username: str, password: str) -> Token | None:
        """Log in and receive a bearer token."""
        from ..resolvers.auth import login

        return await login(info, username, password)

    @strawberry.mutation(name="addAsFriend")
    async def add_as_friend(self, info: strawberry.Info, name: str) -> User | None:
        """Add an existing contact to the current user's friends (requires authentication)."""
        from ..resolvers.user import add_as_friend

        return await add_as_friend(info, name)
