"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

from .person import Person

if TYPE_CHECKING:
    from ...database.models import UserDocument


@strawberry.type
class User:
    """User type for GraphQL API."""

    username: str
    id: strawberry.ID
    friend_ids: strawberry.Private[list[str]]

    @strawberry.field
    async def friends(self, info: strawberry.Info) -> list[Person | None]:
        """Contacts this user has added, in the order they were added."""
        from ..resolvers.user import resolve_user_friends

        return await resolve_user_friends(self, info)

    @classmethod
    def from_document(cls, doc: "UserDocument") -> "User":
        return cls(username=doc.username, id=strawberry.ID(doc.id), friend_ids=list(doc.friends))


@strawberry.type
class Token:
    value: str
