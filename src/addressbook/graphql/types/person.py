"""
Person GraphQL type definitions
"""

from enum import Enum
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...database.models import PersonDocument


@strawberry.enum
class YesNo(Enum):
    """Phone presence filter for allPersons."""

    YES = "YES"
    NO = "NO"


@strawberry.type
class Address:
    street: str
    city: str


@strawberry.type
class Person:
    """A contact in the address book."""

    name: str
    phone: str | None
    id: strawberry.ID
    street: strawberry.Private[str]
    city: strawberry.Private[str]

    @strawberry.field
    def address(self) -> Address:
        """Nested street/city view over the flat contact record."""
        from ..resolvers.person import resolve_person_address

        return resolve_person_address(self)

    @classmethod
    def from_document(cls, doc: "PersonDocument") -> "Person":
        return cls(
            name=doc.name,
            phone=doc.phone,
            id=strawberry.ID(doc.id),
            street=doc.street,
            city=doc.city,
        )
