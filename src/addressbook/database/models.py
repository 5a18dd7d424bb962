"""
Document models for the persons and users collections
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    """Generate a fresh document id (ObjectId hex string)."""
    return str(ObjectId())


class PersonDocument(BaseModel):
    """A contact record stored in the ``persons`` collection."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=False)

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=5)
    phone: str | None = Field(default=None, min_length=5)
    street: str = Field(min_length=5)
    city: str = Field(min_length=5)

    def to_mongo(self) -> dict[str, Any]:
        """Serialize for storage; an absent phone is omitted rather than stored as null."""
        doc = self.model_dump(exclude={"id"}, exclude_none=True)
        doc["_id"] = ObjectId(self.id)
        return doc

    @classmethod
    def from_mongo(cls, doc: dict[str, Any]) -> PersonDocument:
        data = {k: v for k, v in doc.items() if k != "_id"}
        return cls(id=str(doc["_id"]), **data)


class UserDocument(BaseModel):
    """An account stored in the ``users`` collection.

    ``friends`` holds contact ids in insertion order; the user references
    contacts but does not own them.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    username: str = Field(min_length=3)
    friends: list[str] = Field(default_factory=list)

    def has_friend(self, person_id: str) -> bool:
        return person_id in self.friends

    def to_mongo(self) -> dict[str, Any]:
        return {
            "_id": ObjectId(self.id),
            "username": self.username,
            "friends": [ObjectId(friend_id) for friend_id in self.friends],
        }

    @classmethod
    def from_mongo(cls, doc: dict[str, Any]) -> UserDocument:
        return cls(
            id=str(doc["_id"]),
            username=doc["username"],
            friends=[str(friend_id) for friend_id in doc.get("friends", [])],
        )
