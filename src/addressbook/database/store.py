"""
Persistence layer for contacts and users backed by MongoDB (motor)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..logging import get_logger
from .models import PersonDocument, UserDocument

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorDatabase

logger = get_logger(__name__)

PERSONS_COLLECTION = "persons"
USERS_COLLECTION = "users"


class DocumentValidationError(Exception):
    """Raised when a document fails field validation or a uniqueness constraint."""

    @classmethod
    def from_pydantic(cls, model: str, error: ValidationError) -> DocumentValidationError:
        """Build a readable message like ``Person validation failed: name: ...``."""
        parts = []
        for detail in error.errors():
            field = ".".join(str(loc) for loc in detail["loc"]) or "value"
            parts.append(f"{field}: {detail['msg']}")
        return cls(f"{model} validation failed: {', '.join(parts)}")


class Store(Protocol):
    """Operations the resolvers need from the document store."""

    async def count_persons(self) -> int: ...

    async def list_persons(self, has_phone: bool | None = None) -> list[PersonDocument]: ...

    async def find_person_by_name(self, name: str) -> PersonDocument | None: ...

    async def get_persons_by_ids(self, ids: list[str]) -> list[PersonDocument]: ...

    async def insert_person(self, person: PersonDocument) -> PersonDocument: ...

    async def update_person_phone(self, person: PersonDocument) -> PersonDocument: ...

    async def delete_person(self, person_id: str) -> None: ...

    async def insert_user(self, user: UserDocument) -> UserDocument: ...

    async def find_user_by_id(self, user_id: str) -> UserDocument | None: ...

    async def find_user_by_username(self, username: str) -> UserDocument | None: ...

    async def add_friend(self, user_id: str, person_id: str) -> UserDocument | None: ...


def _object_id(value: str) -> ObjectId | None:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class MongoStore:
    """``Store`` implementation over a motor database handle."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self._db = database
        self._persons = database[PERSONS_COLLECTION]
        self._users = database[USERS_COLLECTION]

    async def ensure_indexes(self) -> None:
        """Create the unique indexes that back name and username uniqueness."""
        await self._persons.create_index([("name", ASCENDING)], unique=True)
        await self._users.create_index([("username", ASCENDING)], unique=True)
        logger.info("MongoDB indexes ensured")

    # Contacts
    async def count_persons(self) -> int:
        return await self._persons.count_documents({})

    async def list_persons(self, has_phone: bool | None = None) -> list[PersonDocument]:
        if has_phone is None:
            query = {}
        elif has_phone:
            query = {"phone": {"$ne": None}}
        else:
            # Matches both a missing field and an explicit null
            query = {"phone": None}

        cursor = self._persons.find(query)
        return [PersonDocument.from_mongo(doc) async for doc in cursor]

    async def find_person_by_name(self, name: str) -> PersonDocument | None:
        doc = await self._persons.find_one({"name": name})
        return PersonDocument.from_mongo(doc) if doc else None

    async def get_persons_by_ids(self, ids: list[str]) -> list[PersonDocument]:
        object_ids = [oid for oid in (_object_id(i) for i in ids) if oid is not None]
        if not object_ids:
            return []

        found = {
            str(doc["_id"]): PersonDocument.from_mongo(doc)
            async for doc in self._persons.find({"_id": {"$in": object_ids}})
        }
        # Preserve the caller's ordering; dangling references are skipped
        return [found[i] for i in ids if i in found]

    async def insert_person(self, person: PersonDocument) -> PersonDocument:
        try:
            await self._persons.insert_one(person.to_mongo())
        except DuplicateKeyError as e:
            raise DocumentValidationError(
                f"Person validation failed: name: expected name to be unique, got {person.name!r}"
            ) from e
        logger.debug("Person inserted", person_id=person.id, name=person.name)
        return person

    async def update_person_phone(self, person: PersonDocument) -> PersonDocument:
        await self._persons.update_one(
            {"_id": ObjectId(person.id)}, {"$set": {"phone": person.phone}}
        )
        logger.debug("Person phone updated", person_id=person.id)
        return person

    async def delete_person(self, person_id: str) -> None:
        await self._persons.delete_one({"_id": ObjectId(person_id)})
        logger.debug("Person deleted", person_id=person_id)

    # Users
    async def insert_user(self, user: UserDocument) -> UserDocument:
        try:
            await self._users.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise DocumentValidationError(
                f"User validation failed: username: expected username to be unique, "
                f"got {user.username!r}"
            ) from e
        logger.debug("User inserted", user_id=user.id, username=user.username)
        return user

    async def find_user_by_id(self, user_id: str) -> UserDocument | None:
        oid = _object_id(user_id)
        if oid is None:
            return None
        doc = await self._users.find_one({"_id": oid})
        return UserDocument.from_mongo(doc) if doc else None

    async def find_user_by_username(self, username: str) -> UserDocument | None:
        doc = await self._users.find_one({"username": username})
        return UserDocument.from_mongo(doc) if doc else None

    async def add_friend(self, user_id: str, person_id: str) -> UserDocument | None:
        """Append a contact to a user's friends unless already there; returns the stored user.

        The append happens server-side, so links written by other connections
        are never overwritten. Returns None when the user does not exist.
        """
        oid = _object_id(user_id)
        if oid is None:
            return None
        doc = await self._users.find_one_and_update(
            {"_id": oid},
            {"$addToSet": {"friends": ObjectId(person_id)}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        logger.debug("Friend linked", user_id=user_id, person_id=person_id)
        return UserDocument.from_mongo(doc)
