"""
Shared pytest fixtures and configuration for all tests.
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest
import pytest_asyncio
import strawberry

from addressbook.auth.context import AuthContext
from addressbook.auth.tokens import TokenService
from addressbook.config import Settings
from addressbook.database.models import PersonDocument, UserDocument
from addressbook.database.store import DocumentValidationError
from addressbook.events import EventBus
from addressbook.rest_bridge import RestBridge
from addressbook.services import AppServices

TEST_SECRET = "test-secret-key-for-testing-only"


class InMemoryStore:
    """In-memory stand-in for ``MongoStore`` with the same uniqueness rules.

    Documents are copied on the way in and out, like a real round trip.
    """

    def __init__(self) -> None:
        self.persons: dict[str, PersonDocument] = {}
        self.users: dict[str, UserDocument] = {}

    async def count_persons(self) -> int:
        return len(self.persons)

    async def list_persons(self, has_phone: bool | None = None) -> list[PersonDocument]:
        return [
            p.model_copy(deep=True)
            for p in self.persons.values()
            if has_phone is None or (p.phone is not None) == has_phone
        ]

    async def find_person_by_name(self, name: str) -> PersonDocument | None:
        for person in self.persons.values():
            if person.name == name:
                return person.model_copy(deep=True)
        return None

    async def get_persons_by_ids(self, ids: list[str]) -> list[PersonDocument]:
        return [self.persons[i].model_copy(deep=True) for i in ids if i in self.persons]

    async def insert_person(self, person: PersonDocument) -> PersonDocument:
        if any(p.name == person.name for p in self.persons.values()):
            raise DocumentValidationError(
                f"Person validation failed: name: expected name to be unique, got {person.name!r}"
            )
        self.persons[person.id] = person.model_copy(deep=True)
        return person

    async def update_person_phone(self, person: PersonDocument) -> PersonDocument:
        self.persons[person.id].phone = person.phone
        return person

    async def delete_person(self, person_id: str) -> None:
        self.persons.pop(person_id, None)

    async def insert_user(self, user: UserDocument) -> UserDocument:
        if any(u.username == user.username for u in self.users.values()):
            raise DocumentValidationError(
                f"User validation failed: username: expected username to be unique, "
                f"got {user.username!r}"
            )
        self.users[user.id] = user.model_copy(deep=True)
        return user

    async def find_user_by_id(self, user_id: str) -> UserDocument | None:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def find_user_by_username(self, username: str) -> UserDocument | None:
        for user in self.users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    async def add_friend(self, user_id: str, person_id: str) -> UserDocument | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        if person_id not in user.friends:
            user.friends = [*user.friends, person_id]
        return user.model_copy(deep=True)


def rest_users_handler(request: httpx.Request) -> httpx.Response:
    """Default handler for the fake REST service."""
    if request.url.path == "/users":
        return httpx.Response(
            200,
            json=[
                {"name": "Leanne Graham", "id": 1, "email": "leanne@example.com", "phone": "x"},
                {"name": "Ervin Howell", "id": 2, "email": "ervin@example.com"},
            ],
        )
    return httpx.Response(404)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, jwt_secret=TEST_SECRET, debug=False)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def rest_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Override in a test module to change what the fake REST service answers."""
    return rest_users_handler


@pytest.fixture
def services(settings: Settings, store: InMemoryStore, rest_handler) -> AppServices:
    return AppServices(
        settings=settings,
        store=store,
        tokens=TokenService(TEST_SECRET),
        events=EventBus(),
        rest=RestBridge(
            "http://rest.test",
            client=httpx.AsyncClient(transport=httpx.MockTransport(rest_handler)),
        ),
    )


@pytest_asyncio.fixture
async def alice(store: InMemoryStore) -> UserDocument:
    return await store.insert_user(UserDocument(username="alice"))


@pytest.fixture
def make_context(services: AppServices) -> Callable[..., dict[str, Any]]:
    """Build a GraphQL context dict as the transports do."""

    def _make(user: UserDocument | None = None) -> dict[str, Any]:
        return {
            "services": services,
            "auth": AuthContext(user_id=user.id if user else None),
        }

    return _make


@pytest.fixture
def make_info(make_context) -> Callable[..., MagicMock]:
    """Create a mock GraphQL info object carrying the given user."""

    def _make(user: UserDocument | None = None) -> MagicMock:
        info = MagicMock(spec=strawberry.Info)
        info.context = make_context(user)
        info.field_name = "testField"
        return info

    return _make


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
