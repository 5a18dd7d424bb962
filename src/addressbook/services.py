"""Process-wide collaborators handed to resolvers through the GraphQL context."""

from __future__ import annotations

from dataclasses import dataclass

from .auth.tokens import TokenService
from .config import Settings
from .database.store import Store
from .events import EventBus
from .rest_bridge import RestBridge


@dataclass
class AppServices:
    """Dependencies shared by every GraphQL operation."""

    settings: Settings
    store: Store
    tokens: TokenService
    events: EventBus
    rest: RestBridge

    @classmethod
    def build(cls, settings: Settings, store: Store) -> AppServices:
        return cls(
            settings=settings,
            store=store,
            tokens=TokenService(settings.jwt_secret or "", settings.jwt_algorithm),
            events=EventBus(),
            rest=RestBridge(settings.rest_api_url, timeout=settings.rest_api_timeout),
        )

    async def close(self) -> None:
        await self.rest.close()
