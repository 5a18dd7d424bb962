"""
Root GraphQL subscription definitions
"""

from collections.abc import AsyncGenerator
from contextlib import aclosing

import strawberry

from ..types.person import Person


@strawberry.type
class Subscription:
    """Root GraphQL subscription type."""

    @strawberry.subscription(name="personAdded")
    async def person_added(self, info: strawberry.Info) -> AsyncGenerator[Person, None]:
        """Contacts as they are added, for as long as the subscription lives."""
        from ..resolvers.person import subscribe_person_added

        async with aclosing(subscribe_person_added(info)) as stream:
            async for person in stream:
                yield person
