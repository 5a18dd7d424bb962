from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...rest_bridge import UpstreamUnavailableError as RestUnavailable
from ..access_control import get_services
from ..errors import UpstreamUnavailableError

if TYPE_CHECKING:
    from ..types.rest import PersonREST

logger = get_logger(__name__)


async def resolve_all_persons_rest(info: strawberry.Info) -> list[PersonREST]:
    from ..types.rest import PersonREST

    try:
        persons = await get_services(info).rest.fetch_persons()
    except RestUnavailable as e:
        raise UpstreamUnavailableError(str(e)) from e

    return [
        PersonREST(name=p["name"], id=strawberry.ID(p["id"]), email=p["email"]) for p in persons
    ]
