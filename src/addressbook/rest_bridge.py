"""Read-only bridge to the external REST service listing persons."""

from __future__ import annotations

from typing import Any, TypedDict

import httpx

from .logging import get_logger

logger = get_logger(__name__)


class RestPerson(TypedDict):
    name: str
    id: str
    email: str


class UpstreamUnavailableError(Exception):
    """Raised when the external REST service cannot be reached or answers badly."""

    pass


class RestBridge:
    """Fetches ``/users`` from the configured REST service."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch_persons(self) -> list[RestPerson]:
        url = f"{self.base_url}/users"
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            logger.error("REST service request failed", url=url, error=str(e))
            raise UpstreamUnavailableError(f"REST service unavailable: {e}") from e
        except ValueError as e:
            logger.error("REST service returned invalid JSON", url=url, error=str(e))
            raise UpstreamUnavailableError("REST service returned invalid JSON") from e

        if not isinstance(body, list):
            raise UpstreamUnavailableError("REST service returned an unexpected payload")

        persons = [_reshape(item) for item in body]
        logger.debug("Fetched persons from REST service", url=url, count=len(persons))
        return persons

    async def close(self) -> None:
        await self._client.aclose()


def _reshape(item: Any) -> RestPerson:
    try:
        return RestPerson(name=item["name"], id=str(item["id"]), email=item["email"])
    except (KeyError, TypeError) as e:
        raise UpstreamUnavailableError(f"REST service returned a malformed person: {e}") from e
