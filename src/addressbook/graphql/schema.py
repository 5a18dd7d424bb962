"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import HTTPException
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from starlette.requests import HTTPConnection
from strawberry.exceptions import ConnectionRejectionError
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from ..auth.context import ANONYMOUS, authenticate_connection, get_auth_context
from ..auth.tokens import AuthenticationError
from ..logging import bind_user_id, get_logger
from ..services import AppServices
from .mutations.root import Mutation
from .queries.root import Query
from .subscriptions.root import Subscription

logger = get_logger(__name__)

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or introspection fails
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


async def get_context(connection: HTTPConnection) -> dict[str, Any]:
    """Build the per-operation context for HTTP requests and WebSocket connections.

    HTTP requests are authenticated here from the Authorization header.
    WebSocket connections start anonymous and are authenticated from their
    connection params in ``AddressBookGraphQLRouter.on_ws_connect``.
    """
    services: AppServices = connection.app.state.services
    context: dict[str, Any] = {"services": services, "auth": ANONYMOUS}

    if connection.scope["type"] == "websocket":
        return context

    try:
        auth = await get_auth_context(services, connection.headers.get("authorization"))
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    bind_user_id(auth.user_id)
    context["auth"] = auth
    return context


class AddressBookGraphQLRouter(GraphQLRouter[dict[str, Any], None]):
    """GraphQL router that requires a valid token before accepting a WebSocket."""

    async def on_ws_connect(self, context: dict[str, Any]) -> Any:
        services: AppServices = context["services"]
        try:
            auth = await authenticate_connection(services, context.get("connection_params"))
        except AuthenticationError as e:
            logger.warning("WebSocket connection rejected", error=str(e))
            raise ConnectionRejectionError(
                {"message": str(e), "extensions": {"code": "UNAUTHENTICATED"}}
            ) from e

        context["auth"] = auth
        logger.info("WebSocket connection authenticated", user_id=auth.user_id)
        return await super().on_ws_connect(context)


def create_graphql_router(graphiql: bool = True) -> AddressBookGraphQLRouter:
    """Create the GraphQL router serving queries, mutations and subscriptions."""
    return AddressBookGraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if graphiql else None,
        context_getter=get_context,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
    )
