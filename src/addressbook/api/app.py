"""
Main FastAPI application for the address book backend
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings, settings
from ..database import MongoStore, check_database_connection, create_client, get_database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..services import AppServices

logger = get_logger(__name__)


class StartupError(RuntimeError):
    """Raised when the application cannot start."""


def _make_lifespan(app_settings: Settings, services: AppServices | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager."""
        logger.info("Starting address book API...")

        if services is not None:
            # Pre-built collaborators (tests)
            app.state.services = services
            yield
            return

        client = create_client(app_settings)
        try:
            ok, error = await check_database_connection(client)
            if not ok:
                logger.error("Database connection failed", error=error)
                raise StartupError(error or "Database connection failed")

            store = MongoStore(get_database(client, app_settings))
            # Raises ValueError when ADDRESSBOOK_JWT_SECRET is unset
            app.state.services = AppServices.build(app_settings, store)
            try:
                await store.ensure_indexes()
                logger.info("Database initialized", database=app_settings.mongodb_database)
                yield
            finally:
                logger.info("Shutting down address book API...")
                await app.state.services.close()
        finally:
            client.close()

    return lifespan


def create_app(
    app_settings: Settings | None = None, services: AppServices | None = None
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Address Book API",
        description="GraphQL address book with contacts, users and live updates",
        version=__version__,
        lifespan=_make_lifespan(app_settings, services),
        debug=app_settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        app.include_router(create_graphql_router(graphiql=app_settings.debug), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        # Fail fast: the server must not start with a broken schema
        raise

    return app


def build_app() -> FastAPI:
    """Application factory used by uvicorn (``--factory``)."""
    app_settings = Settings()
    configure_logging(app_settings.log_level, console=app_settings.debug)
    return create_app(app_settings)
