"""
MongoDB connection management
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError, OperationFailure, PyMongoError

from ..config import Settings
from ..logging import get_logger

logger = get_logger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Create a motor client for the configured MongoDB URL.

    The client connects lazily; call ``check_database_connection`` to fail fast.
    """
    client = AsyncIOMotorClient(
        settings.mongodb_url,
        serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
        uuidRepresentation="standard",
    )
    logger.info(
        "MongoDB client created",
        database=settings.mongodb_database,
    )
    return client


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    return client[settings.mongodb_database]


async def check_database_connection(client: AsyncIOMotorClient) -> tuple[bool, str | None]:
    """
    Ping the database server and return a helpful error message on failure.

    Returns:
        tuple: (success: bool, error_message: str | None)
    """
    try:
        await client.admin.command("ping")
        return True, None
    except OperationFailure as e:
        if e.code in (13, 18):  # Unauthorized, AuthenticationFailed
            return False, (
                f"Database authentication failed: {e}\n"
                f"Please check the credentials in ADDRESSBOOK_MONGODB_URL."
            )
        return False, f"Database command failed: {e}"
    except ConfigurationError as e:
        return False, f"Invalid MongoDB configuration: {e}"
    except PyMongoError as e:
        return False, (
            f"Cannot connect to database server: {e}\n"
            f"The database server appears to be down or unreachable.\n"
            f"Please check that MongoDB is running and accessible."
        )
