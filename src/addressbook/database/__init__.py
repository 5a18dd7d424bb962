"""
Database module for the address book backend
"""

from .connection import check_database_connection, create_client, get_database
from .models import PersonDocument, UserDocument
from .store import DocumentValidationError, MongoStore, Store

__all__ = [
    "check_database_connection",
    "create_client",
    "get_database",
    "PersonDocument",
    "UserDocument",
    "DocumentValidationError",
    "MongoStore",
    "Store",
]
