"""
Address Book Backend
GraphQL address book with contacts, users and live updates
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
