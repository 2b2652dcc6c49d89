"""
Database module initialization.
Exports database components for use throughout the application.
"""

from database.base import Base
from database.connection import (
    init_db,
    close_db,
    check_db_connection,
    get_db_info,
)
from database.dependencies import get_db
from database.session import (
    create_engine_for_url,
    create_session_factory,
    get_db_session,
)

__all__ = [
    # Connection management
    "init_db",
    "close_db",
    "create_engine_for_url",
    "create_session_factory",
    # Dependencies
    "get_db",
    "get_db_session",
    # Base classes
    "Base",
    # Utilities
    "check_db_connection",
    "get_db_info",
]
