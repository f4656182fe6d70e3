"""
Database connection, session management, migration and seeding utilities.

This module provides async SQLAlchemy engine configuration, the session
manager the repositories run their units of work in, Alembic helpers and
the sample clinic data set.
"""

from .connection import (
    DatabaseConfig,
    create_engine,
    create_engine_from_settings,
    get_database_info,
)
from .migrations import MigrationManager
from .seed import seed_reference_data
from .session import SessionManager

__all__ = [
    # Connection utilities
    "DatabaseConfig",
    "create_engine",
    "create_engine_from_settings",
    "get_database_info",
    # Session management
    "SessionManager",
    # Migration utilities
    "MigrationManager",
    # Reference data
    "seed_reference_data",
]
