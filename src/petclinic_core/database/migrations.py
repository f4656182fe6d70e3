"""
Database migration utilities for the petclinic-core package.

This module wraps Alembic for applying schema revisions to deployed
databases and inspecting their migration state.
"""

import logging
import os
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from ..exceptions import MigrationException

logger = logging.getLogger(__name__)


class MigrationManager:
    """Manager for database migrations using Alembic."""

    def __init__(
        self,
        alembic_config_path: Optional[str] = None,
        database_url: Optional[str] = None,
    ):
        """
        Initialize the migration manager.

        Args:
            alembic_config_path: Path to alembic.ini file
            database_url: Database URL override
        """
        self.alembic_config_path = alembic_config_path or self._find_alembic_config()
        self.database_url = database_url
        self._alembic_config: Optional[Config] = None

    @staticmethod
    def _find_alembic_config() -> str:
        """Find the alembic.ini configuration file."""
        possible_paths = [
            "alembic.ini",
            "../alembic.ini",
            os.path.join(os.path.dirname(__file__), "../../../alembic.ini"),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return os.path.abspath(path)

        raise MigrationException("Could not find alembic.ini configuration file")

    @property
    def alembic_config(self) -> Config:
        """Get the Alembic configuration object."""
        if self._alembic_config is None:
            self._alembic_config = Config(self.alembic_config_path)

            # Relative script locations resolve against the ini file
            script_location = self._alembic_config.get_main_option("script_location")
            if script_location and not os.path.isabs(script_location):
                self._alembic_config.set_main_option(
                    "script_location",
                    os.path.join(
                        os.path.dirname(self.alembic_config_path), script_location
                    ),
                )

            if self.database_url:
                self._alembic_config.set_main_option(
                    "sqlalchemy.url", self.database_url
                )

        return self._alembic_config

    @property
    def script_directory(self) -> ScriptDirectory:
        return ScriptDirectory.from_config(self.alembic_config)

    def _run(self, direction: str, revision: str) -> None:
        """Run ``alembic upgrade`` or ``alembic downgrade`` to ``revision``."""
        step = getattr(command, direction)
        logger.info(f"Running {direction} to revision {revision}")
        try:
            step(self.alembic_config, revision)
        except (CommandError, SQLAlchemyError, OSError) as e:
            logger.error(f"Database {direction} to {revision} failed: {e}")
            raise MigrationException(
                f"Database {direction} to {revision} failed: {e}",
                migration_version=revision,
                original_error=e,
            ) from e
        logger.info(f"Database {direction} to {revision} complete")

    def upgrade_database(self, revision: str = "head") -> None:
        """
        Apply revisions up to ``revision``.

        Raises:
            MigrationException: If Alembic or the database rejects the upgrade
        """
        self._run("upgrade", revision)

    def downgrade_database(self, revision: str) -> None:
        """
        Revert revisions down to ``revision`` (``"base"`` for an empty schema).

        Raises:
            MigrationException: If Alembic or the database rejects the downgrade
        """
        self._run("downgrade", revision)

    def get_head_revision(self) -> Optional[str]:
        """Return the newest revision known to the script directory."""
        return self.script_directory.get_current_head()

    async def get_current_revision(self, engine: AsyncEngine) -> Optional[str]:
        """
        Get the revision the database is currently at.

        Args:
            engine: Engine connected to the database to inspect

        Returns:
            Current revision ID or None if no migrations applied

        Raises:
            MigrationException: If the revision table cannot be read
        """

        def _current(connection) -> Optional[str]:
            context = MigrationContext.configure(connection)
            return context.get_current_revision()

        try:
            async with engine.connect() as conn:
                return await conn.run_sync(_current)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get current revision: {e}")
            raise MigrationException(
                f"Failed to get current revision: {e}", original_error=e
            ) from e
