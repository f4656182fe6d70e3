"""
Configuration management utilities.

This module provides environment variable handling with type conversion,
database URL validation, the package settings object and logging
configuration.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union
from urllib.parse import parse_qs, urlparse

from ..exceptions import DatabaseConfigException, EnvironmentException

ENV_PREFIX = "PETCLINIC_"
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./petclinic.db"


class LogLevel(Enum):
    """Enumeration for log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnvironmentConfig:
    """
    Typed access to environment variables.

    Each getter returns ``default`` for an unset variable, raises
    ``EnvironmentException`` when a required one is unset, and raises the
    same when a value cannot be converted.
    """

    TRUE_VALUES = ("true", "1", "yes", "on")
    FALSE_VALUES = ("false", "0", "no", "off", "")

    @staticmethod
    def _lookup(key: str, required: bool) -> Optional[str]:
        value = os.getenv(key)
        if value is None and required:
            raise EnvironmentException(
                f"Required environment variable '{key}' is not set", env_var=key
            )
        return value

    @classmethod
    def get_str(
        cls, key: str, default: Optional[str] = None, required: bool = False
    ) -> Optional[str]:
        value = cls._lookup(key, required)
        return default if value is None else value

    @classmethod
    def get_int(
        cls, key: str, default: Optional[int] = None, required: bool = False
    ) -> Optional[int]:
        value = cls._lookup(key, required)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            raise EnvironmentException(
                f"Environment variable '{key}' must be an integer, got: {value}",
                env_var=key,
                env_value=value,
            )

    @classmethod
    def get_bool(
        cls, key: str, default: Optional[bool] = None, required: bool = False
    ) -> Optional[bool]:
        """Accepts true/1/yes/on and false/0/no/off, case-insensitively."""
        value = cls._lookup(key, required)
        if value is None:
            return default

        normalized = value.strip().lower()
        if normalized in cls.TRUE_VALUES:
            return True
        if normalized in cls.FALSE_VALUES:
            return False

        raise EnvironmentException(
            f"Environment variable '{key}' must be a boolean, got: {value}",
            env_var=key,
            env_value=value,
        )


class DatabaseURLValidator:
    """Utility class for validating database URLs."""

    SUPPORTED_DRIVERS = {
        "postgresql": ["postgresql+asyncpg"],
        "sqlite": ["sqlite+aiosqlite"],
    }

    @classmethod
    def validate_url(cls, url: str) -> Dict[str, Any]:
        """
        Validate a database URL and return parsed components.

        Args:
            url: Database URL to validate

        Returns:
            Dictionary with parsed components

        Raises:
            DatabaseConfigException: If URL is invalid or uses a sync driver
        """
        if not url:
            raise DatabaseConfigException("Database URL cannot be empty")

        parsed = urlparse(url)

        if not parsed.scheme:
            raise DatabaseConfigException(
                "Database URL must include a scheme (e.g., postgresql+asyncpg://)"
            )

        supported = [d for drivers in cls.SUPPORTED_DRIVERS.values() for d in drivers]
        if parsed.scheme not in supported:
            raise DatabaseConfigException(
                f"Unsupported database driver '{parsed.scheme}'. Supported: {', '.join(supported)}",
                config_key="driver",
                config_value=parsed.scheme,
            )

        is_sqlite = parsed.scheme.startswith("sqlite")

        if not is_sqlite:
            if not parsed.hostname:
                raise DatabaseConfigException("Database URL must include a hostname")
            if not parsed.path.lstrip("/"):
                raise DatabaseConfigException(
                    "Database URL must include a database name"
                )

        return {
            "valid": True,
            "scheme": parsed.scheme,
            "dialect": "sqlite" if is_sqlite else "postgresql",
            "hostname": parsed.hostname,
            "port": parsed.port,
            "database": parsed.path.lstrip("/") if parsed.path else "",
            "query": dict(parse_qs(parsed.query)),
        }


@dataclass
class PetClinicSettings:
    """Runtime settings for the data-access core."""

    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    pool_size: int = 5
    last_name_case_sensitive: bool = False
    log_level: str = LogLevel.INFO.value

    def __post_init__(self) -> None:
        DatabaseURLValidator.validate_url(self.database_url)

        if self.pool_size < 1:
            raise DatabaseConfigException(
                "Pool size must be at least 1",
                config_key="pool_size",
                config_value=str(self.pool_size),
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in LogLevel.__members__:
            raise EnvironmentException(
                f"Unknown log level '{self.log_level}'",
                env_var=f"{ENV_PREFIX}LOG_LEVEL",
                env_value=self.log_level,
            )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @classmethod
    def from_environment(cls) -> "PetClinicSettings":
        """
        Build settings from ``PETCLINIC_*`` environment variables.

        Returns:
            PetClinicSettings populated from the environment, with defaults
            for anything unset
        """
        return cls(
            database_url=EnvironmentConfig.get_str(
                f"{ENV_PREFIX}DATABASE_URL", DEFAULT_DATABASE_URL
            ),
            echo=EnvironmentConfig.get_bool(f"{ENV_PREFIX}DB_ECHO", False),
            pool_size=EnvironmentConfig.get_int(f"{ENV_PREFIX}DB_POOL_SIZE", 5),
            last_name_case_sensitive=EnvironmentConfig.get_bool(
                f"{ENV_PREFIX}LAST_NAME_CASE_SENSITIVE", False
            ),
            log_level=EnvironmentConfig.get_str(
                f"{ENV_PREFIX}LOG_LEVEL", LogLevel.INFO.value
            ),
        )


class LoggingConfigurator:
    """Utility class for configuring logging."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @staticmethod
    def configure_basic_logging(
        level: Union[str, LogLevel] = LogLevel.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> None:
        """
        Configure basic logging for the application.

        Args:
            level: Logging level
            format_string: Custom format string
            log_file: Optional log file path
        """
        if isinstance(level, LogLevel):
            level = level.value

        basic_config_args: Dict[str, Any] = {
            "level": level,
            "format": format_string or LoggingConfigurator.DEFAULT_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

        if log_file:
            basic_config_args["filename"] = log_file
            basic_config_args["filemode"] = "a"

        logging.basicConfig(**basic_config_args)


def configure_logging(settings: PetClinicSettings) -> None:
    """Apply the log level from settings to the root logger."""
    LoggingConfigurator.configure_basic_logging(level=settings.log_level)
