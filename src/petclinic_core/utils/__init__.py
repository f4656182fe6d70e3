"""
Utility functions and helper modules.

This module provides configuration management, logging setup and the
small validation helpers shared by the schemas and models.
"""

from .config import (
    DEFAULT_DATABASE_URL,
    DatabaseURLValidator,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
    PetClinicSettings,
    configure_logging,
)
from .validation import normalize_telephone, require_text, sanitize_string

__all__ = [
    # Configuration utilities
    "DEFAULT_DATABASE_URL",
    "LogLevel",
    "EnvironmentConfig",
    "DatabaseURLValidator",
    "LoggingConfigurator",
    "PetClinicSettings",
    "configure_logging",
    # Validation helpers
    "sanitize_string",
    "normalize_telephone",
    "require_text",
]
