"""
Custom exceptions for the petclinic-core package.

This module defines the exception hierarchy used throughout the
data-access layer.
"""

from .core_exceptions import (
    BusinessRuleException,
    ConfigurationException,
    ConnectionException,
    DatabaseConfigException,
    DatabaseException,
    EntityNotFoundException,
    EnvironmentException,
    MigrationException,
    PetClinicException,
    SchemaValidationException,
    TransactionException,
    ValidationException,
    create_error_response,
    format_validation_errors,
    handle_database_retry,
    log_exception_context,
)

__all__ = [
    # Exception classes
    "PetClinicException",
    "EntityNotFoundException",
    "DatabaseException",
    "ConnectionException",
    "TransactionException",
    "MigrationException",
    "ValidationException",
    "SchemaValidationException",
    "BusinessRuleException",
    "ConfigurationException",
    "DatabaseConfigException",
    "EnvironmentException",
    # Utility functions
    "format_validation_errors",
    "create_error_response",
    "handle_database_retry",
    "log_exception_context",
]
