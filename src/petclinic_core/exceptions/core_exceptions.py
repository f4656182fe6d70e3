"""
Core exceptions for the petclinic-core package.

Three families matter to callers:

- ``EntityNotFoundException``: a lookup by identifier found nothing. Expected
  and recoverable; callers usually render an empty state.
- ``ValidationException`` and subclasses: caller-supplied data was rejected
  before any write was attempted.
- ``DatabaseException`` and subclasses: the datastore failed. These are
  never masked and should map to a generic failure response.

Every exception carries a machine-readable ``error_code`` (a class attribute
that an instance may override) and a ``details`` dictionary that is safe to
log: database URLs lose their credentials and sensitive configuration values
are redacted.
"""

import asyncio
import functools
import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, urlunparse

SENSITIVE_CONFIG_KEYS = ("password", "secret", "key", "token", "credential", "url")

NON_RETRYABLE_CONNECTION_ERRORS = (
    "authentication failed",
    "password authentication",
    "permission denied",
    "does not exist",
)


class PetClinicException(Exception):
    """
    Base exception class for all petclinic-core exceptions.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional, log-safe error details
    """

    error_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used in logs and error responses."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": time.time(),
        }

    def log_error(
        self, logger: Optional[logging.Logger] = None, level: int = logging.ERROR
    ) -> None:
        """
        Log the exception together with its details.

        Args:
            logger: Logger to use, the module logger when omitted
            level: Logging level
        """
        logger = logger or logging.getLogger(__name__)
        logger.log(
            level,
            f"{self.error_code}: {self.message}",
            extra={"exception_data": self.to_dict()},
        )

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class EntityNotFoundException(PetClinicException):
    """Raised when a lookup by identifier finds no matching row."""

    error_code = "ENTITY_NOT_FOUND"

    def __init__(
        self, entity_type: str, entity_id: Any, message: Optional[str] = None
    ):
        """
        Args:
            entity_type: Name of the entity that was looked up (e.g. "Owner")
            entity_id: Identifier that produced no match
            message: Optional override for the default message
        """
        super().__init__(
            message or f"{entity_type} with id {entity_id} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class DatabaseException(PetClinicException):
    """
    Base exception for datastore failures.

    ``retryable`` tells a caller whether repeating the same operation could
    succeed. Only connection-level failures are retryable by default.
    """

    error_code = "DATABASE_ERROR"
    retryable = False

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
        retryable: Optional[bool] = None,
    ):
        super().__init__(message, error_code, details)
        self.original_error = original_error
        if retryable is not None:
            self.retryable = retryable

        if original_error is not None:
            self.details.setdefault("original_error", str(original_error))
        self.details["retryable"] = self.retryable


class ConnectionException(DatabaseException):
    """Raised when the database cannot be reached."""

    error_code = "DATABASE_CONNECTION_ERROR"
    retryable = True

    def __init__(
        self,
        message: str = "Database connection failed",
        database_url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Args:
            message: Error message
            database_url: Database URL, stored without credentials
            original_error: Driver error that caused the failure
        """
        details = {}
        if database_url:
            details["database_url"] = sanitize_database_url(database_url)

        retryable = None
        if original_error is not None:
            error_text = str(original_error).lower()
            if any(p in error_text for p in NON_RETRYABLE_CONNECTION_ERRORS):
                retryable = False

        super().__init__(
            message,
            details=details,
            original_error=original_error,
            retryable=retryable,
        )


class TransactionException(DatabaseException):
    """Raised when a unit of work fails to complete."""

    error_code = "DATABASE_TRANSACTION_ERROR"

    def __init__(
        self,
        message: str = "Database transaction failed",
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {"operation": operation} if operation else {}
        super().__init__(message, details=details, original_error=original_error)


class MigrationException(DatabaseException):
    """Raised when an Alembic upgrade or downgrade fails."""

    error_code = "DATABASE_MIGRATION_ERROR"

    def __init__(
        self,
        message: str = "Database migration failed",
        migration_version: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {"migration_version": migration_version} if migration_version else {}
        super().__init__(message, details=details, original_error=original_error)


class ValidationException(PetClinicException):
    """Raised when an entity or payload is rejected before any write."""

    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        validation_errors: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            message: Error message
            field: Field that failed validation
            value: Offending value, stored as a string
            validation_errors: Per-field messages
        """
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(message, details=details)
        self.field = field


class SchemaValidationException(ValidationException):
    """Raised when a pydantic schema rejects its input."""

    error_code = "SCHEMA_VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Schema validation failed",
        schema_name: Optional[str] = None,
        validation_errors: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, validation_errors=validation_errors)
        if schema_name:
            self.details["schema_name"] = schema_name


class BusinessRuleException(ValidationException):
    """Raised when a cross-entity rule fails (e.g. unknown owner)."""

    error_code = "BUSINESS_RULE_ERROR"

    def __init__(
        self,
        message: str = "Business rule validation failed",
        rule_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        if rule_name:
            self.details["rule_name"] = rule_name
        if context:
            self.details["context"] = context


class ConfigurationException(PetClinicException):
    """Raised for invalid settings. Sensitive values never reach ``details``."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
    ):
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value:
            sensitive = not config_key or any(
                s in config_key.lower() for s in SENSITIVE_CONFIG_KEYS
            )
            details["config_value"] = "[REDACTED]" if sensitive else config_value

        super().__init__(message, details=details)


class DatabaseConfigException(ConfigurationException):
    """Raised when the database URL or pool settings are invalid."""

    error_code = "DATABASE_CONFIG_ERROR"


class EnvironmentException(ConfigurationException):
    """Raised when an environment variable is missing or malformed."""

    error_code = "ENVIRONMENT_ERROR"

    def __init__(
        self,
        message: str = "Environment configuration error",
        env_var: Optional[str] = None,
        env_value: Optional[str] = None,
    ):
        super().__init__(message, env_var, env_value)


def sanitize_database_url(url: str) -> str:
    """Strip the user name and password from a database URL."""
    try:
        parsed = urlparse(url)
        if not parsed.hostname:
            return url
        netloc = parsed.hostname
        if parsed.port:
            netloc = f"{netloc}:{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc))
    except ValueError as e:
        return f"[URL_PARSE_ERROR: {e}]"


def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Group pydantic errors (``exc.errors()``) by dotted field path.

    Missing fields read "This field is required"; value errors keep their
    message; anything else gets its error type appended.
    """
    formatted: Dict[str, List[str]] = {}

    for error in errors:
        field_path = ".".join(str(loc) for loc in error.get("loc", ())) or "root"
        message = error.get("msg", "Validation error")
        error_type = error.get("type", "unknown")

        if error_type == "missing":
            message = "This field is required"
        elif error_type != "value_error":
            message = f"{message} (type: {error_type})"

        formatted.setdefault(field_path, []).append(message)

    return formatted


def create_error_response(exception: PetClinicException) -> Dict[str, Any]:
    """
    Build the response body for a failed request.

    Not-found and validation failures are expected outcomes: they are flagged
    ``recoverable`` and carry their message and details. Anything else is
    reported as a generic failure without the underlying database error.

    Args:
        exception: The exception to report

    Returns:
        Dictionary with ``success``, ``recoverable`` and ``error`` keys
    """
    recoverable = isinstance(exception, (EntityNotFoundException, ValidationException))

    if recoverable:
        error: Dict[str, Any] = {
            "type": exception.__class__.__name__,
            "code": exception.error_code,
            "message": exception.message,
        }
        if exception.details:
            error["details"] = exception.details
    else:
        error = {
            "type": "InternalError",
            "code": exception.error_code,
            "message": "The request could not be completed",
        }

    return {"success": False, "recoverable": recoverable, "error": error}


def handle_database_retry(
    operation_name: str,
    max_retries: int = 3,
    base_delay: float = 1.0,
    logger: Optional[logging.Logger] = None,
):
    """
    Decorator for caller-side retries of async database operations.

    The repositories never retry on their own. Wrap only operations that are
    safe to repeat, such as ``save`` of an entity that already has an id.
    A ``DatabaseException`` is retried while it is ``retryable``, with
    exponential backoff; every other exception propagates at once.

    Args:
        operation_name: Name of the operation for logging
        max_retries: Maximum number of retry attempts
        base_delay: Delay before the first retry, doubled each attempt
        logger: Logger instance to use
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            operation_logger = logger or logging.getLogger(__name__)

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except DatabaseException as e:
                    if not e.retryable or attempt == max_retries:
                        operation_logger.error(
                            f"Database operation '{operation_name}' failed after "
                            f"{attempt + 1} attempts",
                            extra={"exception_data": e.to_dict()},
                        )
                        raise

                    delay = base_delay * (2**attempt)
                    operation_logger.warning(
                        f"Database operation '{operation_name}' failed "
                        f"(attempt {attempt + 1}/{max_retries + 1}), retrying in {delay}s"
                    )
                    await asyncio.sleep(delay)

        return wrapper

    return decorator


def log_exception_context(
    exception: Exception,
    context: Dict[str, Any],
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception together with where it happened.

    Args:
        exception: The exception to log
        context: Where it happened, e.g. repository and operation
        logger: Logger instance to use
        level: Logging level
    """
    logger = logger or logging.getLogger(__name__)

    if isinstance(exception, PetClinicException):
        log_data = exception.to_dict()
        log_data["context"] = context
        logger.log(
            level,
            f"Exception with context: {exception.message}",
            extra={"exception_data": log_data},
        )
    else:
        logger.log(
            level,
            f"Unexpected exception: {exception}",
            extra={
                "exception_type": exception.__class__.__name__,
                "exception_message": str(exception),
                "context": context,
            },
        )
