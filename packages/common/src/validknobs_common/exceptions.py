"""Common exception hierarchy for all validknobs packages.

Every error raised or returned by a validknobs package derives from
``ValidknobsError``, which carries an optional context dictionary with
structured information about the failure.

Example:
    ```python
    from validknobs_common.exceptions import ConfigurationError

    raise ConfigurationError(
        "Unknown slice policy",
        context={"key": "slice_internal_errors", "value": "explode"}
    )
    ```

Package-specific extensions subclass one of these:
    ```python
    class InternalError(OperationError):
        '''Validation could not complete.'''
    ```
"""

from typing import Any, Dict


class ValidknobsError(Exception):
    """Base exception for all validknobs packages.

    Attributes:
        context: Read-only dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence when both are given)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self._context = details or context or {}

    @property
    def context(self) -> Dict[str, Any]:
        return self._context

    @property
    def details(self) -> Dict[str, Any]:
        return self._context


class ValidationError(ValidknobsError):
    """Raised or returned when a value fails validation."""

    pass


class ConfigurationError(ValidknobsError):
    """Raised when settings are invalid.

    Example:
        ```python
        raise ConfigurationError(
            "log_failures must be a boolean",
            context={"key": "log_failures", "value": "sometimes"}
        )
        ```
    """

    pass


class NotFoundError(ValidknobsError):
    """Raised when a requested item, such as a settings file, does not exist."""

    pass


class OperationError(ValidknobsError):
    """Raised when an operation fails for reasons unrelated to the data itself.

    Use this for infrastructure failures: a lookup service that is down,
    a dependency that raised, a resource that could not be reached.
    """

    pass


class SerializationError(ValidknobsError):
    """Raised when serialization or deserialization fails.

    Example:
        ```python
        raise SerializationError(
            "Unsupported argument value",
            context={"key": "val", "type": "object"}
        )
        ```
    """

    pass


__all__ = [
    "ValidknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    "SerializationError",
]
