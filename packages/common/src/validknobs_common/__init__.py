"""Common utilities and base classes for validknobs packages.

This package provides shared functionality used across validknobs packages:

- **Exceptions**: Unified exception hierarchy with context support
- **Serialization**: Protocols and utilities for to_dict/from_dict patterns

Example:
    ```python
    from validknobs_common import ValidknobsError, serialize

    raise ValidknobsError("Something went wrong", context={"details": "here"})
    ```
"""

from validknobs_common.exceptions import (
    ConfigurationError,
    NotFoundError,
    OperationError,
    SerializationError,
    ValidationError,
    ValidknobsError,
)
from validknobs_common.serialization import (
    Serializable,
    deserialize,
    serialize,
    to_json,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ValidknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    "SerializationError",
    # Serialization
    "Serializable",
    "serialize",
    "deserialize",
    "to_json",
]
