"""Serialization protocols and utilities for validknobs packages.

Objects that can be rendered to a plain dictionary implement ``to_dict`` and,
when they can be rebuilt, the ``from_dict`` classmethod. ``to_json`` renders
a serializable object as compact JSON.

Example:
    ```python
    from validknobs_common.serialization import serialize, to_json

    data = serialize(error)      # {"constraint": "string_len", ...}
    text = to_json(error)        # '{"constraint":"string_len",...}'
    ```
"""

import json
from typing import Any, Dict, Protocol, Type, TypeVar, runtime_checkable

from validknobs_common.exceptions import SerializationError

T = TypeVar("T")


@runtime_checkable
class Serializable(Protocol):
    """Protocol for objects that can be serialized to/from dict.

    The @runtime_checkable decorator allows isinstance() checks at runtime.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert object to dictionary representation.

        Raises:
            SerializationError: If serialization fails
        """
        ...

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create object from dictionary representation.

        Raises:
            SerializationError: If deserialization fails
        """
        ...


def serialize(obj: Any) -> Dict[str, Any]:
    """Serialize an object to dictionary.

    Args:
        obj: Object to serialize (must have to_dict method)

    Returns:
        Serialized dictionary

    Raises:
        SerializationError: If object doesn't support serialization or serialization fails
    """
    if not hasattr(obj, "to_dict"):
        raise SerializationError(
            f"Object of type {type(obj).__name__} is not serializable (missing to_dict method)",
            context={"type": type(obj).__name__, "object": str(obj)},
        )

    try:
        result = obj.to_dict()
        if not isinstance(result, dict):
            raise SerializationError(
                f"to_dict() must return a dict, got {type(result).__name__}",
                context={"type": type(obj).__name__, "result_type": type(result).__name__},
            )
        return result
    except Exception as e:
        if isinstance(e, SerializationError):
            raise
        raise SerializationError(
            f"Failed to serialize {type(obj).__name__}: {e}",
            context={"type": type(obj).__name__, "error": str(e)},
        ) from e


def deserialize(cls: Type[T], data: Dict[str, Any]) -> T:
    """Deserialize dictionary into an object.

    Args:
        cls: Class to deserialize into (must have from_dict classmethod)
        data: Dictionary with serialized data

    Returns:
        Deserialized object instance

    Raises:
        SerializationError: If class doesn't support deserialization or deserialization fails
    """
    if not hasattr(cls, "from_dict"):
        raise SerializationError(
            f"Class {cls.__name__} is not deserializable (missing from_dict classmethod)",
            context={"class": cls.__name__},
        )

    if not isinstance(data, dict):
        raise SerializationError(
            f"Data must be a dict, got {type(data).__name__}",
            context={"class": cls.__name__, "data_type": type(data).__name__},
        )

    try:
        return cls.from_dict(data)  # type: ignore[attr-defined, no-any-return]
    except Exception as e:
        if isinstance(e, SerializationError):
            raise
        raise SerializationError(
            f"Failed to deserialize {cls.__name__}: {e}",
            context={"class": cls.__name__, "error": str(e), "data": data},
        ) from e


def to_json(obj: Any) -> str:
    """Serialize an object and encode the result as compact JSON.

    Non-ASCII characters are written as-is.

    Raises:
        SerializationError: If the object cannot be serialized or encoded
    """
    data = serialize(obj)
    try:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Failed to encode {type(obj).__name__} as JSON: {e}",
            context={"type": type(obj).__name__, "error": str(e)},
        ) from e


__all__ = [
    "Serializable",
    "serialize",
    "deserialize",
    "to_json",
]
