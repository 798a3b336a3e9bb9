"""Error types returned by validators and schemas.

Two kinds of error are kept apart by type:

- ``ValidationError``: a value broke a constraint. Safe to collect, aggregate,
  serialize and show to an end user.
- ``InternalError``: validation itself could not finish (a dependency failed).
  A schema stops at the first one and returns it as-is.

``Errors`` is the aggregate produced by schemas and slice bindings: a
read-only mapping from field name (or element index) to error, itself an
error so it can be returned wherever a single error can.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterator, Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Union

import numpy as np

from validknobs_common.exceptions import (
    OperationError,
    SerializationError,
    ValidationError as BaseValidationError,
    ValidknobsError,
)
from validknobs_common.serialization import to_json

ArgValue = Union[None, bool, int, float, str, list["ArgValue"]]


def normalize_arg(value: Any) -> ArgValue:
    """Convert a constraint argument into the closed set of argument kinds.

    numpy scalars and arrays become plain Python values. Other integral
    numbers become ``int``, other real numbers and ``Decimal`` become
    ``float``. Tuples and lists become lists.

    Raises:
        SerializationError: If the value has no argument representation
    """
    if isinstance(value, np.generic):
        value = value.item()
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        return float(value)
    if isinstance(value, np.ndarray):
        return [normalize_arg(item) for item in value.tolist()]
    if isinstance(value, (list, tuple)):
        return [normalize_arg(item) for item in value]
    raise SerializationError(
        f"Unsupported constraint argument of type {type(value).__name__}",
        context={"type": type(value).__name__, "value": repr(value)},
    )


def stringify(value: Any) -> str:
    """Render a serializable value as JSON, reporting failures inline."""
    try:
        return to_json(value)
    except SerializationError as e:
        return f"stringify: {e}"


class ValidationError(BaseValidationError):
    """A failed constraint.

    Attributes:
        constraint: Stable tag naming the rule that failed, e.g. ``"string_len"``.
            Callers map it to their own translated messages.
        message: Default human-readable message.
        context: Read-only mapping of the values involved (bounds, choices,
            the offending value under ``"val"``). Serialized as ``args``.
    """

    def __init__(self, constraint: str, message: str, args: Mapping[str, Any] | None = None):
        normalized = {key: normalize_arg(value) for key, value in (args or {}).items()}
        super().__init__(message)
        self._constraint = constraint
        self._message = message
        self._context = MappingProxyType(normalized)

    @property
    def constraint(self) -> str:
        return self._constraint

    @property
    def message(self) -> str:
        return self._message

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"constraint", "message", "args"}``; ``args`` only when present."""
        data: dict[str, Any] = {"constraint": self._constraint, "message": self._message}
        if self.context:
            data["args"] = {key: self.context[key] for key in sorted(self.context)}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationError:
        return cls(data["constraint"], data["message"], data.get("args"))

    def __str__(self) -> str:
        return stringify(self)

    def __repr__(self) -> str:
        return (
            f"ValidationError(constraint={self._constraint!r}, "
            f"message={self._message!r}, args={dict(self.context)!r})"
        )


class InternalError(OperationError):
    """Validation could not complete because of a failure unrelated to the data.

    A schema that receives one aborts immediately and returns it, discarding
    validation errors already collected in that pass.

    Attributes:
        key: Caller-supplied identifier of what failed.
        cause: The underlying exception.
    """

    def __init__(self, key: str, cause: BaseException):
        super().__init__(f"{key}: {cause}", context={"key": key})
        self.key = key
        self.cause = cause
        self.__cause__ = cause

    def __repr__(self) -> str:
        return f"InternalError(key={self.key!r}, cause={self.cause!r})"


class Errors(ValidknobsError, Mapping[str, Exception]):
    """Aggregate of errors keyed by field name or element index.

    Never empty: code that found no failures returns ``None`` instead.
    """

    __hash__ = ValidknobsError.__hash__

    def __init__(self, errors: Mapping[str, Exception]):
        entries = dict(errors)
        if not entries:
            raise ValueError("Errors requires at least one entry")
        super().__init__(
            f"{len(entries)} validation error(s)",
            context={"keys": sorted(entries)},
        )
        self._errors = entries

    def __getitem__(self, key: str) -> Exception:
        return self._errors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def to_dict(self) -> dict[str, Any]:
        """Serialize every entry, recursing into nested aggregates."""
        return {key: _render(self._errors[key]) for key in sorted(self._errors)}

    def __str__(self) -> str:
        return stringify(self)

    def __repr__(self) -> str:
        return f"Errors({self._errors!r})"


def _render(err: Exception) -> dict[str, Any]:
    if isinstance(err, (ValidationError, Errors)):
        return err.to_dict()
    return {"message": str(err)}


__all__ = [
    "ArgValue",
    "ValidationError",
    "InternalError",
    "Errors",
    "normalize_arg",
    "stringify",
]
