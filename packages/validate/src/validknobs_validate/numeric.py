"""Numeric constraints and the integer/float composers.

The constraint bodies are written once for any ordered numeric type (Python
``int`` and ``float`` as well as numpy's sized scalars). The constraint tag
is passed in by the composer, so ``IntComposer.min`` always reports
``integer_min`` and ``FloatComposer.min`` always reports ``float_min``.

Example:
    ```python
    age = IntComposer().min(18).max(130).compose()
    age(15).constraint        # 'integer_min'
    age(42) is None           # True
    ```
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .core import Chain, Validator
from .errors import ValidationError, normalize_arg

N = TypeVar("N")


def minimum(constraint: str, min: N) -> Validator[N]:
    """Fail when the value is less than ``min``; equal values pass."""

    def check(n: N) -> ValidationError | None:
        if n < min:  # type: ignore[operator]
            return ValidationError(
                constraint,
                f"must be greater than or equal to {min}",
                {"min": min, "val": n},
            )
        return None

    return Validator(check)


def maximum(constraint: str, max: N) -> Validator[N]:
    """Fail when the value is greater than ``max``; equal values pass."""

    def check(n: N) -> ValidationError | None:
        if max < n:  # type: ignore[operator]
            return ValidationError(
                constraint,
                f"must be less than or equal to {max}",
                {"max": max, "val": n},
            )
        return None

    return Validator(check)


def choose(constraint: str, choices: Sequence[N]) -> Validator[N]:
    """Fail unless the value equals one of ``choices``.

    An empty ``choices`` never matches.
    """
    allowed = list(choices)

    def check(n: N) -> ValidationError | None:
        for choice in allowed:
            if choice == n:
                return None
        return ValidationError(
            constraint,
            f"must be one of {normalize_arg(allowed)}",
            {"choices": allowed, "val": n},
        )

    return Validator(check)


class IntComposer(Chain[N]):
    """Composer for integer validators."""

    __slots__ = ()

    def min(self, bound: N) -> IntComposer[N]:
        """Value must be >= bound. Tag: ``integer_min``."""
        return self.and_(minimum("integer_min", bound), "integer_min")

    def max(self, bound: N) -> IntComposer[N]:
        """Value must be <= bound. Tag: ``integer_max``."""
        return self.and_(maximum("integer_max", bound), "integer_max")

    def choose(self, *choices: N) -> IntComposer[N]:
        """Value must equal one of choices. Tag: ``integer_choose``."""
        return self.and_(choose("integer_choose", choices), "integer_choose")


class FloatComposer(Chain[N]):
    """Composer for float validators."""

    __slots__ = ()

    def min(self, bound: N) -> FloatComposer[N]:
        """Value must be >= bound. Tag: ``float_min``."""
        return self.and_(minimum("float_min", bound), "float_min")

    def max(self, bound: N) -> FloatComposer[N]:
        """Value must be <= bound. Tag: ``float_max``."""
        return self.and_(maximum("float_max", bound), "float_max")

    def choose(self, *choices: N) -> FloatComposer[N]:
        """Value must equal one of choices. Tag: ``float_choose``."""
        return self.and_(choose("float_choose", choices), "float_choose")


def integer() -> IntComposer[int]:
    """Start an empty integer chain."""
    return IntComposer()


def floating() -> FloatComposer[float]:
    """Start an empty float chain."""
    return FloatComposer()


__all__ = [
    "minimum",
    "maximum",
    "choose",
    "IntComposer",
    "FloatComposer",
    "integer",
    "floating",
]
