"""Validator and composer primitives shared by every constraint family.

A ``Validator`` checks one value and returns an error, or ``None`` when the
value is valid. A ``Composer`` takes the validator built so far and returns a
new one that also enforces one more constraint. Chains start from
``identity`` and are terminated by feeding them ``nop()``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")
F = TypeVar("F")


class Validator(Generic[T]):
    """A reusable check of a single value.

    Calling the validator (or ``evaluate``) returns the first error found, or
    ``None`` when the value passes.
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[T], Exception | None]):
        self._func = func

    def __call__(self, value: T) -> Exception | None:
        return self._func(value)

    def evaluate(self, value: T) -> Exception | None:
        """Apply the validator to ``value``."""
        return self._func(value)


Composer = Callable[[Validator[T]], Validator[T]]


def identity(f: F) -> F:
    """Return ``f`` unchanged; the starting composer of every chain."""
    return f


def nop() -> Validator[T]:
    """Return a validator that always passes; the terminal of every chain."""
    return Validator(lambda _value: None)


def merge(*validators: Callable[[T], Exception | None]) -> Validator[T]:
    """Merge validators into one that stops at the first error.

    Validators run in the given order. Once one returns an error, the
    remaining validators are not evaluated for that value.
    """

    def merged(value: T) -> Exception | None:
        for validator in validators:
            err = validator(value)
            if err is not None:
                return err
        return None

    return Validator(merged)


def compose(composer: Composer[T], next_validator: Callable[[T], Exception | None]) -> Composer[T]:
    """Chain one more validator onto a composer.

    The returned composer, given a terminal validator, evaluates everything
    ``composer`` built first and ``next_validator`` after it.
    """

    def composed(terminal: Validator[T]) -> Validator[T]:
        return merge(composer(terminal), next_validator)

    return composed


class Chain(Generic[T]):
    """Immutable builder around a composer.

    Every chaining call returns a new builder; the receiver is never
    modified, so a partial chain can be shared and extended in several
    directions. Nothing is evaluated until ``compose()``.
    """

    __slots__ = ("_composer", "_constraints")

    def __init__(
        self,
        composer: Composer[T] | None = None,
        constraints: tuple[str, ...] = (),
    ):
        self._composer: Composer[T] = composer or identity
        self._constraints = tuple(constraints)

    @property
    def constraints(self) -> tuple[str, ...]:
        """Constraint tags appended so far, in call order."""
        return self._constraints

    def and_(self, validator: Callable[[T], Exception | None], constraint: str = "custom"):
        """Append any validator to the chain.

        Args:
            validator: Callable returning an error or None
            constraint: Tag recorded in ``constraints`` for this link

        Returns:
            A new builder of the same type
        """
        return type(self)(compose(self._composer, validator), self._constraints + (constraint,))

    def compose(self) -> Validator[T]:
        """Build a single validator from the chain; an empty chain always passes."""
        return self._composer(nop())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._constraints)})"


__all__ = [
    "Validator",
    "Composer",
    "Chain",
    "identity",
    "nop",
    "merge",
    "compose",
]
