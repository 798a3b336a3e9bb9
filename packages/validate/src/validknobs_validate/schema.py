"""Schemas: named collections of independent predicates validated together.

A predicate is a zero-argument callable returning an error or ``None``,
usually made by binding a value (``bind``) or a sequence of values
(``bind_slice``) to a validator.

Example:
    ```python
    err = Schema({
        "name": bind(user.name, StringComposer().len(4, 40).compose()),
        "age": bind(user.age, IntComposer().min(18).compose()),
        "scores": bind_slice(user.scores, IntComposer().max(100).compose()),
    }, name="user").validate()

    if err is not None:
        return 422, str(err)
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Optional, TypeVar

from .errors import Errors, InternalError
from .settings import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

Predicate = Callable[[], Optional[Exception]]


def bind(value: T, validator: Callable[[T], Exception | None]) -> Predicate:
    """Bind one value to a validator."""

    def predicate() -> Exception | None:
        return validator(value)

    return predicate


def bind_slice(
    values: Iterable[T],
    validator: Callable[[T], Exception | None],
    propagate_internal: bool | None = None,
) -> Predicate:
    """Bind every element of a sequence to a validator.

    Failing elements are collected into an ``Errors`` keyed by their
    decimal index, starting at ``"0"``.

    Args:
        values: Elements to validate, in order
        validator: Validator applied to each element
        propagate_internal: When true, an ``InternalError`` for an element is
            returned immediately instead of being recorded under its index.
            ``None`` uses the ``slice_internal_errors`` setting.

    Returns:
        Predicate returning the nested ``Errors``, or None when every element passes
    """
    if propagate_internal is None:
        propagate_internal = get_settings().propagate_slice_internal_errors

    def predicate() -> Exception | None:
        errs: dict[str, Exception] = {}
        for index, item in enumerate(values):
            err = validator(item)
            if err is None:
                continue
            if propagate_internal and isinstance(err, InternalError):
                return err
            errs[str(index)] = err

        if errs:
            return Errors(errs)
        return None

    return predicate


class Schema(dict[str, Predicate]):
    """Mapping of field name to predicate.

    ``validate`` runs every predicate once, in insertion order, and gathers
    the failures by field name. The first ``InternalError`` stops the pass.
    """

    def __init__(self, predicates: Mapping[str, Predicate] | None = None, *, name: str = "schema"):
        """Initialize schema.

        Args:
            predicates: Initial field predicates
            name: Schema name used in log messages
        """
        super().__init__(predicates or {})
        self.name = name

    def field(self, name: str, predicate: Predicate) -> Schema:
        """Add a field predicate (fluent API).

        Returns:
            Self for chaining
        """
        self[name] = predicate
        return self

    def validate(self) -> Exception | None:
        """Validate every field.

        Returns:
            None when all fields pass; the ``InternalError`` itself when a
            predicate returns one (errors found so far are discarded);
            otherwise an ``Errors`` keyed by failing field name.
        """
        log_failures = get_settings().log_failures
        failures: dict[str, Exception] = {}

        for field_name, predicate in self.items():
            err = predicate()
            if err is None:
                continue

            if isinstance(err, InternalError):
                logger.warning(
                    f"Schema '{self.name}' aborted at field '{field_name}' "
                    f"by internal error '{err.key}': {err.cause}"
                )
                return err

            if log_failures:
                logger.debug(f"Schema '{self.name}' field '{field_name}' failed: {err}")
            failures[field_name] = err

        logger.debug(f"Schema '{self.name}' checked {len(self)} fields, {len(failures)} failed")

        if failures:
            return Errors(failures)
        return None

    def check(self) -> None:
        """Validate and raise the resulting error, if any.

        Raises:
            Errors: When one or more fields fail
            InternalError: When validation could not complete
        """
        err = self.validate()
        if err is not None:
            raise err

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, fields={list(self)!r})"


__all__ = [
    "Predicate",
    "bind",
    "bind_slice",
    "Schema",
]
