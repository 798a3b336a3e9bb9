"""Composable validators for primitive values and field-keyed schemas.

Build a validator by chaining constraints, then bind validators to values
inside a schema:

    ```python
    from validknobs_validate import IntComposer, Schema, StringComposer, bind

    err = Schema({
        "name": bind("bob", StringComposer().len(4, 40).compose()),
        "age": bind(15, IntComposer().min(18).compose()),
    }).validate()
    str(err)
    # '{"age":{"constraint":"integer_min",...},"name":{"constraint":"string_len",...}}'
    ```
"""

from .core import Chain, Composer, Validator, compose, identity, merge, nop
from .errors import ArgValue, Errors, InternalError, ValidationError, normalize_arg, stringify
from .numeric import FloatComposer, IntComposer, choose, floating, integer, maximum, minimum
from .schema import Predicate, Schema, bind, bind_slice
from .settings import ValidationSettings, get_settings, reset_settings
from .strings import (
    EMAIL_PATTERN,
    StringComposer,
    email,
    not_blank,
    not_blank_trim,
    str_len,
    string,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Validator",
    "Composer",
    "Chain",
    "identity",
    "nop",
    "merge",
    "compose",
    # Errors
    "ArgValue",
    "ValidationError",
    "InternalError",
    "Errors",
    "normalize_arg",
    "stringify",
    # Numeric
    "IntComposer",
    "FloatComposer",
    "integer",
    "floating",
    "minimum",
    "maximum",
    "choose",
    # Strings
    "StringComposer",
    "string",
    "not_blank",
    "not_blank_trim",
    "str_len",
    "email",
    "EMAIL_PATTERN",
    # Schema
    "Predicate",
    "Schema",
    "bind",
    "bind_slice",
    # Settings
    "ValidationSettings",
    "get_settings",
    "reset_settings",
]
