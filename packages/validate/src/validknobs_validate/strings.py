"""String constraints and the string composer.

Example:
    ```python
    username = StringComposer().not_blank_trim().len(4, 40).compose()
    username("bob").to_dict()
    # {'constraint': 'string_len', 'message': 'must be at least 4 characters',
    #  'args': {'len': 3, 'max': 40, 'min': 4}}
    ```
"""

from __future__ import annotations

import re

from .core import Chain, Validator
from .errors import ValidationError

# Character ranges allowed beyond ASCII in local parts and domain labels.
_UCS = r"\u00a0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef"

_ATEXT = rf"[a-zA-Z0-9!#$%&'*+\-/=?^_`{{|}}~{_UCS}]"
_DOT_ATOM = rf"{_ATEXT}+(?:\.{_ATEXT}+)*"

_WSP = r"[\x20\x09]"
# Quoted content: any character but LF. A CR is content only when no LF
# follows it; CRLF appears only in a fold, which must be followed by WSP.
_QCHAR = rf"[\x01-\x09\x0b\x0c\x0e-\x7f{_UCS}]"
_QCONTENT = rf"(?:{_QCHAR}|\x0d(?!\x0a))"
_FOLD = rf"\x0d\x0a{_WSP}"
_QUOTED = rf"\x22(?:{_FOLD}?{_QCONTENT})*{_FOLD}?\x22"

_ALNUM = rf"[a-zA-Z0-9{_UCS}]"
_ALPHA = rf"[a-zA-Z{_UCS}]"
_LABEL_INNER = rf"[a-zA-Z0-9\-.~{_UCS}]"
# Labels may themselves contain dots, so a domain is any run of label
# characters that starts alphanumeric, ends alphabetic (before an optional
# root dot) and has at least one dot between an alphanumeric and a letter.
_DOMAIN = rf"(?={_LABEL_INNER}*?{_ALNUM}\.{_ALPHA}){_ALNUM}{_LABEL_INNER}*{_ALPHA}\.?"

EMAIL_PATTERN = re.compile(rf"(?:{_DOT_ATOM}|{_QUOTED})@{_DOMAIN}")


def not_blank() -> Validator[str]:
    """Fail on the empty string."""

    def check(s: str) -> ValidationError | None:
        if s == "":
            return ValidationError("string_not_blank", "must not be blank")
        return None

    return Validator(check)


def not_blank_trim() -> Validator[str]:
    """Fail on a string that is empty once surrounding whitespace is removed.

    Only this check sees the trimmed value.
    """
    blank = not_blank()
    return Validator(lambda s: blank(s.strip()))


def str_len(min: int, max: int) -> Validator[str]:
    """Fail when the length is outside ``[min, max]``.

    Length is the size of the UTF-8 encoding in bytes, so non-ASCII
    characters count more than once. A bound of zero or less disables that
    side of the check.
    """

    def check(s: str) -> ValidationError | None:
        length = len(s.encode("utf-8", "surrogatepass"))
        args = {"min": min, "max": max, "len": length}

        if min > 0 and length < min:
            return ValidationError("string_len", f"must be at least {min} characters", args)

        if max > 0 and length > max:
            return ValidationError("string_len", f"must be at most {max} characters", args)

        return None

    return Validator(check)


def email() -> Validator[str]:
    """Fail unless the whole string matches ``EMAIL_PATTERN``."""

    def check(s: str) -> ValidationError | None:
        if EMAIL_PATTERN.fullmatch(s) is None:
            return ValidationError("string_email", "must be a valid email address")
        return None

    return Validator(check)


class StringComposer(Chain[str]):
    """Composer for string validators."""

    __slots__ = ()

    def not_blank(self) -> StringComposer:
        """String must not be empty. Tag: ``string_not_blank``.

        Use ``not_blank_trim`` to ignore surrounding whitespace.
        """
        return self.and_(not_blank(), "string_not_blank")

    def not_blank_trim(self) -> StringComposer:
        """String must not be empty after trimming. Tag: ``string_not_blank``."""
        return self.and_(not_blank_trim(), "string_not_blank")

    def email(self) -> StringComposer:
        """String must be an email address. Tag: ``string_email``."""
        return self.and_(email(), "string_email")

    def len(self, min: int, max: int) -> StringComposer:
        """Length must be within [min, max]; non-positive bounds are ignored. Tag: ``string_len``."""
        return self.and_(str_len(min, max), "string_len")


def string() -> StringComposer:
    """Start an empty string chain."""
    return StringComposer()


__all__ = [
    "EMAIL_PATTERN",
    "not_blank",
    "not_blank_trim",
    "str_len",
    "email",
    "StringComposer",
    "string",
]
