# lineparse/errors.py
"""
Exception family for numeric and boolean conversion.

All of them are ValueError subclasses so callers that only know the builtin
still catch them. The try_parse_* helpers convert exactly this family and
nothing else.
"""
from __future__ import annotations


class NumericParseError(ValueError):
    """Base class for every conversion failure raised by NumericStateParser."""

    def __init__(self, message: str, *, text: str | None = None, index: int | None = None) -> None:
        super().__init__(message)
        self.text = text
        self.index = index


class InvalidBase(NumericParseError):
    def __init__(self, base: int) -> None:
        super().__init__(f"invalid base {base}: bases must be between 1 and 62")
        self.base = base


class IllegalCharacter(NumericParseError):
    """A character that is neither a digit, a separator nor a decimal point."""


class IllegalDigit(IllegalCharacter):
    """A digit character whose value does not fit the active base."""


class IllegalSeparator(NumericParseError):
    """Two separators in a row, or a second decimal point (strict mode only)."""


class UnrecognizedBooleanToken(NumericParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"unrecognized boolean token: {text!r}", text=text)


class ExponentOverflow(NumericParseError):
    """A Decimal exponent outside the active decimal context's range."""
