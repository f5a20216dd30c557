# lineparse/numeric/state_parser.py
"""
Does:
    Converts single tokens into int / float / Decimal / bool values.
    - Any base from 1 (unary tally) to 62 (0-9, A-Z, a-z).
    - 0x / 0b prefixes (optionally followed by one separator) switch the base
      to 16 / 2 when the requested base is 2, 10 or 16.
    - Digit-group separators and decimal points come from the active FormatStyle.
    - Base-10 reals understand e/E exponents, "NaN" and inf / infinity.
    - Booleans are looked up in two mutable, case-insensitive vocabularies.

Outputs:
    parse_*()      -> value, or raises a NumericParseError subclass
    try_parse_*()  -> (ok, value_or_default); same accept/reject decisions

Notes:
    * Sized integer variants parse with parse_integer() and then wrap to the
      target width (two's complement). There is no other overflow check.
    * Float exponents overflow to +-inf and underflow to 0.0 like float();
      Decimal exponents outside the context range raise ExponentOverflow.
    * Letters are case-insensitive up to base 36 (so hex a-f == A-F); above
      36, A-Z are 10..35 and a-z are 36..61.
    * Failures are raised, never logged.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from decimal import Context, Decimal, InvalidOperation, Overflow
from typing import TypeVar

from lineparse.errors import (
    ExponentOverflow,
    IllegalCharacter,
    IllegalDigit,
    IllegalSeparator,
    InvalidBase,
    NumericParseError,
    UnrecognizedBooleanToken,
)
from lineparse.numeric.styles import FormatStyle

_LOGGER = logging.getLogger("lineparse.numeric.state_parser")

T = TypeVar("T")

MIN_BASE, MAX_BASE = 1, 62

FIXED_FALSE_ARGS: frozenset[str] = frozenset({"false", "0", "no", "n", "f"})
FIXED_TRUE_ARGS: frozenset[str] = frozenset({"true", "1", "yes", "y", "t"})

_PREFIX_BASES = (2, 10, 16)
_INF_WORDS = ("inf", "infinity")

# float exponents: scaled in Decimal, then rounded once to a double
_FLOAT_EXP_LIMIT = 10 ** 6
_FLOAT_CTX = Context(prec=40, Emax=10 ** 7, Emin=-(10 ** 7), traps=[])


def digit_value(ch: str, base: int) -> int:
    """Value of one digit character, or -1 if it is not [0-9A-Za-z]."""
    if "0" <= ch <= "9":
        return ord(ch) - 48
    if "A" <= ch <= "Z":
        return ord(ch) - 55
    if "a" <= ch <= "z":
        return ord(ch) - 87 if base <= 36 else ord(ch) - 61
    return -1


def _check_base(base: int) -> None:
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBase(base)


def _require_str(text: object) -> str:
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return text


def _wrap(value: int, bits: int, signed: bool) -> int:
    v = value & ((1 << bits) - 1)
    if signed and v >> (bits - 1):
        v -= 1 << bits
    return v


def _scale10(acc: T, exp: int, text: str, index: int) -> T:
    """acc * 10**exp without an intermediate power of ten."""
    if isinstance(acc, Decimal):
        try:
            return acc.scaleb(exp)
        except (Overflow, InvalidOperation) as e:
            raise ExponentOverflow(
                f"exponent {exp} at index {index} is out of Decimal range in {text!r}",
                text=text, index=index,
            ) from e
    if not acc:
        return acc
    # beyond this any finite double mantissa is already inf / 0.0
    exp = max(-_FLOAT_EXP_LIMIT, min(exp, _FLOAT_EXP_LIMIT))
    return float(Decimal(acc).scaleb(exp, context=_FLOAT_CTX))


def _attempt(fn: Callable[..., T], default: T, *args) -> tuple[bool, T]:
    try:
        return True, fn(*args)
    except NumericParseError:
        return False, default


def _lowered(args: Iterable[str]) -> set[str]:
    if isinstance(args, str):
        args = [args]
    return {str(a).lower() for a in args}


class NumericStateParser:
    """
    Per-instance configuration: style (separators / decimal points),
    strict_separators, and the true/false vocabularies.
    """

    def __init__(self, style: FormatStyle | str = FormatStyle.SI, *, strict_separators: bool = True) -> None:
        self.false_args: set[str] = set(FIXED_FALSE_ARGS)
        self.true_args: set[str] = set(FIXED_TRUE_ARGS)
        self.strict_separators = bool(strict_separators)
        self._separators: frozenset[str] = frozenset()
        self._decimals: frozenset[str] = frozenset()
        self.style = style

    # ---------------------------- configuration ----------------------------
    @property
    def style(self) -> FormatStyle:
        return self._style

    @style.setter
    def style(self, value: FormatStyle | str) -> None:
        style = FormatStyle.coerce(value)
        self._style = style
        self._separators = style.chars.separators
        self._decimals = style.chars.decimals
        _LOGGER.debug("format style set to %s", style.value)

    @property
    def separators(self) -> frozenset[str]:
        return self._separators

    @property
    def decimals(self) -> frozenset[str]:
        return self._decimals

    def add_true_args(self, args: Iterable[str]) -> None:
        self.true_args.update(_lowered(args))

    def add_false_args(self, args: Iterable[str]) -> None:
        self.false_args.update(_lowered(args))

    def remove_true_args(self, args: Iterable[str]) -> None:
        """Remove custom true tokens; the fixed defaults always come back."""
        self.true_args.difference_update(_lowered(args))
        self.true_args.update(FIXED_TRUE_ARGS)

    def remove_false_args(self, args: Iterable[str]) -> None:
        """Remove custom false tokens; the fixed defaults always come back."""
        self.false_args.difference_update(_lowered(args))
        self.false_args.update(FIXED_FALSE_ARGS)

    # ---------------------------- shared state machine ----------------------------
    def preprocess(self, text: str, base: int) -> tuple[bool, str, int]:
        """
        Strip a leading '-' and a 0x / 0b prefix (plus one optional separator).
        Returns (negative, remaining text, effective base).
        """
        s = _require_str(text)
        negative = s.startswith("-")
        if negative:
            s = s[1:]
        if base in _PREFIX_BASES and len(s) > 2 and s[0] == "0" and s[1] in "xXbB":
            rest = s[2:]
            if rest[0] in self._separators:
                rest = rest[1:]
            if rest:
                return negative, rest, 16 if s[1] in "xX" else 2
        return negative, s, base

    def _digit(self, ch: str, base: int, text: str, index: int) -> int:
        val = digit_value(ch, base)
        if val < 0:
            raise IllegalCharacter(
                f"illegal character {ch!r} at index {index} in {text!r}", text=text, index=index,
            )
        if (base == 1 and val != 1) or (base != 1 and val >= base):
            raise IllegalDigit(
                f"digit {ch!r} at index {index} is not valid in base {base}: {text!r}",
                text=text, index=index,
            )
        return val

    def _separator_run(self, prev_sep: bool, text: str, index: int) -> None:
        if prev_sep and self.strict_separators:
            raise IllegalSeparator(
                f"consecutive separators at index {index} in {text!r}", text=text, index=index,
            )

    # ---------------------------- integers ----------------------------
    def parse_integer(self, text: str, base: int = 10) -> int:
        """Arbitrary-precision integer in `base` (1..62)."""
        _check_base(base)
        negative, body, base = self.preprocess(text, base)
        offset = len(text) - len(body)
        prev_sep = offset > 0 and text[offset - 1] in self._separators
        value = 0
        digits = 0
        for i, ch in enumerate(body, start=offset):
            if ch in self._separators:
                self._separator_run(prev_sep, text, i)
                prev_sep = True
                continue
            prev_sep = False
            val = self._digit(ch, base, text, i)
            if base == 2:
                value = (value << 1) + val
            elif base == 16:
                value = (value << 4) + val
            else:
                value = value * base + val
            digits += 1
        if digits == 0:
            raise IllegalCharacter(f"no digits in {text!r}", text=text, index=offset)
        return -value if negative else value

    def parse_int16(self, text: str, base: int = 10) -> int:
        return _wrap(self.parse_integer(text, base), 16, signed=True)

    def parse_int32(self, text: str, base: int = 10) -> int:
        return _wrap(self.parse_integer(text, base), 32, signed=True)

    def parse_int64(self, text: str, base: int = 10) -> int:
        return _wrap(self.parse_integer(text, base), 64, signed=True)

    def parse_uint32(self, text: str, base: int = 10) -> int:
        return _wrap(self.parse_integer(text, base), 32, signed=False)

    def parse_uint64(self, text: str, base: int = 10) -> int:
        return _wrap(self.parse_integer(text, base), 64, signed=False)

    # ---------------------------- reals ----------------------------
    def parse_real(self, text: str, base: int = 10) -> float:
        return self._parse_real(text, base, float)

    def parse_decimal(self, text: str, base: int = 10) -> Decimal:
        return self._parse_real(text, base, Decimal)

    def _parse_real(self, text: str, base: int, kind: Callable[..., T]) -> T:
        _require_str(text)
        if base == 10:
            if text == "NaN":
                return kind("NaN")
            unsigned = text[1:] if text[:1] in ("+", "-") else text
            if unsigned.lower() in _INF_WORDS:
                return kind("-Infinity") if text.startswith("-") else kind("Infinity")
        _check_base(base)
        negative, body, base = self.preprocess(text, base)
        offset = len(text) - len(body)
        prev_sep = offset > 0 and text[offset - 1] in self._separators
        acc, div = kind(0), kind(1)
        frac = False
        digits = 0
        for i, ch in enumerate(body, start=offset):
            if ch in self._decimals:
                if not frac:
                    frac = True
                    prev_sep = False
                    continue
                if self.strict_separators:
                    raise IllegalSeparator(
                        f"second decimal point {ch!r} at index {i} in {text!r}", text=text, index=i,
                    )
                # lenient: later decimal points are plain separators
                prev_sep = True
                continue
            if base == 10 and ch in "eE":
                if digits == 0:
                    raise IllegalCharacter(
                        f"exponent without mantissa at index {i} in {text!r}", text=text, index=i,
                    )
                exp_text = body[i - offset + 1:]
                if exp_text.startswith("+"):
                    exp_text = exp_text[1:]
                exp = self.parse_integer(exp_text, 10)
                acc = _scale10(acc, exp, text, i)
                return -acc if negative else acc
            if ch in self._separators:
                self._separator_run(prev_sep, text, i)
                prev_sep = True
                continue
            prev_sep = False
            val = self._digit(ch, base, text, i)
            if frac:
                div *= base
                acc += kind(val) / div
            else:
                acc = acc * base + val
            digits += 1
        if digits == 0:
            raise IllegalCharacter(f"no digits in {text!r}", text=text, index=offset)
        return -acc if negative else acc

    # ---------------------------- booleans ----------------------------
    def parse_bool(self, text: str) -> bool:
        key = _require_str(text).lower()
        if key in self.false_args:
            return False
        if key in self.true_args:
            return True
        raise UnrecognizedBooleanToken(text)

    # ---------------------------- non-throwing twins ----------------------------
    def try_parse_integer(self, text: str, base: int = 10) -> tuple[bool, int]:
        return _attempt(self.parse_integer, 0, text, base)

    def try_parse_int16(self, text: str, base: int = 10) -> tuple[bool, int]:
        return _attempt(self.parse_int16, 0, text, base)

    def try_parse_int32(self, text: str, base: int = 10) -> tuple[bool, int]:
        return _attempt(self.parse_int32, 0, text, base)

    def try_parse_int64(self, text: str, base: int = 10) -> tuple[bool, int]:
        return _attempt(self.parse_int64, 0, text, base)

    def try_parse_uint32(self, text: str, base: int = 10) -> tuple[bool, int]:
        return _attempt(self.parse_uint32, 0, text, base)

    def try_parse_uint64(self, text: str, base: int = 10) -> tuple[bool, int]:
        return _attempt(self.parse_uint64, 0, text, base)

    def try_parse_real(self, text: str, base: int = 10) -> tuple[bool, float]:
        return _attempt(self.parse_real, 0.0, text, base)

    def try_parse_decimal(self, text: str, base: int = 10) -> tuple[bool, Decimal]:
        return _attempt(self.parse_decimal, Decimal(0), text, base)

    def try_parse_bool(self, text: str) -> tuple[bool, bool]:
        return _attempt(self.parse_bool, False, text)
