# lineparse/numeric/formatting.py
from __future__ import annotations

from lineparse.errors import InvalidBase

# same alphabet the parser reads: 0-9, A-Z, then a-z for bases above 36
DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def format_integer(value: int, base: int = 10) -> str:
    """Render `value` in `base` (2..62). Inverse of NumericStateParser.parse_integer."""
    if not 2 <= base <= 62:
        raise InvalidBase(base)
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    n = -value if value < 0 else value
    out: list[str] = []
    while n:
        n, r = divmod(n, base)
        out.append(DIGITS[r])
    return sign + "".join(reversed(out))
