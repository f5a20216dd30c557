from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class StyleChars:
    separators: frozenset[str]  # digit-group separators, skipped
    decimals: frozenset[str]    # decimal points; only the first one counts


class FormatStyle(Enum):
    SI = "SI"  # 1 234 567,89 or 1_234_567.89
    EU = "EU"  # 1.234.567,89
    EN = "EN"  # 1,234,567.89

    @property
    def chars(self) -> StyleChars:
        return _STYLE_CHARS[self]

    @classmethod
    def coerce(cls, value: FormatStyle | str) -> FormatStyle:
        """Accept an enum member or its (case-insensitive) name."""
        if isinstance(value, FormatStyle):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(
                f"unknown format style {value!r}; expected one of {[s.value for s in cls]}"
            ) from None


_STYLE_CHARS: dict[FormatStyle, StyleChars] = {
    FormatStyle.SI: StyleChars(separators=frozenset({"_", " "}), decimals=frozenset({".", ","})),
    FormatStyle.EU: StyleChars(separators=frozenset({"_", " ", "."}), decimals=frozenset({","})),
    FormatStyle.EN: StyleChars(separators=frozenset({"_", " ", ","}), decimals=frozenset({"."})),
}
