# lineparse/split/patterns.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


def compute_failure_table(pattern: str) -> list[int]:
    """
    Prefix function of `pattern`.

    lps[i] = length of the longest proper prefix of pattern that is also a
    suffix of pattern[:i + 1]. lps[0] is always 0; "" gives [].
    """
    lps = [0] * len(pattern)
    length = 0
    i = 1
    while i < len(pattern):
        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            i += 1
        elif length != 0:
            # fall back without advancing i
            length = lps[length - 1]
        else:
            lps[i] = 0
            i += 1
    return lps


@dataclass(frozen=True)
class PatternTable:
    """
    Delimiter strings plus one failure table per string, in caller order.

    Duplicates are kept: each one is searched (and recorded) separately.
    An empty pattern list is legal and never matches anything.
    """
    patterns: tuple[str, ...] = ()
    tables: tuple[tuple[int, ...], ...] = field(default=(), repr=False)
    has_empty: bool = False

    @classmethod
    def build(cls, patterns: Iterable[str] | None) -> PatternTable:
        pats = tuple(patterns) if patterns is not None else ()
        for p in pats:
            if not isinstance(p, str):
                raise TypeError(f"delimiter patterns must be str, got {type(p).__name__}")
        tables = tuple(tuple(compute_failure_table(p)) for p in pats)
        return cls(patterns=pats, tables=tables, has_empty=any(p == "" for p in pats))

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self):
        return iter(zip(self.patterns, self.tables))
