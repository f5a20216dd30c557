# lineparse/split/tokenizer.py
"""
Does:
    Splits one line into groups separated by literal delimiter patterns.
    Every pattern gets its own KMP scan over the line; matches are written into
    an additive match-extent buffer (numpy int64, len(line) + 1 slots) and a
    single left-to-right running sum turns that buffer into group indices.

Inputs:
    line (str), max_groups (int, <= 0 means unlimited), the active PatternTable.

Outputs:
    TokenizeResult(indices, word_count): indices has one slot per character,
    -1 for delimiter/dead characters, 1-based group numbers otherwise.

Notes:
    - A match of length L ending at i does buf[i - L] -= L and buf[i] += L, so
      overlapping matches (same or different patterns) simply add up.
    - A delimiter run at the very end of the line is trimmed before indexing;
      it never produces a trailing empty group.
    - Once max_groups groups exist, every further live character (delimiters
      included) folds into the last group.
    - Search is one scan per pattern, O(sum(len(p)) * len(line)) worst case;
      there is no combined automaton.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from lineparse.split.patterns import PatternTable
from lineparse.types import UNLIMITED, MatchMode, Span, TokenizeResult

_LOGGER = logging.getLogger("lineparse.split.tokenizer")

_MATCH_MODES = ("blend", "complete")


def _normalize_max_groups(max_groups: int | None) -> int:
    if max_groups is None or max_groups <= 0:
        return UNLIMITED
    return int(max_groups)


def _record_matches(
    line: str,
    pattern: str,
    lps: Sequence[int],
    buf: np.ndarray,
    mode: MatchMode,
) -> int:
    """KMP scan of one pattern; writes every full match into buf. Returns #matches."""
    n, m = len(line), len(pattern)
    if m == 0 or n < m:
        return 0
    hits = 0
    i = j = 0
    while i < n:
        if line[i] == pattern[j]:
            i += 1
            j += 1
        if j == m:
            buf[i - m] -= m
            buf[i] += m
            hits += 1
            # blend: keep the border so overlapping self-matches are found
            j = lps[m - 1] if mode == "blend" else 0
        elif i < n and line[i] != pattern[j]:
            if j != 0:
                j = lps[j - 1]
            else:
                i += 1
    return hits


def _live_length(buf: np.ndarray) -> int:
    """
    Number of leading positions that take part in indexing.
    If a match ends exactly at the end of the line, walk back to where the
    trailing delimiter run starts; everything from there on is dead.
    """
    e = buf.shape[0] - 1
    acc = int(buf[e])
    while acc > 0:
        e -= 1
        acc += int(buf[e])
    return e


def _assign_indices(
    ext: list[int],
    live: int,
    max_groups: int,
    empty_delim: bool,
) -> tuple[list[int], int]:
    out = [-1] * (len(ext) - 1)
    idx = 0
    neg = 0
    for i in range(live):
        if max_groups != UNLIMITED and idx >= max_groups:
            # capped: no new groups, nothing stays a gap
            out[i] = idx
            continue
        neg += ext[i]
        if neg < 0:
            out[i] = -1
            continue
        if empty_delim or i == 0 or out[i - 1] < 0:
            idx += 1
        out[i] = idx
    return out, idx


class Tokenizer:
    """
    Multi-pattern splitter. Owns its PatternTable; assigning `patterns`
    rebuilds it. Not thread-safe: one instance per thread.
    """

    def __init__(self, patterns: Iterable[str] | None = None, *, match_mode: MatchMode = "blend") -> None:
        if match_mode not in _MATCH_MODES:
            raise ValueError(f"match_mode must be one of {_MATCH_MODES}, got {match_mode!r}")
        self.match_mode: MatchMode = match_mode
        self._table = PatternTable()
        self.patterns = patterns

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._table.patterns

    @patterns.setter
    def patterns(self, value: Iterable[str] | None) -> None:
        self._table = PatternTable.build(value)
        _LOGGER.debug(
            "pattern table rebuilt: %d pattern(s), empty_delim=%s, mode=%s",
            len(self._table), self._table.has_empty, self.match_mode,
        )

    @property
    def table(self) -> PatternTable:
        return self._table

    def extents(self, line: str) -> np.ndarray:
        """Raw match-extent buffer (len(line) + 1 slots) before trimming/indexing."""
        if not isinstance(line, str):
            raise TypeError(f"line must be str, got {type(line).__name__}")
        buf = np.zeros(len(line) + 1, dtype=np.int64)
        for pattern, lps in self._table:
            _record_matches(line, pattern, lps, buf, self.match_mode)
        return buf

    def tokenize(self, line: str, max_groups: int | None = UNLIMITED) -> TokenizeResult:
        cap = _normalize_max_groups(max_groups)
        buf = self.extents(line)
        live = _live_length(buf)
        out, word_count = _assign_indices(buf.tolist(), live, cap, self._table.has_empty)

        if word_count == 0:
            return TokenizeResult(indices=np.empty(0, dtype=np.int64), word_count=0)
        if cap != UNLIMITED and word_count == cap and live > 0 and _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("group cap %d reached (line length %d, live %d)", cap, len(line), live)
        return TokenizeResult(indices=np.asarray(out, dtype=np.int64), word_count=word_count)

    def split(self, line: str, max_groups: int | None = UNLIMITED) -> list[str]:
        res = self.tokenize(line, max_groups)
        return [line[a:b] for a, b in group_spans(res.indices)]


def group_spans(indices: Sequence[int] | np.ndarray) -> list[Span]:
    """[start, end) of each group, in order. Runs of one positive index form a group."""
    spans: list[Span] = []
    vals = indices.tolist() if isinstance(indices, np.ndarray) else list(indices)
    start = -1
    cur = -1
    for i, v in enumerate(vals):
        if v == cur and v > 0:
            continue
        if cur > 0:
            spans.append((start, i))
        start, cur = i, v
    if cur > 0:
        spans.append((start, len(vals)))
    return spans


def split_line(
    line: str,
    patterns: Iterable[str] | None,
    max_groups: int | None = UNLIMITED,
    *,
    match_mode: MatchMode = "blend",
) -> list[str]:
    """One-shot helper: build a Tokenizer and return the group substrings."""
    return Tokenizer(patterns, match_mode=match_mode).split(line, max_groups)
