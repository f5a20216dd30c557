# lineparse/cursor/__init__.py
"""
Does: Line-oriented reader that hands out groups (and typed values) one at a time.
Inputs: a text stream (default sys.stdin), delimiters, max groups per line, FormatStyle.
Outputs: str groups / chars / lines, or values converted by NumericStateParser.

Notes:
- Empty lines and lines without any group are skipped.
- End of stream raises EOFError.
- try_next_* consume the group whether or not it converts.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator
from decimal import Decimal
from typing import TextIO

from lineparse.config import DEFAULT_DELIMITERS, Config
from lineparse.numeric.state_parser import FIXED_FALSE_ARGS, FIXED_TRUE_ARGS, NumericStateParser
from lineparse.numeric.styles import FormatStyle
from lineparse.split.tokenizer import Tokenizer
from lineparse.types import UNLIMITED, MatchMode

_LOGGER = logging.getLogger("lineparse.cursor")

__all__ = ["FIXED_FALSE_ARGS", "FIXED_TRUE_ARGS", "LineCursor"]


class LineCursor:
    def __init__(
        self,
        reader: TextIO | None = None,
        *,
        delimiters: Iterable[str] | None = None,
        max_groups: int = UNLIMITED,
        style: FormatStyle | str = FormatStyle.SI,
        match_mode: MatchMode = "blend",
        strict_separators: bool = True,
    ) -> None:
        self._numbers = NumericStateParser(style, strict_separators=strict_separators)
        self._tokenizer = Tokenizer(match_mode=match_mode)
        self._reader: TextIO | None = None
        self._reset_line()
        self.reader = reader
        self.delimiters = delimiters
        self.max_groups = max_groups

    @classmethod
    def from_config(cls, cfg: Config, reader: TextIO | None = None) -> LineCursor:
        cur = cls(
            reader,
            delimiters=cfg.tokenizer.delimiters,
            max_groups=cfg.tokenizer.max_groups,
            style=cfg.numeric.format_style,
            match_mode=cfg.tokenizer.match_mode,
            strict_separators=cfg.numeric.strict_separators,
        )
        cur.add_true_args(cfg.numeric.true_args)
        cur.add_false_args(cfg.numeric.false_args)
        return cur

    # ---------------- configuration ----------------
    @property
    def reader(self) -> TextIO:
        return self._reader

    @reader.setter
    def reader(self, value: TextIO | None) -> None:
        # the previous stream is closed, except the process-wide stdin
        if self._reader is not None and self._reader is not value and self._reader is not sys.stdin:
            self._reader.close()
        self._reader = value if value is not None else sys.stdin
        self._reset_line()

    @property
    def delimiters(self) -> tuple[str, ...]:
        return self._tokenizer.patterns

    @delimiters.setter
    def delimiters(self, value: Iterable[str] | None) -> None:
        pats = tuple(value) if value is not None else ()
        self._tokenizer.patterns = pats or DEFAULT_DELIMITERS

    @property
    def max_groups(self) -> int:
        return self._max_groups

    @max_groups.setter
    def max_groups(self, value: int | None) -> None:
        self._max_groups = int(value) if value is not None and value > 0 else UNLIMITED

    @property
    def style(self) -> FormatStyle:
        return self._numbers.style

    @style.setter
    def style(self, value: FormatStyle | str) -> None:
        self._numbers.style = value

    @property
    def parser(self) -> NumericStateParser:
        return self._numbers

    @property
    def true_args(self) -> set[str]:
        return self._numbers.true_args

    @property
    def false_args(self) -> set[str]:
        return self._numbers.false_args

    def add_true_args(self, args: Iterable[str]) -> None:
        self._numbers.add_true_args(args)

    def add_false_args(self, args: Iterable[str]) -> None:
        self._numbers.add_false_args(args)

    def remove_true_args(self, args: Iterable[str]) -> None:
        self._numbers.remove_true_args(args)

    def remove_false_args(self, args: Iterable[str]) -> None:
        self._numbers.remove_false_args(args)

    def number_format(self) -> str:
        return self._numbers.style.value

    # ---------------- line state ----------------
    def _reset_line(self) -> None:
        self._raw: str = ""
        self._indices: list[int] = []
        self._offset = 0
        self._end = 0  # one past the last group character

    def _read_raw(self) -> str:
        while True:
            line = self._reader.readline()
            if line == "":
                raise EOFError("input stream exhausted")
            line = line.rstrip("\r\n")
            if line:
                return line

    def _load_line(self) -> None:
        """Read lines until one yields at least one group."""
        while True:
            raw = self._read_raw()
            res = self._tokenizer.tokenize(raw, self._max_groups)
            if res.word_count > 0:
                indices = res.indices.tolist()
                end = len(indices)
                while indices[end - 1] < 0:
                    end -= 1
                self._raw = raw
                self._indices = indices
                self._offset = 0
                self._end = end
                _LOGGER.debug("line loaded: %d chars, %d group(s)", len(raw), res.word_count)
                return

    def _skip_gaps(self) -> None:
        while self._offset < self._end and self._indices[self._offset] < 0:
            self._offset += 1

    def has_more_tokens(self) -> bool:
        """True if the current line still has an unread group character."""
        return self._offset < self._end

    # ---------------- readers ----------------
    def next(self) -> str:
        """Next group; reads further lines as needed."""
        if not self.has_more_tokens():
            self._load_line()
        self._skip_gaps()
        first = self._offset
        group = self._indices[first]
        end = first
        while end < self._end and self._indices[end] == group:
            end += 1
        self._offset = end
        return self._raw[first:end]

    def next_char(self) -> str:
        """Next non-delimiter character; a partly read group is finished by next()."""
        if not self.has_more_tokens():
            self._load_line()
        self._skip_gaps()
        ch = self._raw[self._offset]
        self._offset += 1
        return ch

    def next_line(self) -> str:
        """Rest of the current line if it has unread groups, else the next raw line."""
        if self.has_more_tokens():
            rest = self._raw[self._offset:]
        else:
            rest = self._read_raw()
        self._reset_line()
        return rest

    def next_trimmed_line(self) -> str:
        """Like next_line(), without leading/trailing delimiter characters."""
        if not self.has_more_tokens():
            self._load_line()
        self._skip_gaps()
        out = self._raw[self._offset:self._end]
        self._reset_line()
        return out

    def __iter__(self) -> Iterator[str]:
        while True:
            try:
                yield self.next()
            except EOFError:
                return

    # ---------------- typed readers ----------------
    def next_short(self, base: int = 10) -> int:
        return self._numbers.parse_int16(self.next(), base)

    def next_int(self, base: int = 10) -> int:
        return self._numbers.parse_int32(self.next(), base)

    def next_long(self, base: int = 10) -> int:
        return self._numbers.parse_int64(self.next(), base)

    def next_uint32(self, base: int = 10) -> int:
        return self._numbers.parse_uint32(self.next(), base)

    def next_uint64(self, base: int = 10) -> int:
        return self._numbers.parse_uint64(self.next(), base)

    def next_float(self, base: int = 10) -> float:
        return self._numbers.parse_real(self.next(), base)

    def next_decimal(self, base: int = 10) -> Decimal:
        return self._numbers.parse_decimal(self.next(), base)

    def next_bool(self) -> bool:
        return self._numbers.parse_bool(self.next())

    def try_next_short(self, base: int = 10) -> tuple[bool, int]:
        return self._numbers.try_parse_int16(self.next(), base)

    def try_next_int(self, base: int = 10) -> tuple[bool, int]:
        return self._numbers.try_parse_int32(self.next(), base)

    def try_next_long(self, base: int = 10) -> tuple[bool, int]:
        return self._numbers.try_parse_int64(self.next(), base)

    def try_next_uint32(self, base: int = 10) -> tuple[bool, int]:
        return self._numbers.try_parse_uint32(self.next(), base)

    def try_next_uint64(self, base: int = 10) -> tuple[bool, int]:
        return self._numbers.try_parse_uint64(self.next(), base)

    def try_next_float(self, base: int = 10) -> tuple[bool, float]:
        return self._numbers.try_parse_real(self.next(), base)

    def try_next_decimal(self, base: int = 10) -> tuple[bool, Decimal]:
        return self._numbers.try_parse_decimal(self.next(), base)

    def try_next_bool(self) -> tuple[bool, bool]:
        return self._numbers.try_parse_bool(self.next())
