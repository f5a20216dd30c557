from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

# -----------------------
# Simple string enums
# -----------------------
MatchMode = Literal["blend", "complete"]
StyleName = Literal["SI", "EU", "EN"]

Span = tuple[int, int]  # [start, end)

# max_groups sentinel: no cap on the number of groups per line
UNLIMITED = -1


# -----------------------
# Core data types
# -----------------------

@dataclass(frozen=True)
class TokenizeResult:
    """
    Output of Tokenizer.tokenize().
    Fields:
      indices: one slot per character; -1 = delimiter/dead, >0 = 1-based group number
      word_count: number of groups (== indices.max() when non-empty)
    """
    indices: np.ndarray
    word_count: int

    def __len__(self) -> int:
        return int(self.indices.shape[0])

    def as_dict(self) -> dict[str, object]:
        return {
            "indices": [int(x) for x in self.indices.tolist()],
            "word_count": int(self.word_count),
        }
