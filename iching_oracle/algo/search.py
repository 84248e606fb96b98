"""Shortest transformation paths between hexagrams and analysis of whole sequences."""
from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Optional, Sequence, Tuple

import numpy as np

from .analysis import (
    from_lines,
    from_trigrams,
    hamming,
    inverse,
    line,
    lower_trigram,
    nuclear,
    opposite,
    upper_trigram,
)
from .catalog import HexagramCatalog
from .constants import TRIGRAM_MASK

logger = logging.getLogger(__name__)


def _reverse_trigram(trigram: int) -> int:
    return (trigram & 1) << 2 | (trigram & 2) | trigram >> 2 & 1


class SearchOperation(Enum):
    NO_OP = "no-op"
    FLIP_LINE_1 = "flip-line-1"
    FLIP_LINE_2 = "flip-line-2"
    FLIP_LINE_3 = "flip-line-3"
    FLIP_LINE_4 = "flip-line-4"
    FLIP_LINE_5 = "flip-line-5"
    FLIP_LINE_6 = "flip-line-6"
    OPPOSITE_LOWER_TRIGRAM = "opposite-lower-trigram"
    OPPOSITE_UPPER_TRIGRAM = "opposite-upper-trigram"
    REVERSE_LOWER_TRIGRAM = "reverse-lower-trigram"
    REVERSE_UPPER_TRIGRAM = "reverse-upper-trigram"
    SWAP_TRIGRAMS = "swap-trigrams"
    MIRROR_TRIGRAMS = "mirror-trigrams"
    NUCLEAR = "nuclear"
    OPPOSITE = "opposite"
    INVERSE = "inverse"
    INTERLEAVE_LOWER_FIRST = "interleave-lower-first"
    INTERLEAVE_UPPER_FIRST = "interleave-upper-first"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def all_operations(cls) -> List["SearchOperation"]:
        return [op for op in cls if op is not cls.NO_OP]

    def apply(self, pattern: int) -> int:
        lower, upper = lower_trigram(pattern), upper_trigram(pattern)
        if self is SearchOperation.NO_OP:
            return pattern
        if self.name.startswith("FLIP_LINE_"):
            index = int(self.name.rsplit("_", 1)[1]) - 1
            return pattern ^ (1 << index)
        if self is SearchOperation.OPPOSITE_LOWER_TRIGRAM:
            return from_trigrams(lower ^ TRIGRAM_MASK, upper)
        if self is SearchOperation.OPPOSITE_UPPER_TRIGRAM:
            return from_trigrams(lower, upper ^ TRIGRAM_MASK)
        if self is SearchOperation.REVERSE_LOWER_TRIGRAM:
            return from_trigrams(_reverse_trigram(lower), upper)
        if self is SearchOperation.REVERSE_UPPER_TRIGRAM:
            return from_trigrams(lower, _reverse_trigram(upper))
        if self is SearchOperation.SWAP_TRIGRAMS:
            return from_trigrams(upper, lower)
        if self is SearchOperation.MIRROR_TRIGRAMS:
            # each trigram turned over in its own half
            return from_trigrams(_reverse_trigram(lower), _reverse_trigram(upper))
        if self is SearchOperation.NUCLEAR:
            return nuclear(pattern)
        if self is SearchOperation.OPPOSITE:
            return opposite(pattern)
        if self is SearchOperation.INVERSE:
            return inverse(pattern)
        if self is SearchOperation.INTERLEAVE_LOWER_FIRST:
            return from_lines([line(t, i) for i in range(3) for t in (lower, upper)])
        if self is SearchOperation.INTERLEAVE_UPPER_FIRST:
            return from_lines([line(t, i) for i in range(3) for t in (upper, lower)])
        raise ValueError(f"Unhandled operation: {self}")


# a path is the start hexagram (reached by NO_OP) followed by each step and the operation taking it
Path = List[Tuple[int, SearchOperation]]


def count_line_changes(path: Path) -> int:
    return sum(hamming(path[i][0], path[i - 1][0]) for i in range(1, len(path)))


def least_line_changes(paths: Sequence[Path]) -> List[Path]:
    if not paths:
        return []
    minimum = min(count_line_changes(p) for p in paths)
    return [list(p) for p in paths if count_line_changes(p) == minimum]


class HexagramSearcher:
    """Breadth-first search for the shortest operation paths between two hexagrams."""

    def __init__(self, start: int, end: int, catalog: Optional[HexagramCatalog] = None) -> None:
        self.catalog = catalog or HexagramCatalog.get()
        self.start = self.catalog.lookup_by_number(start)
        self.end = self.catalog.lookup_by_number(end)

    def find_shortest_paths(self, all_paths: bool = False) -> List[Path]:
        start, end = self.start.pattern, self.end.pattern
        if start == end:
            return [[(start, SearchOperation.NO_OP)]]

        ops = SearchOperation.all_operations()
        queue: Deque[Path] = deque([[(start, SearchOperation.NO_OP)]])
        shortest: List[Path] = []
        while queue:
            path = queue.popleft()
            if shortest and len(path) >= len(shortest[0]):
                break
            current = path[-1][0]
            for op in ops:
                new = op.apply(current)
                if any(h == new for h, _ in path):
                    continue
                new_path = path + [(new, op)]
                if new == end:
                    shortest.append(new_path)
                else:
                    queue.append(new_path)

        logger.debug(
            "Found %d shortest path(s) of %d step(s) from #%d to #%d",
            len(shortest),
            len(shortest[0]) - 1 if shortest else 0,
            self.start.number,
            self.end.number,
        )
        return shortest if all_paths else least_line_changes(shortest)


def king_wen() -> List[int]:
    """King Wen's sequence: the hexagrams in the order they appear in the I Ching."""
    return list(range(1, 65))


def random_sequence(rng: Optional[np.random.Generator] = None) -> List[int]:
    rng = rng or np.random.default_rng()
    sequence = np.array(king_wen())
    rng.shuffle(sequence)
    return [int(n) for n in sequence]


@dataclass
class SequenceAnalysis:
    sequence: List[int]
    shortest_paths: List[List[Path]] = field(default_factory=list)
    total_ops: int = 0
    total_line_changes: int = 0
    total_paths: int = 1

    @property
    def changes_per_op(self) -> float:
        return self.total_line_changes / self.total_ops if self.total_ops else 0.0

    @classmethod
    def analyze(cls, sequence: Sequence[int], catalog: Optional[HexagramCatalog] = None) -> "SequenceAnalysis":
        catalog = catalog or HexagramCatalog.get()
        shortest_paths = [
            HexagramSearcher(sequence[i - 1], sequence[i], catalog).find_shortest_paths()
            for i in range(1, len(sequence))
        ]
        return cls(
            sequence=list(sequence),
            shortest_paths=shortest_paths,
            total_ops=sum(len(paths[0]) - 1 for paths in shortest_paths),
            total_line_changes=sum(count_line_changes(paths[0]) for paths in shortest_paths),
            total_paths=math.prod(len(paths) for paths in shortest_paths),
        )


def find_min_random_sequence(
    num_sequences: int,
    seed: Optional[int] = None,
    catalog: Optional[HexagramCatalog] = None,
) -> SequenceAnalysis:
    """The shuffle of King Wen's hexagrams needing the fewest operations.

    Ties go to the earliest shuffle.
    """
    if num_sequences < 1:
        raise ValueError("num_sequences must be at least 1")
    catalog = catalog or HexagramCatalog.get()
    rng = np.random.default_rng(seed)
    analyses = [SequenceAnalysis.analyze(random_sequence(rng), catalog) for _ in range(num_sequences)]
    logger.debug("Operations per shuffle: %s", [a.total_ops for a in analyses])
    return min(analyses, key=lambda a: a.total_ops)
