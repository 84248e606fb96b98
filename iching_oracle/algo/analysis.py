"""Structural relationships between hexagrams.

All functions work on 6-bit patterns (bit i = line i, counted from the bottom)
and never touch line stability.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .catalog import CatalogEntry, HexagramCatalog, Trigram
from .constants import HEXAGRAM_MASK, LINES_PER_HEXAGRAM, LINES_PER_TRIGRAM, TRIGRAM_MASK


def _check(pattern: int) -> None:
    if not 0 <= pattern <= HEXAGRAM_MASK:
        raise ValueError(f"pattern must be a 6-bit value, got {pattern}")


def line(pattern: int, index: int) -> int:
    return pattern >> index & 1


def lower_trigram(pattern: int) -> int:
    return pattern & TRIGRAM_MASK


def upper_trigram(pattern: int) -> int:
    return pattern >> LINES_PER_TRIGRAM & TRIGRAM_MASK


def from_trigrams(lower: int, upper: int) -> int:
    return (lower & TRIGRAM_MASK) | (upper & TRIGRAM_MASK) << LINES_PER_TRIGRAM


def from_lines(bits: List[int]) -> int:
    return sum((bit & 1) << i for i, bit in enumerate(bits))


def opposite(pattern: int) -> int:
    """Every line's polarity flipped."""
    _check(pattern)
    return pattern ^ HEXAGRAM_MASK


def inverse(pattern: int) -> int:
    """Line order reversed: line i trades places with line 5 - i."""
    _check(pattern)
    return from_lines([line(pattern, LINES_PER_HEXAGRAM - 1 - i) for i in range(LINES_PER_HEXAGRAM)])


def nuclear(pattern: int) -> int:
    """Lines 1-3 become the lower trigram, lines 2-4 the upper trigram.

    Two extractions land on Qian, Kun, Ji Ji or Wei Ji, and a further double
    extraction leaves those unchanged.
    """
    _check(pattern)
    return from_lines([line(pattern, i) for i in (1, 2, 3, 2, 3, 4)])


def nuclear_trigrams(pattern: int) -> Tuple[int, int]:
    """(lines 1-3, lines 2-4) as trigram patterns."""
    _check(pattern)
    return pattern >> 1 & TRIGRAM_MASK, pattern >> 2 & TRIGRAM_MASK


def hamming(a: int, b: int) -> int:
    return bin(a ^ b).count("1")


@dataclass
class HexagramAnalysis:
    entry: CatalogEntry
    lower: Trigram
    upper: Trigram
    lower_nuclear: Trigram
    upper_nuclear: Trigram
    opposite: CatalogEntry
    inverse: CatalogEntry
    nuclear: CatalogEntry
    # (hexagram, operation name) pairs one operation away
    reachable: List[Tuple[CatalogEntry, str]] = field(default_factory=list)

    @classmethod
    def for_pattern(cls, pattern: int, catalog: Optional[HexagramCatalog] = None) -> "HexagramAnalysis":
        from .search import SearchOperation

        catalog = catalog or HexagramCatalog.get()
        entry = catalog.lookup_by_pattern(pattern)
        lower_nuc, upper_nuc = nuclear_trigrams(pattern)
        reachable = []
        for op in SearchOperation.all_operations():
            target = op.apply(pattern)
            if target != pattern:
                reachable.append((catalog.lookup_by_pattern(target), op.label))
        return cls(
            entry=entry,
            lower=entry.lower,
            upper=entry.upper,
            lower_nuclear=catalog.trigram(lower_nuc),
            upper_nuclear=catalog.trigram(upper_nuc),
            opposite=catalog.lookup_by_pattern(opposite(pattern)),
            inverse=catalog.lookup_by_pattern(inverse(pattern)),
            nuclear=catalog.lookup_by_pattern(nuclear(pattern)),
            reachable=reachable,
        )

    @classmethod
    def for_number(cls, number: int, catalog: Optional[HexagramCatalog] = None) -> "HexagramAnalysis":
        catalog = catalog or HexagramCatalog.get()
        return cls.for_pattern(catalog.lookup_by_number(number).pattern, catalog)

    def to_dict(self) -> dict:
        def brief(entry: CatalogEntry) -> dict:
            return {"number": entry.number, "name": entry.name, "pinyin": entry.pinyin, "binary": entry.binary}

        def trigram(t: Trigram) -> dict:
            return {"name": t.name, "image": t.image, "symbol": t.symbol, "binary": t.binary}

        return {
            "hexagram": brief(self.entry),
            "lower_trigram": trigram(self.lower),
            "upper_trigram": trigram(self.upper),
            "lower_nuclear_trigram": trigram(self.lower_nuclear),
            "upper_nuclear_trigram": trigram(self.upper_nuclear),
            "opposite": brief(self.opposite),
            "inverse": brief(self.inverse),
            "nuclear": brief(self.nuclear),
            "reachable": [{"operation": op, **brief(e)} for e, op in self.reachable],
        }
