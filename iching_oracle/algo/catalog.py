from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .constants import HEXAGRAM_MASK, LINES_PER_HEXAGRAM, LINES_PER_TRIGRAM, TRIGRAM_MASK
from .errors import CatalogInvariantViolation, OutOfRange

CATALOG_FILE = Path(__file__).parent / "hexagrams.json"


def binary_to_pattern(binary: str) -> int:
    """Bottom-first line string ("100000" = only the bottom line yang) to a pattern."""
    if not binary or any(ch not in "01" for ch in binary):
        raise ValueError(f"Invalid line string: {binary!r}")
    return sum(1 << i for i, ch in enumerate(binary) if ch == "1")


def pattern_to_binary(pattern: int, width: int = LINES_PER_HEXAGRAM) -> str:
    return "".join("1" if pattern >> i & 1 else "0" for i in range(width))


@dataclass(frozen=True)
class Trigram:
    pattern: int
    key: str
    name: str
    chinese: str
    symbol: str
    image: str
    attribute: str

    @property
    def binary(self) -> str:
        return pattern_to_binary(self.pattern, LINES_PER_TRIGRAM)

    def __str__(self) -> str:
        return f"{self.symbol} {self.name} ({self.image})"


@dataclass(frozen=True)
class CatalogEntry:
    pattern: int
    number: int
    name: str
    chinese: str
    pinyin: str
    lower: Trigram
    upper: Trigram

    @property
    def binary(self) -> str:
        return pattern_to_binary(self.pattern)

    @property
    def title(self) -> str:
        return f"{self.pinyin} / {self.name}"

    def __str__(self) -> str:
        return f"#{self.number} {self.title}"


class HexagramCatalog:
    """King Wen table of the 64 hexagrams, validated as a bijection on construction."""

    _instance: Optional["HexagramCatalog"] = None

    def __init__(self, data: Dict[str, Any]) -> None:
        self._trigrams = self._build_trigrams(data.get("trigrams", []))
        self._by_number: Dict[int, CatalogEntry] = {}
        self._by_pattern: Dict[int, CatalogEntry] = {}

        by_key = {t.key: t for t in self._trigrams}
        for raw in data.get("hexagrams", []):
            try:
                pattern = binary_to_pattern(raw["binary"])
                entry = CatalogEntry(
                    pattern=pattern,
                    number=int(raw["number"]),
                    name=raw["name"],
                    chinese=raw.get("chinese", ""),
                    pinyin=raw.get("pinyin", ""),
                    lower=by_key[raw["lower"]],
                    upper=by_key[raw["upper"]],
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise CatalogInvariantViolation(f"malformed hexagram record {raw!r}: {exc}") from exc
            if entry.number in self._by_number:
                raise CatalogInvariantViolation(f"hexagram number {entry.number} appears twice")
            if pattern in self._by_pattern:
                raise CatalogInvariantViolation(
                    f"hexagrams {self._by_pattern[pattern].number} and {entry.number} share pattern {raw['binary']}"
                )
            if pattern != entry.lower.pattern | entry.upper.pattern << LINES_PER_TRIGRAM:
                raise CatalogInvariantViolation(
                    f"hexagram {entry.number}: lines {raw['binary']} do not match "
                    f"{entry.lower.key} below {entry.upper.key}"
                )
            self._by_number[entry.number] = entry
            self._by_pattern[pattern] = entry

        if set(self._by_number) != set(range(1, 65)):
            missing = sorted(set(range(1, 65)) - set(self._by_number))
            raise CatalogInvariantViolation(f"catalog must number hexagrams 1-64, missing {missing}")
        if set(self._by_pattern) != set(range(HEXAGRAM_MASK + 1)):
            raise CatalogInvariantViolation("catalog does not cover all 64 line patterns")

    @staticmethod
    def _build_trigrams(records: List[Dict[str, Any]]) -> Tuple[Trigram, ...]:
        trigrams: Dict[int, Trigram] = {}
        for raw in records:
            try:
                trigram = Trigram(
                    pattern=binary_to_pattern(raw["binary"]),
                    key=raw["key"],
                    name=raw["name"],
                    chinese=raw.get("chinese", ""),
                    symbol=raw.get("symbol", ""),
                    image=raw.get("image", ""),
                    attribute=raw.get("attribute", ""),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise CatalogInvariantViolation(f"malformed trigram record {raw!r}: {exc}") from exc
            if len(raw["binary"]) != LINES_PER_TRIGRAM or trigram.pattern in trigrams:
                raise CatalogInvariantViolation(f"invalid or duplicate trigram {raw['binary']!r}")
            trigrams[trigram.pattern] = trigram
        if set(trigrams) != set(range(TRIGRAM_MASK + 1)):
            raise CatalogInvariantViolation("catalog must define exactly the 8 trigrams")
        if len({t.key for t in trigrams.values()}) != len(trigrams):
            raise CatalogInvariantViolation("trigram keys must be unique")
        return tuple(trigrams[p] for p in range(TRIGRAM_MASK + 1))

    @classmethod
    def from_file(cls, path: Path = CATALOG_FILE) -> "HexagramCatalog":
        with open(path, "r", encoding="utf-8") as f:
            return cls(json.load(f))

    @classmethod
    def get(cls) -> "HexagramCatalog":
        """Process-wide catalog, loaded from the packaged table on first use."""
        if cls._instance is None:
            cls._instance = cls.from_file()
        return cls._instance

    def lookup_by_pattern(self, pattern: int) -> CatalogEntry:
        if not 0 <= pattern <= HEXAGRAM_MASK:
            raise ValueError(f"pattern must be a 6-bit value, got {pattern}")
        return self._by_pattern[pattern]

    def lookup_by_number(self, number: int) -> CatalogEntry:
        entry = self._by_number.get(number)
        if entry is None:
            raise OutOfRange(number)
        return entry

    def trigram(self, pattern: int) -> Trigram:
        if not 0 <= pattern <= TRIGRAM_MASK:
            raise ValueError(f"trigram pattern must be a 3-bit value, got {pattern}")
        return self._trigrams[pattern]

    def trigrams_of(self, pattern: int) -> Tuple[Trigram, Trigram]:
        """(lower, upper) trigrams of a hexagram pattern."""
        entry = self.lookup_by_pattern(pattern)
        return entry.lower, entry.upper

    def resolve(self, identifier: int | str) -> CatalogEntry:
        """Look up a King Wen number ("1"-"64") or a bottom-first line string ("111111")."""
        if isinstance(identifier, int):
            return self.lookup_by_number(identifier)
        text = str(identifier).strip()
        if len(text) == LINES_PER_HEXAGRAM and set(text) <= {"0", "1"}:
            return self.lookup_by_pattern(binary_to_pattern(text))
        try:
            number = int(text)
        except ValueError:
            raise ValueError(
                f"Invalid hexagram identifier {identifier!r}: use a number 1-64 or six lines such as 111111"
            ) from None
        return self.lookup_by_number(number)

    @property
    def trigrams(self) -> Tuple[Trigram, ...]:
        return self._trigrams

    @property
    def entries(self) -> List[CatalogEntry]:
        return [self._by_number[n] for n in range(1, 65)]

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._by_number)
