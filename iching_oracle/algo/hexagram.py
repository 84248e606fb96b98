from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import Settings
from .catalog import CatalogEntry, HexagramCatalog, pattern_to_binary
from .constants import HEXAGRAM_MASK, LINES_PER_HEXAGRAM
from .engine import LineGenerator, ReadingMethod, create_engine
from .line_types import LineType, Polarity
from .randomness import RandomnessMode, RandomnessSource, create_source

logger = logging.getLogger(__name__)


class Hexagram:
    """Six lines, index 0 at the bottom (value-object style)."""

    __slots__ = ("lines",)

    def __init__(self, lines: Iterable[LineType]) -> None:
        lines = tuple(LineType.parse(line) for line in lines)
        if len(lines) != LINES_PER_HEXAGRAM:
            raise ValueError(f"a hexagram has six lines, got {len(lines)}")
        self.lines: Tuple[LineType, ...] = lines

    @classmethod
    def from_pattern(cls, pattern: int) -> "Hexagram":
        if not 0 <= pattern <= HEXAGRAM_MASK:
            raise ValueError(f"pattern must be a 6-bit value, got {pattern}")
        return cls(
            LineType.from_polarity(Polarity.Yang if pattern >> i & 1 else Polarity.Yin)
            for i in range(LINES_PER_HEXAGRAM)
        )

    @property
    def polarities(self) -> List[Polarity]:
        return [line.polarity for line in self.lines]

    @property
    def pattern(self) -> int:
        return sum(1 << i for i, line in enumerate(self.lines) if line.is_yang)

    @property
    def binary(self) -> str:
        return pattern_to_binary(self.pattern)

    @property
    def changing_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, line in enumerate(self.lines) if line.is_changing)

    def transformed(self) -> Optional["Hexagram"]:
        """The resulting hexagram, or None when no line is changing."""
        if not self.changing_indices:
            return None
        return Hexagram(line.settled() for line in self.lines)

    def entry(self, catalog: Optional[HexagramCatalog] = None) -> CatalogEntry:
        return (catalog or HexagramCatalog.get()).lookup_by_pattern(self.pattern)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hexagram):
            return NotImplemented
        return self.lines == other.lines

    def __hash__(self) -> int:
        return hash(self.lines)

    def __str__(self) -> str:
        return f"Hexagram(binary='{self.binary}', lines={[line.value for line in self.lines]})"

    def __repr__(self) -> str:
        return self.__str__()


@dataclass(frozen=True)
class Reading:
    primary: Hexagram
    primary_entry: CatalogEntry
    secondary: Optional[Hexagram]
    secondary_entry: Optional[CatalogEntry]
    changing_indices: Tuple[int, ...]
    # None for lines cast outside this program
    method: Optional[ReadingMethod] = None
    randomness: Optional[RandomnessMode] = None
    question: str = ""

    @property
    def has_changes(self) -> bool:
        return bool(self.changing_indices)

    def to_dict(self) -> dict:
        def hexagram_dict(hexagram: Hexagram, entry: CatalogEntry) -> dict:
            return {
                "number": entry.number,
                "name": entry.name,
                "pinyin": entry.pinyin,
                "chinese": entry.chinese,
                "binary": hexagram.binary,
                "lines": [line.value for line in hexagram.lines],
            }

        return {
            "question": self.question,
            "method": self.method.value if self.method else None,
            "randomness": self.randomness.value if self.randomness else None,
            "primary": hexagram_dict(self.primary, self.primary_entry),
            "changing_lines": [i + 1 for i in self.changing_indices],
            "secondary": (
                hexagram_dict(self.secondary, self.secondary_entry)
                if self.secondary is not None and self.secondary_entry is not None
                else None
            ),
        }


class HexagramAssembler:
    """Builds readings from cast lines and resolves them against the catalog."""

    def __init__(self, catalog: Optional[HexagramCatalog] = None) -> None:
        self.catalog = catalog or HexagramCatalog.get()

    def assemble(
        self,
        lines: Sequence[LineType | int],
        *,
        method: Optional[ReadingMethod] = None,
        randomness: Optional[RandomnessMode] = None,
        question: str = "",
    ) -> Reading:
        primary = Hexagram(lines)
        secondary = primary.transformed()
        return Reading(
            primary=primary,
            primary_entry=self.catalog.lookup_by_pattern(primary.pattern),
            secondary=secondary,
            secondary_entry=self.catalog.lookup_by_pattern(secondary.pattern) if secondary else None,
            changing_indices=primary.changing_indices,
            method=method,
            randomness=randomness,
            question=question,
        )

    def cast(self, engine: LineGenerator, source: RandomnessSource, *, question: str = "") -> Reading:
        lines = engine.six_lines(source)
        logger.debug("Cast lines %s with %s/%s", [line.value for line in lines], engine.method, source.mode)
        return self.assemble(lines, method=engine.method, randomness=source.mode, question=question)


def cast_reading(
    method: ReadingMethod | str = ReadingMethod.YARROW_STALKS,
    randomness: RandomnessMode | str = RandomnessMode.RANDOM,
    question: str = "",
    *,
    source: Optional[RandomnessSource] = None,
    settings: Optional[Settings] = None,
    seed: Optional[int] = None,
) -> Reading:
    """Cast a complete reading; raises SourceUnavailable if the remote source fails."""
    engine = create_engine(method)
    if source is not None:
        return HexagramAssembler().cast(engine, source, question=question)

    source = create_source(randomness, settings, seed=seed)
    try:
        return HexagramAssembler().cast(engine, source, question=question)
    finally:
        source.close()
