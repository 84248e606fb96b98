from __future__ import annotations

from enum import Enum


class Polarity(Enum):
    Yin = 0
    Yang = 1

    def flipped(self) -> "Polarity":
        return Polarity.Yang if self is Polarity.Yin else Polarity.Yin


class LineType(Enum):
    """Ritual line values: the sum of one casting."""

    OLD_YIN = 6  # changing yin
    YOUNG_YANG = 7  # stable yang
    YOUNG_YIN = 8  # stable yin
    OLD_YANG = 9  # changing yang

    @property
    def polarity(self) -> Polarity:
        return Polarity.Yang if self.value % 2 else Polarity.Yin

    @property
    def is_changing(self) -> bool:
        return self in (LineType.OLD_YIN, LineType.OLD_YANG)

    @property
    def is_yang(self) -> bool:
        return self.polarity is Polarity.Yang

    def settled(self) -> "LineType":
        """The young line an old line turns into; young lines stay as they are."""
        if self is LineType.OLD_YIN:
            return LineType.YOUNG_YANG
        if self is LineType.OLD_YANG:
            return LineType.YOUNG_YIN
        return self

    @classmethod
    def from_polarity(cls, polarity: Polarity) -> "LineType":
        return cls.YOUNG_YANG if polarity is Polarity.Yang else cls.YOUNG_YIN

    @classmethod
    def parse(cls, item: object) -> "LineType":
        """Accept an enum name (case-insensitive) or one of the values 6-9."""
        if isinstance(item, LineType):
            return item
        if isinstance(item, bool):
            raise ValueError(f"Unsupported line value: {item!r}")
        if isinstance(item, int):
            try:
                return cls(item)
            except ValueError:
                raise ValueError(f"Invalid line value: {item} (expected 6, 7, 8 or 9)") from None
        if isinstance(item, str):
            key = item.strip().upper().replace("-", "_").replace(" ", "_")
            if key in cls.__members__:
                return cls[key]
            try:
                return cls(int(key))
            except ValueError:
                raise ValueError(f"Invalid line name: {item!r}") from None
        raise ValueError(f"Unsupported line type: {type(item).__name__}")
