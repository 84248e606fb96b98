from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Sequence

from .constants import (
    COIN_HEADS,
    COIN_TAILS,
    COINS_PER_LINE,
    LE_YONG,
    LINES_PER_HEXAGRAM,
    VALID_YONG_RETURNS,
)
from .line_types import LineType
from .randomness import RandomnessSource


class ReadingMethod(Enum):
    YARROW_STALKS = "yarrow-stalks"
    COIN = "coin"

    def __str__(self) -> str:
        return self.value


def split_range(yong: int) -> int:
    """Number of admissible left-pile sizes when dividing ``yong`` stalks.

    The left pile holds between 1 and the largest multiple of four below
    ``yong`` stalks, so each remainder class is equally likely.

    With 49 stalks this admits a left pile of 48, which leaves a single
    stalk on the right. Once it is taken as the human stalk the right pile
    is empty, and `one_change` counts its remainder of four out of the left
    pile's fours. The totals set aside are those of a 44/5 split, so the
    odds stay exact even though no hand could divide the stalks this way.
    """
    if yong < 5:
        raise ValueError(f"cannot divide {yong} stalks")
    return 4 * ((yong - 1) // 4)


def one_change(yong: int, left: int) -> tuple[int, int]:
    """One change of the ritual: divide, take one, count off by fours.

    Returns ``(set_aside, new_yong)``.
    """
    if not 1 <= left < yong:
        raise ValueError(f"left pile must hold 1..{yong - 1} stalks, got {left}")
    ciel, terre = left, yong - left
    homme, terre = 1, terre - 1

    seasons_ciel, return_ciel = divmod(ciel, 4)
    seasons_terre, return_terre = divmod(terre, 4)

    # a remainder of zero counts as a full four
    if return_ciel == 0:
        return_ciel = 4
        seasons_ciel -= 1
    if return_terre == 0:
        return_terre = 4
        seasons_terre -= 1

    ret = return_ciel + return_terre + homme
    new_yong = (seasons_ciel + seasons_terre) * 4
    return ret, new_yong


def yarrow_line(lefts: Sequence[int]) -> LineType:
    """Run the three changes on the given left-pile sizes and read the line."""
    if len(lefts) != len(VALID_YONG_RETURNS):
        raise ValueError("the stalk ritual takes exactly three divisions")
    yong = LE_YONG
    for step, left in enumerate(lefts):
        _, yong = one_change(yong, left)
        assert yong in VALID_YONG_RETURNS[step], f"invalid stalk count after change {step + 1}: {yong}"
    return LineType(yong // 4)


def coin_line(tosses: Sequence[int]) -> LineType:
    """Sum three coin faces (1 = heads = 3, 0 = tails = 2)."""
    if len(tosses) != COINS_PER_LINE:
        raise ValueError("a coin line takes exactly three tosses")
    return LineType(sum(COIN_HEADS if toss else COIN_TAILS for toss in tosses))


class LineGenerator(ABC):
    method: ReadingMethod

    @abstractmethod
    def line(self, source: RandomnessSource) -> LineType:
        raise NotImplementedError

    def six_lines(self, source: RandomnessSource) -> List[LineType]:
        """Cast six lines, bottom to top."""
        return [self.line(source) for _ in range(LINES_PER_HEXAGRAM)]


class YarrowStalkEngine(LineGenerator):
    """The yarrow-stalk oracle: P(6)=1/16, P(7)=5/16, P(8)=7/16, P(9)=3/16."""

    method = ReadingMethod.YARROW_STALKS

    def line(self, source: RandomnessSource) -> LineType:
        yong = LE_YONG
        lefts: List[int] = []
        for _ in range(len(VALID_YONG_RETURNS)):
            left = 1 + source.draw_uniform(split_range(yong))
            lefts.append(left)
            _, yong = one_change(yong, left)
        return yarrow_line(lefts)


class CoinEngine(LineGenerator):
    """The three-coin oracle: P(6)=1/8, P(7)=3/8, P(8)=3/8, P(9)=1/8."""

    method = ReadingMethod.COIN

    def line(self, source: RandomnessSource) -> LineType:
        return coin_line(source.draw_many(2, COINS_PER_LINE))


def create_engine(method: ReadingMethod | str) -> LineGenerator:
    method = ReadingMethod(method)
    if method is ReadingMethod.YARROW_STALKS:
        return YarrowStalkEngine()
    if method is ReadingMethod.COIN:
        return CoinEngine()
    raise ValueError(f"Unknown reading method: {method}")
