from __future__ import annotations

import json
from typing import Iterable, List

import pytest

from iching_oracle.algo.catalog import CATALOG_FILE, HexagramCatalog
from iching_oracle.algo.errors import SourceUnavailable
from iching_oracle.algo.randomness import RandomnessMode, RandomnessSource


class SequenceSource(RandomnessSource):
    """Replays a fixed list of draws; fails once they run out."""

    mode = RandomnessMode.PSEUDORANDOM

    def __init__(self, draws: Iterable[int], fail_when_exhausted: bool = False) -> None:
        self.draws: List[int] = list(draws)
        self.requested: List[int] = []
        self.fail_when_exhausted = fail_when_exhausted

    def draw_uniform(self, n: int) -> int:
        self.validate(n)
        self.requested.append(n)
        if not self.draws:
            if self.fail_when_exhausted:
                raise SourceUnavailable("no more draws")
            raise AssertionError("SequenceSource ran out of draws")
        value = self.draws.pop(0)
        assert 0 <= value < n, f"scripted draw {value} outside [0, {n})"
        return value


@pytest.fixture
def catalog() -> HexagramCatalog:
    return HexagramCatalog.get()


@pytest.fixture
def catalog_data() -> dict:
    with open(CATALOG_FILE, "r", encoding="utf-8") as f:
        return json.load(f)
