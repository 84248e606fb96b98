from __future__ import annotations

import hashlib

try:
    from iching_oracle.algo import HexagramAssembler, RandomnessMode, RandomnessSource, YarrowStalkEngine
    from iching_oracle.algo.report import format_reading
except ModuleNotFoundError:
    import sys
    from pathlib import Path

    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))
    from iching_oracle.algo import HexagramAssembler, RandomnessMode, RandomnessSource, YarrowStalkEngine
    from iching_oracle.algo.report import format_reading


class QuestionHashSource(RandomnessSource):
    """Example source: deterministic draws derived from the question text.

    Draws use rejection sampling on SHA-256 blocks so every value in [0, n)
    stays equally likely.
    """

    mode = RandomnessMode.PSEUDORANDOM

    def __init__(self, question: str) -> None:
        self._seed = question.encode("utf-8")
        self._counter = 0

    def draw_uniform(self, n: int) -> int:
        self.validate(n)
        limit = (2**64 // n) * n
        while True:
            block = hashlib.sha256(self._seed + self._counter.to_bytes(8, "big")).digest()
            self._counter += 1
            value = int.from_bytes(block[:8], "big")
            if value < limit:
                return value % n


def run_demo() -> None:
    question = "What does the coming season hold?"
    reading = HexagramAssembler().cast(YarrowStalkEngine(), QuestionHashSource(question), question=question)
    print(format_reading(reading))


if __name__ == "__main__":
    run_demo()
