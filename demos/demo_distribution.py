from __future__ import annotations

import argparse
from collections import Counter

try:
    from iching_oracle.algo import CoinEngine, LocalSource, YarrowStalkEngine
except ModuleNotFoundError:
    import sys
    from pathlib import Path

    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))
    from iching_oracle.algo import CoinEngine, LocalSource, YarrowStalkEngine


EXPECTED = {
    "yarrow-stalks": {6: 1 / 16, 7: 5 / 16, 8: 7 / 16, 9: 3 / 16},
    "coin": {6: 1 / 8, 7: 3 / 8, 8: 3 / 8, 9: 1 / 8},
}


def run_demo(samples: int, seed: int | None) -> None:
    source = LocalSource(seed=seed)
    for engine in (YarrowStalkEngine(), CoinEngine()):
        counts = Counter(engine.line(source).value for _ in range(samples))
        print(f"{engine.method.value}: {samples} lines")
        for value in (6, 7, 8, 9):
            observed = counts[value] / samples
            print(f"  {value}: observed {observed:.4f}  expected {EXPECTED[engine.method.value][value]:.4f}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare sampled line frequencies with the ritual odds")
    parser.add_argument("--samples", type=int, default=100_000)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()
    run_demo(args.samples, args.seed)
