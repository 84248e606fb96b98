"""Command line: cast I Ching readings and analyze hexagrams.

Examples:
    iching-oracle -m coin -r pseudorandom -q "Should I move?"
    iching-oracle analyze hexagram 63
    iching-oracle analyze shortest-distance 1 2
    iching-oracle serve --port 8000
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .algo.analysis import HexagramAnalysis
from .algo.catalog import HexagramCatalog
from .algo.engine import ReadingMethod
from .algo.errors import OutOfRange, SourceUnavailable
from .algo.hexagram import cast_reading
from .algo.randomness import RandomnessMode
from .algo.report import (
    format_analysis,
    format_comparison,
    format_paths,
    format_reading,
    format_sequence_analysis,
)
from .algo.search import HexagramSearcher, SequenceAnalysis, find_min_random_sequence, king_wen
from .config import Settings
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_SOURCE_UNAVAILABLE = 3
EXIT_INTERRUPTED = 130


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="iching-oracle",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "-m",
        "--method",
        choices=[m.value for m in ReadingMethod],
        default=settings.method,
        help="Method used to generate the reading (default: %(default)s)",
    )
    p.add_argument(
        "-r",
        "--randomness",
        choices=[r.value for r in RandomnessMode],
        default=settings.randomness,
        help="Use random.org (random) or a local generator (pseudorandom) (default: %(default)s)",
    )
    p.add_argument("-q", "--question", default="", help="The optional question to ask the I Ching")
    p.add_argument("--seed", type=int, default=None, help="Seed for the pseudorandom generator")
    p.add_argument("--log-level", default=settings.log_level, help="Log level (default: %(default)s)")

    sub = p.add_subparsers(dest="command")

    analyze = sub.add_parser("analyze", help="Sub-commands to analyze hexagrams")
    analyze_sub = analyze.add_subparsers(dest="analysis", required=True)

    hexagram = analyze_sub.add_parser(
        "hexagram", help="Trigrams, opposite, inverse and nuclear hexagrams of one hexagram"
    )
    hexagram.add_argument("identifier", help="King Wen number (1-64) or six lines bottom first, e.g. 100010")

    shortest = analyze_sub.add_parser("shortest-distance", help="Find the shortest path between two hexagrams")
    shortest.add_argument("start", type=int, help="The hexagram from which to start")
    shortest.add_argument("end", type=int, help="The hexagram to reach")
    shortest.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Print all shortest paths instead of the ones with the least line changes",
    )

    analyze_sub.add_parser("king-wen", help="Print an analysis of King Wen's sequence")
    compare = analyze_sub.add_parser(
        "compare-king-wen", help="Compare King Wen's sequence to the best of some random shuffles"
    )
    compare.add_argument("--seed", dest="shuffle_seed", type=int, default=None, help="Seed for the shuffles")
    compare.add_argument(
        "-n",
        "--shuffles",
        type=int,
        default=1,
        help="Number of shuffles to try; the one needing the fewest operations is compared (default: %(default)s)",
    )

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: %(default)s)")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind to (default: %(default)s)")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload (for development)")
    serve.add_argument("--workers", type=int, default=1, help="Number of worker processes (uvicorn) to run")
    return p


def run_analysis(args: argparse.Namespace, catalog: HexagramCatalog) -> str:
    if args.analysis == "hexagram":
        entry = catalog.resolve(args.identifier)
        return format_analysis(HexagramAnalysis.for_pattern(entry.pattern, catalog))
    if args.analysis == "shortest-distance":
        paths = HexagramSearcher(args.start, args.end, catalog).find_shortest_paths(args.all)
        return format_paths(args.start, args.end, paths, catalog)
    if args.analysis == "king-wen":
        return format_sequence_analysis(SequenceAnalysis.analyze(king_wen(), catalog), catalog)
    if args.analysis == "compare-king-wen":
        king_wen_analysis = SequenceAnalysis.analyze(king_wen(), catalog)
        random_analysis = find_min_random_sequence(args.shuffles, args.shuffle_seed, catalog)
        return format_comparison(king_wen_analysis, random_analysis)
    raise ValueError(f"Unknown analysis: {args.analysis}")


def serve(args: argparse.Namespace) -> None:
    try:
        import uvicorn
    except ModuleNotFoundError:
        print("uvicorn is required to run the server: pip install uvicorn", file=sys.stderr)
        sys.exit(1)

    # string app import so uvicorn can spawn workers
    uvicorn.run(
        "iching_oracle.fastapi.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=max(1, int(args.workers)),
        log_level=args.log_level.lower(),
    )


def main(argv: Optional[list[str]] = None) -> int:
    try:
        settings = Settings.from_env()
    except ValueError as e:
        # logging is not configured yet
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level)

    # a broken table must stop us before any request is served
    catalog = HexagramCatalog.get()

    try:
        if args.command == "serve":
            serve(args)
            return 0
        if args.command == "analyze":
            print(run_analysis(args, catalog))
            return 0
        reading = cast_reading(
            args.method,
            args.randomness,
            args.question,
            settings=settings,
            seed=args.seed,
        )
        print(format_reading(reading))
        return 0
    except SourceUnavailable as e:
        logger.error("Random source unavailable: %s", e)
        return EXIT_SOURCE_UNAVAILABLE
    except (OutOfRange, ValueError) as e:
        logger.error("%s", e)
        return EXIT_USAGE
    except KeyboardInterrupt:
        print("\nDivination cancelled.", file=sys.stderr)
        return EXIT_INTERRUPTED


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
