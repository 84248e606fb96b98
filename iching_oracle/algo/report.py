from __future__ import annotations

from typing import List, Optional, Sequence

from .analysis import HexagramAnalysis
from .catalog import CatalogEntry, HexagramCatalog, Trigram
from .constants import LINES_PER_HEXAGRAM
from .hexagram import Hexagram, Reading
from .line_types import LineType
from .search import Path, SequenceAnalysis, count_line_changes

YANG_LINE = "━━━━━━━"
YIN_LINE = "━━━ ━━━"
CHANGE_MARKS = {LineType.OLD_YANG: " o", LineType.OLD_YIN: " x"}


def hexagram_figure(hexagram: Hexagram) -> List[str]:
    """Lines drawn top to bottom, changing lines marked."""
    rows = []
    for line in reversed(hexagram.lines):
        rows.append((YANG_LINE if line.is_yang else YIN_LINE) + CHANGE_MARKS.get(line, ""))
    return rows


def pattern_figure(pattern: int) -> List[str]:
    return [YANG_LINE if pattern >> i & 1 else YIN_LINE for i in reversed(range(LINES_PER_HEXAGRAM))]


def _trigram_line(label: str, trigram: Trigram) -> str:
    return f"{label}: {trigram.symbol} {trigram.name} ({trigram.image}, {trigram.attribute})"


def format_reading(reading: Reading) -> str:
    out: List[str] = []
    if reading.question:
        out.append(f"Question: {reading.question}")
    if reading.method is not None and reading.randomness is not None:
        out.append(f"Method: {reading.method.value} ({reading.randomness.value})")
    out.append("")

    primary = reading.primary_entry
    out.append(f">>> Primary hexagram #{primary.number}: {primary.title} {primary.chinese}")
    out.append("")
    out.extend(f"  {row}" for row in hexagram_figure(reading.primary))
    out.append("")

    if reading.has_changes:
        positions = ", ".join(str(i + 1) for i in reading.changing_indices)
        out.append(f">>> Changing lines: {positions}")
        out.append("")
        secondary = reading.secondary_entry
        out.append(f">>> Resulting hexagram #{secondary.number}: {secondary.title} {secondary.chinese}")
        out.append("")
        out.extend(f"  {row}" for row in hexagram_figure(reading.secondary))
    else:
        out.append(">>> No changing lines")
    return "\n".join(out)


def format_entry(entry: CatalogEntry) -> str:
    return f"#{entry.number} {entry.title} [{entry.binary}]"


def format_analysis(analysis: HexagramAnalysis) -> str:
    out: List[str] = [f">>>>> Analysis of hexagram {format_entry(analysis.entry)}", ""]
    out.extend(f"  {row}" for row in pattern_figure(analysis.entry.pattern))
    out.append("")
    out.append(_trigram_line("Lower trigram", analysis.lower))
    out.append(_trigram_line("Upper trigram", analysis.upper))
    out.append(_trigram_line("Lower nuclear trigram", analysis.lower_nuclear))
    out.append(_trigram_line("Upper nuclear trigram", analysis.upper_nuclear))
    out.append("")
    out.append(f"Opposite hexagram: {format_entry(analysis.opposite)}")
    out.append(f"Inverse hexagram:  {format_entry(analysis.inverse)}")
    out.append(f"Nuclear hexagram:  {format_entry(analysis.nuclear)}")
    out.append("")
    out.append(">>> Reachable hexagrams:")
    for entry, op in analysis.reachable:
        out.append(f"> {format_entry(entry)} by applying {op}")
    return "\n".join(out)


def format_paths(start: int, end: int, paths: Sequence[Path], catalog: Optional[HexagramCatalog] = None) -> str:
    catalog = catalog or HexagramCatalog.get()
    out: List[str] = [f">>> Shortest path search found {len(paths)} path(s)", ""]
    for n, path in enumerate(paths, start=1):
        out.append(
            f">>> Path #{n} from hexagram {start} to hexagram {end} "
            f"({len(path) - 1} operation(s), {count_line_changes(path)} line change(s)):"
        )
        for i, (pattern, op) in enumerate(path):
            entry = catalog.lookup_by_pattern(pattern)
            if i == 0:
                out.append(f"  {format_entry(entry)}")
            else:
                out.append(f"  -> {format_entry(entry)} by applying {op.label}")
        out.append("")
    return "\n".join(out).rstrip()


def format_sequence_info(analysis: SequenceAnalysis) -> str:
    return "\n".join(
        [
            f">>> Sequence of hexagrams: {analysis.sequence}",
            f">>> Total operations: {analysis.total_ops}",
            f">>> Total line changes: {analysis.total_line_changes}",
            f">>> Lines changed per operation: {analysis.changes_per_op:.3f}",
            f">>> Total paths: {analysis.total_paths}",
        ]
    )


def format_sequence_analysis(analysis: SequenceAnalysis, catalog: Optional[HexagramCatalog] = None) -> str:
    out = [">>>>> Analysis of sequence of hexagrams", "", format_sequence_info(analysis), ""]
    out.append(">>> Shortest paths between each pair of hexagrams:")
    out.append("")
    for i in range(1, len(analysis.sequence)):
        out.append(
            format_paths(analysis.sequence[i - 1], analysis.sequence[i], analysis.shortest_paths[i - 1], catalog)
        )
        out.append("")
    return "\n".join(out).rstrip()


def format_comparison(first: SequenceAnalysis, second: SequenceAnalysis) -> str:
    return "\n".join(
        [">>>>> Comparison of sequence analyses", "", format_sequence_info(first), "", format_sequence_info(second)]
    )
