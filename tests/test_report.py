from iching_oracle.algo.analysis import HexagramAnalysis
from iching_oracle.algo.engine import CoinEngine
from iching_oracle.algo.hexagram import HexagramAssembler
from iching_oracle.algo.randomness import LocalSource
from iching_oracle.algo.report import (
    YANG_LINE,
    YIN_LINE,
    format_analysis,
    format_paths,
    format_reading,
    hexagram_figure,
)
from iching_oracle.algo.search import HexagramSearcher


def test_reading_with_changes(catalog):
    reading = HexagramAssembler(catalog).assemble([9, 6, 9, 6, 9, 6], question="Where to?")
    text = format_reading(reading)
    assert "Question: Where to?" in text
    assert "Primary hexagram #63" in text
    assert "Changing lines: 1, 2, 3, 4, 5, 6" in text
    assert "Resulting hexagram #64" in text


def test_reading_without_changes(catalog):
    text = format_reading(HexagramAssembler(catalog).assemble([7] * 6))
    assert "Primary hexagram #1: Qian / The Creative" in text
    assert "No changing lines" in text
    assert "Resulting" not in text


def test_figure_is_drawn_top_down(catalog):
    reading = HexagramAssembler(catalog).assemble([9, 8, 8, 8, 8, 6])
    rows = hexagram_figure(reading.primary)
    assert rows[0] == YIN_LINE + " x"
    assert rows[-1] == YANG_LINE + " o"
    assert rows[1:5] == [YIN_LINE] * 4


def test_analysis_report(catalog):
    text = format_analysis(HexagramAnalysis.for_number(3, catalog))
    assert "Analysis of hexagram #3" in text
    assert "Inverse hexagram:  #4" in text
    assert "Nuclear hexagram:  #23" in text
    assert "Lower trigram: ☳ Zhen" in text


def test_paths_report(catalog):
    paths = HexagramSearcher(1, 2, catalog).find_shortest_paths()
    text = format_paths(1, 2, paths, catalog)
    assert "found 1 path(s)" in text
    assert "-> #2 Kun / The Receptive [000000] by applying opposite" in text


def test_method_line_only_for_cast_readings(catalog):
    assembled = format_reading(HexagramAssembler(catalog).assemble([7] * 6))
    assert "Method:" not in assembled
    cast = format_reading(HexagramAssembler(catalog).cast(CoinEngine(), LocalSource(seed=1)))
    assert "Method: coin (pseudorandom)" in cast
