import numpy as np
import pytest

from iching_oracle.algo.analysis import inverse, nuclear, opposite
from iching_oracle.algo.errors import OutOfRange
from iching_oracle.algo.search import (
    HexagramSearcher,
    SearchOperation,
    SequenceAnalysis,
    count_line_changes,
    find_min_random_sequence,
    king_wen,
    least_line_changes,
    random_sequence,
)


def test_find_path_between_creative_and_receptive(catalog):
    paths = HexagramSearcher(1, 2, catalog).find_shortest_paths()
    assert paths == [[(0b111111, SearchOperation.NO_OP), (0b000000, SearchOperation.OPPOSITE)]]


def test_same_hexagram_needs_no_operation(catalog):
    paths = HexagramSearcher(5, 5, catalog).find_shortest_paths()
    assert paths == [[(catalog.lookup_by_number(5).pattern, SearchOperation.NO_OP)]]


def test_paths_are_valid_and_shortest(catalog):
    searcher = HexagramSearcher(3, 58, catalog)
    every = searcher.find_shortest_paths(all_paths=True)
    fewest = searcher.find_shortest_paths()
    assert every and fewest
    assert {len(p) for p in every} == {len(every[0])}
    assert all(p in every for p in fewest)
    for path in every:
        assert path[0] == (catalog.lookup_by_number(3).pattern, SearchOperation.NO_OP)
        assert path[-1][0] == catalog.lookup_by_number(58).pattern
        for (before, _), (after, op) in zip(path, path[1:]):
            assert op.apply(before) == after
    least = min(count_line_changes(p) for p in every)
    assert all(count_line_changes(p) == least for p in fewest)


def test_searcher_rejects_invalid_numbers(catalog):
    with pytest.raises(OutOfRange):
        HexagramSearcher(0, 5, catalog)
    with pytest.raises(OutOfRange):
        HexagramSearcher(5, 65, catalog)


def test_operations():
    p = 0b000001  # only the bottom line yang
    assert SearchOperation.FLIP_LINE_1.apply(p) == 0
    assert SearchOperation.FLIP_LINE_6.apply(p) == 0b100001
    assert SearchOperation.OPPOSITE_LOWER_TRIGRAM.apply(p) == 0b000110
    assert SearchOperation.OPPOSITE_UPPER_TRIGRAM.apply(p) == 0b111001
    assert SearchOperation.REVERSE_LOWER_TRIGRAM.apply(p) == 0b000100
    assert SearchOperation.REVERSE_UPPER_TRIGRAM.apply(0b001000) == 0b100000
    assert SearchOperation.SWAP_TRIGRAMS.apply(p) == 0b001000
    assert SearchOperation.MIRROR_TRIGRAMS.apply(0b001001) == 0b100100
    assert SearchOperation.INTERLEAVE_LOWER_FIRST.apply(0b000111) == 0b010101
    assert SearchOperation.INTERLEAVE_UPPER_FIRST.apply(0b000111) == 0b101010
    assert SearchOperation.NO_OP.apply(p) == p
    for q in range(64):
        assert SearchOperation.OPPOSITE.apply(q) == opposite(q)
        assert SearchOperation.INVERSE.apply(q) == inverse(q)
        assert SearchOperation.NUCLEAR.apply(q) == nuclear(q)
        for op in SearchOperation:
            assert 0 <= op.apply(q) < 64


def test_all_operations_excludes_no_op():
    ops = SearchOperation.all_operations()
    assert len(ops) == 17
    assert SearchOperation.NO_OP not in ops


def test_count_line_changes():
    path = [(0, SearchOperation.NO_OP), (1, SearchOperation.FLIP_LINE_1), (0b111110, SearchOperation.OPPOSITE)]
    assert count_line_changes(path) == 1 + 6
    assert least_line_changes([]) == []


def test_sequence_analysis(catalog):
    analysis = SequenceAnalysis.analyze([1, 2, 1], catalog)
    assert analysis.total_ops == 2
    assert analysis.total_line_changes == 12
    assert analysis.total_paths == 1
    assert analysis.changes_per_op == 6.0


def test_king_wen_and_shuffles():
    assert king_wen() == list(range(1, 65))
    shuffled = random_sequence(np.random.default_rng(3))
    assert sorted(shuffled) == king_wen()
    assert shuffled == random_sequence(np.random.default_rng(3))


def test_find_min_random_sequence_keeps_fewest_operations(catalog):
    best = find_min_random_sequence(2, seed=11, catalog=catalog)
    rng = np.random.default_rng(11)
    candidates = [SequenceAnalysis.analyze(random_sequence(rng), catalog) for _ in range(2)]
    assert best.total_ops == min(c.total_ops for c in candidates)
    assert best.sequence in [c.sequence for c in candidates]
    assert sorted(best.sequence) == king_wen()

    again = find_min_random_sequence(2, seed=11, catalog=catalog)
    assert again.sequence == best.sequence
    assert again.total_ops == best.total_ops


def test_find_min_random_sequence_needs_a_shuffle():
    with pytest.raises(ValueError):
        find_min_random_sequence(0)
