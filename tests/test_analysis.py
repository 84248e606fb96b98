import pytest

from iching_oracle.algo.analysis import (
    HexagramAnalysis,
    inverse,
    nuclear,
    nuclear_trigrams,
    opposite,
)
from iching_oracle.algo.errors import OutOfRange

ALL = range(64)


def test_opposite_is_an_involution():
    for p in ALL:
        assert opposite(opposite(p)) == p
        assert opposite(p) != p


def test_inverse_is_an_involution():
    for p in ALL:
        assert inverse(inverse(p)) == p


def test_double_nuclear_is_a_fixed_point():
    for p in ALL:
        twice = nuclear(nuclear(p))
        assert nuclear(nuclear(twice)) == twice


def test_double_nuclear_lands_on_four_hexagrams(catalog):
    numbers = {catalog.lookup_by_pattern(nuclear(nuclear(p))).number for p in ALL}
    assert numbers == {1, 2, 63, 64}


def test_nuclear_of_completion_hexagrams_alternate(catalog):
    after = catalog.lookup_by_number(63).pattern
    before = catalog.lookup_by_number(64).pattern
    assert nuclear(after) == before
    assert nuclear(before) == after
    assert nuclear(0b111111) == 0b111111


def test_nuclear_uses_inner_lines():
    # only line 1 yang: becomes the bottom line of the nuclear hexagram
    assert nuclear(0b000010) == 0b000001
    # outer lines never matter
    assert nuclear(0b100001) == 0


def test_classical_relations(catalog):
    def number(p):
        return catalog.lookup_by_pattern(p).number

    zhun = catalog.lookup_by_number(3).pattern
    assert number(inverse(zhun)) == 4
    assert number(nuclear(zhun)) == 23
    assert number(opposite(zhun)) == 50
    tai = catalog.lookup_by_number(11).pattern
    assert number(inverse(tai)) == 12
    assert number(opposite(tai)) == 12


def test_nuclear_trigrams_match_nuclear_hexagram():
    for p in ALL:
        lower, upper = nuclear_trigrams(p)
        assert nuclear(p) == lower | upper << 3


def test_rejects_non_six_bit_patterns():
    with pytest.raises(ValueError):
        opposite(64)
    with pytest.raises(ValueError):
        nuclear(-1)


def test_hexagram_analysis(catalog):
    analysis = HexagramAnalysis.for_number(1, catalog)
    assert analysis.entry.number == 1
    assert analysis.opposite.number == 2
    assert analysis.inverse.number == 1
    assert analysis.nuclear.number == 1
    assert analysis.lower.image == analysis.upper.image == "Heaven"
    reachable = {op: entry.number for entry, op in analysis.reachable}
    assert reachable["opposite"] == 2
    assert "inverse" not in reachable
    assert all(entry.number != 1 for entry, _ in analysis.reachable)

    data = analysis.to_dict()
    assert data["opposite"]["number"] == 2
    assert data["lower_nuclear_trigram"]["image"] == "Heaven"


def test_hexagram_analysis_out_of_range(catalog):
    with pytest.raises(OutOfRange):
        HexagramAnalysis.for_number(0, catalog)
