import pytest

from iching_oracle import cli
from iching_oracle.algo.errors import SourceUnavailable


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


def test_pseudorandom_reading(capsys):
    assert cli.main(["-m", "coin", "-r", "pseudorandom", "--seed", "3", "-q", "Which way?"]) == 0
    out = capsys.readouterr().out
    assert "Question: Which way?" in out
    assert "Method: coin (pseudorandom)" in out
    assert "Primary hexagram #" in out


def test_reading_is_reproducible(capsys):
    cli.main(["-r", "pseudorandom", "--seed", "9"])
    first = capsys.readouterr().out
    cli.main(["-r", "pseudorandom", "--seed", "9"])
    assert capsys.readouterr().out == first


def test_source_unavailable_is_reported(monkeypatch, capsys):
    def unavailable(*args, **kwargs):
        raise SourceUnavailable("random.org request timed out")

    monkeypatch.setattr(cli, "cast_reading", unavailable)
    assert cli.main(["-r", "random"]) == cli.EXIT_SOURCE_UNAVAILABLE
    assert "Primary hexagram" not in capsys.readouterr().out


def test_analyze_hexagram(capsys):
    assert cli.main(["analyze", "hexagram", "1"]) == 0
    out = capsys.readouterr().out
    assert "Opposite hexagram: #2" in out
    assert "Nuclear hexagram:  #1" in out


def test_analyze_hexagram_by_lines(capsys):
    assert cli.main(["analyze", "hexagram", "101010"]) == 0
    assert "Analysis of hexagram #63" in capsys.readouterr().out


@pytest.mark.parametrize("identifier", ["65", "0", "heaven"])
def test_analyze_rejects_bad_identifier(identifier, capsys):
    assert cli.main(["analyze", "hexagram", identifier]) == cli.EXIT_USAGE


def test_shortest_distance(capsys):
    assert cli.main(["analyze", "shortest-distance", "1", "2"]) == 0
    out = capsys.readouterr().out
    assert "Shortest path search found 1 path(s)" in out


def test_shortest_distance_out_of_range():
    assert cli.main(["analyze", "shortest-distance", "1", "99"]) == cli.EXIT_USAGE


def test_unknown_method_is_rejected():
    with pytest.raises(SystemExit):
        cli.main(["-m", "tortoise"])


def test_analyze_king_wen(capsys):
    assert cli.main(["analyze", "king-wen"]) == 0
    out = capsys.readouterr().out
    assert "Analysis of sequence of hexagrams" in out
    assert out.count(">>> Total operations:") == 1


def test_compare_king_wen_with_best_of_shuffles(capsys):
    assert cli.main(["analyze", "compare-king-wen", "--seed", "3", "--shuffles", "2"]) == 0
    out = capsys.readouterr().out
    assert out.count(">>> Total operations:") == 2
    assert ">>> Sequence of hexagrams: [1, 2, 3," in out

    assert cli.main(["analyze", "compare-king-wen", "--seed", "3", "--shuffles", "2"]) == 0
    assert capsys.readouterr().out == out


def test_compare_king_wen_rejects_zero_shuffles():
    assert cli.main(["analyze", "compare-king-wen", "--shuffles", "0"]) == cli.EXIT_USAGE


@pytest.mark.parametrize(
    "name, value",
    [("ICHING_REMOTE_TIMEOUT", "soon"), ("ICHING_REMOTE_TIMEOUT", "-1"), ("ICHING_LOG_LEVEL", "LOUD")],
)
def test_invalid_configuration_is_a_usage_error(monkeypatch, capsys, name, value):
    monkeypatch.setenv(name, value)
    assert cli.main(["-r", "pseudorandom"]) == cli.EXIT_USAGE
    assert "Invalid configuration" in capsys.readouterr().err
