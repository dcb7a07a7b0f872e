import logging

from schoolgrades._util import clamp_percentage, round_half_up, safe_divide


def test_round_half_up_rounds_halves_away_from_zero():
    assert round_half_up(82.25, 1) == 82.3
    assert round_half_up(82.24, 1) == 82.2
    assert round_half_up(3.145, 2) == 3.15
    assert round_half_up(77.5, 0) == 78


def test_safe_divide_by_zero_is_zero():
    assert safe_divide(10, 0) == 0
    assert safe_divide(10, 4) == 2.5


def test_clamp_percentage_logs_when_out_of_range(caplog):
    # when
    with caplog.at_level(logging.WARNING):
        result = clamp_percentage(-5)

    # then
    assert result == 0
    assert "out of range" in caplog.text


def test_clamp_percentage_passes_through_when_disabled():
    assert clamp_percentage(130, clamp=False) == 130
