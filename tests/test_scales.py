import pandas as pd
import pytest

import schoolgrades
from schoolgrades.scales import (
    COARSE_SCALE,
    FINE_SCALE,
    GradingScale,
    grade_point,
    letter_grade,
    map_percentage_to_grade,
    map_percentages_to_letter_grades,
)


# map_percentage_to_grade --------------------------------------------------------------


def test_coarse_scale_lower_bounds_are_inclusive():
    assert map_percentage_to_grade(90, COARSE_SCALE).letter == "A"
    assert map_percentage_to_grade(89.999, COARSE_SCALE).letter == "B"
    assert map_percentage_to_grade(80, COARSE_SCALE).letter == "B"
    assert map_percentage_to_grade(60, COARSE_SCALE).letter == "D"
    assert map_percentage_to_grade(59.9, COARSE_SCALE).letter == "F"


def test_coarse_scale_grade_points():
    assert map_percentage_to_grade(95, COARSE_SCALE).grade_point == 4.0
    assert map_percentage_to_grade(75, COARSE_SCALE).grade_point == 2.0
    assert map_percentage_to_grade(10, COARSE_SCALE).grade_point == 0.0


def test_fine_scale_on_every_threshold():
    # given
    expected = [
        (90, "A+", 4.0),
        (85, "A", 3.7),
        (80, "A-", 3.3),
        (75, "B+", 3.0),
        (70, "B", 2.7),
        (65, "B-", 2.3),
        (60, "C+", 2.0),
        (55, "C", 1.7),
        (50, "C-", 1.3),
        (45, "D", 1.0),
        (44.9, "F", 0.0),
    ]

    for percentage, letter, points in expected:
        # when
        mapping = map_percentage_to_grade(percentage, FINE_SCALE)

        # then
        assert mapping.letter == letter
        assert mapping.grade_point == points


def test_same_function_drives_both_scales():
    assert map_percentage_to_grade(86, COARSE_SCALE).letter == "B"
    assert map_percentage_to_grade(86, FINE_SCALE).letter == "A"


def test_percentage_above_100_is_clamped_to_the_top_band():
    assert map_percentage_to_grade(130, FINE_SCALE).letter == "A+"


def test_negative_percentage_maps_to_the_lowest_band():
    assert map_percentage_to_grade(-5, COARSE_SCALE) == ("F", 0.0)


def test_percentage_below_every_band_falls_through_to_the_lowest_band():
    # given
    scale = GradingScale([(50, 100, "P", 1.0), (20, 49.99, "N", 0.0)])

    # when
    mapping = map_percentage_to_grade(5, scale)

    # then
    assert mapping.letter == "N"


def test_clamping_can_be_disabled():
    # given
    opts = schoolgrades.AggregationOptions(clamp_percentages=False)

    # when
    mapping = map_percentage_to_grade(-5, COARSE_SCALE, opts)

    # then
    assert mapping.letter == "F"


def test_clamping_logs_a_warning(caplog):
    # when
    map_percentage_to_grade(120, COARSE_SCALE)

    # then
    assert "out of range" in caplog.text


def test_shortcuts():
    assert letter_grade(83) == "B"
    assert grade_point(83) == 3.3


def test_map_percentages_to_letter_grades_on_a_series():
    # given
    percentages = pd.Series(data=[84, 95, 55], index=["S1", "S2", "S3"])

    # when
    letters = map_percentages_to_letter_grades(percentages)

    # then
    assert list(letters) == ["B", "A", "F"]
    assert list(letters.index) == ["S1", "S2", "S3"]


# GradingScale -------------------------------------------------------------------------


def test_scale_letters_are_best_first():
    assert COARSE_SCALE.letters == ["A", "B", "C", "D", "F"]
    assert len(FINE_SCALE) == 11


def test_grade_point_for_a_letter():
    assert FINE_SCALE.grade_point_for("B+") == 3.0

    with pytest.raises(KeyError):
        FINE_SCALE.grade_point_for("E")


def test_scale_raises_if_not_monotonically_decreasing():
    with pytest.raises(ValueError):
        GradingScale([(50, 100, "P", 1.0), (60, 100, "N", 0.0)])


def test_scale_raises_if_empty():
    with pytest.raises(ValueError):
        GradingScale([])


def test_scale_raises_if_band_bounds_are_inverted():
    with pytest.raises(ValueError):
        GradingScale([(90, 80, "A", 4.0)])


def test_scale_from_stored_items_in_any_order():
    # given
    items = [
        {"min_percentage": 0, "max_percentage": 49.99, "letter_grade": "F", "grade_point": 0},
        {"min_percentage": 75, "max_percentage": 100, "letter_grade": "A", "grade_point": 4},
        {"min_percentage": 50, "max_percentage": 74.99, "letter_grade": "C", "grade_point": 2},
    ]

    # when
    scale = GradingScale.from_items(items, name="school")

    # then
    assert scale.letters == ["A", "C", "F"]
    assert scale.name == "school"
    assert map_percentage_to_grade(74.99, scale).letter == "C"
