import math

import pytest

import schoolgrades
from schoolgrades import Assessment, Grade, Subject
from schoolgrades.averages import (
    running_average,
    simple_average,
    subject_averages,
    weighted_subject_average,
)
from schoolgrades.scales import COARSE_SCALE, map_percentage_to_grade


# weighted_subject_average -------------------------------------------------------------


def test_weighted_average_of_two_equally_weighted_grades():
    # given
    grades = [Grade(percentage=80, weight=50), Grade(percentage=100, weight=50)]

    # when
    average = weighted_subject_average(grades)

    # then
    assert average == 90


def test_weighted_average_from_assessments_and_scores():
    # given
    quiz = Assessment("quiz", max_score=10, weight=20, subject_id="math")
    midterm = Assessment("midterm", max_score=50, weight=30, subject_id="math")
    final = Assessment("final", max_score=200, weight=50, subject_id="math")
    grades = [
        Grade.from_assessment(quiz, "S1", 7),
        Grade.from_assessment(midterm, "S1", 40),
        Grade.from_assessment(final, "S1", 180),
    ]

    # when
    average = weighted_subject_average(grades)

    # then
    # 70 * .2 + 80 * .3 + 90 * .5
    assert math.isclose(average, 83)
    assert map_percentage_to_grade(average, COARSE_SCALE).letter == "B"


def test_weighted_average_accepts_store_rows():
    # given
    rows = [
        {"percentage": 60, "weight": 25, "is_published": True, "created_at": "2024-01-01"},
        {"percentage": 100, "weight": 75, "is_published": True, "created_at": "2024-02-01"},
    ]

    # when
    average = weighted_subject_average(rows)

    # then
    assert average == 90


def test_weighted_average_of_nothing_is_zero():
    assert weighted_subject_average([]) == 0


def test_weighted_average_with_zero_total_weight_is_zero():
    # given
    grades = [Grade(percentage=80, weight=0), Grade(percentage=100, weight=0)]

    # when
    average = weighted_subject_average(grades)

    # then
    assert average == 0
    assert not math.isnan(average)


def test_weighted_average_ignores_unpublished_grades():
    # given
    published = [Grade(percentage=80, weight=50), Grade(percentage=100, weight=50)]
    draft = Grade(percentage=0, weight=100, is_published=False)

    # when
    without_draft = weighted_subject_average(published)
    with_draft = weighted_subject_average(published + [draft])

    # then
    assert with_draft == without_draft


def test_weighted_average_of_only_unpublished_grades_is_zero():
    assert weighted_subject_average([Grade(percentage=95, is_published=False)]) == 0


def test_weighted_average_clamps_out_of_range_percentages():
    # given
    grades = [Grade(percentage=150, weight=1), Grade(percentage=50, weight=1)]

    # when
    clamped = weighted_subject_average(grades)
    raw = weighted_subject_average(
        grades, schoolgrades.AggregationOptions(clamp_percentages=False)
    )

    # then
    assert clamped == 75
    assert raw == 100


# simple_average -----------------------------------------------------------------------


def test_simple_average_ignores_weights():
    # given
    grades = [Grade(percentage=70, weight=20), Grade(percentage=90, weight=80)]

    # when
    simple = simple_average(grades)
    weighted = weighted_subject_average(grades)

    # then
    assert simple == 80
    assert weighted == 86


def test_simple_average_of_nothing_is_zero():
    assert simple_average([]) == 0


def test_simple_average_ignores_unpublished_grades():
    # given
    grades = [Grade(percentage=70), Grade(percentage=90)]
    draft = Grade(percentage=10, is_published=False)

    # then
    assert simple_average(grades + [draft]) == simple_average(grades) == 80


# subject_averages ---------------------------------------------------------------------


def test_subject_averages_groups_by_subject_in_first_seen_order():
    # given
    subjects = [
        Subject("math", "Mathematics", "MATH101", credit=4),
        Subject("bio", "Biology", "BIO101", credit=3),
    ]
    grades = [
        Grade("S1", percentage=90, weight=50, subject_id="bio"),
        Grade("S1", percentage=70, weight=50, subject_id="math"),
        Grade("S1", percentage=80, weight=50, subject_id="bio"),
        Grade("S1", percentage=100, weight=50, subject_id="math"),
    ]

    # when
    averages = subject_averages(grades, subjects)

    # then
    assert [a.subject_id for a in averages] == ["bio", "math"]
    assert [a.name for a in averages] == ["Biology", "Mathematics"]
    assert [a.average for a in averages] == [85, 85]
    assert [a.credit for a in averages] == [3, 4]
    assert [a.count for a in averages] == [2, 2]


def test_subject_averages_with_simple_method():
    # given
    grades = [
        Grade(percentage=60, weight=90, subject_id="math"),
        Grade(percentage=100, weight=10, subject_id="math"),
    ]

    # when
    weighted = subject_averages(grades)
    simple = subject_averages(grades, method="simple")

    # then
    assert weighted[0].average == pytest.approx(64)
    assert simple[0].average == 80


def test_subject_averages_for_unknown_subject_uses_defaults():
    # given
    grades = [Grade(percentage=60, subject_id="art")]

    # when
    (average,) = subject_averages(grades)

    # then
    assert average.name == "art"
    assert average.credit == 1.0


def test_subject_averages_skips_subjects_with_only_unpublished_grades():
    # given
    grades = [
        Grade(percentage=60, subject_id="math"),
        Grade(percentage=90, subject_id="art", is_published=False),
    ]

    # when
    averages = subject_averages(grades)

    # then
    assert [a.subject_id for a in averages] == ["math"]


def test_subject_averages_raises_on_unknown_method():
    with pytest.raises(ValueError):
        subject_averages([], method="median")


# running_average / rounding -----------------------------------------------------------


def test_running_average():
    # given
    grades = [
        Grade(percentage=70),
        Grade(percentage=50, is_published=False),
        Grade(percentage=90),
        Grade(percentage=80),
    ]

    # when
    trend = running_average(grades)

    # then
    assert trend == [70, 80, 80]
