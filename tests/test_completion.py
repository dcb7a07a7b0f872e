from schoolgrades.completion import (
    RosterCompletion,
    compute_completion,
    pending_assessments,
)

ROSTER = {f"S{i}" for i in range(30)}


def _completion(assessment_id, pending, total=30):
    graded = total - pending
    return RosterCompletion(
        assessment_id,
        total,
        graded,
        pending,
        "complete" if pending == 0 else "in_progress",
    )


# compute_completion -------------------------------------------------------------------


def test_nothing_graded_is_not_started():
    # when
    completion = compute_completion("quiz", ROSTER, set())

    # then
    assert completion.total == 30
    assert completion.graded == 0
    assert completion.pending == 30
    assert completion.status == "not_started"
    assert completion.progress == 0


def test_everything_graded_is_complete():
    # when
    completion = compute_completion("quiz", ROSTER, ROSTER)

    # then
    assert completion.pending == 0
    assert completion.status == "complete"
    assert completion.progress == 100


def test_half_graded_is_in_progress():
    # given
    graded = {f"S{i}" for i in range(15)}

    # when
    completion = compute_completion("quiz", ROSTER, graded)

    # then
    assert completion.graded == 15
    assert completion.pending == 15
    assert completion.status == "in_progress"
    assert completion.progress == 50


def test_grades_of_students_no_longer_enrolled_are_not_counted():
    # given
    enrolled = ["S1", "S2", "S3"]
    graded = ["S1", "S2", "S99"]

    # when
    completion = compute_completion("quiz", enrolled, graded)

    # then
    assert completion.graded == 2
    assert completion.pending == 1


def test_empty_roster_is_complete():
    # when
    completion = compute_completion("quiz", set(), set())

    # then
    assert completion.total == 0
    assert completion.status == "complete"
    assert completion.progress == 0


def test_progress_is_rounded():
    # when
    completion = compute_completion("quiz", ["S1", "S2", "S3"], ["S1"])

    # then
    assert completion.progress == 33


# pending_assessments ------------------------------------------------------------------


def test_pending_assessments_drops_complete_and_sorts_most_pending_first():
    # given
    completions = [_completion("a", 0), _completion("b", 5), _completion("c", 12)]

    # when
    pending = pending_assessments(completions)

    # then
    assert [c.pending for c in pending] == [12, 5]
    assert [c.assessment_id for c in pending] == ["c", "b"]


def test_pending_assessments_keeps_order_of_ties():
    # given
    completions = [
        _completion("a", 3),
        _completion("b", 7),
        _completion("c", 3),
        _completion("d", 3),
    ]

    # when
    pending = pending_assessments(completions)

    # then
    assert [c.assessment_id for c in pending] == ["b", "a", "c", "d"]


def test_pending_assessments_of_all_complete_is_empty():
    assert pending_assessments([_completion("a", 0), _completion("b", 0)]) == []
