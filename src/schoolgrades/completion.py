"""Tracking how much of a roster has been graded on each assessment."""

import logging
import typing

logger = logging.getLogger(__name__)

COMPLETE = "complete"
NOT_STARTED = "not_started"
IN_PROGRESS = "in_progress"


class RosterCompletion(typing.NamedTuple):
    """Grading progress of one assessment.

    Attributes
    ----------
    assessment_id : str
    total : int
        The number of actively enrolled students.
    graded : int
        The number of enrolled students with a recorded grade.
    pending : int
        ``total - graded``.
    status : str
        One of ``"complete"``, ``"not_started"`` or ``"in_progress"``.

    """

    assessment_id: str
    total: int
    graded: int
    pending: int
    status: str

    @property
    def progress(self) -> int:
        """Percentage of the roster graded, rounded to a whole number. 0 for an empty roster."""
        if self.total == 0:
            return 0
        return int(self.graded / self.total * 100 + 0.5)


def _status(total, pending):
    if pending == 0:
        return COMPLETE
    elif pending == total:
        return NOT_STARTED
    else:
        return IN_PROGRESS


def compute_completion(
    assessment_id: str,
    enrolled_student_ids: typing.Collection[str],
    graded_student_ids: typing.Collection[str],
) -> RosterCompletion:
    """Compute the grading progress of an assessment.

    Grades recorded for students who are not actively enrolled (e.g., who
    have since left the class) are not counted.

    Parameters
    ----------
    assessment_id : str
    enrolled_student_ids : Collection[str]
        The ids of the students actively enrolled in the class.
    graded_student_ids : Collection[str]
        The ids of the students with a recorded grade on the assessment.

    Returns
    -------
    RosterCompletion

    Example
    -------
    >>> compute_completion("quiz-1", {"S1", "S2", "S3"}, {"S1", "S9"})
    RosterCompletion(assessment_id='quiz-1', total=3, graded=1, pending=2, status='in_progress')

    """
    enrolled = set(enrolled_student_ids)
    graded_and_enrolled = enrolled & set(graded_student_ids)

    total = len(enrolled)
    graded = len(graded_and_enrolled)
    pending = total - graded

    return RosterCompletion(
        assessment_id=assessment_id,
        total=total,
        graded=graded,
        pending=pending,
        status=_status(total, pending),
    )


def pending_assessments(
    completions: typing.Iterable[RosterCompletion],
) -> list[RosterCompletion]:
    """The assessments that still need grading, most pending first.

    Completions with nothing pending are dropped. The sort is stable, so
    assessments with equal pending counts keep their relative order.

    """
    outstanding = [c for c in completions if c.pending != 0]
    logger.debug("%d assessment(s) have pending grades.", len(outstanding))
    return sorted(outstanding, key=lambda c: c.pending, reverse=True)
