"""Per-subject and overall percentage averages.

Two averages are provided on purpose, and they are not interchangeable:

- :func:`weighted_subject_average` weighs each grade by its assessment's
  weight. Teacher grade tables, homeroom results and transcripts use it.
- :func:`simple_average` is the plain mean of the percentages, ignoring
  weights. Student dashboards and performance summaries use it.

Only published grades are ever included. Empty inputs produce 0.

"""

import collections.abc
import logging
import typing

from .core._records import Grade, Subject, published
from .options import AggregationOptions, DEFAULT_OPTIONS
from ._util import clamp_percentage, safe_divide

logger = logging.getLogger(__name__)

GradeLike = typing.Union[Grade, typing.Mapping]


# private helpers ======================================================================


def _published_percentages(grades, opts):
    """(percentage, weight) pairs of the published grades, clamped per the options."""
    return [
        (clamp_percentage(g.percentage, opts.clamp_percentages), g.weight)
        for g in published(grades)
    ]


def _index_subjects(subjects):
    if subjects is None:
        return {}
    if isinstance(subjects, collections.abc.Mapping):
        return dict(subjects)
    return {s.id: s for s in subjects}


# SubjectAverage =======================================================================


class SubjectAverage(typing.NamedTuple):
    """A student's average in one subject.

    Attributes
    ----------
    subject_id : str
    name : str
        The subject's name, or its id when the subject is unknown.
    average : float
        The percentage average.
    credit : float
        The subject's credit weight.
    count : int
        The number of published grades that went into the average.

    """

    subject_id: str
    name: str
    average: float
    credit: float = 1.0
    count: int = 0


# public functions =====================================================================


def weighted_subject_average(
    grades: typing.Iterable[GradeLike], opts: typing.Optional[AggregationOptions] = None
) -> float:
    """The weight-averaged percentage of the published grades.

    Computes ``sum(percentage * weight) / sum(weight)``.

    Parameters
    ----------
    grades : Iterable[Grade or Mapping]
        The grades, typically all in one subject.
    opts : Optional[AggregationOptions]

    Returns
    -------
    float
        The weighted average. 0 if there are no published grades, or if
        their weights sum to zero.

    Example
    -------
    >>> weighted_subject_average([Grade(percentage=80, weight=50), Grade(percentage=100, weight=50)])
    90.0

    """
    if opts is None:
        opts = DEFAULT_OPTIONS

    pairs = _published_percentages(grades, opts)
    total_weight = sum(w for _, w in pairs)
    return float(safe_divide(sum(p * w for p, w in pairs), total_weight))


def simple_average(
    grades: typing.Iterable[GradeLike], opts: typing.Optional[AggregationOptions] = None
) -> float:
    """The arithmetic mean of the published grades' percentages, ignoring weights.

    Returns 0 if there are no published grades.

    """
    if opts is None:
        opts = DEFAULT_OPTIONS

    percentages = [p for p, _ in _published_percentages(grades, opts)]
    return float(safe_divide(sum(percentages), len(percentages)))


def subject_averages(
    grades: typing.Iterable[GradeLike],
    subjects: typing.Union[
        typing.Mapping[str, Subject], typing.Iterable[Subject], None
    ] = None,
    method: str = "weighted",
    opts: typing.Optional[AggregationOptions] = None,
) -> list[SubjectAverage]:
    """Average the published grades of each subject.

    Subjects appear in the order in which their first published grade
    appears.

    Parameters
    ----------
    grades : Iterable[Grade or Mapping]
        One student's grades across subjects.
    subjects : Mapping[str, Subject] or Iterable[Subject], optional
        Subject details used for names and credits. A subject that is not
        found gets its id as its name and the default credit.
    method : str
        Either ``"weighted"`` (:func:`weighted_subject_average`) or
        ``"simple"`` (:func:`simple_average`). Default: ``"weighted"``.
    opts : Optional[AggregationOptions]

    Returns
    -------
    list[SubjectAverage]

    Raises
    ------
    ValueError
        If `method` is not recognized.

    """
    if opts is None:
        opts = DEFAULT_OPTIONS

    averagers = {"weighted": weighted_subject_average, "simple": simple_average}
    if method not in averagers:
        raise ValueError(f"Unknown averaging method {method!r}.")
    averager = averagers[method]

    by_id = _index_subjects(subjects)

    groups = {}
    for grade in published(grades):
        groups.setdefault(grade.subject_id, []).append(grade)

    result = []
    for subject_id, subject_grades in groups.items():
        subject = by_id.get(subject_id)
        if subject is None:
            logger.debug("No details for subject %r; using defaults.", subject_id)
            name, credit = str(subject_id), opts.default_credit
        else:
            name, credit = subject.name, subject.credit

        result.append(
            SubjectAverage(
                subject_id=subject_id,
                name=name,
                average=averager(subject_grades, opts),
                credit=credit,
                count=len(subject_grades),
            )
        )

    return result


def running_average(
    grades: typing.Iterable[GradeLike], opts: typing.Optional[AggregationOptions] = None
) -> list[float]:
    """The cumulative simple average after each published grade.

    Used for performance trend charts; the grades should already be in
    chronological order.

    Example
    -------
    >>> running_average([Grade(percentage=70), Grade(percentage=90)])
    [70.0, 80.0]

    """
    if opts is None:
        opts = DEFAULT_OPTIONS

    result = []
    total = 0.0
    for i, (percentage, _) in enumerate(_published_percentages(grades, opts), start=1):
        total += percentage
        result.append(total / i)
    return result


__all__ = [
    "SubjectAverage",
    "weighted_subject_average",
    "simple_average",
    "subject_averages",
    "running_average",
]
