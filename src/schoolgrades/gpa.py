"""Grade point averages.

As with averages, two GPA computations coexist and are kept apart:

- :func:`credit_weighted_gpa` maps each subject average to a grade point on
  a scale (the fine scale by default) and weighs the points by subject
  credit. Transcripts use it.
- :func:`simple_scaled_gpa` rescales an overall percentage linearly onto
  4.0. Dashboards use it.

The two disagree in general, e.g. an 85% average is 3.7 by credit but 3.4
scaled.

"""

import collections.abc
import typing

import pandas as pd

from .averages import SubjectAverage
from .scales import FINE_SCALE, GradingScale, map_percentage_to_grade
from .options import AggregationOptions
from ._util import safe_divide

#: the top of the grade point scale
MAX_GRADE_POINT = 4.0


def credit_weighted_gpa(
    subject_averages: typing.Iterable[typing.Union[SubjectAverage, typing.Mapping]],
    scale: GradingScale = FINE_SCALE,
    opts: typing.Optional[AggregationOptions] = None,
) -> float:
    """Compute the credit-weighted GPA.

    Each subject's average is mapped to a grade point on `scale`; the GPA is
    ``sum(grade_point * credit) / sum(credit)``.

    Parameters
    ----------
    subject_averages : Iterable[SubjectAverage or Mapping]
        Objects with ``average`` and ``credit``. Plain mappings with those
        keys are accepted too.
    scale : GradingScale
        Default: :attr:`FINE_SCALE`.
    opts : Optional[AggregationOptions]

    Returns
    -------
    float
        The GPA. 0 if there are no subjects or their credits sum to zero.

    """
    total_points = 0.0
    total_credit = 0.0
    for subject in subject_averages:
        if isinstance(subject, collections.abc.Mapping):
            average, credit = subject["average"], subject["credit"]
        else:
            average, credit = subject.average, subject.credit

        points = map_percentage_to_grade(average, scale, opts).grade_point
        total_points += points * credit
        total_credit += credit

    return safe_divide(total_points, total_credit)


def simple_scaled_gpa(overall_percentage: float) -> float:
    """Rescale an overall percentage onto a 4.0 scale.

    Example
    -------
    >>> simple_scaled_gpa(85)
    3.4

    """
    return overall_percentage / 100 * MAX_GRADE_POINT


def average_gpa(
    letter_grades: pd.Series,
    scale: GradingScale = FINE_SCALE,
    include_failing: bool = False,
) -> float:
    """Compute the average GPA of a class from its letter grades.

    Parameters
    ----------
    letter_grades : pd.Series
        A Series containing the letter grades.
    scale : GradingScale
        The scale the letters come from. Default: :attr:`FINE_SCALE`.
    include_failing : Bool
        Whether or not to include grades in the lowest band.
        Default: False.

    Returns
    -------
    float
        The average GPA; 0 if there are no grades to average.

    Raises
    ------
    KeyError
        If a letter is not on the scale.

    """
    if not include_failing:
        letter_grades = letter_grades[letter_grades != scale.lowest.letter]

    if letter_grades.empty:
        return 0.0

    points = letter_grades.map(scale.grade_point_for)
    return float(points.mean())
