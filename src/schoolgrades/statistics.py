"""Summary statistics: rankings, strengths and weaknesses, distributions."""

import collections.abc
import typing

import numpy as np
import pandas as pd

from .averages import SubjectAverage, simple_average, subject_averages
from .core._records import Grade, Subject, published
from .gpa import simple_scaled_gpa
from .options import AggregationOptions, DEFAULT_OPTIONS
from .scales import GradingScale, map_percentage_to_grade
from ._util import safe_divide

#: label used in distributions for grades with no letter
NO_LETTER = "N/A"


def _average_of(item):
    if isinstance(item, collections.abc.Mapping):
        return item["average"]
    return item.average


def _sorted_by_average(items):
    # sorted() is stable, also with reverse=True
    return sorted(items, key=_average_of, reverse=True)


# rank / percentile --------------------------------------------------------------------


def rank(scores: pd.Series) -> pd.Series:
    """The rank of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        A series containing overall scores.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` containing the integer rank of
        each student in the class. Students with equal scores are ranked in
        the order they appear in `scores`.

    """
    sorted_scores = scores.sort_values(ascending=False, kind="mergesort").to_frame()
    sorted_scores["rank"] = np.arange(1, len(sorted_scores) + 1)
    return sorted_scores["rank"]


def percentile(scores: pd.Series) -> pd.Series:
    """The percentile of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        The scores used to compute the percentile.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` in which each entry is the
        student's percentile in the class, as a number between 0 and 1.

    """
    ranks = rank(scores)
    s = 1 - ((ranks - 1) / len(ranks))
    s.name = "percentile"
    return s


# strengths / weaknesses ---------------------------------------------------------------


def strengths(
    subject_averages: typing.Iterable[SubjectAverage], n: typing.Optional[int] = None
) -> list:
    """The `n` subjects with the highest averages, best first.

    Subjects with equal averages keep their input order.

    Parameters
    ----------
    subject_averages : Iterable[SubjectAverage or Mapping]
        Anything with an ``average``.
    n : Optional[int]
        Default: :attr:`AggregationOptions.top_n`, i.e., 3.

    """
    if n is None:
        n = DEFAULT_OPTIONS.top_n
    return _sorted_by_average(subject_averages)[:n]


def weaknesses(
    subject_averages: typing.Iterable[SubjectAverage], n: typing.Optional[int] = None
) -> list:
    """The `n` subjects with the lowest averages, worst first.

    This is the tail of the same stable descending sort used by
    :func:`strengths`, reversed; tied subjects therefore come out in reverse
    input order.

    """
    if n is None:
        n = DEFAULT_OPTIONS.top_n
    if n <= 0:
        return []
    return _sorted_by_average(subject_averages)[-n:][::-1]


# distributions ------------------------------------------------------------------------


def letter_grade_distribution(
    grades: typing.Iterable[typing.Union[Grade, typing.Mapping]],
    scale: typing.Optional[GradingScale] = None,
    opts: typing.Optional[AggregationOptions] = None,
) -> pd.Series:
    """Counts the frequency of each letter grade over the published grade records.

    Every published grade is counted, so a subject with five grades
    contributes five counts. A grade's stored letter is used if it has one;
    otherwise its percentage is mapped with `scale`. Without a scale, grades
    with no stored letter are counted under ``"N/A"``.

    Parameters
    ----------
    grades : Iterable[Grade or Mapping]
    scale : Optional[GradingScale]
        If given, the result lists every letter on the scale in order, from
        best to worst, including letters with a count of zero.
    opts : Optional[AggregationOptions]

    Returns
    -------
    pd.Series
        The count of each letter grade.

    """

    def _letter(grade):
        if grade.letter_grade:
            return grade.letter_grade
        if scale is not None:
            return map_percentage_to_grade(grade.percentage, scale, opts).letter
        return NO_LETTER

    letters = pd.Series([_letter(g) for g in published(grades)], dtype=object)
    counts = letters.value_counts(sort=False)

    if scale is not None:
        extra = [letter for letter in counts.index if letter not in scale.letters]
        counts = counts.reindex(scale.letters + extra)

    counts.index.name = "Letter"
    counts.name = "Frequency"
    return counts.fillna(0).astype(int)


def band_distribution(
    percentages: typing.Iterable[float], scale: GradingScale
) -> pd.Series:
    """Counts how many percentages fall into each band of a scale.

    Unlike :func:`letter_grade_distribution`, this ignores stored letters
    and works from raw percentages, as the school-wide analytics do.

    """
    letters = pd.Series(
        [map_percentage_to_grade(p, scale).letter for p in percentages], dtype=object
    )
    counts = letters.value_counts().reindex(scale.letters)
    counts.index.name = "Letter"
    counts.name = "Frequency"
    return counts.fillna(0).astype(int)


def pass_rate(
    percentages: typing.Iterable[float], threshold: typing.Optional[float] = None
) -> float:
    """The percentage of grades at or above the pass threshold.

    Returns 0 if there are no grades.

    """
    if threshold is None:
        threshold = DEFAULT_OPTIONS.pass_threshold

    percentages = list(percentages)
    passed = sum(1 for p in percentages if p >= threshold)
    return safe_divide(passed, len(percentages)) * 100


# performance summary ------------------------------------------------------------------


class PerformanceSummary(typing.NamedTuple):
    """A student's performance at a glance.

    Attributes
    ----------
    overall_average : float
        The simple average of every published grade.
    gpa : float
        The overall average rescaled onto 4.0.
    subject_averages : list[SubjectAverage]
        Simple per-subject averages.
    strengths : list[SubjectAverage]
    weaknesses : list[SubjectAverage]
    top_subject : Optional[str]
        The name of the best subject, or `None` without grades.
    distribution : pd.Series
        Counts of the stored letter grades.

    """

    overall_average: float
    gpa: float
    subject_averages: list
    strengths: list
    weaknesses: list
    top_subject: typing.Optional[str]
    distribution: pd.Series


def performance_summary(
    grades: typing.Iterable[typing.Union[Grade, typing.Mapping]],
    subjects: typing.Union[
        typing.Mapping[str, Subject], typing.Iterable[Subject], None
    ] = None,
    opts: typing.Optional[AggregationOptions] = None,
) -> PerformanceSummary:
    """Summarize a student's published grades for their dashboard.

    This uses the simple (unweighted) averages and the simple scaled GPA.

    """
    if opts is None:
        opts = DEFAULT_OPTIONS

    grades = published(grades)
    overall = simple_average(grades, opts)
    averages = subject_averages(grades, subjects, method="simple", opts=opts)
    best = strengths(averages, opts.top_n)

    return PerformanceSummary(
        overall_average=overall,
        gpa=simple_scaled_gpa(overall),
        subject_averages=averages,
        strengths=best,
        weaknesses=weaknesses(averages, opts.top_n),
        top_subject=best[0].name if best else None,
        distribution=letter_grade_distribution(grades, opts=opts),
    )
