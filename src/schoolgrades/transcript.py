"""Assembling the figures printed on a student's transcript.

Rendering the transcript (e.g., to PDF) is left to the caller; this module
only computes what goes on it.

"""

import collections.abc
import typing

from .averages import subject_averages, simple_average
from .core._records import Grade, Subject, published
from .gpa import credit_weighted_gpa
from .options import AggregationOptions, DEFAULT_OPTIONS
from .scales import FINE_SCALE, GradingScale, map_percentage_to_grade


class TranscriptLine(typing.NamedTuple):
    """One subject on a transcript."""

    subject_id: str
    code: typing.Optional[str]
    name: str
    credit: float
    average: float
    letter: str
    grade_point: float


class Transcript(typing.NamedTuple):
    """The lines and totals of a transcript.

    Attributes
    ----------
    lines : list[TranscriptLine]
        One line per subject, in order of the subject's first grade.
    total_credits : float
        The sum of the credits of the subjects on the transcript.
    overall_average : float
        The simple average of every published grade.
    gpa : float
        The credit-weighted GPA.

    """

    lines: list
    total_credits: float
    overall_average: float
    gpa: float


def build_transcript(
    grades: typing.Iterable[typing.Union[Grade, typing.Mapping]],
    subjects: typing.Union[
        typing.Mapping[str, Subject], typing.Iterable[Subject], None
    ] = None,
    scale: GradingScale = FINE_SCALE,
    opts: typing.Optional[AggregationOptions] = None,
) -> Transcript:
    """Compute a student's transcript from their grades.

    Subject averages are weighted by assessment weight, letters and grade
    points come from `scale`, and the GPA is weighted by subject credit.
    Unpublished grades are ignored.

    Parameters
    ----------
    grades : Iterable[Grade or Mapping]
        One student's grades.
    subjects : Mapping[str, Subject] or Iterable[Subject], optional
        Subject details for codes, names and credits.
    scale : GradingScale
        Default: :attr:`FINE_SCALE`.
    opts : Optional[AggregationOptions]

    Returns
    -------
    Transcript

    """
    if opts is None:
        opts = DEFAULT_OPTIONS

    if subjects is not None and not isinstance(subjects, collections.abc.Mapping):
        subjects = {s.id: s for s in subjects}

    grades = published(grades)
    averages = subject_averages(grades, subjects, method="weighted", opts=opts)

    lines = []
    for avg in averages:
        subject = subjects.get(avg.subject_id) if subjects else None
        mapping = map_percentage_to_grade(avg.average, scale, opts)
        lines.append(
            TranscriptLine(
                subject_id=avg.subject_id,
                code=subject.code if subject is not None else None,
                name=avg.name,
                credit=avg.credit,
                average=avg.average,
                letter=mapping.letter,
                grade_point=mapping.grade_point,
            )
        )

    return Transcript(
        lines=lines,
        total_credits=float(sum(line.credit for line in lines)),
        overall_average=simple_average(grades, opts),
        gpa=credit_weighted_gpa(averages, scale, opts),
    )
