"""Class-level roll-ups over a table of grade records."""

from __future__ import annotations

import dataclasses
import logging
import typing

import numpy as np
import pandas as pd

from ..completion import RosterCompletion, compute_completion, pending_assessments
from ..options import AggregationOptions, DEFAULT_OPTIONS
from .._util import round_half_up
from ..scales import COARSE_SCALE, GradingScale, map_percentages_to_letter_grades
from .. import statistics
from ._records import Assessment, Grade, Subject, as_grade
from ._student import Student, Students

logger = logging.getLogger(__name__)

_COLUMNS = [f.name for f in dataclasses.fields(Grade)]


# private helper functions -------------------------------------------------------------


def _first_seen(values):
    """Unique values in order of first appearance, skipping missing ones."""
    return list(dict.fromkeys(v for v in values if not pd.isna(v)))


def _clip_percentages(table, opts):
    if not opts.clamp_percentages:
        return table

    out_of_range = (table["percentage"] < 0) | (table["percentage"] > 100)
    if out_of_range.any():
        logger.warning(
            "%d grade(s) have percentages outside [0, 100]; clamped.",
            int(out_of_range.sum()),
        )
    table = table.copy()
    table["percentage"] = table["percentage"].clip(0, 100)
    return table


def _round(values, digits):
    """Round half-up every non-missing entry of a Series or DataFrame."""

    def _round_series(s):
        return s.map(lambda x: x if pd.isna(x) else round_half_up(x, digits))

    if isinstance(values, pd.DataFrame):
        return values.apply(_round_series).astype(float)
    return _round_series(values).astype(float)


def _is_missing(value):
    return value is None or (isinstance(value, float) and np.isnan(value))


# GradeTable ===========================================================================


class GradeTable:
    """Grades for a whole class, with roll-ups computed over every student at once.

    The per-student functions in :mod:`schoolgrades.averages` answer questions
    about one student. A :class:`GradeTable` answers the same questions for a
    roster and returns pandas objects indexed by :class:`Student`, suitable
    for homeroom result sheets, teacher grade tables and analytics.

    Parameters
    ----------
    grades : Iterable[Grade or Mapping]
        The grade records. Store rows (mappings) are converted with
        :func:`as_grade`.
    students : Optional[Iterable[Student or Mapping or str]]
        The roster, in display order, as students, store rows or ids.
        Students without any grade still get a row in per-student tables. If
        omitted, the roster is every student with a grade, in order of first
        appearance.
    subjects : Optional[Iterable[Subject]]
        Subject details. Used for column order in :meth:`subject_averages`
        and for names in :meth:`subject_summary`.
    assessments : Optional[Iterable[Assessment]]
        The assessments to track in :meth:`completion`, including those
        nobody has been graded on yet.
    opts : Optional[AggregationOptions]

    Attributes
    ----------
    grades : pandas.DataFrame
        One row per grade record, one column per :class:`Grade` field,
        including unpublished grades. Can be modified.
    students : Students
    subjects : dict[str, Subject]
    assessments : dict[str, Assessment]
    opts : AggregationOptions

    """

    def __init__(
        self,
        grades: typing.Iterable[typing.Union[Grade, typing.Mapping]],
        students: typing.Optional[typing.Iterable] = None,
        subjects: typing.Optional[typing.Iterable[Subject]] = None,
        assessments: typing.Optional[typing.Iterable[Assessment]] = None,
        opts: typing.Optional[AggregationOptions] = None,
    ):
        self.opts = opts if opts is not None else DEFAULT_OPTIONS

        records = [dataclasses.asdict(as_grade(g)) for g in grades]
        self.grades = pd.DataFrame(records, columns=_COLUMNS)

        if students is None:
            students = _first_seen(self.grades["student_id"])
        self.students = Students(students)

        self.subjects = {} if subjects is None else {s.id: s for s in subjects}
        self.assessments = (
            {} if assessments is None else {a.id: a for a in assessments}
        )

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} object with "
            f"{len(self.grades)} grades "
            f"and {len(self.students)} students>"
        )

    # properties -----------------------------------------------------------------------

    @property
    def student_ids(self) -> list[str]:
        """The ids of the students on the roster, in order."""
        return self.students.ids

    @property
    def published(self) -> pd.DataFrame:
        """The published grade records, with percentages clamped per the options.

        This is a dynamically-computed property; it should not be modified.

        """
        table = self.grades[self.grades["is_published"].astype(bool)]
        return _clip_percentages(table, self.opts)

    def _subject_order(self, table):
        known = [s for s in self.subjects if s in set(table["subject_id"])]
        return known + [s for s in _first_seen(table["subject_id"]) if s not in known]

    # averages -------------------------------------------------------------------------

    def subject_averages(self, method: str = "weighted") -> pd.DataFrame:
        """A table of each student's average in each subject.

        Produces a DataFrame with a row for each student and a column for
        each subject id. An entry is `NaN` if the student has no published
        grade in the subject.

        Parameters
        ----------
        method : str
            ``"weighted"`` weighs grades by assessment weight, as
            :func:`schoolgrades.averages.weighted_subject_average` does;
            ``"simple"`` takes the plain mean, as
            :func:`schoolgrades.averages.simple_average` does.
            Default: ``"weighted"``.

        Raises
        ------
        ValueError
            If `method` is not recognized.

        """
        if method not in ("weighted", "simple"):
            raise ValueError(f"Unknown averaging method {method!r}.")

        table = self.published
        keys = ["student_id", "subject_id"]

        if method == "weighted":
            table = table.assign(
                weighted=table["percentage"] * table["weight"],
                weight=table["weight"].astype(float),
            )
            sums = table.groupby(keys)[["weighted", "weight"]].sum()
            averages = (sums["weighted"] / sums["weight"]).where(sums["weight"] > 0, 0.0)
        else:
            averages = table.groupby(keys)["percentage"].mean()

        result = averages.unstack("subject_id") if len(averages) else pd.DataFrame()
        result = result.reindex(
            index=self.student_ids, columns=self._subject_order(table)
        ).astype(float)
        result.index = list(self.students)
        result.columns.name = "subject"
        return result

    @property
    def overall_average(self) -> pd.Series:
        """Each student's mean over the subjects in which they have grades.

        Computed from the weighted subject averages. A student with no
        published grades has an overall average of 0.

        This is a dynamically-computed property; it should not be modified.

        """
        averages = self.subject_averages("weighted")
        overall = averages.mean(axis=1, skipna=True).fillna(0.0)
        overall.name = "overall average"
        return overall

    @property
    def total(self) -> pd.Series:
        """Each student's sum of weighted subject averages; 0 without grades."""
        total = self.subject_averages("weighted").sum(axis=1, skipna=True)
        total.name = "total"
        return total

    def letter_grades(self, scale: GradingScale = COARSE_SCALE) -> pd.Series:
        """Each student's overall average mapped to a letter grade on `scale`."""
        letters = map_percentages_to_letter_grades(
            self.overall_average, scale, self.opts
        )
        letters.name = "letter"
        return letters

    @property
    def ranks(self) -> pd.Series:
        """Each student's rank by overall average; ties keep roster order."""
        return statistics.rank(self.overall_average)

    def outcomes(
        self, scale: GradingScale = COARSE_SCALE, digits: typing.Optional[int] = None
    ) -> pd.DataFrame:
        """Compute a table summarizing student outcomes, as on a homeroom sheet.

        Parameters
        ----------
        scale : GradingScale
            The scale used for the letter grade. Default: :attr:`COARSE_SCALE`.
        digits : Optional[int]
            If given, subject averages are rounded half-up to this many
            decimal places first, and the total and overall average are
            computed from the rounded values and rounded the same way.
            Ranks then follow the rounded averages.

        Returns
        -------
        pd.DataFrame
            A table with one row per student, and columns for the average in
            each subject, as well as total, overall average, letter grade,
            rank, and percentile. Sorted by overall average, from highest to
            lowest.

        """
        averages = self.subject_averages()
        if digits is not None:
            averages = _round(averages, digits)

        total = averages.sum(axis=1, skipna=True)
        overall = averages.mean(axis=1, skipna=True).fillna(0.0)
        if digits is not None:
            total = _round(total, digits)
            overall = _round(overall, digits)

        summary = pd.DataFrame(
            {
                "total": total,
                "overall average": overall,
                "letter": map_percentages_to_letter_grades(overall, scale, self.opts),
                "rank": statistics.rank(overall),
                "percentile": statistics.percentile(overall),
            }
        )
        outcomes = pd.concat([averages, summary], axis=1)
        return outcomes.sort_values(
            by="overall average", ascending=False, kind="mergesort"
        )

    # completion -----------------------------------------------------------------------

    def _tracked_assessment_ids(self):
        if self.assessments:
            return [a.id for a in self.assessments.values() if a.is_published]
        return _first_seen(self.grades["assessment_id"])

    def completion(
        self, enrolled_student_ids: typing.Optional[typing.Collection[str]] = None
    ) -> list[RosterCompletion]:
        """The grading progress of every tracked assessment.

        The tracked assessments are the published ones passed as
        `assessments` when the table was built, so that an assessment with no
        grades at all is reported as not started. Without them, every
        assessment with at least one grade is tracked.

        Unpublished grades count as graded: this is the teacher's view.

        Parameters
        ----------
        enrolled_student_ids : Optional[Collection[str]]
            The actively enrolled students. Default: the roster.

        Returns
        -------
        list[RosterCompletion]
            One entry per assessment, in the order the assessments were
            given, or else in order of first grade.

        """
        if enrolled_student_ids is None:
            enrolled_student_ids = self.student_ids

        graded_by_assessment = {}
        for assessment_id, student_id in zip(
            self.grades["assessment_id"], self.grades["student_id"]
        ):
            graded_by_assessment.setdefault(assessment_id, set()).add(student_id)

        return [
            compute_completion(
                assessment_id,
                enrolled_student_ids,
                graded_by_assessment.get(assessment_id, set()),
            )
            for assessment_id in self._tracked_assessment_ids()
        ]

    def pending(
        self, enrolled_student_ids: typing.Optional[typing.Collection[str]] = None
    ) -> list[RosterCompletion]:
        """Assessments with grades still pending, most pending first."""
        return pending_assessments(self.completion(enrolled_student_ids))

    # analytics ------------------------------------------------------------------------

    def _summarize_by(self, column, label):
        table = self.published
        threshold = self.opts.pass_threshold

        if table.empty:
            return pd.DataFrame(
                {"average": [], "count": [], "pass rate": []},
                index=pd.Index([], name=label),
            )

        grouped = table.groupby(column, sort=False)["percentage"]
        result = pd.DataFrame(
            {
                "average": grouped.mean(),
                "count": grouped.size(),
                "pass rate": grouped.apply(lambda s: statistics.pass_rate(s, threshold)),
            }
        )
        result.index.name = label
        return result.sort_values(by="average", ascending=False, kind="mergesort")

    def subject_summary(self) -> pd.DataFrame:
        """Average, grade count and pass rate of each subject, best first.

        Averages are simple means over every published grade in the subject.
        Subjects are labeled by name when their details are known.

        """
        result = self._summarize_by("subject_id", "subject")
        result.index = [
            self.subjects[s].name if s in self.subjects else s for s in result.index
        ]
        result.index.name = "subject"
        return result

    def class_performance(self) -> pd.DataFrame:
        """Average, grade count and pass rate of each class, best first."""
        return self._summarize_by("class_id", "class")

    def distribution(self, scale: GradingScale = COARSE_SCALE) -> pd.Series:
        """Counts of published grades in each band of `scale`."""
        return statistics.band_distribution(self.published["percentage"], scale)

    # lookups --------------------------------------------------------------------------

    def grades_for(self, student: typing.Union[Student, str]) -> list[Grade]:
        """The grade records of one student, published or not.

        Parameters
        ----------
        student : Union[Student, str]
            A :class:`Student`, a student id (on the roster or not), or a
            query used to find a student on the roster by name or admission
            number.

        Raises
        ------
        ValueError
            If `student` is a query that matches no student or several.

        """
        if isinstance(student, str):
            known_ids = set(self.student_ids) | set(self.grades["student_id"])
            if student not in known_ids:
                student = self.students.find(student)

        student_id = student.id if isinstance(student, Student) else student
        rows = self.grades[self.grades["student_id"] == student_id]

        def _to_grade(row):
            kwargs = {k: v for k, v in row.items() if not _is_missing(v)}
            return Grade(**kwargs)

        return [_to_grade(row) for _, row in rows.iterrows()]
