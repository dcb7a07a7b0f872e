"""Read-only snapshots of the subject, assessment and grade rows in the store."""

from __future__ import annotations

import collections.abc
import dataclasses
import typing


# Subject ------------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Subject:
    """A subject taught at the school.

    Attributes
    ----------
    id : str
        The subject's identifier.
    name : str
        The subject's display name.
    code : Optional[str]
        The short subject code printed on transcripts.
    credit : float
        The subject's credit weight, used when computing a credit-weighted
        GPA. Must be positive. Default: 1.

    Raises
    ------
    ValueError
        If the credit is not positive.

    """

    id: str
    name: str
    code: typing.Optional[str] = None
    credit: float = 1.0

    def __post_init__(self):
        if not self.credit > 0:
            raise ValueError(f"Subject {self.id!r} must have a positive credit.")


# Assessment ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Assessment:
    """A gradable unit of work within a class-subject pairing.

    Attributes
    ----------
    id : str
        The assessment's identifier.
    max_score : float
        The maximum score possible. Must be positive.
    weight : float
        The assessment's percentage contribution within its subject. The
        weights of a subject's assessments typically sum to 100, but this is
        not required.
    subject_id : Optional[str]
    class_id : Optional[str]
    title : Optional[str]
    is_published : bool
        Whether the assessment is visible to students. Default: `True`.

    Raises
    ------
    ValueError
        If the maximum score is not positive or the weight is negative.

    """

    id: str
    max_score: float
    weight: float
    subject_id: typing.Optional[str] = None
    class_id: typing.Optional[str] = None
    title: typing.Optional[str] = None
    is_published: bool = True

    def __post_init__(self):
        if not self.max_score > 0:
            raise ValueError(f"Assessment {self.id!r} must have a positive max score.")
        if self.weight < 0:
            raise ValueError(f"Assessment {self.id!r} cannot have a negative weight.")


# Grade --------------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Grade:
    """One student's grade on one assessment.

    Either `percentage` or both of `score` and `max_score` must be given. If
    `percentage` is omitted it is derived as ``score / max_score * 100``.

    Only published grades are used in student-facing aggregates. Snapshots
    handed to the aggregator are normally fetched published-only, so
    `is_published` defaults to `True`.

    Attributes
    ----------
    student_id : Optional[str]
    percentage : float
    weight : float
        The weight of the grade's assessment within its subject. Default: 1.
    is_published : bool
    subject_id : Optional[str]
    assessment_id : Optional[str]
    score : Optional[float]
    max_score : Optional[float]
    letter_grade : Optional[str]
        The letter recorded in the store, if any.
    id : Optional[str]
    class_id : Optional[str]

    Raises
    ------
    ValueError
        If the percentage can't be determined, if `max_score` is not
        positive, or if `weight` is negative.

    """

    student_id: typing.Optional[str] = None
    percentage: typing.Optional[float] = None
    weight: float = 1.0
    is_published: bool = True
    subject_id: typing.Optional[str] = None
    assessment_id: typing.Optional[str] = None
    score: typing.Optional[float] = None
    max_score: typing.Optional[float] = None
    letter_grade: typing.Optional[str] = None
    id: typing.Optional[str] = None
    class_id: typing.Optional[str] = None

    def __post_init__(self):
        if self.max_score is not None and not self.max_score > 0:
            raise ValueError("A grade's max score must be positive.")

        if self.weight < 0:
            raise ValueError("A grade cannot have a negative weight.")

        if self.percentage is None:
            if self.score is None or self.max_score is None:
                raise ValueError(
                    "A grade needs either a percentage or both a score and a max score."
                )
            object.__setattr__(self, "percentage", self.score / self.max_score * 100)

    @classmethod
    def from_assessment(
        cls,
        assessment: Assessment,
        student_id: str,
        score: float,
        *,
        is_published: bool = True,
        letter_grade: typing.Optional[str] = None,
        id: typing.Optional[str] = None,
    ) -> "Grade":
        """Create a grade which inherits its assessment's weight, max score and subject.

        Example
        -------
        >>> quiz = Assessment("quiz-1", max_score=20, weight=30, subject_id="math")
        >>> Grade.from_assessment(quiz, "S1", 16).percentage
        80.0

        """
        return cls(
            student_id=student_id,
            weight=assessment.weight,
            is_published=is_published,
            subject_id=assessment.subject_id,
            assessment_id=assessment.id,
            score=score,
            max_score=assessment.max_score,
            letter_grade=letter_grade,
            id=id,
            class_id=assessment.class_id,
        )

    def publish(self) -> "Grade":
        """A copy of this grade with the publication flag set."""
        return dataclasses.replace(self, is_published=True)


def published(grades: typing.Iterable) -> list[Grade]:
    """Only the published grades, in their original order."""
    return [g for g in map(as_grade, grades) if g.is_published]


def as_grade(obj: typing.Union[Grade, typing.Mapping]) -> Grade:
    """Coerce a store row (a mapping of column names to values) into a :class:`Grade`.

    Columns that are not :class:`Grade` fields, such as timestamps or joined
    relations, are ignored.

    Raises
    ------
    TypeError
        If the object is neither a :class:`Grade` nor a mapping.

    """
    if isinstance(obj, Grade):
        return obj

    if not isinstance(obj, collections.abc.Mapping):
        raise TypeError(f"Cannot make a Grade from type {obj.__class__.__name__}.")

    fields = {f.name for f in dataclasses.fields(Grade)}
    kwargs = {k: v for k, v in obj.items() if k in fields and v is not None}
    return Grade(**kwargs)
