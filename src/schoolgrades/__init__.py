"""Grade computation and aggregation for school management dashboards."""

from .core import (
    Subject,
    Assessment,
    Grade,
    Student,
    Students,
    GradeTable,
)

from .options import AggregationOptions

from .scales import (
    Band,
    GradeMapping,
    GradingScale,
    COARSE_SCALE,
    FINE_SCALE,
    map_percentage_to_grade,
    map_percentages_to_letter_grades,
)

from .averages import (
    SubjectAverage,
    weighted_subject_average,
    simple_average,
    subject_averages,
)

from .gpa import credit_weighted_gpa, simple_scaled_gpa

from .completion import RosterCompletion, compute_completion, pending_assessments

from .statistics import strengths, weaknesses, letter_grade_distribution

from .transcript import Transcript, TranscriptLine, build_transcript

from . import io
from . import statistics

__all__ = [
    "Subject",
    "Assessment",
    "Grade",
    "Student",
    "Students",
    "GradeTable",
    "AggregationOptions",
    "Band",
    "GradeMapping",
    "GradingScale",
    "COARSE_SCALE",
    "FINE_SCALE",
    "map_percentage_to_grade",
    "map_percentages_to_letter_grades",
    "SubjectAverage",
    "weighted_subject_average",
    "simple_average",
    "subject_averages",
    "credit_weighted_gpa",
    "simple_scaled_gpa",
    "RosterCompletion",
    "compute_completion",
    "pending_assessments",
    "strengths",
    "weaknesses",
    "letter_grade_distribution",
    "Transcript",
    "TranscriptLine",
    "build_transcript",
    "io",
    "statistics",
]
