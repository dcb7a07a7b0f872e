from ._records import Subject, Assessment, Grade, as_grade, published
from ._student import Student, Students, as_student
from ._grade_table import GradeTable

__all__ = [
    "Subject",
    "Assessment",
    "Grade",
    "as_grade",
    "published",
    "Student",
    "Students",
    "as_student",
    "GradeTable",
]
