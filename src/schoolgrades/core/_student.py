"""Students on a class roster, as read from the store."""

from __future__ import annotations

import collections.abc
import dataclasses
import typing


@dataclasses.dataclass(frozen=True, eq=False)
class Student:
    """A row of the ``students`` table.

    Students are used as the index of the per-student tables built by
    :class:`GradeTable`. Two students, or a student and a plain string, are
    equal when their ids are, so those tables can be looked up by id while
    printing the student's name:

    .. code::

        table.subject_averages().loc['S-0042', 'math']

    Attributes
    ----------
    id : str
        The student's key in the store.
    full_name : Optional[str]
    student_id_code : Optional[str]
        The admission number printed on result sheets.
    class_id : Optional[str]
        The student's current class.

    """

    id: str
    full_name: typing.Optional[str] = None
    student_id_code: typing.Optional[str] = None
    class_id: typing.Optional[str] = None

    @classmethod
    def from_row(cls, row: typing.Mapping) -> "Student":
        """Build a student from a store row.

        The full name is joined from ``first_name``, ``middle_name`` and
        ``last_name``, skipping the parts that are missing.

        """
        parts = [row.get(k) for k in ("first_name", "middle_name", "last_name")]
        full_name = " ".join(p for p in parts if p) or row.get("full_name")
        return cls(
            id=row["id"],
            full_name=full_name,
            student_id_code=row.get("student_id_code"),
            class_id=row.get("current_class_id"),
        )

    def matches(self, query: str) -> bool:
        """Case-insensitive match on part of the name, or on the whole id or code."""
        query = query.lower()
        if self.full_name is not None and query in self.full_name.lower():
            return True
        return query in (str(self.id).lower(), (self.student_id_code or "").lower())

    def __repr__(self):
        return f"<{self.full_name or self.student_id_code or self.id}>"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Student):
            return self.id == other.id
        return self.id == other

    def __lt__(self, other):
        return self.id < (other.id if isinstance(other, Student) else other)


def as_student(obj: typing.Union[Student, typing.Mapping, str]) -> Student:
    """Coerce a student row or a bare id into a :class:`Student`."""
    if isinstance(obj, Student):
        return obj
    if isinstance(obj, collections.abc.Mapping):
        return Student.from_row(obj)
    return Student(obj)


class Students(typing.Sequence[Student]):
    """A roster: an ordered sequence of :class:`Student` instances.

    Parameters
    ----------
    students : Iterable[Student or Mapping or str]
        Students, store rows, or bare ids, in display order.

    """

    def __init__(self, students: typing.Iterable = ()):
        self._students = [as_student(s) for s in students]

    def __getitem__(self, ix):
        return self._students[ix]

    def __len__(self):
        return len(self._students)

    def __repr__(self):
        return f"Students({self._students!r})"

    @property
    def ids(self) -> list[str]:
        return [s.id for s in self._students]

    def search(self, query: str) -> "Students":
        """The students whose name contains `query`, or whose id or code is `query`."""
        return Students(s for s in self._students if s.matches(query))

    def in_class(self, class_id: str) -> "Students":
        """The students currently in a class."""
        return Students(s for s in self._students if s.class_id == class_id)

    def sorted_by(self, key: str = "name") -> "Students":
        """The roster sorted by ``"name"`` or by ``"code"``; missing values sort last."""
        attr = {"name": "full_name", "code": "student_id_code"}[key]
        return Students(
            sorted(
                self._students,
                key=lambda s: (getattr(s, attr) is None, (getattr(s, attr) or "").lower()),
            )
        )

    def find(self, query: str) -> Student:
        """The one student matching `query`, as :meth:`search` matches.

        Raises
        ------
        ValueError
            If no student matches, or if more than one does.

        """
        matches = self.search(query)

        if not matches:
            raise ValueError(f"No student matched {query!r}.")

        if len(matches) > 1:
            raise ValueError(f"More than one student matched {query!r}: {list(matches)}")

        return matches[0]
