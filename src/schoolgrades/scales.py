"""Mapping percentages to letter grades and grade points."""

import typing

import pandas as pd

from ._util import clamp_percentage
from .options import AggregationOptions, DEFAULT_OPTIONS


# Band / GradeMapping ==================================================================


class Band(typing.NamedTuple):
    """One row of a grading scale.

    Attributes
    ----------
    min_percentage : float
        The inclusive lower bound of the band.
    max_percentage : float
        The upper bound of the band. Informational; lookups only use the
        lower bounds.
    letter : str
        The letter grade awarded in this band.
    grade_point : float
        The grade point (on a 4.0 scale) awarded in this band.

    """

    min_percentage: float
    max_percentage: float
    letter: str
    grade_point: float


class GradeMapping(typing.NamedTuple):
    """The result of mapping a percentage onto a scale."""

    letter: str
    grade_point: float


# GradingScale =========================================================================


class GradingScale(typing.Sequence[Band]):
    """An ordered sequence of non-overlapping percentage bands.

    Bands are kept in descending order of their lower bound, best grade
    first. This behaves like a tuple of :class:`Band` objects.

    Parameters
    ----------
    bands : Iterable[Band or tuple]
        The bands, ordered from the highest lower bound to the lowest. Plain
        ``(min, max, letter, grade_point)`` tuples are accepted.
    name : Optional[str]
        A display name for the scale.

    Raises
    ------
    ValueError
        If there are no bands, if the lower bounds do not strictly decrease,
        or if a band's lower bound exceeds its upper bound.

    """

    def __init__(self, bands: typing.Iterable, name: typing.Optional[str] = None):
        bands = tuple(Band(*b) for b in bands)

        if not bands:
            raise ValueError("A grading scale needs at least one band.")

        prev = float("inf")
        for band in bands:
            if band.min_percentage > band.max_percentage:
                raise ValueError(
                    f"Band {band.letter!r} has a lower bound above its upper bound."
                )
            if band.min_percentage >= prev:
                raise ValueError("Scale is not monotonically decreasing.")
            prev = band.min_percentage

        self._bands = bands
        self.name = name

    @classmethod
    def from_items(
        cls, items: typing.Iterable[typing.Mapping], name: typing.Optional[str] = None
    ) -> "GradingScale":
        """Create a scale from stored grading scale items.

        Parameters
        ----------
        items : Iterable[Mapping]
            Rows with ``min_percentage``, ``max_percentage``, ``letter_grade``
            and ``grade_point`` keys, in any order.
        name : Optional[str]
            A display name for the scale.

        Returns
        -------
        GradingScale

        """
        bands = [
            Band(
                float(item["min_percentage"]),
                float(item["max_percentage"]),
                item["letter_grade"],
                float(item["grade_point"]),
            )
            for item in items
        ]
        bands.sort(key=lambda b: b.min_percentage, reverse=True)
        return cls(bands, name=name)

    def __getitem__(self, ix):
        return self._bands[ix]

    def __len__(self):
        return len(self._bands)

    def __eq__(self, other):
        if not isinstance(other, GradingScale):
            return NotImplemented
        return self._bands == other._bands

    def __hash__(self):
        return hash(self._bands)

    def __repr__(self):
        return f"GradingScale(name={self.name!r}, letters={self.letters!r})"

    @property
    def letters(self) -> list[str]:
        """The letter grades, best first."""
        return [band.letter for band in self._bands]

    @property
    def lowest(self) -> Band:
        """The band with the lowest threshold."""
        return self._bands[-1]

    def grade_point_for(self, letter: str) -> float:
        """The grade point awarded for a letter grade.

        Raises
        ------
        KeyError
            If the letter is not on this scale.

        """
        for band in self._bands:
            if band.letter == letter:
                return band.grade_point
        raise KeyError(f"Letter {letter!r} is not on the scale.")


# common scales ========================================================================

COARSE_SCALE = GradingScale(
    [
        (90, 100, "A", 4.0),
        (80, 89.99, "B", 3.0),
        (70, 79.99, "C", 2.0),
        (60, 69.99, "D", 1.0),
        (0, 59.99, "F", 0.0),
    ],
    name="coarse",
)
"""The five-band scale used by class grade tables."""

FINE_SCALE = GradingScale(
    [
        (90, 100, "A+", 4.0),
        (85, 89.99, "A", 3.7),
        (80, 84.99, "A-", 3.3),
        (75, 79.99, "B+", 3.0),
        (70, 74.99, "B", 2.7),
        (65, 69.99, "B-", 2.3),
        (60, 64.99, "C+", 2.0),
        (55, 59.99, "C", 1.7),
        (50, 54.99, "C-", 1.3),
        (45, 49.99, "D", 1.0),
        (0, 44.99, "F", 0.0),
    ],
    name="fine",
)
"""The eleven-band scale used by transcripts and student grade views."""


# public functions =====================================================================


def map_percentage_to_grade(
    percentage: float,
    scale: GradingScale = COARSE_SCALE,
    opts: typing.Optional[AggregationOptions] = None,
) -> GradeMapping:
    """Map a percentage to a letter grade and grade point.

    The first band (best first) whose lower bound is at most `percentage` is
    used. A percentage below every band gets the lowest band. Never raises.

    Parameters
    ----------
    percentage : float
        A percentage, nominally between 0 and 100.
    scale : GradingScale
        The scale to map onto. Default: :attr:`COARSE_SCALE`.
    opts : Optional[AggregationOptions]
        Controls whether out-of-range percentages are clamped first.

    Returns
    -------
    GradeMapping
        The letter grade and grade point.

    Example
    -------
    >>> map_percentage_to_grade(90, COARSE_SCALE)
    GradeMapping(letter='A', grade_point=4.0)
    >>> map_percentage_to_grade(89.999, COARSE_SCALE).letter
    'B'

    """
    if opts is None:
        opts = DEFAULT_OPTIONS

    percentage = clamp_percentage(percentage, opts.clamp_percentages)

    for band in scale:
        if percentage >= band.min_percentage:
            return GradeMapping(band.letter, band.grade_point)
    else:
        lowest = scale.lowest
        return GradeMapping(lowest.letter, lowest.grade_point)


def letter_grade(percentage: float, scale: GradingScale = COARSE_SCALE) -> str:
    """Shortcut for the letter of :func:`map_percentage_to_grade`."""
    return map_percentage_to_grade(percentage, scale).letter


def grade_point(percentage: float, scale: GradingScale = FINE_SCALE) -> float:
    """Shortcut for the grade point of :func:`map_percentage_to_grade`."""
    return map_percentage_to_grade(percentage, scale).grade_point


def map_percentages_to_letter_grades(
    percentages: pd.Series,
    scale: GradingScale = COARSE_SCALE,
    opts: typing.Optional[AggregationOptions] = None,
) -> pd.Series:
    """Map each percentage in a series to a letter grade.

    Parameters
    ----------
    percentages : pandas.Series
        A series containing percentages between 0 and 100.
    scale : GradingScale
        Default: :attr:`COARSE_SCALE`.
    opts : Optional[AggregationOptions]

    Returns
    -------
    pandas.Series
        A series with the same index containing the letter grades.

    """
    return percentages.apply(
        lambda p: map_percentage_to_grade(p, scale, opts).letter
    )
