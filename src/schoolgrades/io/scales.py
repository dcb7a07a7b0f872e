"""Read and write grading scales.

A scale file is a simple CSV with no headers. Each row is one band:
the letter grade, the lower bound, the upper bound and the grade point.
The order of the rows matters! Bands are listed best first.

"""

from typing import Optional, Union
import pathlib as _pathlib

from ..scales import Band, GradingScale


def write(path: Union[str, _pathlib.Path], scale: GradingScale):
    """Writes a grading scale to disk.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale will be written.
    scale : GradingScale
        The scale to write.

    """
    path = _pathlib.Path(path)

    with path.open("w") as fileobj:
        for band in scale:
            fileobj.write(
                f"{band.letter},{band.min_percentage},{band.max_percentage},{band.grade_point}\n"
            )


def read(path: Union[str, _pathlib.Path], name: Optional[str] = None) -> GradingScale:
    """Reads a grading scale from the file.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale is stored.
    name : Optional[str]
        A display name for the scale. Default: the file's stem.

    Returns
    -------
    GradingScale

    Raises
    ------
    ValueError
        If a line is malformed, or if the bands do not form a valid scale.

    """
    path = _pathlib.Path(path)

    with path.open() as fileobj:
        lines = [line for line in fileobj.readlines() if line.strip()]

    def parse_line(line):
        try:
            letter, lower, upper, points = line.strip().split(",")
        except ValueError:
            raise ValueError(f"Malformed scale line: {line!r}") from None
        return Band(float(lower), float(upper), letter, float(points))

    return GradingScale(map(parse_line, lines), name=name or path.stem)
