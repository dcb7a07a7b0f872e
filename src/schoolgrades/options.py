"""Options configuring grade aggregation."""

import dataclasses


@dataclasses.dataclass
class AggregationOptions:
    """Configures the behavior of the aggregation functions.

    Attributes
    ----------
    clamp_percentages: bool
        If `True`, percentages outside of [0, 100] are clamped into range
        (and a warning is logged) before they are averaged or mapped to a letter
        grade. If `False`, they pass through unchanged
        and fall through to the boundary bands of the scale. Default: `True`.

    top_n: int
        How many subjects are reported as strengths and as weaknesses.
        Default: 3.

    pass_threshold: float
        The percentage at or above which a grade counts as a pass in
        pass-rate summaries. Default: 50.

    default_credit: float
        The credit used for a subject whose credit is unknown. Default: 1.

    """

    clamp_percentages: bool = True
    top_n: int = 3
    pass_threshold: float = 50.0
    default_credit: float = 1.0


DEFAULT_OPTIONS = AggregationOptions()
