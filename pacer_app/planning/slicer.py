"""Session slicing into fixed-width intervals"""

import math

from ..data.models import Slice
from ..utils.time import TimeLike, add_minutes, as_time_of_day, minutes_between


def slice_session(start: TimeLike, end: TimeLike, step_minutes: int) -> list[Slice]:
    """
    Partition a session window into contiguous intervals.

    n = max(1, ceil(T / step)) where T = max(0, end - start); the last slice
    ends exactly at `end` and absorbs any remainder. A window whose end is
    before its start has T = 0 and yields one zero-duration slice.

    Args:
        start: Session start time of day
        end: Session end time of day
        step_minutes: Interval width in minutes

    Returns:
        Ordered list of slices
    """
    start_t = as_time_of_day(start)
    end_t = as_time_of_day(end)
    step = step_minutes if step_minutes and step_minutes > 0 else 1

    total = max(0.0, minutes_between(start_t, end_t))
    n = max(1, math.ceil(total / step))

    slices = []
    for i in range(n):
        s = add_minutes(start_t, i * step)
        e = end_t if i == n - 1 else add_minutes(start_t, (i + 1) * step)
        slices.append(Slice(
            start=s,
            end=e,
            duration_minutes=max(0.0, minutes_between(s, e)),
        ))
    return slices
