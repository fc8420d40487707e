"""Planning engine: session slicing, weight curves and plan building"""

from .builder import (
    apply_cap,
    build_participation_plan,
    build_plan,
    build_time_sliced_plan,
    shave_excess,
    target_participation_rate,
)
from .slicer import slice_session
from .weights import equal_weights, ucurve_weights, weights

__all__ = [
    "build_plan",
    "build_time_sliced_plan",
    "build_participation_plan",
    "apply_cap",
    "shave_excess",
    "target_participation_rate",
    "slice_session",
    "weights",
    "equal_weights",
    "ucurve_weights",
]
