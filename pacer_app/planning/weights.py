"""Intraday weight curves"""

from ..data.models import Curve


def equal_weights(n: int) -> list[float]:
    """Flat profile: every slice gets 1/n."""
    if n <= 0:
        return []
    return [1.0 / n] * n


def ucurve_weights(n: int) -> list[float]:
    """
    Symmetric profile proportional to 0.6 + 0.8 * (1 - |i - mid| / mid)

    mid = (n - 1) / 2, taken as 1 when n == 1. The curve peaks at the centre
    slice and tapers toward both edges; weights are normalized to sum to 1.
    """
    if n <= 0:
        return []

    mid = (n - 1) / 2
    raw = [0.6 + 0.8 * (1 - abs(i - mid) / (mid or 1)) for i in range(n)]
    total = sum(raw) or 1.0
    return [w / total for w in raw]


def weights(curve: Curve, n: int) -> list[float]:
    """Normalized weight vector for the requested curve."""
    if Curve(curve) == Curve.UCURVE:
        return ucurve_weights(n)
    return equal_weights(n)
