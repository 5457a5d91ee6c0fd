"""
Sigmoid easing curves.

Every spatial effect converts its linear progress into an eased value
with ``scurve`` so motion accelerates into the middle of a phase and
settles at both ends.
"""

import math


def sigmoid(x: float, steepness: float) -> float:
    """Logistic function ``1 / (1 + exp(-x * steepness))``."""
    z = -x * steepness
    # exp overflows past ~709
    if z > 700.0:
        return 0.0
    return 1.0 / (1.0 + math.exp(z))


def scurve(value: float, steepness: float) -> float:
    """
    Interpolate ``value`` in [0, 1] along a normalized sigmoid.

    The logistic curve is centred on 0.5 and rescaled so that
    ``scurve(0) == 0``, ``scurve(0.5) == 0.5`` and ``scurve(1) == 1``
    for any positive steepness. Larger steepness values give a sharper
    transition around the midpoint.

    Args:
        value: Linear progress, nominally in [0, 1].
        steepness: Slope of the logistic curve (> 0).

    Returns:
        Eased progress in [0, 1].
    """
    if steepness <= 0:
        raise ValueError(f"steepness must be positive, got {steepness}")

    # sigmoid(x, s) - 0.5 == tanh(x * s / 2) / 2, and tanh is exactly odd,
    # so both endpoints come out as exact 0.0 and 1.0.
    y = math.tanh((value - 0.5) * steepness * 0.5)
    v = math.tanh(0.5 * steepness * 0.5)
    return y / v * 0.5 + 0.5
