# core/numeric/quadrature.py
"""
Composite Simpson quadrature over a finite interval.
"""
from typing import Callable

import numpy as np


def simpson_weights(n: int) -> np.ndarray:
    """
    Node weights of the composite rule, before the h/3 factor.

    Endpoints carry 1; interior node i (1-based) carries 4 if i is odd and
    2 if i is even. For odd n the pattern is applied unchanged, so the rule
    only reaches its nominal order when n is even.
    """
    w = np.where(np.arange(n + 1) % 2 == 1, 4.0, 2.0)
    w[0] = w[-1] = 1.0
    return w


def integrate(
    f: Callable,
    lo: float,
    hi: float,
    n: int = 100,
    vectorized: bool = False,
) -> float:
    """
    Approximate the integral of f over [lo, hi] with n equal subintervals.

    Args:
        f: Scalar integrand. With ``vectorized=True`` it is called once with
           the array of all n+1 nodes and must return an array of values.
        lo: Lower limit.
        hi: Upper limit (callers guarantee hi > lo).
        n: Number of subintervals; pass an even value for nominal accuracy.
        vectorized: Evaluate the integrand on the whole node array at once.

    Returns:
        The Simpson estimate as a float.
    """
    h = (hi - lo) / n
    if vectorized:
        x = lo + h * np.arange(n + 1)
        return float(np.dot(simpson_weights(n), f(x)) * h / 3.0)

    total = f(lo) + f(hi)
    for i in range(1, n):
        total += f(lo + i * h) * (4.0 if i % 2 == 1 else 2.0)
    return float(total * h / 3.0)
