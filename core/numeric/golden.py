# core/numeric/golden.py
"""
Golden-section search for the minimizer of a unimodal function.

If f has several local minima on [a, b] the search settles in one of them,
not necessarily the global one.
"""
import math
from typing import Callable

# 1/phi, the fraction of the bracket kept at every step
INV_PHI = (math.sqrt(5.0) - 1.0) / 2.0


def minimize(f: Callable[[float], float], a: float, b: float, tol: float = 1e-4) -> float:
    """
    Shrink [a, b] around the lower of two golden probes until it is narrower
    than tol and return the bracket midpoint.

    Each step reuses the surviving probe, so f is called once per iteration.
    """
    c = b - INV_PHI * (b - a)
    d = a + INV_PHI * (b - a)
    fc, fd = f(c), f(d)

    while abs(b - a) > tol:
        if fc < fd:
            b, d, fd = d, c, fc
            c = b - INV_PHI * (b - a)
            fc = f(c)
        else:
            a, c, fc = c, d, fd
            d = a + INV_PHI * (b - a)
            fd = f(d)
    return (a + b) / 2.0
