# core/numeric/roots.py
"""
Bisection root finding with a tagged result.

A bracket without a sign change is reported as ``NOT_BRACKETED`` rather than
as a numeric sentinel, so callers decide how to degrade.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class RootStatus(Enum):
    FOUND = "found"
    NOT_BRACKETED = "not_bracketed"


@dataclass(frozen=True)
class RootResult:
    """
    Outcome of a bisection run.

    Attributes:
        status: FOUND when the bracket had a sign change, else NOT_BRACKETED.
        root: Last midpoint, or None when not bracketed.
        converged: True if |f(root)| dropped below the tolerance before the
            iteration cap; False means the root is approximate only.
        iterations: Number of bisection steps taken.
    """
    status: RootStatus
    root: Optional[float] = None
    converged: bool = False
    iterations: int = 0

    @property
    def found(self) -> bool:
        return self.status is RootStatus.FOUND

    def value_or(self, fallback: float) -> float:
        return self.root if self.found else fallback


def find_root(
    f: Callable[[float], float],
    low: float,
    high: float,
    tol: float = 1e-6,
    max_iter: int = 100,
) -> RootResult:
    """
    Bisect f on [low, high] until |f(mid)| < tol or max_iter steps.

    The last midpoint is returned even when the cap is hit.
    """
    f_low = f(low)
    if f_low * f(high) > 0:
        return RootResult(RootStatus.NOT_BRACKETED)

    mid = low
    for it in range(max_iter):
        mid = (low + high) / 2.0
        f_mid = f(mid)
        if abs(f_mid) < tol:
            return RootResult(RootStatus.FOUND, mid, True, it)
        if f_low * f_mid < 0:
            high = mid
        else:
            low, f_low = mid, f_mid
    return RootResult(RootStatus.FOUND, mid, False, max_iter)
