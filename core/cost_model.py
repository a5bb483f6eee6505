# core/cost_model.py
"""
Expected costs of Witsenhausen's two-stage control problem.

For cost weight k and initial standard deviation sigma the module computes

* the best affine strategy u = lam * x, whose gain solves
  (t - sigma)(1 + t^2)^2 + t/k^2 = 0 with t = sigma * lam;
* the two-level signaling strategy that drives the state to +/- sigma;
* the lower bound E[Vk(xi)], xi ~ N(0, sigma^2), where
  Vk(xi) = min_a k^2 (a - xi)^2 + h(a).

All integrals are composite Simpson estimates over truncated windows and
Vk is found by golden-section search, so each lower-bound evaluation runs
one minimisation per quadrature node.
"""
import math
from typing import Callable

import numpy as np
import pandas as pd

from core.evaluation_types import CostResult
from core.numeric.context import DEFAULT_SETTINGS, NumericSettings, ParameterPoint, require_positive
from core.numeric.golden import minimize
from core.numeric.quadrature import integrate
from core.numeric.roots import RootResult, find_root
from utils.logging_config import get_logger

logger = get_logger(__name__)

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)
_SIGNALING_ENERGY = 1.0 - math.sqrt(2.0 / math.pi)


def phi(z: float) -> float:
    """Standard normal density."""
    return _INV_SQRT_2PI * math.exp(-0.5 * z * z)


def calculate_h(a: float, settings: NumericSettings = DEFAULT_SETTINGS) -> float:
    """
    h(a) = a^2 exp(-a^2/2) * integral of exp(-y^2/2) / cosh(a y) dy.

    h(0) is defined as 0. h is even in a.
    """
    if a == 0:
        return 0.0
    w = settings.h_window
    integral = integrate(
        lambda y: np.exp(-0.5 * y * y) / np.cosh(a * y),
        -w, w, settings.h_intervals, vectorized=True,
    )
    return a * a * math.exp(-0.5 * a * a) * integral


# ---------------------------------------------------------------------------
# Affine strategy
# ---------------------------------------------------------------------------

def gain_equation(k: float, sigma: float) -> Callable[[float], float]:
    """Stationarity condition of the affine cost in t = sigma * lam."""
    k2 = k * k
    return lambda t: (t - sigma) * (1.0 + t * t) ** 2 + t / k2


def solve_affine_gain(k: float, sigma: float,
                      settings: NumericSettings = DEFAULT_SETTINGS) -> RootResult:
    """Bisect the gain equation on [0, sigma]; the root is t, not lam."""
    p = ParameterPoint(k, sigma)
    return find_root(gain_equation(p.k, p.sigma), 0.0, p.sigma,
                     tol=settings.root_tol, max_iter=settings.root_max_iter)


def affine_cost(k: float, sigma: float, lam: float) -> float:
    """k^2 sigma^2 (1 - lam)^2 + sigma^2 lam^2 / (1 + sigma^2 lam^2)."""
    s2l2 = sigma * sigma * lam * lam
    return k * k * sigma * sigma * (1.0 - lam) ** 2 + s2l2 / (1.0 + s2l2)


# ---------------------------------------------------------------------------
# Signaling strategy
# ---------------------------------------------------------------------------

def nonlinear_cost(k: float, sigma: float,
                   settings: NumericSettings = DEFAULT_SETTINGS) -> float:
    """Energy to push x to sigma*sign(x), plus the second-stage error h(sigma)."""
    p = ParameterPoint(k, sigma)
    first_term = 2.0 * p.k * p.k * p.sigma * p.sigma * _SIGNALING_ENERGY
    return first_term + calculate_h(p.sigma, settings)


# ---------------------------------------------------------------------------
# Lower bound
# ---------------------------------------------------------------------------

def calculate_vk(xi: float, k: float, settings: NumericSettings = DEFAULT_SETTINGS) -> float:
    """Vk(xi) = min over a in [-b, b] of k^2 (a - xi)^2 + h(a)."""
    k2 = k * k

    def cost(a):
        return k2 * (a - xi) ** 2 + calculate_h(a, settings)

    b = settings.vk_bracket
    return cost(minimize(cost, -b, b, tol=settings.golden_tol))


def lower_bound(k: float, sigma: float,
                settings: NumericSettings = DEFAULT_SETTINGS) -> float:
    """
    2 * integral over z in [0, w] of phi(z) Vk(sigma z).

    The integrand is even in z, so only the positive half is integrated.
    """
    p = ParameterPoint(k, sigma)
    integral = integrate(
        lambda z: phi(z) * calculate_vk(p.sigma * z, p.k, settings),
        0.0, settings.lower_bound_window, settings.lower_bound_intervals,
    )
    return 2.0 * integral


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def calculate_costs(k: float, sigma: float,
                    settings: NumericSettings = DEFAULT_SETTINGS) -> CostResult:
    """
    Evaluate the affine cost, the signaling cost and the lower bound.

    Raises:
        ParameterError: if k or sigma is not finite and positive.
    """
    p = ParameterPoint(k, sigma)

    gain = solve_affine_gain(p.k, p.sigma, settings)
    if not gain.found:
        logger.warning("Gain equation not bracketed on [0, %g] for k=%g; using lambda=0",
                       p.sigma, p.k)
    elif not gain.converged:
        logger.debug("Bisection hit %d iterations for k=%g sigma=%g",
                     gain.iterations, p.k, p.sigma)
    lam = gain.value_or(0.0) / p.sigma

    result = CostResult(
        lam=lam,
        affine_cost=affine_cost(p.k, p.sigma, lam),
        nonlin_cost=nonlinear_cost(p.k, p.sigma, settings),
        lower_bound=lower_bound(p.k, p.sigma, settings),
        gain_found=gain.found,
    )
    logger.debug("k=%g sigma=%g -> %s", p.k, p.sigma, result)
    return result


def strategy_curves(sigma: float, lam: float, multiplier: float = 2.5,
                    points: int = 101) -> pd.DataFrame:
    """
    Tabulate the first-stage control laws over [-m*sigma, m*sigma].

    Columns: x, affine (lam*x), signaling (+sigma for x > 0, else -sigma),
    identity (x).
    """
    sigma = require_positive("sigma", sigma)
    span = require_positive("multiplier", multiplier) * sigma
    x = np.linspace(-span, span, points)
    return pd.DataFrame({
        "x": x,
        "affine": lam * x,
        "signaling": np.where(x > 0, sigma, -sigma),
        "identity": x,
    })
