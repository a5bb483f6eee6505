# evaluation/grid.py
"""
Sweep the cost model over a quantized (k, sigma) grid.

Every cell is independent, so rows of the grid are farmed out to a process
pool and gathered back in index order.
"""
import math
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from core.cost_model import calculate_costs
from core.evaluation_types import CostResult, EvaluationPoint
from core.exceptions import NotTabulatedError, ParameterError, WitsenhausenError
from core.numeric.context import DEFAULT_SETTINGS, NumericSettings
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Decimals kept on axis values; strips the noise of min + i*step
AXIS_DECIMALS = 10


def round_half_up(x: float) -> int:
    """Nearest integer with ties rounded up (no banker's rounding)."""
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class Axis:
    """
    Evenly spaced parameter axis min, min+step, ..., max.

    Index of a value v is round((v - min) / step).
    """
    name: str
    min: float
    max: float
    step: float

    def __post_init__(self):
        for attr in ("min", "max", "step"):
            value = float(getattr(self, attr))
            if not math.isfinite(value):
                raise ParameterError(f"Axis '{self.name}': {attr} must be finite")
            object.__setattr__(self, attr, value)
        if self.step <= 0:
            raise ParameterError(f"Axis '{self.name}': step must be > 0")
        if self.max < self.min:
            raise ParameterError(f"Axis '{self.name}': max must be >= min")

    def __len__(self) -> int:
        return round_half_up((self.max - self.min) / self.step) + 1

    @property
    def values(self) -> List[float]:
        grid = self.min + self.step * np.arange(len(self))
        return [float(v) for v in np.round(grid, AXIS_DECIMALS)]

    def index_of(self, value: float) -> int:
        """
        Nearest index of value on this axis.

        Raises:
            NotTabulatedError: if the index falls outside the axis.
        """
        if not math.isfinite(value):
            raise NotTabulatedError(f"{self.name}={value} is not a finite value")
        idx = round_half_up((value - self.min) / self.step)
        if not 0 <= idx < len(self):
            raise NotTabulatedError(
                f"{self.name}={value} is outside the tabulated range [{self.min}, {self.max}]"
            )
        return idx

    def to_metadata(self) -> Dict[str, object]:
        return {"min": self.min, "max": self.max, "step": self.step, "values": self.values}


def _evaluate_point(i: int, j: int, k: float, sigma: float,
                    settings: NumericSettings, precision: int) -> EvaluationPoint:
    try:
        result = calculate_costs(k, sigma, settings).rounded(precision)
        return EvaluationPoint(i, j, k, sigma, result=result)
    except WitsenhausenError as e:
        logger.error("Error at k=%g sigma=%g: %s", k, sigma, e)
        return EvaluationPoint(i, j, k, sigma, error=str(e))


def evaluate_row(i: int, k: float, sigmas: Sequence[float],
                 settings: NumericSettings, precision: int) -> List[EvaluationPoint]:
    """Evaluate one k row of the grid."""
    return [_evaluate_point(i, j, k, s, settings, precision) for j, s in enumerate(sigmas)]


@dataclass
class SweepResult:
    """
    Grid of sweep results indexed [k_index][sigma_index].

    Cells whose evaluation failed are None and have a matching entry in errors.
    """
    k_axis: Axis
    sigma_axis: Axis
    data: List[List[Optional[CostResult]]]
    errors: List[str] = field(default_factory=list)
    stats: Dict[str, float] = field(default_factory=dict)

    def to_dataframe(self):
        import pandas as pd
        rows = []
        for i, k in enumerate(self.k_axis.values):
            for j, sigma in enumerate(self.sigma_axis.values):
                cell = self.data[i][j]
                row = {"k_index": i, "sigma_index": j, "k": k, "sigma": sigma}
                if cell is not None:
                    row.update({
                        "lambda": cell.lam,
                        "affine_cost": cell.affine_cost,
                        "nonlin_cost": cell.nonlin_cost,
                        "lower_bound": cell.lower_bound,
                    })
                else:
                    row.update({"lambda": None, "affine_cost": None,
                                "nonlin_cost": None, "lower_bound": None})
                rows.append(row)
        return pd.DataFrame(rows)

    @property
    def counterexample_cells(self) -> int:
        return sum(1 for row in self.data for c in row if c is not None and c.is_counterexample)


def sweep(k_axis: Axis, sigma_axis: Axis,
          settings: NumericSettings = DEFAULT_SETTINGS,
          precision: int = 6,
          workers: Optional[int] = None) -> SweepResult:
    """
    Evaluate the cost model on every (k, sigma) cell of the two axes.

    Args:
        k_axis: Cost weight axis (rows).
        sigma_axis: Initial standard deviation axis (columns).
        settings: Numeric settings passed to every evaluation.
        precision: Decimal digits kept on stored values.
        workers: Worker processes; None uses the CPU count, 1 runs in-process.
    """
    ks, sigmas = k_axis.values, sigma_axis.values
    logger.info("k axis: %d points [%g, %g] step %g", len(ks), k_axis.min, k_axis.max, k_axis.step)
    logger.info("sigma axis: %d points [%g, %g] step %g",
                len(sigmas), sigma_axis.min, sigma_axis.max, sigma_axis.step)
    logger.info("Total evaluations: %d", len(ks) * len(sigmas))

    data: List[List[Optional[CostResult]]] = []
    errors: List[str] = []
    start_time = time.time()

    def collect(i: int, row: List[EvaluationPoint]) -> None:
        if i % 10 == 0:
            logger.info("Processing k = %g (%d%%)", ks[i], round(100 * i / len(ks)))
        for point in row:
            if point.error:
                errors.append(f"k={point.k}, sigma={point.sigma}: {point.error}")
        data.append([point.result for point in row])

    if workers == 1:
        for i, k in enumerate(ks):
            collect(i, evaluate_row(i, k, sigmas, settings, precision))
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(evaluate_row, i, k, sigmas, settings, precision)
                       for i, k in enumerate(ks)]
            # futures are consumed in submission order, so rows stay in index order
            for i, future in enumerate(futures):
                collect(i, future.result())

    elapsed = time.time() - start_time
    logger.info("Grid completed in %.1f s", elapsed)
    stats = {"points": len(ks) * len(sigmas), "elapsed": elapsed}
    return SweepResult(k_axis, sigma_axis, data, errors, stats)
