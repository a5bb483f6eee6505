# core/evaluation_types.py
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Persisted cell keys, in the order they are written.
CELL_KEYS = ("affineCost", "nonlinCost", "lowerBound", "lambda")


@dataclass(frozen=True)
class CostResult:
    """
    Costs of the two strategies and the lower bound at one (k, sigma).

    Attributes:
        lam: Optimal affine gain (u = lam * x).
        affine_cost: Expected cost of the best affine strategy.
        nonlin_cost: Expected cost of the two-level signaling strategy.
        lower_bound: Lower bound on the cost of any strategy.
        gain_found: False when the gain equation had no sign change on
            [0, sigma] and lam fell back to 0.
    """
    lam: float
    affine_cost: float
    nonlin_cost: float
    lower_bound: float
    gain_found: bool = True

    @property
    def is_counterexample(self) -> bool:
        """True when signaling beats the best affine strategy."""
        return self.nonlin_cost < self.affine_cost

    @property
    def improvement(self) -> float:
        """Relative saving of signaling over the affine strategy."""
        if self.affine_cost == 0:
            return 0.0
        return 1.0 - self.nonlin_cost / self.affine_cost

    def rounded(self, digits: int) -> "CostResult":
        return CostResult(
            lam=round(self.lam, digits),
            affine_cost=round(self.affine_cost, digits),
            nonlin_cost=round(self.nonlin_cost, digits),
            lower_bound=round(self.lower_bound, digits),
            gain_found=self.gain_found,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "affineCost": self.affine_cost,
            "nonlinCost": self.nonlin_cost,
            "lowerBound": self.lower_bound,
            "lambda": self.lam,
        }

    @classmethod
    def from_dict(cls, cell: Mapping[str, Any]) -> "CostResult":
        return cls(
            lam=float(cell["lambda"]),
            affine_cost=float(cell["affineCost"]),
            nonlin_cost=float(cell["nonlinCost"]),
            lower_bound=float(cell["lowerBound"]),
        )


@dataclass
class EvaluationPoint:
    """
    One cell of a grid sweep.

    Attributes:
        k_index: Row index on the k axis.
        sigma_index: Column index on the sigma axis.
        k: Cost weight at this cell.
        sigma: Initial standard deviation at this cell.
        result: Computed costs (None if the evaluation failed).
        error: Error message if the evaluation failed.
    """
    k_index: int
    sigma_index: int
    k: float
    sigma: float
    result: Optional[CostResult] = None
    error: Optional[str] = None
