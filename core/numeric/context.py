# core/numeric/context.py
from __future__ import annotations
import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

from core.exceptions import ParameterError


def require_positive(name: str, value: Any) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise ParameterError(f"{name} must be a real number, got {value!r}") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise ParameterError(f"{name} must be finite and > 0, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class ParameterPoint:
    """
    Immutable, validated (k, sigma) pair.

    * Hashable → usable as a cache key.
    * Picklable → ships cheaply to worker processes.
    """
    k: float
    sigma: float

    def __post_init__(self):
        object.__setattr__(self, "k", require_positive("k", self.k))
        object.__setattr__(self, "sigma", require_positive("sigma", self.sigma))


@dataclass(frozen=True)
class NumericSettings:
    """
    Discretisation and truncation choices of the cost model.

    The windows are empirical: they are adequate for k in [0.01, 1] and
    sigma in [0.5, 10] and must be re-checked for wider ranges.
    """
    h_window: float = 10.0               # h(a) integrates y over [-w, w]
    h_intervals: int = 200
    vk_bracket: float = 20.0             # Vk minimises a over [-b, b]
    lower_bound_window: float = 5.0      # outer integral over z in [0, w]
    lower_bound_intervals: int = 50
    root_tol: float = 1e-6
    root_max_iter: int = 100
    golden_tol: float = 1e-4

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type == "int":
                if (isinstance(value, bool) or not isinstance(value, (int, float))
                        or int(value) != value or value < 1):
                    raise ParameterError(f"{f.name} must be a positive integer, got {value!r}")
                object.__setattr__(self, f.name, int(value))
            else:
                object.__setattr__(self, f.name, require_positive(f.name, value))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "NumericSettings":
        """Build settings from a (validated) config mapping, ignoring None values."""
        if not data:
            return cls()
        return cls(**{k: v for k, v in data.items() if v is not None})


DEFAULT_SETTINGS = NumericSettings()
