# evaluation/lookup.py
"""
Read-only nearest-cell lookup into a generated cost grid.
"""
from typing import Iterable, Optional, Sequence, Tuple

import pandas as pd

from core.evaluation_types import CostResult
from core.exceptions import GridFormatError, NotTabulatedError
from evaluation.grid import Axis, SweepResult

_SLICE_COLUMNS = ["affine_cost", "nonlin_cost", "lower_bound"]


class CostTable:
    """
    Immutable cost grid indexed [k_index][sigma_index].

    Lookups snap (k, sigma) to the nearest tabulated cell. Points outside the
    axes and cells whose computation failed raise NotTabulatedError instead of
    returning zero costs.
    """
    __slots__ = ("_k_axis", "_sigma_axis", "_cells")

    def __init__(self, k_axis: Axis, sigma_axis: Axis,
                 cells: Sequence[Sequence[Optional[CostResult]]]):
        if len(cells) != len(k_axis):
            raise GridFormatError(f"Expected {len(k_axis)} k rows, got {len(cells)}")
        for i, row in enumerate(cells):
            if len(row) != len(sigma_axis):
                raise GridFormatError(
                    f"Row {i}: expected {len(sigma_axis)} sigma cells, got {len(row)}"
                )
        self._k_axis = k_axis
        self._sigma_axis = sigma_axis
        self._cells: Tuple[Tuple[Optional[CostResult], ...], ...] = tuple(
            tuple(row) for row in cells
        )

    @classmethod
    def from_sweep(cls, result: SweepResult) -> "CostTable":
        return cls(result.k_axis, result.sigma_axis, result.data)

    @property
    def k_axis(self) -> Axis:
        return self._k_axis

    @property
    def sigma_axis(self) -> Axis:
        return self._sigma_axis

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self._k_axis), len(self._sigma_axis)

    @property
    def cells(self) -> Tuple[Tuple[Optional[CostResult], ...], ...]:
        return self._cells

    def cell(self, k_index: int, sigma_index: int) -> CostResult:
        """Cell by index; raises NotTabulatedError if out of bounds or failed."""
        rows, cols = self.shape
        if not (0 <= k_index < rows and 0 <= sigma_index < cols):
            raise NotTabulatedError(f"Cell ({k_index}, {sigma_index}) is outside a {rows}x{cols} table")
        result = self._cells[k_index][sigma_index]
        if result is None:
            raise NotTabulatedError(f"Cell ({k_index}, {sigma_index}) has no data")
        return result

    def lookup(self, k: float, sigma: float) -> CostResult:
        """Costs at the cell nearest to (k, sigma)."""
        return self.cell(self._k_axis.index_of(k), self._sigma_axis.index_of(sigma))

    def get(self, k: float, sigma: float,
            default: Optional[CostResult] = None) -> Optional[CostResult]:
        try:
            return self.lookup(k, sigma)
        except NotTabulatedError:
            return default

    def sigma_slice(self, k: float, sigmas: Optional[Iterable[float]] = None) -> pd.DataFrame:
        """Costs against sigma at fixed k; untabulated sigmas are skipped."""
        i = self._k_axis.index_of(k)
        rows = []
        for s in (self._sigma_axis.values if sigmas is None else sigmas):
            try:
                c = self.cell(i, self._sigma_axis.index_of(s))
            except NotTabulatedError:
                continue
            rows.append(_slice_row("sigma", s, c))
        return pd.DataFrame(rows, columns=["sigma"] + _SLICE_COLUMNS)

    def k_slice(self, sigma: float, ks: Optional[Iterable[float]] = None) -> pd.DataFrame:
        """Costs against k at fixed sigma; untabulated ks are skipped."""
        j = self._sigma_axis.index_of(sigma)
        rows = []
        for kv in (self._k_axis.values if ks is None else ks):
            try:
                c = self.cell(self._k_axis.index_of(kv), j)
            except NotTabulatedError:
                continue
            rows.append(_slice_row("k", kv, c))
        return pd.DataFrame(rows, columns=["k"] + _SLICE_COLUMNS)


def _slice_row(name: str, x: float, c: CostResult) -> dict:
    return {name: x, "affine_cost": c.affine_cost, "nonlin_cost": c.nonlin_cost,
            "lower_bound": c.lower_bound}
