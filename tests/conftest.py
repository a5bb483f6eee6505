import logging
import pytest
from core.evaluation_types import CostResult
from evaluation.grid import Axis, sweep
from evaluation.lookup import CostTable

@pytest.fixture
def small_axes():
    # Two k rows by two sigma columns: cheap enough to sweep in every run.
    return Axis("k", 0.2, 0.4, 0.2), Axis("sigma", 1.0, 3.0, 2.0)

@pytest.fixture
def small_sweep(small_axes):
    k_axis, sigma_axis = small_axes
    return sweep(k_axis, sigma_axis, workers=1)

@pytest.fixture
def synthetic_table():
    """
    3x3 table with recognisable values: affine_cost = 10*i + j, lambda = i + j/10,
    and the centre cell left empty as if its computation had failed.
    """
    k_axis = Axis("k", 0.1, 0.3, 0.1)
    sigma_axis = Axis("sigma", 1.0, 2.0, 0.5)
    cells = []
    for i in range(3):
        row = []
        for j in range(3):
            if (i, j) == (1, 1):
                row.append(None)
                continue
            row.append(CostResult(lam=i + j / 10, affine_cost=10.0 * i + j,
                                  nonlin_cost=5.0 * i + j, lower_bound=1.0 * i))
        cells.append(row)
    return CostTable(k_axis, sigma_axis, cells)

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog

@pytest.fixture
def restore_root_logger():
    """Undo setup_logging so later tests keep pytest's capture handlers."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
