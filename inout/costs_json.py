# inout/costs_json.py
"""
JSON persistence of the cost grid.

Document layout::

    {
      "metadata": {
        "k":     {"min": .., "max": .., "step": .., "values": [..]},
        "sigma": {"min": .., "max": .., "step": .., "values": [..]}
      },
      "data": [[{"affineCost": .., "nonlinCost": .., "lowerBound": .., "lambda": ..}, ...], ...]
    }

``data`` is indexed [k_index][sigma_index]; a cell whose computation failed
is stored as null.
"""
import json
from pathlib import Path
from typing import Any, Dict, Union

from core.evaluation_types import CELL_KEYS, CostResult
from core.exceptions import GridFormatError, ParameterError
from evaluation.grid import Axis
from evaluation.lookup import CostTable
from utils.logging_config import get_logger

logger = get_logger(__name__)


def to_json_dict(table: CostTable) -> Dict[str, Any]:
    """
    Convert the table to the persisted document.

    Args:
        table: A CostTable (see CostTable.from_sweep).

    Returns:
        A dictionary with axis metadata and the [k][sigma] cell grid.
    """
    return {
        "metadata": {
            "k": table.k_axis.to_metadata(),
            "sigma": table.sigma_axis.to_metadata(),
        },
        "data": [
            [cell.to_dict() if cell is not None else None for cell in row]
            for row in table.cells
        ],
    }


def write_costs(table: CostTable, path: Union[str, Path]) -> Path:
    """
    Write the table's JSON representation to a file, creating parent directories.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(to_json_dict(table), f, indent=2)
    logger.info("Cost grid written to %s", path)
    return path


def _axis_from_metadata(name: str, meta: Any) -> Axis:
    if not isinstance(meta, dict):
        raise GridFormatError(f"metadata.{name} must be an object")
    try:
        axis = Axis(name, meta["min"], meta["max"], meta["step"])
    except KeyError as e:
        raise GridFormatError(f"metadata.{name} is missing {e}") from e
    except (TypeError, ValueError, ParameterError) as e:
        raise GridFormatError(f"metadata.{name} is invalid: {e}") from e

    values = meta.get("values")
    if values is not None and len(values) != len(axis):
        raise GridFormatError(
            f"metadata.{name}.values has {len(values)} entries, axis implies {len(axis)}"
        )
    return axis


def _cell_from_json(cell: Any, i: int, j: int):
    if cell is None:
        return None
    try:
        return CostResult.from_dict(cell)
    except (KeyError, TypeError, ValueError) as e:
        raise GridFormatError(f"Cell ({i}, {j}) must hold {', '.join(CELL_KEYS)}: {e}") from e


def from_json_dict(doc: Any) -> CostTable:
    """
    Build a read-only CostTable from a persisted document.

    Raises:
        GridFormatError: On missing keys or a grid shape that disagrees with the axes.
    """
    if not isinstance(doc, dict) or "metadata" not in doc or "data" not in doc:
        raise GridFormatError("Cost grid must contain 'metadata' and 'data'")
    meta = doc["metadata"]
    if not isinstance(meta, dict):
        raise GridFormatError("metadata must be an object")
    k_axis = _axis_from_metadata("k", meta.get("k"))
    sigma_axis = _axis_from_metadata("sigma", meta.get("sigma"))

    data = doc["data"]
    if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
        raise GridFormatError("data must be a list of rows")
    cells = [[_cell_from_json(c, i, j) for j, c in enumerate(row)] for i, row in enumerate(data)]
    return CostTable(k_axis, sigma_axis, cells)


def read_costs(path: Union[str, Path]) -> CostTable:
    """
    Load a persisted cost grid.

    Raises:
        GridFormatError: If the file cannot be parsed or fails validation.
    """
    path = Path(path)
    try:
        with open(path) as f:
            doc = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise GridFormatError(f"Failed to read cost grid '{path}': {e}") from e
    return from_json_dict(doc)
