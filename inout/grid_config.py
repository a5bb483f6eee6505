# inout/grid_config.py
"""
Load and validate YAML grid configurations.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from cerberus import Validator

from core.exceptions import ConfigError, ParameterError
from core.numeric.context import NumericSettings
from evaluation.grid import Axis
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "grid.yml"

_AXIS_SCHEMA = {
    'type': 'dict',
    'required': True,
    'schema': {
        'min': {'type': 'float', 'required': True, 'coerce': float},
        'max': {'type': 'float', 'required': True, 'coerce': float},
        'step': {'type': 'float', 'required': True, 'coerce': float, 'min': 0.0},
    }
}

def _optional(kind: str) -> Dict[str, Any]:
    rule = {'required': False, 'nullable': True, 'min': 0}
    if kind == 'float':
        rule.update({'type': 'float', 'coerce': float})
    else:
        rule['type'] = 'integer'
    return rule

# Cerberus schema for grid configuration
GRID_SCHEMA = {
    'grid': {
        'type': 'dict',
        'required': True,
        'schema': {
            'k': _AXIS_SCHEMA,
            'sigma': _AXIS_SCHEMA,
        }
    },
    'precision': {'type': 'integer', 'min': 0, 'max': 15, 'default': 6},
    'workers': {'type': 'integer', 'min': 1, 'nullable': True, 'default': None},
    'numerics': {
        'type': 'dict',
        'required': False,
        'nullable': True,
        'default': None,
        'schema': {
            'h_window': _optional('float'),
            'h_intervals': _optional('integer'),
            'vk_bracket': _optional('float'),
            'lower_bound_window': _optional('float'),
            'lower_bound_intervals': _optional('integer'),
            'root_tol': _optional('float'),
            'root_max_iter': _optional('integer'),
            'golden_tol': _optional('float'),
        }
    },
}


@dataclass(frozen=True)
class GridConfig:
    k_axis: Axis
    sigma_axis: Axis
    precision: int = 6
    workers: Optional[int] = None
    numerics: NumericSettings = NumericSettings()


def validate_grid_config(raw: Any) -> GridConfig:
    """
    Validate a parsed configuration document and build a GridConfig.

    Raises:
        ConfigError: If the document fails schema or domain validation.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"Grid configuration must be a mapping, got {type(raw).__name__}")
    validator = Validator(GRID_SCHEMA, allow_unknown=False)
    if not validator.validate(raw):
        logger.error("Grid schema validation errors: %s", validator.errors)
        raise ConfigError(f"Grid schema validation errors: {validator.errors}")
    doc: Dict[str, Any] = validator.document

    try:
        return GridConfig(
            k_axis=Axis("k", **doc['grid']['k']),
            sigma_axis=Axis("sigma", **doc['grid']['sigma']),
            precision=doc['precision'],
            workers=doc['workers'],
            numerics=NumericSettings.from_mapping(doc.get('numerics')),
        )
    except ParameterError as e:
        raise ConfigError(f"Invalid grid configuration: {e}") from e


def load_grid_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> GridConfig:
    """
    Load a YAML grid configuration file, validate its schema, and return a GridConfig.

    Raises:
        ConfigError: If file read fails or validation fails.
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read grid YAML '{path}': {e}") from e
    return validate_grid_config(raw)
