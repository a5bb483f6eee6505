# utils/logging_config.py
import logging
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger for a grid run.

    Args:
        level: Logging level, numeric or by name (e.g. "DEBUG").
        log_file: Optional path that receives a copy of the console output.
    """
    if isinstance(level, str):
        name, level = level, logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {name}")

    root = logging.getLogger()
    root.setLevel(level)

    # Re-running setup must not duplicate output
    if root.hasHandlers():
        root.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(formatter)
        root.addHandler(fh)

def get_logger(name: str) -> logging.Logger:
    """
    Module logger; level and handlers come from the root configured by setup_logging.
    """
    return logging.getLogger(name)
