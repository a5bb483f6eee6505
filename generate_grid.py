#!/usr/bin/env python
import argparse
import logging
import sys
from typing import List, Optional
from utils.logging_config import setup_logging, get_logger
from inout.grid_config import DEFAULT_CONFIG_PATH, load_grid_config
from inout.costs_json import write_costs
from evaluation.grid import sweep
from evaluation.lookup import CostTable
from core.exceptions import WitsenhausenError

logger = get_logger(__name__)

def main(argv: Optional[List[str]] = None) -> int:
    """
    Generate the (k, sigma) cost grid and write it as JSON.

    Command-line arguments:
      --config: Path to the YAML grid configuration (default config/grid.yml).
      --output: Path of the JSON table to write (default costs.json).
      --workers: Override the worker process count from the configuration.
      --summary: Print a summary of the generated grid.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Tabulate affine, signaling and lower-bound costs.")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to the YAML grid configuration.")
    parser.add_argument("--output", default="costs.json", help="Path of the JSON cost table to write.")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (1 = in-process).")
    parser.add_argument("--summary", action="store_true", help="Print grid summary.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be >= 1")

    if args.verbose:
        setup_logging(level=logging.DEBUG)
        logger.debug("Verbose logging enabled.")
    else:
        setup_logging(level=logging.INFO)

    try:
        config = load_grid_config(args.config)
    except WitsenhausenError as e:
        logger.error("Grid configuration failed: %s", e)
        return 1

    workers = args.workers if args.workers is not None else config.workers
    logger.info("Starting grid generation...")
    result = sweep(config.k_axis, config.sigma_axis, settings=config.numerics,
                   precision=config.precision, workers=workers)
    logger.info("Grid completed.")

    if result.errors:
        logger.warning("Some cells could not be computed:")
        for err in result.errors:
            logger.warning(err)
    else:
        logger.info("No errors reported during the sweep.")

    path = write_costs(CostTable.from_sweep(result), args.output)

    if args.summary:
        print(f"Grid completed: {result.stats['points']} cells in {result.stats['elapsed']:.3f} s")
        print(f"Signaling beats affine in {result.counterexample_cells} cells")
        print(f"Cost table written to {path}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
