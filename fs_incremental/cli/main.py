"""Command-line entry point for running experiments."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from fs_incremental.pipeline import run_experiment


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run incremental feature-selection experiments.")
    parser.add_argument(
        "--config",
        type=Path,
        required=False,
        help="Path to experiment YAML config (merged over fs_incremental/config/default_config.yaml).",
    )
    parser.add_argument(
        "--results-dir",
        type=Path,
        default=Path("results"),
        help="Directory where experiment outputs will be stored.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    result = run_experiment(args.config, results_root=args.results_dir)
    print(f"Experiment finished. Kept {len(result.kept_features)} features: {result.kept_features}")
    print(f"Results stored in: {result.run_dir}")


if __name__ == "__main__":
    main()
