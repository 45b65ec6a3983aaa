"""Command-line entry points for running simulations and plotting their metrics."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Allow `python cli/main.py ...` execution from IDEs by adding repo root to sys.path.
if __package__ in {None, ""}:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from configs.loader import ConfigLoader, SimulationConfig
from data.logger import SimulationLogger
from main import run
from visualization.plotting import plot_experiment


def _run_single(config: SimulationConfig, db_path: Path) -> str:
    with SimulationLogger(db_path) as logger:
        run(config, logger=logger)
        experiment_id = logger.latest_experiment_id()
    if experiment_id is None:
        raise RuntimeError("Expected experiment id when logger is configured.")
    return experiment_id


def _latest_experiment(db_path: Path) -> str:
    with SimulationLogger(db_path) as logger:
        experiment_id = logger.latest_experiment_id()
    if experiment_id is None:
        raise RuntimeError(f"No experiments recorded in {db_path}.")
    return experiment_id


def run_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="forage")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every meal at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run")
    run_cmd.add_argument("--config", default="configs/default.yaml")
    run_cmd.add_argument("--db", default="simulation_metrics.db")
    run_cmd.add_argument("--generations", type=int, help="override the configured generation count")
    run_cmd.add_argument("--seed", type=int, help="override the configured seed")

    plot_cmd = sub.add_parser("plot")
    plot_cmd.add_argument("--experiment", help="experiment id (defaults to the latest run)")
    plot_cmd.add_argument("--db", default="simulation_metrics.db")
    plot_cmd.add_argument("--out", default="artifacts/metrics.png")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "run":
        config = ConfigLoader.load(args.config)
        overrides = {
            key: value
            for key, value in (("generations", args.generations), ("seed", args.seed))
            if value is not None
        }
        if overrides:
            config = ConfigLoader.from_mapping({**config.to_dict(), **overrides})
        print(_run_single(config, Path(args.db)))
        return 0

    if args.command == "plot":
        db_path = Path(args.db)
        experiment_id = args.experiment or _latest_experiment(db_path)
        print(plot_experiment(db_path, experiment_id, args.out))
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(run_cli())
