"""Headless simulation runner for local validation."""

from __future__ import annotations

import logging
import random
from pathlib import Path

from configs.loader import ConfigLoader, SimulationConfig
from data.logger import SimulationLogger
from engine.simulator import GenerationStats, Simulation

LOGGER = logging.getLogger(__name__)


def run(config: SimulationConfig, logger: SimulationLogger | None = None) -> list[GenerationStats]:
    """Run ``config.generations`` full generations and return their stats."""
    rng = random.Random(config.seed)
    simulation = Simulation.random(rng, config)

    experiment_id = None
    if logger is not None:
        experiment_id = logger.start_experiment(config=config.to_dict(), seed=config.seed)

    history: list[GenerationStats] = []
    for _ in range(config.generations):
        stats = simulation.train(rng)
        history.append(stats)
        if logger is not None and experiment_id is not None:
            logger.log_generation(experiment_id, stats)

    if history:
        LOGGER.info("Finished %d generations, best satiation %.0f", len(history), max(s.max_fitness for s in history))
    return history


def main(config_path: str = "configs/default.yaml", db_path: str | None = "simulation_metrics.db") -> None:
    """Load config, run the simulation, and record generation metrics."""
    logging.basicConfig(level=logging.INFO)
    config = ConfigLoader.load(config_path)

    if not db_path:
        run(config)
        return
    with SimulationLogger(Path(db_path)) as logger:
        run(config, logger=logger)


if __name__ == "__main__":
    main()
