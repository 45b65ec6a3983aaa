"""Plot utilities for persisted generation metrics."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from data.logger import SimulationLogger  # noqa: E402


def plot_experiment(db_path: str | Path, experiment_id: str, output_path: str | Path) -> Path:
    """Render satiation and diversity curves for an experiment from SQLite logs.

    Raises:
        LookupError: If no generations were logged for ``experiment_id``.
    """
    with SimulationLogger(db_path) as logger:
        rows = logger.fetch_metrics(experiment_id)
        config = logger.fetch_config(experiment_id) or {}
    if not rows:
        raise LookupError(f"No generation metrics logged for experiment {experiment_id!r}.")

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    generations = [int(row["generation_index"]) for row in rows]
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 6), sharex=True)
    for key in ("min_fitness", "mean_fitness", "max_fitness"):
        ax1.plot(generations, [float(row[key]) for row in rows], label=key)
    ax1.set_ylabel("satiation")
    ax1.set_title(f"{experiment_id} (seed {config.get('seed', '?')})")
    ax1.legend()

    ax2.plot(generations, [float(row["diversity"]) for row in rows], label="diversity", color="tab:green")
    ax2.set_ylabel("genome diversity")
    ax2.set_xlabel("generation")
    ax2.legend()

    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
    return output
