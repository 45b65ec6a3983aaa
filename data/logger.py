"""SQLite store for foraging runs and their per-generation fitness summaries."""

from __future__ import annotations

import hashlib
import json
import platform
import sqlite3
import time
from pathlib import Path
from typing import Any, Mapping

from engine.simulator import GenerationStats

_SCHEMA = """
CREATE TABLE IF NOT EXISTS experiments (
    id TEXT PRIMARY KEY,
    seed INTEGER NOT NULL,
    config_sha256 TEXT NOT NULL,
    config TEXT NOT NULL,
    host TEXT NOT NULL,
    started_at REAL NOT NULL
);

CREATE TABLE IF NOT EXISTS generations (
    experiment_id TEXT NOT NULL REFERENCES experiments (id) ON DELETE CASCADE,
    generation_index INTEGER NOT NULL,
    min_fitness REAL NOT NULL,
    max_fitness REAL NOT NULL,
    mean_fitness REAL NOT NULL,
    diversity REAL NOT NULL,
    UNIQUE (experiment_id, generation_index)
);
"""


class SimulationLogger:
    """Persist run metadata and per-generation fitness statistics in SQLite.

    Only summary statistics are stored; agent populations are never written.
    Usable as a context manager, which closes the connection on exit.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.connection = sqlite3.connect(self.db_path)
        self.connection.row_factory = sqlite3.Row
        self.connection.execute("PRAGMA foreign_keys = ON")
        self.connection.executescript(_SCHEMA)

    def __enter__(self) -> "SimulationLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.connection.close()

    def start_experiment(self, config: Mapping[str, Any], seed: int) -> str:
        """Register a run and return its experiment id."""
        config_json = json.dumps(dict(config), sort_keys=True)
        digest = hashlib.sha256(config_json.encode("utf-8")).hexdigest()
        started_at = time.time()
        experiment_id = hashlib.sha256(f"{digest}:{seed}:{time.time_ns()}".encode("utf-8")).hexdigest()[:16]
        host = json.dumps({"python": platform.python_version(), "platform": platform.platform()})

        with self.connection:
            self.connection.execute(
                "INSERT INTO experiments (id, seed, config_sha256, config, host, started_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (experiment_id, int(seed), digest, config_json, host, started_at),
            )
        return experiment_id

    def log_generation(self, experiment_id: str, stats: GenerationStats) -> None:
        """Store the summary of one generation, replacing any earlier row for it."""
        with self.connection:
            self.connection.execute(
                "INSERT OR REPLACE INTO generations "
                "(experiment_id, generation_index, min_fitness, max_fitness, mean_fitness, diversity) "
                "VALUES (:experiment_id, :generation, :min_fitness, :max_fitness, :mean_fitness, :diversity)",
                {"experiment_id": experiment_id, **vars(stats)},
            )

    def fetch_metrics(self, experiment_id: str) -> list[dict[str, float]]:
        """Return generation metrics ordered by generation index."""
        cursor = self.connection.execute(
            "SELECT generation_index, min_fitness, max_fitness, mean_fitness, diversity "
            "FROM generations WHERE experiment_id = ? ORDER BY generation_index",
            (experiment_id,),
        )
        return [dict(row) for row in cursor]

    def fetch_config(self, experiment_id: str) -> dict[str, Any] | None:
        """Return the config a run was started with, or ``None`` if unknown."""
        row = self.connection.execute("SELECT config FROM experiments WHERE id = ?", (experiment_id,)).fetchone()
        return json.loads(row["config"]) if row is not None else None

    def latest_experiment_id(self) -> str | None:
        row = self.connection.execute(
            "SELECT id FROM experiments ORDER BY started_at DESC, rowid DESC LIMIT 1"
        ).fetchone()
        return row["id"] if row is not None else None
