"""Crossover operators for fixed-length genomes."""

from __future__ import annotations

import random

import numpy as np

from agents.genome import Genome
from evolution.base import ChromosomeLengthError, CrossoverMethod


class UniformCrossover(CrossoverMethod):
    """Each child gene is copied from parent A or parent B with equal odds.

    One draw is consumed per gene, in gene order, so the result is fully
    determined by the state of ``rng``. Genes are copied, never blended.
    """

    def crossover(self, rng: random.Random, parent_a: Genome, parent_b: Genome) -> Genome:
        if len(parent_a) != len(parent_b):
            raise ChromosomeLengthError(
                f"Parents must have equal lengths: got {len(parent_a)} and {len(parent_b)}."
            )

        take_a = np.fromiter(
            (rng.random() < 0.5 for _ in range(len(parent_a))),
            dtype=bool,
            count=len(parent_a),
        )
        return Genome(np.where(take_a, parent_a.genes, parent_b.genes))
