"""Mutation operators for fixed-length genomes."""

from __future__ import annotations

import random

import numpy as np

from agents.genome import Genome
from evolution.base import MutationMethod


class GaussianMutation(MutationMethod):
    """Bounded random perturbation of individual genes.

    For every gene a sign is drawn first, then whether the gene mutates at all
    (probability ``chance``), and only then the magnitude ``u`` in [0, 1). A
    mutated gene moves by ``sign * coeff * u``, so no gene ever moves further
    than ``coeff`` in a single mutation.

    Despite the name, the magnitude is uniform, not normally distributed.
    """

    def __init__(self, chance: float, coeff: float) -> None:
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"chance must be in [0.0, 1.0], got {chance}")
        if coeff < 0.0:
            raise ValueError(f"coeff must be >= 0, got {coeff}")
        self.chance = float(chance)
        self.coeff = float(coeff)

    def mutate(self, rng: random.Random, child: Genome) -> None:
        genes = child.genes
        for index in range(genes.shape[0]):
            sign = -1.0 if rng.random() < 0.5 else 1.0
            if rng.random() < self.chance:
                genes[index] += np.float32(sign * self.coeff * rng.random())
