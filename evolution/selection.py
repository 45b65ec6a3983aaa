"""Parent selection strategies."""

from __future__ import annotations

import random
from typing import Sequence

from evolution.base import EmptyPopulationError, IndividualT, SelectionMethod


class RankSelection(SelectionMethod):
    """Rank-weighted roulette selection.

    Individuals are sorted ascending by fitness and weighted by their rank
    (1 for the lowest fitness, N for the highest) instead of by raw fitness.
    Every individual keeps a nonzero chance of being picked.
    """

    def select(self, rng: random.Random, population: Sequence[IndividualT]) -> IndividualT:
        if not population:
            raise EmptyPopulationError("Cannot select from an empty population.")

        # sorted() is stable, so ties keep their population order.
        ranked = sorted(population, key=lambda individual: individual.fitness())
        ranks = range(1, len(ranked) + 1)
        return rng.choices(ranked, weights=ranks, k=1)[0]
