"""Generational genetic algorithm over pluggable operators."""

from __future__ import annotations

import random
from typing import Generic, Sequence

from evolution.base import (
    CrossoverMethod,
    EmptyPopulationError,
    IndividualT,
    MutationMethod,
    SelectionMethod,
)


class GeneticAlgorithm(Generic[IndividualT]):
    """Select + crossover + mutate, one offspring per population slot.

    The three operators are injected at construction and used only through
    their abstract interfaces, so any combination can be swapped in.
    """

    def __init__(
        self,
        selection_method: SelectionMethod,
        crossover_method: CrossoverMethod,
        mutation_method: MutationMethod,
    ) -> None:
        self.selection_method = selection_method
        self.crossover_method = crossover_method
        self.mutation_method = mutation_method

    def evolve(self, rng: random.Random, population: Sequence[IndividualT]) -> list[IndividualT]:
        """Return the next population with preserved size.

        For every slot two parents are selected independently (possibly the
        same individual), their genomes are crossed over, the child genome is
        mutated, and a new individual is created from it through the
        population's ``create`` hook.

        Raises:
            EmptyPopulationError: If ``population`` is empty.
        """
        if not population:
            raise EmptyPopulationError("Cannot evolve an empty population.")

        individual_type = type(population[0])
        next_population: list[IndividualT] = []

        while len(next_population) < len(population):
            parent_a = self.selection_method.select(rng, population).chromosome()
            parent_b = self.selection_method.select(rng, population).chromosome()

            child = self.crossover_method.crossover(rng, parent_a, parent_b)
            self.mutation_method.mutate(rng, child)

            next_population.append(individual_type.create(child))

        return next_population
