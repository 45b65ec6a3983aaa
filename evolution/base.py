"""Evolution contracts: individuals and pluggable genetic operators."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Sequence, TypeVar

from agents.genome import Genome


class EmptyPopulationError(ValueError):
    """Raised when an operator that needs individuals receives none."""


class ChromosomeLengthError(ValueError):
    """Raised when genomes that must align have different lengths."""


IndividualT = TypeVar("IndividualT", bound="Individual")


class Individual(ABC):
    """Anything the genetic algorithm can rank and breed.

    The genetic engine only ever sees this capability: a fitness score, a
    genome, and a way to build a new instance from a genome. It never inspects
    the concrete entity behind it.
    """

    @classmethod
    @abstractmethod
    def create(cls: type[IndividualT], chromosome: Genome) -> IndividualT:
        """Build a fresh individual from an offspring genome.

        Args:
            chromosome (Genome): Genome produced by crossover and mutation.

        Returns:
            Individual: New individual owning ``chromosome``.
        """

    @abstractmethod
    def fitness(self) -> float:
        """Return the fitness score used for selection."""

    @abstractmethod
    def chromosome(self) -> Genome:
        """Return the genome currently held by this individual."""


class SelectionMethod(ABC):
    """Strategy for drawing one parent from a population."""

    @abstractmethod
    def select(self, rng: random.Random, population: Sequence[IndividualT]) -> IndividualT:
        """Draw one individual from ``population``.

        Args:
            rng (random.Random): Caller-owned random source.
            population (Sequence[Individual]): Candidates with fitness.

        Returns:
            Individual: The selected member of ``population``.

        Invariants:
            - Must raise ``EmptyPopulationError`` on an empty population.
            - Must not reorder or modify ``population``.
        """


class CrossoverMethod(ABC):
    """Strategy for recombining two parent genomes."""

    @abstractmethod
    def crossover(self, rng: random.Random, parent_a: Genome, parent_b: Genome) -> Genome:
        """Create a child genome from two parents.

        Invariants:
            - Must not mutate either parent genome.
            - Must raise ``ChromosomeLengthError`` for parents of different lengths.
        """


class MutationMethod(ABC):
    """Strategy for perturbing a freshly created child genome."""

    @abstractmethod
    def mutate(self, rng: random.Random, child: Genome) -> None:
        """Perturb ``child`` in place.

        Invariants:
            - Only ever applied to an offspring genome, never to a parent's.
            - Genome length is preserved.
        """
