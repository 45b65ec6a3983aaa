"""Tick-based foraging simulation with generational evolution."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from agents.agent import AgentIndividual
from configs.loader import SimulationConfig
from environment.world import World
from evolution.crossover import UniformCrossover
from evolution.ga import GeneticAlgorithm
from evolution.mutation import GaussianMutation
from evolution.selection import RankSelection

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationStats:
    """Fitness summary of one completed generation."""

    generation: int
    min_fitness: float
    max_fitness: float
    mean_fitness: float
    diversity: float

    @classmethod
    def from_population(cls, generation: int, population: Sequence[AgentIndividual]) -> "GenerationStats":
        fitnesses = [individual.fitness() for individual in population]
        return cls(
            generation=generation,
            min_fitness=float(min(fitnesses)),
            max_fitness=float(max(fitnesses)),
            mean_fitness=float(sum(fitnesses) / len(fitnesses)),
            diversity=_genome_diversity(population),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "generation": float(self.generation),
            "min_fitness": self.min_fitness,
            "max_fitness": self.max_fitness,
            "mean_fitness": self.mean_fitness,
            "diversity": self.diversity,
        }


def _genome_diversity(population: Sequence[AgentIndividual]) -> float:
    """Mean pairwise Euclidean distance between genomes."""
    genomes = [individual.chromosome() for individual in population]
    distances = [
        genomes[i].distance(genomes[j])
        for i in range(len(genomes))
        for j in range(i + 1, len(genomes))
    ]
    if not distances:
        return 0.0
    return float(sum(distances) / len(distances))


class Simulation:
    """Owns the world and advances it one tick at a time.

    Each ``step`` runs sense, think, move and collide for every agent, then
    ages the current generation. Once a generation has lived for
    ``generation_length`` ticks the agents are replaced by offspring bred from
    their brains, weighted by how much food each one ate. Food stays where it
    is across generations.

    All randomness comes from the ``rng`` passed to each call.
    """

    def __init__(
        self,
        world: World,
        config: SimulationConfig,
        genetic_algorithm: GeneticAlgorithm[AgentIndividual] | None = None,
    ) -> None:
        self._world = world
        self.config = config
        self.genetic_algorithm = genetic_algorithm or GeneticAlgorithm(
            RankSelection(),
            UniformCrossover(),
            GaussianMutation(chance=config.mutation_chance, coeff=config.mutation_coeff),
        )
        self.age = 0
        self.generation = 0
        self.last_generation_stats: GenerationStats | None = None

    @classmethod
    def random(cls, rng: random.Random, config: SimulationConfig | None = None) -> "Simulation":
        """Create a simulation with randomly placed agents, brains and food."""
        config = config or SimulationConfig()
        return cls(World.random(rng, config), config)

    def world(self) -> World:
        return self._world

    def step(self, rng: random.Random) -> None:
        """Advance the simulation by one tick."""
        self._tick(rng)

    def train(self, rng: random.Random) -> GenerationStats:
        """Step until the current generation is replaced and return its stats."""
        while True:
            stats = self._tick(rng)
            if stats is not None:
                return stats

    def _tick(self, rng: random.Random) -> GenerationStats | None:
        self._process_brains_and_movement()
        self._process_collisions(rng)

        self.age += 1
        if self.age > self.config.generation_length:
            return self._evolve(rng)
        return None

    def _process_brains_and_movement(self) -> None:
        food_positions = self._world.food_positions()
        agents = self._world.agents

        # Every agent senses the same pre-movement world.
        responses = [agent.act(agent.observe(food_positions)) for agent in agents]
        for agent, (speed_delta, heading_delta) in zip(agents, responses):
            agent.move(self.config, speed_delta, heading_delta)

    def _process_collisions(self, rng: random.Random) -> None:
        foods = self._world.foods
        if not foods:
            return

        positions = self._world.food_positions()
        for agent_index, agent in enumerate(self._world.agents):
            offsets = positions - agent.position
            distances = np.hypot(offsets[:, 0], offsets[:, 1])
            for food_index in np.flatnonzero(distances <= self.config.food_size):
                agent.satiation += 1
                food = foods[food_index]
                food.relocate(rng)
                positions[food_index] = food.position
                LOGGER.debug("Agent %d ate food %d (satiation=%d)", agent_index, food_index, agent.satiation)

    def _evolve(self, rng: random.Random) -> GenerationStats:
        self.age = 0

        individuals = [AgentIndividual.from_agent(agent) for agent in self._world.agents]
        stats = GenerationStats.from_population(self.generation, individuals)

        offspring = self.genetic_algorithm.evolve(rng, individuals)
        self._world.agents = [individual.into_agent(rng, self.config) for individual in offspring]

        self.generation += 1
        self.last_generation_stats = stats
        LOGGER.info(
            "Generation %d done: min=%.1f max=%.1f mean=%.2f diversity=%.3f",
            stats.generation,
            stats.min_fitness,
            stats.max_fitness,
            stats.mean_fitness,
            stats.diversity,
        )
        return stats
