"""Foraging agents and their view as genetic-algorithm individuals."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

import numpy as np

from agents.brain import Brain
from agents.eye import Eye, wrap_angle
from agents.genome import Genome
from configs.loader import SimulationConfig
from evolution.base import Individual


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def eye_from_config(config: SimulationConfig) -> Eye:
    return Eye(fov_range=config.fov_range, fov_angle=config.fov_angle, cells=config.eye_cells)


@dataclass
class Agent:
    """Physical and cognitive state of one forager.

    ``heading`` is in radians, 0 pointing along +y. ``satiation`` counts food
    eaten during the current generation and doubles as fitness.
    """

    position: np.ndarray
    heading: float
    speed: float
    eye: Eye
    brain: Brain
    satiation: int = field(default=0)

    @classmethod
    def random(cls, rng: random.Random, config: SimulationConfig) -> "Agent":
        eye = eye_from_config(config)
        brain = Brain.random(rng, eye)
        return cls._spawn(rng, config, eye, brain)

    @classmethod
    def from_chromosome(
        cls,
        chromosome: Genome,
        rng: random.Random,
        config: SimulationConfig,
    ) -> "Agent":
        eye = eye_from_config(config)
        brain = Brain.from_chromosome(chromosome, eye)
        return cls._spawn(rng, config, eye, brain)

    @classmethod
    def _spawn(cls, rng: random.Random, config: SimulationConfig, eye: Eye, brain: Brain) -> "Agent":
        position = np.array([rng.random(), rng.random()], dtype=np.float64)
        heading = rng.uniform(-math.pi, math.pi)
        return cls(position=position, heading=heading, speed=config.initial_speed, eye=eye, brain=brain)

    def as_chromosome(self) -> Genome:
        return self.brain.as_chromosome()

    def observe(self, food_positions: np.ndarray) -> np.ndarray:
        """Run the eye against every food position."""
        return self.eye.process_vision(self.position, self.heading, food_positions)

    def act(self, vision: np.ndarray) -> tuple[float, float]:
        """Return the raw ``(speed_delta, heading_delta)`` motor response."""
        return self.brain.propagate(vision)

    def move(self, config: SimulationConfig, speed_delta: float, heading_delta: float) -> None:
        """Apply a motor response and advance one tick on the torus."""
        speed_delta = _clamp(speed_delta, -config.speed_accel, config.speed_accel)
        heading_delta = _clamp(heading_delta, -config.rotation_accel, config.rotation_accel)

        self.speed = _clamp(self.speed + speed_delta, config.speed_min, config.speed_max)
        self.heading = float(wrap_angle(self.heading + heading_delta))

        forward = np.array([-math.sin(self.heading), math.cos(self.heading)])
        position = np.mod(self.position + forward * self.speed, 1.0)
        # mod() of a tiny negative value can round up to exactly 1.0.
        self.position = np.where(position >= 1.0, 0.0, position)


class AgentIndividual(Individual):
    """Snapshot of an agent handed to the genetic algorithm."""

    def __init__(self, fitness: float, chromosome: Genome) -> None:
        self._fitness = float(fitness)
        self._chromosome = chromosome

    @classmethod
    def create(cls, chromosome: Genome) -> "AgentIndividual":
        return cls(fitness=0.0, chromosome=chromosome)

    @classmethod
    def from_agent(cls, agent: Agent) -> "AgentIndividual":
        return cls(fitness=float(agent.satiation), chromosome=agent.as_chromosome())

    def fitness(self) -> float:
        return self._fitness

    def chromosome(self) -> Genome:
        return self._chromosome

    def into_agent(self, rng: random.Random, config: SimulationConfig) -> Agent:
        return Agent.from_chromosome(self._chromosome, rng, config)
