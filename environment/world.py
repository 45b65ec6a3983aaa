"""World state: the agents and food of one simulation."""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np

from agents.agent import Agent
from configs.loader import SimulationConfig
from environment.food import Food


@dataclass
class World:
    """Agent and food collections, index-addressable within a tick."""

    agents: list[Agent]
    foods: list[Food]

    @classmethod
    def random(cls, rng: random.Random, config: SimulationConfig) -> "World":
        agents = [Agent.random(rng, config) for _ in range(config.population_size)]
        foods = [Food.random(rng) for _ in range(config.food_count)]
        return cls(agents=agents, foods=foods)

    def food_positions(self) -> np.ndarray:
        """Return an ``(n, 2)`` array of current food positions."""
        if not self.foods:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([food.position for food in self.foods], dtype=np.float64)

    def render_state(self) -> dict[str, list[dict[str, float]]]:
        """Return a JSON-serializable snapshot of positions and headings."""
        return {
            "agents": [
                {
                    "x": float(agent.position[0]),
                    "y": float(agent.position[1]),
                    "heading": float(agent.heading),
                    "satiation": int(agent.satiation),
                }
                for agent in self.agents
            ],
            "foods": [{"x": float(food.position[0]), "y": float(food.position[1])} for food in self.foods],
        }
