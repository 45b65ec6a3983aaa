"""Stationary food items."""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np


@dataclass
class Food:
    """A food point in the unit square; relocated rather than removed when eaten."""

    position: np.ndarray

    @classmethod
    def random(cls, rng: random.Random) -> "Food":
        return cls(position=np.array([rng.random(), rng.random()], dtype=np.float64))

    def relocate(self, rng: random.Random) -> None:
        self.position = np.array([rng.random(), rng.random()], dtype=np.float64)
