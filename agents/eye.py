"""Cone-shaped food sensor feeding an agent's brain."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

FOV_RANGE = 0.25
FOV_ANGLE = math.pi + math.pi / 4
CELLS = 9


def wrap_angle(angle: float | np.ndarray) -> float | np.ndarray:
    """Wrap radians into (-pi, pi]."""
    return math.pi - np.mod(math.pi - angle, 2.0 * math.pi)


class Eye:
    """Maps food positions into a histogram of perceived energy.

    The field of view is a circular sector of radius ``fov_range`` and width
    ``fov_angle`` centred on the agent's heading, split into ``cells`` equal
    angular bins. Heading 0 looks along +y. Each visible food item adds
    ``(fov_range - distance) / fov_range`` to the bin its bearing falls in,
    so nearer food shines brighter and several items may share a bin.

    An eye holds no per-tick state; ``process_vision`` is a pure function.
    """

    def __init__(
        self,
        fov_range: float = FOV_RANGE,
        fov_angle: float = FOV_ANGLE,
        cells: int = CELLS,
    ) -> None:
        if fov_range <= 0.0:
            raise ValueError(f"fov_range must be > 0, got {fov_range}")
        if fov_angle <= 0.0:
            raise ValueError(f"fov_angle must be > 0, got {fov_angle}")
        if cells <= 0:
            raise ValueError(f"cells must be > 0, got {cells}")
        self.fov_range = float(fov_range)
        self.fov_angle = float(fov_angle)
        self.cells = int(cells)

    def __repr__(self) -> str:
        return f"Eye(fov_range={self.fov_range}, fov_angle={self.fov_angle}, cells={self.cells})"

    def process_vision(
        self,
        position: Sequence[float] | np.ndarray,
        heading: float,
        food_positions: Sequence[Sequence[float]] | np.ndarray,
    ) -> np.ndarray:
        """Return the energy histogram (length ``cells``) seen from ``position``."""
        cells = np.zeros(self.cells, dtype=np.float32)
        food = np.asarray(food_positions, dtype=np.float64).reshape(-1, 2)
        if food.shape[0] == 0:
            return cells

        vectors = food - np.asarray(position, dtype=np.float64)
        distances = np.hypot(vectors[:, 0], vectors[:, 1])

        # Bearing measured from +y, counter-clockwise positive, relative to heading.
        angles = wrap_angle(np.arctan2(-vectors[:, 0], vectors[:, 1]) - heading)

        half_angle = self.fov_angle / 2.0
        visible = (distances < self.fov_range) & (angles >= -half_angle) & (angles <= half_angle)
        if not visible.any():
            return cells

        slots = (angles[visible] + half_angle) / self.fov_angle * self.cells
        indices = np.minimum(slots.astype(np.intp), self.cells - 1)
        energy = (self.fov_range - distances[visible]) / self.fov_range
        np.add.at(cells, indices, energy.astype(np.float32))
        return cells
