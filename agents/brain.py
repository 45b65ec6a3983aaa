"""Neural controller translating vision into motor commands."""

from __future__ import annotations

import random

import numpy as np

from agents.eye import Eye
from agents.genome import Genome
from neural.network import LayerTopology, Network


class Brain:
    """Network with one input per eye cell and two motor outputs.

    Outputs are ``[speed_delta, heading_delta]``; the hidden layer is twice as
    wide as the eye.
    """

    def __init__(self, network: Network) -> None:
        self.network = network

    @staticmethod
    def topology(eye: Eye) -> list[LayerTopology]:
        return [
            LayerTopology(neurons=eye.cells),
            LayerTopology(neurons=2 * eye.cells),
            LayerTopology(neurons=2),
        ]

    @classmethod
    def random(cls, rng: random.Random, eye: Eye) -> "Brain":
        return cls(Network.random(rng, cls.topology(eye)))

    @classmethod
    def from_chromosome(cls, chromosome: Genome, eye: Eye) -> "Brain":
        return cls(Network.from_weights(cls.topology(eye), chromosome))

    def as_chromosome(self) -> Genome:
        return self.network.weights()

    def propagate(self, vision: np.ndarray) -> tuple[float, float]:
        speed_delta, heading_delta = self.network.propagate(vision)
        return float(speed_delta), float(heading_delta)
