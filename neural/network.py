"""Fully-connected feed-forward network with ReLU activations.

Parameters are stored per layer as a bias vector and a weight matrix with one
row per neuron. The genome encoding walks layers in order and, within each
layer, neurons in order, emitting the neuron's bias followed by its weights.
Decoding uses the identical traversal, so the flat layout of one layer is
simply the row-major flattening of ``[bias | weights]``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from agents.genome import Genome


class NetworkShapeError(ValueError):
    """Raised when inputs, genomes, or topologies do not fit the network shape."""


@dataclass(frozen=True)
class LayerTopology:
    """Number of neurons at one layer boundary."""

    neurons: int


def _widths(topology: Sequence[LayerTopology]) -> list[int]:
    widths = [int(layer.neurons) for layer in topology]
    if len(widths) < 2:
        raise NetworkShapeError(
            f"Topology needs at least 2 layer boundaries, got {len(widths)}."
        )
    if any(width <= 0 for width in widths):
        raise NetworkShapeError(f"Layer widths must be positive, got {widths}.")
    return widths


@dataclass
class Neuron:
    """Single ReLU unit."""

    bias: float
    weights: list[float]

    def propagate(self, inputs: Sequence[float]) -> float:
        if len(inputs) != len(self.weights):
            raise NetworkShapeError(
                f"Got {len(inputs)} inputs, but {len(self.weights)} inputs were expected."
            )
        x = np.asarray(inputs, dtype=np.float32)
        w = np.asarray(self.weights, dtype=np.float32)
        output = np.float32(self.bias) + np.dot(x, w)
        return float(max(output, np.float32(0.0)))


class Layer:
    """Neurons sharing one input width."""

    def __init__(self, biases: np.ndarray, weights: np.ndarray) -> None:
        biases = np.asarray(biases, dtype=np.float32)
        weights = np.asarray(weights, dtype=np.float32)
        if weights.ndim != 2 or biases.shape != (weights.shape[0],):
            raise NetworkShapeError(
                f"Bias shape {biases.shape} does not match weight shape {weights.shape}."
            )
        self.biases = biases
        self.weights = weights

    @classmethod
    def from_neurons(cls, neurons: Sequence[Neuron]) -> "Layer":
        if not neurons:
            raise NetworkShapeError("A layer needs at least one neuron.")
        input_size = len(neurons[0].weights)
        for neuron in neurons:
            if len(neuron.weights) != input_size:
                raise NetworkShapeError(
                    f"Neuron has {len(neuron.weights)} weights, but {input_size} were expected."
                )
        return cls(
            biases=np.array([neuron.bias for neuron in neurons], dtype=np.float32),
            weights=np.array([neuron.weights for neuron in neurons], dtype=np.float32),
        )

    @classmethod
    def random(cls, rng: random.Random, input_size: int, output_size: int) -> "Layer":
        biases = np.empty(output_size, dtype=np.float32)
        weights = np.empty((output_size, input_size), dtype=np.float32)
        for row in range(output_size):
            biases[row] = rng.uniform(-1.0, 1.0)
            for col in range(input_size):
                weights[row, col] = rng.uniform(-1.0, 1.0)
        return cls(biases, weights)

    @property
    def input_size(self) -> int:
        return int(self.weights.shape[1])

    @property
    def output_size(self) -> int:
        return int(self.weights.shape[0])

    @property
    def neurons(self) -> list[Neuron]:
        return [
            Neuron(bias=float(bias), weights=row.tolist())
            for bias, row in zip(self.biases, self.weights)
        ]

    def propagate(self, inputs: np.ndarray) -> np.ndarray:
        if inputs.ndim != 1 or inputs.shape[0] != self.input_size:
            raise NetworkShapeError(
                f"Got {inputs.size} inputs, but {self.input_size} inputs were expected."
            )
        return np.maximum(self.biases + self.weights @ inputs, np.float32(0.0))

    def flatten(self) -> np.ndarray:
        return np.hstack([self.biases[:, np.newaxis], self.weights]).ravel()


class Network:
    """Feed-forward network built from a topology of layer widths."""

    def __init__(self, layers: Sequence[Layer]) -> None:
        if not layers:
            raise NetworkShapeError("A network needs at least one layer.")
        for previous, current in zip(layers, layers[1:]):
            if previous.output_size != current.input_size:
                raise NetworkShapeError(
                    f"Layer of width {previous.output_size} cannot feed a layer "
                    f"expecting {current.input_size} inputs."
                )
        self.layers = list(layers)

    def __len__(self) -> int:
        return len(self.layers)

    @property
    def topology(self) -> list[LayerTopology]:
        widths = [self.layers[0].input_size] + [layer.output_size for layer in self.layers]
        return [LayerTopology(neurons=width) for width in widths]

    @classmethod
    def random(cls, rng: random.Random, topology: Sequence[LayerTopology]) -> "Network":
        """Build a network with biases and weights drawn uniformly from [-1, 1]."""
        widths = _widths(topology)
        return cls(
            [
                Layer.random(rng, input_size, output_size)
                for input_size, output_size in zip(widths, widths[1:])
            ]
        )

    @classmethod
    def from_weights(cls, topology: Sequence[LayerTopology], genome: Genome) -> "Network":
        """Rebuild a network from a genome produced by :meth:`weights`.

        Raises:
            NetworkShapeError: If the genome holds fewer genes than the topology
                needs, or genes are left over after every layer is filled.
        """
        widths = _widths(topology)
        genes = genome.genes
        expected = sum((inp + 1) * out for inp, out in zip(widths, widths[1:]))

        layers: list[Layer] = []
        offset = 0
        for input_size, output_size in zip(widths, widths[1:]):
            needed = (input_size + 1) * output_size
            if offset + needed > len(genes):
                raise NetworkShapeError(
                    f"Genome underflow: expected {expected} genes, got {len(genes)}."
                )
            block = genes[offset:offset + needed].reshape(output_size, input_size + 1)
            layers.append(Layer(biases=block[:, 0].copy(), weights=block[:, 1:].copy()))
            offset += needed

        if offset != len(genes):
            raise NetworkShapeError(
                f"Genome has {len(genes) - offset} trailing genes: "
                f"expected {expected} genes, got {len(genes)}."
            )
        return cls(layers)

    def propagate(self, inputs: Sequence[float] | np.ndarray) -> np.ndarray:
        """Run ``inputs`` through every layer and return the output activations."""
        activations = np.asarray(inputs, dtype=np.float32)
        for layer in self.layers:
            activations = layer.propagate(activations)
        return activations

    def weights(self) -> Genome:
        """Flatten the network into a genome (bias first, then weights, per neuron)."""
        return Genome(np.concatenate([layer.flatten() for layer in self.layers]))
