"""Tests for feed-forward propagation and genome encoding."""

from __future__ import annotations

import random

import numpy as np
import pytest

from agents.genome import Genome
from neural.network import Layer, LayerTopology, Network, NetworkShapeError, Neuron


def _topology(*widths: int) -> list[LayerTopology]:
    return [LayerTopology(neurons=width) for width in widths]


def test_zero_neuron_outputs_zero() -> None:
    neuron = Neuron(bias=0.0, weights=[0.0, 0.0, 0.0])
    assert neuron.propagate([12.0, -3.5, 0.25]) == 0.0


def test_neuron_relu_clamps_negative_sum() -> None:
    neuron = Neuron(bias=0.5, weights=[-0.3, 0.8])

    assert neuron.propagate([-10.0, -10.0]) == 0.0
    assert neuron.propagate([0.5, 1.0]) == pytest.approx(1.15, rel=1e-6)


def test_neuron_rejects_mismatched_inputs() -> None:
    neuron = Neuron(bias=0.0, weights=[0.1, 0.2])
    with pytest.raises(NetworkShapeError, match="Got 3 inputs, but 2 inputs were expected"):
        neuron.propagate([1.0, 2.0, 3.0])


def test_layer_from_neurons_matches_neuron_outputs() -> None:
    neurons = [Neuron(bias=0.0, weights=[0.1, 0.2, 0.3]), Neuron(bias=0.0, weights=[0.4, 0.5, 0.6])]
    layer = Layer.from_neurons(neurons)

    outputs = layer.propagate(np.array([0.5, 0.5, 0.5], dtype=np.float32))

    assert outputs.tolist() == pytest.approx([0.3, 0.75], rel=1e-6)


def test_network_propagates_layer_by_layer() -> None:
    network = Network(
        [
            Layer.from_neurons([Neuron(0.0, [0.1, 0.2, 0.3]), Neuron(0.0, [0.4, 0.5, 0.6])]),
            Layer.from_neurons([Neuron(0.0, [-0.5, 0.5])]),
        ]
    )

    outputs = network.propagate([0.5, 0.5, 0.5])

    # Hidden = [0.3, 0.75]; output = -0.15 + 0.375
    assert outputs.tolist() == pytest.approx([0.225], rel=1e-6)


def test_network_rejects_wrong_input_width() -> None:
    network = Network.random(random.Random(1), _topology(3, 2, 1))
    with pytest.raises(NetworkShapeError):
        network.propagate([1.0, 2.0])


def test_network_rejects_disconnected_layers() -> None:
    with pytest.raises(NetworkShapeError):
        Network([Layer.from_neurons([Neuron(0.0, [1.0, 1.0])]), Layer.from_neurons([Neuron(0.0, [1.0, 1.0])])])


def test_random_network_shape_and_weight_range() -> None:
    network = Network.random(random.Random(3), _topology(3, 2, 1))

    assert len(network) == 2
    assert [layer.neurons for layer in network.topology] == [3, 2, 1]

    genome = network.weights()
    assert len(genome) == (3 + 1) * 2 + (2 + 1) * 1
    assert all(-1.0 <= gene <= 1.0 for gene in genome)


def test_random_network_is_deterministic_per_seed() -> None:
    first = Network.random(random.Random(9), _topology(4, 3, 2))
    second = Network.random(random.Random(9), _topology(4, 3, 2))
    assert first.weights() == second.weights()


def test_random_network_needs_two_boundaries() -> None:
    with pytest.raises(NetworkShapeError):
        Network.random(random.Random(0), _topology(3))


def test_weights_emit_bias_then_weights_per_neuron() -> None:
    network = Network(
        [
            Layer.from_neurons([Neuron(0.1, [1.0, 2.0]), Neuron(0.2, [3.0, 4.0])]),
            Layer.from_neurons([Neuron(0.3, [5.0, 6.0])]),
        ]
    )

    assert network.weights() == Genome([0.1, 1.0, 2.0, 0.2, 3.0, 4.0, 0.3, 5.0, 6.0])


def test_from_weights_round_trip_is_exact() -> None:
    topology = _topology(9, 18, 2)
    network = Network.random(random.Random(42), topology)

    rebuilt = Network.from_weights(topology, network.weights())

    assert rebuilt.weights() == network.weights()
    for original, copy in zip(network.layers, rebuilt.layers):
        assert np.array_equal(original.biases, copy.biases)
        assert np.array_equal(original.weights, copy.weights)


def test_from_weights_restores_neurons_in_order() -> None:
    network = Network.from_weights(_topology(2, 2), Genome([0.5, -0.3, 0.8, 0.0, 1.0, 1.0]))

    first, second = network.layers[0].neurons
    assert first.bias == pytest.approx(0.5)
    assert first.weights == pytest.approx([-0.3, 0.8])
    assert second.bias == 0.0
    assert second.weights == [1.0, 1.0]
    assert network.propagate([0.5, 1.0]).tolist() == pytest.approx([1.15, 1.5], rel=1e-6)


def test_from_weights_rejects_short_genome() -> None:
    with pytest.raises(NetworkShapeError, match="expected 6 genes, got 5"):
        Network.from_weights(_topology(2, 2), Genome([0.0] * 5))


def test_from_weights_rejects_trailing_genes() -> None:
    with pytest.raises(NetworkShapeError, match="trailing"):
        Network.from_weights(_topology(2, 2), Genome([0.0] * 7))
