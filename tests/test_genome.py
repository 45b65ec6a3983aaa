"""Tests for the float32 genome container."""

from __future__ import annotations

import numpy as np
import pytest

from agents.genome import Genome


def test_genome_behaves_like_a_float_sequence() -> None:
    genome = Genome([1.0, 2.5, -3.0])

    assert len(genome) == 3
    assert genome[1] == 2.5
    assert list(genome) == [1.0, 2.5, -3.0]
    assert genome.genes.dtype == np.float32


def test_genome_from_iterator_is_lossless() -> None:
    genome = Genome(float(n) for n in range(1, 6))
    assert genome.to_list() == [1.0, 2.0, 3.0, 4.0, 5.0]


def test_genome_never_aliases_its_source() -> None:
    source = np.array([1.0, 2.0], dtype=np.float32)
    genome = Genome(source)
    source[0] = 99.0

    copy = genome.copy()
    copy.genes[1] = -1.0

    assert genome.to_list() == [1.0, 2.0]


def test_genome_equality_is_by_value() -> None:
    assert Genome([1.0, 2.0]) == Genome(np.array([1.0, 2.0]))
    assert Genome([1.0, 2.0]) != Genome([2.0, 1.0])


def test_genome_distance() -> None:
    assert Genome([0.0, 0.0]).distance(Genome([3.0, 4.0])) == pytest.approx(5.0)
    with pytest.raises(ValueError):
        Genome([0.0]).distance(Genome([0.0, 1.0]))


def test_genome_rejects_nested_arrays() -> None:
    with pytest.raises(ValueError):
        Genome(np.zeros((2, 2)))
