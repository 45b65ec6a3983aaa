"""Genome representation shared by neural networks and evolutionary operators."""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np


class Genome:
    """Ordered, fixed-length sequence of float32 genes.

    A genome is the only data exchanged between a network and the genetic
    engine: the network flattens its parameters into one, operators recombine
    and perturb it, and a fresh network is rebuilt from the result.

    Invariants:
        - Genes are stored as a one-dimensional ``float32`` array.
        - Construction always copies, so two genomes never share storage.
    """

    __slots__ = ("genes",)

    def __init__(self, genes: Iterable[float] | np.ndarray) -> None:
        if isinstance(genes, np.ndarray):
            array = np.array(genes, dtype=np.float32, copy=True)
        else:
            array = np.fromiter((float(gene) for gene in genes), dtype=np.float32)
        if array.ndim != 1:
            raise ValueError(f"Genome genes must be one-dimensional, got shape {array.shape}.")
        self.genes = array

    def __len__(self) -> int:
        return int(self.genes.shape[0])

    def __getitem__(self, index: int) -> float:
        return float(self.genes[index])

    def __iter__(self) -> Iterator[float]:
        return (float(gene) for gene in self.genes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return bool(np.array_equal(self.genes, other.genes))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Genome({self.genes.tolist()!r})"

    def copy(self) -> "Genome":
        """Return an independent copy of this genome."""
        return Genome(self.genes)

    def to_list(self) -> list[float]:
        return self.genes.tolist()

    def distance(self, other: "Genome") -> float:
        """Euclidean distance between this genome and ``other``.

        Invariants:
            - Both genomes must have the same length.
            - Result is non-negative and symmetric.
        """
        if len(self) != len(other):
            raise ValueError(
                f"Cannot compare genomes of different lengths: {len(self)} != {len(other)}."
            )
        delta = self.genes.astype(np.float64) - other.genes.astype(np.float64)
        return float(np.sqrt(np.dot(delta, delta)))
