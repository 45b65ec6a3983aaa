"""Shared pytest fixtures."""

from __future__ import annotations

import random
from typing import Callable, Iterable

import pytest


class ScriptedRandom(random.Random):
    """``random.Random`` whose ``random()`` replays a fixed list of draws.

    ``uniform`` and ``choices`` are built on ``random()``, so every draw the
    simulation consumes comes from the script, in order. Running past the end
    fails the test instead of silently falling back to real randomness.
    """

    def __new__(cls, draws: Iterable[float]) -> "ScriptedRandom":
        return super().__new__(cls)

    def __init__(self, draws: Iterable[float]) -> None:
        super().__init__(0)
        self.draws = list(draws)
        self.consumed = 0

    def random(self) -> float:
        if self.consumed >= len(self.draws):
            raise AssertionError(f"Script exhausted after {self.consumed} draws.")
        value = self.draws[self.consumed]
        self.consumed += 1
        return value

    @property
    def exhausted(self) -> bool:
        return self.consumed == len(self.draws)


@pytest.fixture
def scripted_rng() -> Callable[[Iterable[float]], ScriptedRandom]:
    return ScriptedRandom
