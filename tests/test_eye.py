"""Tests for the cone-shaped food sensor."""

from __future__ import annotations

import math

import numpy as np
import pytest

from agents.eye import CELLS, FOV_ANGLE, FOV_RANGE, Eye, wrap_angle

CENTER = (0.5, 0.5)


def _vision(food: list[tuple[float, float]], heading: float = 0.0) -> list[float]:
    return Eye().process_vision(CENTER, heading, food).tolist()


def test_default_eye_settings() -> None:
    eye = Eye()
    assert (eye.fov_range, eye.fov_angle, eye.cells) == (FOV_RANGE, FOV_ANGLE, CELLS)
    assert FOV_ANGLE == pytest.approx(math.pi * 1.25)


def test_food_on_top_of_agent_gives_full_energy() -> None:
    vision = _vision([CENTER])

    assert vision[4] == pytest.approx(1.0)
    assert sum(vision) == pytest.approx(1.0)


def test_food_straight_ahead_lands_in_middle_cell() -> None:
    vision = _vision([(0.5, 0.6)])

    assert vision[4] == pytest.approx(0.6, rel=1e-5)
    assert sum(vision) == pytest.approx(0.6, rel=1e-5)


def test_food_at_or_beyond_range_is_invisible() -> None:
    assert _vision([(0.5, 0.75)]) == [0.0] * CELLS
    assert _vision([(0.5, 0.9)]) == [0.0] * CELLS


def test_food_behind_agent_is_outside_the_cone() -> None:
    assert _vision([(0.5, 0.4)]) == [0.0] * CELLS


def test_food_to_the_left_and_right_hits_outer_cells() -> None:
    left = _vision([(0.4, 0.5)])
    right = _vision([(0.6, 0.5)])

    assert left[8] == pytest.approx(0.6, rel=1e-5)
    assert sum(left) == pytest.approx(left[8])
    assert right[0] == pytest.approx(0.6, rel=1e-5)
    assert sum(right) == pytest.approx(right[0])


def test_heading_rotates_the_field_of_view() -> None:
    # Turned a quarter to the left, the agent faces -x.
    vision = _vision([(0.4, 0.5)], heading=math.pi / 2)
    assert vision[4] == pytest.approx(0.6, rel=1e-5)


def test_energy_accumulates_in_shared_cell() -> None:
    vision = _vision([(0.5, 0.6), (0.5, 0.7)])
    assert vision[4] == pytest.approx(0.8, rel=1e-5)


def test_no_food_gives_empty_histogram() -> None:
    vision = Eye(cells=5).process_vision(CENTER, 0.0, np.empty((0, 2)))
    assert vision.tolist() == [0.0] * 5
    assert vision.dtype == np.float32


@pytest.mark.parametrize("kwargs", [{"fov_range": 0.0}, {"fov_angle": -1.0}, {"cells": 0}])
def test_eye_rejects_invalid_settings(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Eye(**kwargs)


def test_wrap_angle_range() -> None:
    assert wrap_angle(0.0) == pytest.approx(0.0)
    assert wrap_angle(math.pi) == pytest.approx(math.pi)
    assert wrap_angle(-math.pi) == pytest.approx(math.pi)
    assert wrap_angle(1.5 * math.pi) == pytest.approx(-0.5 * math.pi)
    assert wrap_angle(-2.5 * math.pi) == pytest.approx(-0.5 * math.pi)
