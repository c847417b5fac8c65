"""Tests for the grid geometry helpers."""

import numpy as np
import pytest

from rival_snake.errors import ConfigurationError
from rival_snake.grid import (
    Cell,
    free_cells,
    in_bounds,
    manhattan,
    occupancy_mask,
    validate_grid_size,
)


class TestGridSize:
    def test_minimum_size_enforced(self):
        with pytest.raises(ConfigurationError, match="at least 2"):
            validate_grid_size(1)
        with pytest.raises(ConfigurationError):
            validate_grid_size(0)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_grid_size(-3)

    def test_valid_size_returned(self):
        assert validate_grid_size(2) == 2
        assert validate_grid_size(15) == 15


class TestInBounds:
    def test_corners_inside(self):
        for cell in [Cell(0, 0), Cell(4, 0), Cell(0, 4), Cell(4, 4)]:
            assert in_bounds(cell, 5)

    def test_outside(self):
        assert not in_bounds(Cell(-1, 0), 5)
        assert not in_bounds(Cell(0, -1), 5)
        assert not in_bounds(Cell(5, 0), 5)
        assert not in_bounds(Cell(0, 5), 5)


class TestGeometry:
    def test_manhattan(self):
        assert manhattan(Cell(0, 0), Cell(3, 4)) == 7
        assert manhattan(Cell(2, 2), Cell(2, 2)) == 0

    def test_cell_is_tuple(self):
        assert Cell(1, 2) == (1, 2)


class TestOccupancy:
    def test_mask_indexed_y_x(self):
        mask = occupancy_mask(4, [[Cell(1, 2)]])
        assert mask.shape == (4, 4)
        assert mask[2, 1]
        assert mask.sum() == 1

    def test_mask_ignores_out_of_bounds(self):
        mask = occupancy_mask(3, [[Cell(-1, 0), Cell(3, 3)]])
        assert not np.any(mask)

    def test_free_cells(self):
        taken = [[Cell(0, 0), Cell(1, 0)], [Cell(1, 1)]]
        free = free_cells(2, taken)
        assert free == [Cell(0, 1)]

    def test_free_cells_on_full_board(self):
        everything = [[Cell(x, y) for x in range(2) for y in range(2)]]
        assert free_cells(2, everything) == []
