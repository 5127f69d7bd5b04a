"""Tests for the Grid class."""

import pytest
from game_of_life.core.grid import Grid, Update, next_state


def seed(grid, cells):
    for x, y in cells:
        grid.set(x, y, True)


def live_cells(grid):
    return {(x, y) for x in range(grid.width) for y in range(grid.height) if grid.get(x, y)}


class TestGrid:
    """Test cases for the Grid class."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid(10, 20)
        assert grid.width == 10
        assert grid.height == 20
        assert grid.population == 0

    def test_fresh_grid_is_dead(self):
        """Every in-bounds cell of a new grid is dead."""
        grid = Grid(7, 4)
        for x in range(7):
            for y in range(4):
                assert grid.get(x, y) is False

    def test_empty_grid(self):
        """Zero-sized grids are legal and step without effect."""
        for width, height in [(0, 0), (0, 5), (5, 0)]:
            grid = Grid(width, height)
            assert grid.population == 0
            assert list(grid.step_iter()) == []
            grid.step()
            assert grid.get(0, 0) is None

    def test_negative_dimensions(self):
        """Negative sizes are rejected."""
        with pytest.raises(ValueError):
            Grid(-1, 5)

        with pytest.raises(ValueError):
            Grid(5, -1)

    def test_in_bounds(self):
        """Test bounds checking."""
        grid = Grid(3, 2)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(2, 1)
        assert not grid.in_bounds(3, 0)
        assert not grid.in_bounds(0, 2)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(0, -1)

    def test_set_returns_previous_value(self):
        """set() reports the value the cell held before the call."""
        grid = Grid(10, 10)

        assert grid.set(5, 5, True) is False
        assert grid.get(5, 5) is True

        assert grid.set(5, 5, True) is True
        assert grid.set(5, 5, False) is True
        assert grid.get(5, 5) is False

    def test_toggle_returns_new_value(self):
        """toggle() reports the value the cell holds after the call."""
        grid = Grid(10, 10)

        assert grid.toggle(3, 3) is True
        assert grid.get(3, 3) is True

        assert grid.toggle(3, 3) is False
        assert grid.get(3, 3) is False

    def test_out_of_bounds_access(self):
        """Out-of-range coordinates return None and leave the grid alone."""
        grid = Grid(10, 10)
        grid.set(1, 1, True)

        for x, y in [(10, 1), (1, 10), (100, 1), (1, 100), (-1, 0), (0, -1)]:
            assert grid.get(x, y) is None
            assert grid.set(x, y, True) is None
            assert grid.toggle(x, y) is None

        assert live_cells(grid) == {(1, 1)}

    def test_repeated_reads(self):
        """Non-mutating calls are stable."""
        grid = Grid(4, 4)
        grid.set(2, 3, True)

        for _ in range(3):
            assert grid.get(2, 3) is True
            assert grid.get(3, 2) is False
            assert grid.in_bounds(3, 3)

    def test_clear(self):
        """Test grid clearing."""
        grid = Grid(5, 5)
        seed(grid, [(1, 1), (2, 2), (3, 3)])
        assert grid.population == 3

        grid.clear()
        assert grid.population == 0
        assert live_cells(grid) == set()

    def test_count_neighbors(self):
        """Test neighbor counting for individual cells."""
        grid = Grid(5, 5)
        assert grid.count_neighbors(2, 2) == 0

        seed(grid, [(1, 1), (1, 2), (2, 1)])

        assert grid.count_neighbors(0, 0) == 1
        assert grid.count_neighbors(2, 2) == 3
        assert grid.count_neighbors(1, 1) == 2  # the cell itself doesn't count
        assert grid.count_neighbors(3, 3) == 0
        assert grid.count_neighbors(5, 0) is None

    def test_count_neighbors_does_not_wrap(self):
        """Corners only see in-bounds neighbors."""
        grid = Grid(3, 3)
        seed(grid, [(2, 0), (0, 2), (2, 2)])

        # With wraparound these would all be neighbors of (0, 0)
        assert grid.count_neighbors(0, 0) == 0

        grid.set(1, 1, True)
        assert grid.count_neighbors(0, 0) == 1

        # Full 3x3 grid: corner has 3 neighbors, edge 5, center 8
        for x in range(3):
            for y in range(3):
                grid.set(x, y, True)
        assert grid.count_neighbors(0, 0) == 3
        assert grid.count_neighbors(1, 0) == 5
        assert grid.count_neighbors(1, 1) == 8

    def test_neighbor_counts(self):
        """Vectorized counts agree with per-cell counts."""
        grid = Grid(6, 4)
        seed(grid, [(0, 0), (2, 1), (2, 2), (2, 3), (5, 3), (4, 0)])

        counts = grid.neighbor_counts()
        assert counts.shape == (4, 6)

        for x in range(6):
            for y in range(4):
                assert counts[y, x] == grid.count_neighbors(x, y)

    def test_corner_cell_not_born_from_opposite_edges(self):
        """A dead corner surrounded only by wrapped cells stays dead."""
        grid = Grid(3, 3)
        seed(grid, [(2, 0), (0, 2), (2, 2)])

        updates = list(grid.step_iter())

        assert Update(0, 0, True) not in updates
        assert grid.get(0, 0) is False

    def test_block_still_life(self):
        """A 2x2 block produces no updates."""
        grid = Grid(4, 4)
        seed(grid, [(1, 1), (1, 2), (2, 1), (2, 2)])

        assert list(grid.step_iter()) == []
        assert list(grid.step_iter()) == []
        assert live_cells(grid) == {(1, 1), (1, 2), (2, 1), (2, 2)}

    def test_blinker_oscillates(self):
        """A vertical blinker flips to horizontal and back."""
        grid = Grid(5, 5)
        seed(grid, [(2, 1), (2, 2), (2, 3)])

        updates = list(grid.step_iter())

        assert len(updates) == 4
        assert Update(2, 1, False) in updates
        assert Update(2, 3, False) in updates
        assert Update(1, 2, True) in updates
        assert Update(3, 2, True) in updates
        assert live_cells(grid) == {(1, 2), (2, 2), (3, 2)}

        updates = list(grid.step_iter())
        assert len(updates) == 4
        assert live_cells(grid) == {(2, 1), (2, 2), (2, 3)}

    def test_update_order(self):
        """Updates are reported with x as the outer loop and y as the inner one."""
        grid = Grid(5, 5)
        seed(grid, [(2, 1), (2, 2), (2, 3)])

        assert list(grid.step_iter()) == [
            Update(1, 2, True),
            Update(2, 1, False),
            Update(2, 3, False),
            Update(3, 2, True),
        ]

    def test_glider_moves(self):
        """A glider travels one cell diagonally every 4 generations."""
        grid = Grid(10, 10)
        glider = [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]
        seed(grid, glider)

        for _ in range(4):
            grid.step()

        assert live_cells(grid) == {(x + 1, y + 1) for x, y in glider}

    def test_lone_cells_die(self):
        """Cells with fewer than two neighbors die."""
        grid = Grid(5, 5)
        seed(grid, [(0, 0), (4, 4)])

        updates = list(grid.step_iter())

        assert sorted(updates, key=lambda u: (u.x, u.y)) == [Update(0, 0, False), Update(4, 4, False)]
        assert grid.population == 0

    def test_overpopulation(self):
        """A live cell with four neighbors dies."""
        grid = Grid(3, 3)
        seed(grid, [(1, 1), (0, 0), (2, 0), (0, 2), (2, 2)])

        grid.step()

        assert grid.get(1, 1) is False

    def test_step_matches_drained_step_iter(self):
        """Draining step_iter() leaves the same grid as step()."""
        cells = [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2), (7, 7), (7, 8), (8, 7)]
        grid1 = Grid(12, 9)
        grid2 = Grid(12, 9)
        seed(grid1, cells)
        seed(grid2, cells)

        for _ in range(10):
            for _update in grid1.step_iter():
                pass
            grid2.step()
            assert grid1 == grid2

    def test_step_callback(self):
        """step() reports each change to the callback."""
        grid = Grid(5, 5)
        seed(grid, [(2, 1), (2, 2), (2, 3)])

        received = []
        grid.step(received.append)

        assert len(received) == 4
        assert Update(1, 2, True) in received

    def test_partial_step_iter(self):
        """Abandoning step_iter() early leaves the current generation unchanged."""
        grid = Grid(5, 5)
        seed(grid, [(2, 1), (2, 2), (2, 3)])

        updates = grid.step_iter()
        assert next(updates) == Update(1, 2, True)
        updates.close()

        assert live_cells(grid) == {(2, 1), (2, 2), (2, 3)}

        # A fresh step still computes the full generation
        grid.step()
        assert live_cells(grid) == {(1, 2), (2, 2), (3, 2)}

    def test_step_iter_is_lazy(self):
        """Nothing changes until the iterator is exhausted."""
        grid = Grid(5, 5)
        seed(grid, [(2, 1), (2, 2), (2, 3)])

        updates = grid.step_iter()
        collected = [next(updates) for _ in range(4)]
        assert len(collected) == 4
        assert live_cells(grid) == {(2, 1), (2, 2), (2, 3)}

        with pytest.raises(StopIteration):
            next(updates)
        assert live_cells(grid) == {(1, 2), (2, 2), (3, 2)}

        # Exhausted iterators do not restart
        assert list(updates) == []
        assert live_cells(grid) == {(1, 2), (2, 2), (3, 2)}

    def test_equality(self):
        """Test grid equality comparison."""
        grid1 = Grid(3, 3)
        grid2 = Grid(3, 3)
        assert grid1 == grid2

        grid1.set(1, 1, True)
        grid2.set(1, 1, True)
        assert grid1 == grid2

        grid2.set(2, 2, True)
        assert grid1 != grid2

        assert grid1 != Grid(4, 4)
        assert grid1 != "not a grid"

    def test_string_representation(self):
        """Living cells render as '#' and dead as '.'."""
        grid = Grid(4, 2)
        assert str(grid) == "....\n...."

        grid.set(0, 0, True)
        grid.set(3, 1, True)
        assert str(grid) == "#...\n...#"


class TestNextState:
    """Test cases for the rule function."""

    @pytest.mark.parametrize("neighbors", [0, 1, 4, 5, 6, 7, 8])
    def test_live_cell_dies(self, neighbors):
        assert next_state(True, neighbors) is False

    @pytest.mark.parametrize("neighbors", [2, 3])
    def test_live_cell_survives(self, neighbors):
        assert next_state(True, neighbors) is True

    def test_dead_cell_birth(self):
        assert next_state(False, 3) is True

    @pytest.mark.parametrize("neighbors", [0, 1, 2, 4, 5, 6, 7, 8])
    def test_dead_cell_stays_dead(self, neighbors):
        assert next_state(False, neighbors) is False
