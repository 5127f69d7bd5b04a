"""Grid data structure for Conway's Game of Life."""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional
import numpy as np
import torch
import torch.nn.functional as F


@dataclass(frozen=True)
class Update:
    """A cell whose liveness changed during a step."""

    x: int
    y: int
    alive: bool


def next_state(alive: bool, neighbors: int) -> bool:
    """Apply Conway's rules to a single cell.

    Args:
        alive: Current state of the cell
        neighbors: Number of living neighbors (0-8)

    Returns:
        State of the cell in the next generation
    """
    if alive:
        # Under- and overpopulation kill, 2 or 3 neighbors survive
        return neighbors in (2, 3)
    return neighbors == 3


class Grid:
    """Fixed-size 2D grid of cells with bounded (non-wrapping) edges.

    Cells live in two flat boolean numpy buffers of length ``width * height``:
    the current generation and a scratch buffer the next generation is
    computed into. Cell ``(x, y)`` is stored at index ``y * width + x``.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            ValueError: If either dimension is negative
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative: {width}x{height}")

        self._width = width
        self._height = height
        self._current = np.zeros(width * height, dtype=bool)
        self._next = np.zeros(width * height, dtype=bool)

        # 3x3 kernel that sums the eight surrounding cells
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._current))

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether ``(x, y)`` addresses a cell of this grid."""
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> Optional[bool]:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if the cell is alive, False if dead, None if out of bounds
        """
        if not self.in_bounds(x, y):
            return None

        return bool(self._current[y * self._width + x])

    def set(self, x: int, y: int, alive: bool) -> Optional[bool]:
        """Set the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            alive: Whether the cell should be alive

        Returns:
            Previous state of the cell, or None if out of bounds
        """
        if not self.in_bounds(x, y):
            return None

        index = y * self._width + x
        previous = bool(self._current[index])
        self._current[index] = bool(alive)
        return previous

    def toggle(self, x: int, y: int) -> Optional[bool]:
        """Toggle the state of a cell.

        Unlike :meth:`set`, this returns the state after the change.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            New state of the cell, or None if out of bounds
        """
        if not self.in_bounds(x, y):
            return None

        index = y * self._width + x
        new_state = not self._current[index]
        self._current[index] = new_state
        return bool(new_state)

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._current.fill(False)

    def count_neighbors(self, x: int, y: int) -> Optional[int]:
        """Count living neighbors of a cell.

        Neighbors outside the grid are not counted, so corner cells have at
        most 3 neighbors and edge cells at most 5.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8), or None if out of bounds
        """
        if not self.in_bounds(x, y):
            return None

        cells = self._current.reshape(self._height, self._width)
        window = cells[max(y - 1, 0) : y + 2, max(x - 1, 0) : x + 2]
        return int(np.count_nonzero(window)) - int(cells[y, x])

    def neighbor_counts(self) -> np.ndarray:
        """Count neighbors for all cells using PyTorch-accelerated convolution.

        Returns:
            Array of shape (height, width) indexed as ``[y, x]``
        """
        if self._current.size == 0:
            return np.zeros((self._height, self._width), dtype=np.int8)

        cells = torch.from_numpy(self._current.reshape(self._height, self._width).astype(np.float32))

        # Zero padding excludes out-of-grid positions from the count
        neighbors = F.conv2d(cells.unsqueeze(0).unsqueeze(0), self._torch_kernel, padding=1)
        return neighbors[0, 0].numpy().astype(np.int8)

    def step(self, on_update: Optional[Callable[[Update], None]] = None) -> None:
        """Advance the grid by one generation.

        Args:
            on_update: Optional callback invoked once for every changed cell
        """
        for update in self.step_iter():
            if on_update is not None:
                on_update(update)

    def step_iter(self) -> Iterator[Update]:
        """Advance the grid by one generation, lazily reporting changes.

        Cells are visited with ``x`` in the outer loop and ``y`` in the inner
        loop. Neighbor counts come from the current generation as it stands
        when the first item is requested; each new state is written into the
        scratch buffer and the buffers are swapped once every cell has been
        visited.

        Stopping early leaves the current generation untouched and a partial
        generation in the scratch buffer. Drain the iterator, or call
        :meth:`step`, to advance atomically.

        Yields:
            Update for each cell whose state changed
        """
        current = self._current
        scratch = self._next
        counts = self.neighbor_counts().reshape(-1)

        for x in range(self._width):
            for y in range(self._height):
                index = y * self._width + x
                alive = bool(current[index])
                lives = next_state(alive, int(counts[index]))
                scratch[index] = lives

                if lives != alive:
                    yield Update(x, y, lives)

        self._current, self._next = scratch, current

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same size and current generation."""
        if not isinstance(other, Grid):
            return False
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self._current, other._current)
        )

    def __repr__(self) -> str:
        return f"Grid({self._width}, {self._height})"

    def __str__(self) -> str:
        """String representation showing living cells as '#' and dead as '.'."""
        cells = self._current.reshape(self._height, self._width)
        return "\n".join("".join("#" if alive else "." for alive in row) for row in cells)
