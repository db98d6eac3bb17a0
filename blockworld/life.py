"""A toroidal board for Conway's game of life laid out on the X/Z plane."""

from __future__ import annotations

from collections.abc import Iterator

DEFAULT_SIZE_X = 100
DEFAULT_SIZE_Z = 100

_NEIGHBOUR_OFFSETS = tuple(
    (dx, dz) for dz in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dz) != (0, 0)
)


class LifeBoard:
    """A grid of live and dead cells whose edges wrap around.

    Cells are addressed by ``(x, z)`` with ``0 <= x < size_x`` and
    ``0 <= z < size_z``.
    """

    def __init__(self, size_x: int = DEFAULT_SIZE_X, size_z: int = DEFAULT_SIZE_Z) -> None:
        if size_x <= 0 or size_z <= 0:
            raise ValueError(f"board dimensions must be positive, got {size_x}x{size_z}")
        self.size_x = size_x
        self.size_z = size_z
        self._cells = [False] * (size_x * size_z)

    def _index(self, pos: tuple[int, int]) -> int:
        x, z = pos
        if not (0 <= x < self.size_x and 0 <= z < self.size_z):
            raise IndexError(f"cell {pos!r} is outside the board")
        return x + z * self.size_x

    def __getitem__(self, pos: tuple[int, int]) -> bool:
        return self._cells[self._index(pos)]

    def __setitem__(self, pos: tuple[int, int], alive: bool) -> None:
        self._cells[self._index(pos)] = bool(alive)

    def clear(self) -> None:
        """Kill every cell."""
        self._cells = [False] * (self.size_x * self.size_z)

    def live_cells(self) -> Iterator[tuple[int, int]]:
        """Yield the positions of all live cells in x-major row order."""
        for idx, alive in enumerate(self._cells):
            if alive:
                yield idx % self.size_x, idx // self.size_x

    def live_neighbours(self, x: int, z: int) -> int:
        """Return how many of the eight cells around ``(x, z)`` are alive."""
        return sum(
            self._cells[(x + dx) % self.size_x + ((z + dz) % self.size_z) * self.size_x]
            for dx, dz in _NEIGHBOUR_OFFSETS
        )

    def step(self) -> None:
        """Advance the board by one generation."""
        next_cells = []
        for idx, alive in enumerate(self._cells):
            count = self.live_neighbours(idx % self.size_x, idx // self.size_x)
            next_cells.append(2 <= count <= 3 if alive else count == 3)
        self._cells = next_cells