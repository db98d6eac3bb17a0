"""Horizontal positions of chunks in a world."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from blockworld.block_pos import BlockPos


@dataclass(frozen=True, order=True, slots=True)
class ChunkPos:
    """The X and Z position of a chunk."""

    x: int
    z: int

    def __iter__(self) -> Iterator[int]:
        return iter((self.x, self.z))

    @classmethod
    def at(cls, x: float, z: float) -> ChunkPos:
        """Return the chunk position containing the absolute point (x, z)."""
        return cls(math.floor(x / 16.0), math.floor(z / 16.0))

    @classmethod
    def from_block_pos(cls, pos: BlockPos) -> ChunkPos:
        """Return the chunk position containing a block position."""
        return cls(pos.x // 16, pos.z // 16)