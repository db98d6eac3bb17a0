"""Absolute block positions in world space and their packed wire form."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

_XZ_MIN, _XZ_MAX = -0x2000000, 0x1FFFFFF
_Y_MIN, _Y_MAX = -0x800, 0x7FF
_ENCODED_SIZE = 8


class BlockFace(enum.Enum):
    """One of the six faces of a block."""

    BOTTOM = "bottom"
    TOP = "top"
    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"


_FACE_OFFSETS = {
    BlockFace.BOTTOM: (0, -1, 0),
    BlockFace.TOP: (0, 1, 0),
    BlockFace.NORTH: (0, 0, -1),
    BlockFace.SOUTH: (0, 0, 1),
    BlockFace.WEST: (-1, 0, 0),
    BlockFace.EAST: (1, 0, 0),
}


def _sign_extend(value: int, bits: int) -> int:
    sign = 1 << (bits - 1)
    return (value ^ sign) - sign


@dataclass(frozen=True, slots=True)
class BlockPos:
    """An absolute block position in world space."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __iter__(self) -> Iterator[int]:
        return iter((self.x, self.y, self.z))

    @classmethod
    def at(cls, pos: Iterable[float]) -> BlockPos:
        """Return the block position that contains the point ``pos``."""
        x, y, z = pos
        return cls(math.floor(x), math.floor(y), math.floor(z))

    def get_in_direction(self, face: BlockFace) -> BlockPos:
        """Return the position adjacent to this one across ``face``."""
        dx, dy, dz = _FACE_OFFSETS[face]
        return BlockPos(self.x + dx, self.y + dy, self.z + dz)

    def encode(self) -> bytes:
        """Pack this position into its 8-byte big-endian wire form.

        Raises ValueError if a coordinate does not fit the packed layout.
        """
        if not (
            _XZ_MIN <= self.x <= _XZ_MAX
            and _Y_MIN <= self.y <= _Y_MAX
            and _XZ_MIN <= self.z <= _XZ_MAX
        ):
            raise ValueError(f"out of range: {self!r}")
        value = (
            ((self.x & 0x3FFFFFF) << 38)
            | ((self.z & 0x3FFFFFF) << 12)
            | (self.y & 0xFFF)
        )
        return value.to_bytes(_ENCODED_SIZE, "big")

    @classmethod
    def decode(cls, data: bytes) -> BlockPos:
        """Unpack a position from the first 8 bytes of ``data``."""
        if len(data) < _ENCODED_SIZE:
            raise ValueError(
                f"expected {_ENCODED_SIZE} bytes for a block position, got {len(data)}"
            )
        value = int.from_bytes(data[:_ENCODED_SIZE], "big", signed=True)
        x = value >> 38
        z = _sign_extend((value >> 12) & 0x3FFFFFF, 26)
        y = _sign_extend(value & 0xFFF, 12)
        return cls(x, y, z)