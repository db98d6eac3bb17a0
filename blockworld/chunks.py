"""The set of loaded chunks that make up one world."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from blockworld.block_pos import BlockPos
from blockworld.chunk import MAX_CHUNK_HEIGHT, LoadedChunk, UnloadedChunk
from blockworld.chunk_pos import ChunkPos


def _as_chunk_pos(pos: ChunkPos | Iterable[int]) -> ChunkPos:
    if isinstance(pos, ChunkPos):
        return pos
    x, z = pos
    return ChunkPos(x, z)


def _as_block_pos(pos: BlockPos | Iterable[int]) -> BlockPos:
    if isinstance(pos, BlockPos):
        return pos
    x, y, z = pos
    return BlockPos(x, y, z)


class Chunks:
    """All loaded chunks of a world, keyed by chunk position.

    ``height`` and ``min_y`` describe the world's dimension: every inserted
    chunk is resized to ``height`` blocks, and world-space Y coordinates are
    offset by ``min_y``. ``biome_registry_len`` is the number of registered
    biomes, which fixes the width of encoded biome indices.
    """

    def __init__(
        self, height: int = 256, min_y: int = 0, biome_registry_len: int = 1
    ) -> None:
        if height < 0 or height % 16 != 0 or height > MAX_CHUNK_HEIGHT:
            raise ValueError(f"invalid dimension height of {height}")
        if biome_registry_len < 1:
            raise ValueError("the biome registry must hold at least one biome")
        self.height = height
        self.min_y = min_y
        self.biome_registry_len = biome_registry_len
        self._chunks: dict[ChunkPos, LoadedChunk] = {}

    def insert(
        self, pos: ChunkPos | Iterable[int], chunk: UnloadedChunk, state: Any = None
    ) -> LoadedChunk:
        """Load ``chunk`` at ``pos``, replacing any chunk already there."""
        loaded = LoadedChunk(chunk, self.height // 16, self.biome_registry_len, state)
        self._chunks[_as_chunk_pos(pos)] = loaded
        return loaded

    def remove(self, pos: ChunkPos | Iterable[int]) -> tuple[UnloadedChunk, Any] | None:
        """Unload the chunk at ``pos`` and return its contents and state."""
        loaded = self._chunks.pop(_as_chunk_pos(pos), None)
        if loaded is None:
            return None
        return loaded.to_unloaded(), loaded.state

    def get(self, pos: ChunkPos | Iterable[int]) -> LoadedChunk | None:
        """Return the chunk at ``pos``, or None if none is loaded there."""
        return self._chunks.get(_as_chunk_pos(pos))

    def __contains__(self, pos: object) -> bool:
        try:
            return _as_chunk_pos(pos) in self._chunks  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[tuple[ChunkPos, LoadedChunk]]:
        return iter(list(self._chunks.items()))

    def retain(self, predicate: Callable[[ChunkPos, LoadedChunk], bool]) -> None:
        """Unload every chunk for which ``predicate(pos, chunk)`` is false."""
        self._chunks = {
            pos: chunk for pos, chunk in self._chunks.items() if predicate(pos, chunk)
        }

    def clear(self) -> None:
        """Unload all chunks."""
        self._chunks.clear()

    def _locate(self, pos: BlockPos | Iterable[int]) -> tuple[LoadedChunk, int, int, int] | None:
        block = _as_block_pos(pos)
        chunk = self._chunks.get(ChunkPos.from_block_pos(block))
        if chunk is None:
            return None
        y = block.y - self.min_y
        if not 0 <= y < chunk.height():
            return None
        return chunk, block.x % 16, y, block.z % 16

    def get_block_state(self, pos: BlockPos | Iterable[int]) -> int | None:
        """Return the block state at a world position, or None outside loaded chunks."""
        found = self._locate(pos)
        if found is None:
            return None
        chunk, x, y, z = found
        return chunk.get_block_state(x, y, z)

    def set_block_state(self, pos: BlockPos | Iterable[int], block: int) -> bool:
        """Set the block state at a world position; return False if it is not loaded."""
        found = self._locate(pos)
        if found is None:
            return False
        chunk, x, y, z = found
        chunk.set_block_state(x, y, z, block)
        return True

    def update_created_this_tick(self) -> None:
        """Apply pending modifications to chunks created during this tick only."""
        for chunk in self._chunks.values():
            if chunk.created_this_tick:
                chunk.apply_modifications(self.biome_registry_len)

    def update(self) -> None:
        """Apply pending modifications to all chunks and end their first tick."""
        for chunk in self._chunks.values():
            chunk.apply_modifications(self.biome_registry_len)
            chunk.created_this_tick = False