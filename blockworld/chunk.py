"""Chunk storage: unloaded and loaded chunks and their change packets."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from blockworld.block_pos import BlockPos
from blockworld.chunk_pos import ChunkPos
from blockworld.palette import (
    AIR,
    BLOCK_STATE_MASK,
    MAX_RAW_BLOCK_STATE,
    MODIFIED_BIT,
    SECTION_BIOMES,
    SECTION_BLOCKS,
    build_heightmap,
    encode_paletted_container,
    log2_ceil,
)

MAX_CHUNK_HEIGHT = 4064


@dataclass
class ChunkSection:
    """A 16x16x16 section of blocks and its 4x4x4 biomes.

    Block values are stored in x, z, y order; the top bit of a value marks
    a modification that has not been sent yet.
    """

    blocks: list[int] = field(default_factory=lambda: [AIR] * SECTION_BLOCKS)
    modified_count: int = 0
    biomes: list[int] = field(default_factory=lambda: [0] * SECTION_BIOMES)
    compact_data: bytes = b""


def _copy_section(section: ChunkSection, *, clean: bool = False) -> ChunkSection:
    blocks = (
        [b & BLOCK_STATE_MASK for b in section.blocks] if clean else list(section.blocks)
    )
    return ChunkSection(
        blocks=blocks,
        modified_count=0 if clean else section.modified_count,
        biomes=list(section.biomes),
        compact_data=section.compact_data,
    )


def _check_block(block: int) -> None:
    if not 0 <= block <= MAX_RAW_BLOCK_STATE:
        raise ValueError(f"invalid block state ID {block}")


def _block_index(
    sections: list[ChunkSection], x: int, y: int, z: int
) -> tuple[ChunkSection, int]:
    if not (0 <= x < 16 and 0 <= y < len(sections) * 16 and 0 <= z < 16):
        raise IndexError("chunk block offsets must be within bounds")
    return sections[y // 16], x + z * 16 + (y % 16) * 256


def _biome_index(
    sections: list[ChunkSection], x: int, y: int, z: int
) -> tuple[ChunkSection, int]:
    if not (0 <= x < 4 and 0 <= y < len(sections) * 4 and 0 <= z < 4):
        raise IndexError("chunk biome offsets must be within bounds")
    return sections[y // 4], x + z * 4 + (y % 4) * 16


@dataclass(frozen=True)
class BlockChangeSingle:
    """A change of one block."""

    location: BlockPos
    block_id: int


@dataclass(frozen=True)
class BlockChangeMulti:
    """Changes of several blocks within one chunk section."""

    chunk_section_position: int
    invert_trust_edges: bool
    blocks: list[int]


class UnloadedChunk:
    """A chunk that is not loaded in any world."""

    def __init__(self, height: int = 0) -> None:
        self._sections: list[ChunkSection] = []
        self.resize(height)

    def height(self) -> int:
        """Return the height of the chunk in blocks, a multiple of 16."""
        return len(self._sections) * 16

    def resize(self, new_height: int) -> None:
        """Extend or truncate the chunk from the top; new blocks are air."""
        if new_height < 0 or new_height % 16 != 0 or new_height > MAX_CHUNK_HEIGHT:
            raise ValueError(f"invalid chunk height of {new_height}")
        count = new_height // 16
        if count > len(self._sections):
            self._sections.extend(
                ChunkSection() for _ in range(count - len(self._sections))
            )
        else:
            del self._sections[count:]

    def get_block_state(self, x: int, y: int, z: int) -> int:
        """Return the block state at offsets from the chunk's minimum corner."""
        section, idx = _block_index(self._sections, x, y, z)
        return section.blocks[idx] & BLOCK_STATE_MASK

    def set_block_state(self, x: int, y: int, z: int, block: int) -> None:
        """Set the block state at offsets from the chunk's minimum corner."""
        _check_block(block)
        section, idx = _block_index(self._sections, x, y, z)
        section.blocks[idx] = block

    def get_biome(self, x: int, y: int, z: int) -> int:
        """Return the biome ID at biome offsets (4x4x4 cells) in the chunk."""
        section, idx = _biome_index(self._sections, x, y, z)
        return section.biomes[idx]

    def set_biome(self, x: int, y: int, z: int, biome: int) -> None:
        """Set the biome ID at biome offsets (4x4x4 cells) in the chunk."""
        section, idx = _biome_index(self._sections, x, y, z)
        section.biomes[idx] = biome


class LoadedChunk:
    """A chunk loaded in a world, tracking changes not yet sent."""

    def __init__(
        self,
        chunk: UnloadedChunk,
        section_count: int,
        biome_registry_len: int,
        state: Any = None,
    ) -> None:
        resized = UnloadedChunk()
        resized._sections = [_copy_section(s) for s in chunk._sections]
        resized.resize(section_count * 16)

        self.state = state
        self._sections: list[ChunkSection] = resized._sections
        self._heightmap: list[int] = []
        self.created_this_tick = True

        # Every section starts out modified so its data gets built.
        for section in self._sections:
            section.modified_count = 1
        self.apply_modifications(biome_registry_len)

    @property
    def heightmap(self) -> list[int]:
        """The MOTION_BLOCKING heightmap as of the last applied modification."""
        return list(self._heightmap)

    def height(self) -> int:
        """Return the height of the chunk in blocks, a multiple of 16."""
        return len(self._sections) * 16

    def get_block_state(self, x: int, y: int, z: int) -> int:
        """Return the block state at offsets from the chunk's minimum corner."""
        section, idx = _block_index(self._sections, x, y, z)
        return section.blocks[idx] & BLOCK_STATE_MASK

    def set_block_state(self, x: int, y: int, z: int, block: int) -> None:
        """Set the block state at offsets from the chunk's minimum corner."""
        _check_block(block)
        section, idx = _block_index(self._sections, x, y, z)
        current = section.blocks[idx]
        if block != current & BLOCK_STATE_MASK:
            if not current & MODIFIED_BIT:
                section.modified_count += 1
            section.blocks[idx] = block | MODIFIED_BIT

    def get_biome(self, x: int, y: int, z: int) -> int:
        """Return the biome ID at biome offsets (4x4x4 cells) in the chunk."""
        section, idx = _biome_index(self._sections, x, y, z)
        return section.biomes[idx]

    def set_biome(self, x: int, y: int, z: int, biome: int) -> None:
        """Set the biome ID at biome offsets (4x4x4 cells) in the chunk."""
        section, idx = _biome_index(self._sections, x, y, z)
        section.biomes[idx] = biome

    def chunk_data(self) -> bytes:
        """Return the encoded blocks and biomes, without unapplied changes."""
        return b"".join(section.compact_data for section in self._sections)

    def block_change_packets(
        self, pos: ChunkPos, min_y: int
    ) -> Iterator[BlockChangeSingle | BlockChangeMulti]:
        """Yield packets describing the changes not yet applied, by section."""
        for sect_y, section in enumerate(self._sections):
            if section.modified_count == 1:
                idx, block = next(
                    (i, b) for i, b in enumerate(section.blocks) if b & MODIFIED_BIT
                )
                yield BlockChangeSingle(
                    location=BlockPos(
                        pos.x * 16 + idx % 16,
                        sect_y * 16 + idx // 256 + min_y,
                        pos.z * 16 + idx // 16 % 16,
                    ),
                    block_id=block & BLOCK_STATE_MASK,
                )
            elif section.modified_count > 1:
                blocks = [
                    (block & BLOCK_STATE_MASK) << 12
                    | (idx % 16) << 8
                    | (idx // 16 % 16) << 4
                    | idx // 256
                    for idx, block in enumerate(section.blocks)
                    if block & MODIFIED_BIT
                ]
                position = (
                    (pos.x << 42)
                    | ((pos.z & 0x3FFFFF) << 20)
                    | ((sect_y + min_y // 16) & 0xFFFFF)
                ) & 0xFFFFFFFFFFFFFFFF
                if position >= 1 << 63:
                    position -= 1 << 64
                yield BlockChangeMulti(
                    chunk_section_position=position,
                    invert_trust_edges=False,
                    blocks=blocks,
                )

    def apply_modifications(self, biome_registry_len: int) -> None:
        """Rebuild the encoded data of modified sections and clear their marks."""
        any_modified = False
        block_bits = log2_ceil(MAX_RAW_BLOCK_STATE)

        for section in self._sections:
            if section.modified_count <= 0:
                continue
            section.modified_count = 0
            any_modified = True

            section.blocks = [b & BLOCK_STATE_MASK for b in section.blocks]
            non_air = sum(1 for b in section.blocks if b != AIR)

            section.compact_data = (
                non_air.to_bytes(2, "big", signed=True)
                + encode_paletted_container(section.blocks, 4, 9, block_bits)
                + encode_paletted_container(
                    section.biomes, 0, 4, log2_ceil(biome_registry_len)
                )
            )

        if any_modified:
            self._heightmap = build_heightmap([s.blocks for s in self._sections])

    def to_unloaded(self) -> UnloadedChunk:
        """Return an unloaded copy of this chunk's blocks and biomes."""
        chunk = UnloadedChunk()
        chunk._sections = [_copy_section(s, clean=True) for s in self._sections]
        return chunk