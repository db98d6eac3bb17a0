# blockworld

Data structures for a voxel world made of chunks: 16×16 columns of stacked
16×16×16 sections. Block states and biomes are plain integer IDs; the package
has no dependencies outside the standard library.

## Modules

- `blockworld.block_pos` – `BlockPos` (frozen `x`, `y`, `z`) and `BlockFace`.
  `BlockPos.at(point)` floors a point to the block containing it,
  `get_in_direction(face)` gives the neighbouring block, and
  `encode()` / `BlockPos.decode(data)` convert to and from the packed 8-byte
  big-endian form. `encode` raises `ValueError` when X or Z is outside
  −33554432…33554431 or Y is outside −2048…2047.
- `blockworld.chunk_pos` – `ChunkPos` (`x`, `z`). `ChunkPos.at(x, z)` gives the
  chunk containing a point, `ChunkPos.from_block_pos(pos)` the chunk containing
  a block.
- `blockworld.biome` – `Biome` with defaults for a plains biome, plus
  `BiomePrecipitation`, `BiomeGrassColorModifier`, `BiomeMusic`,
  `BiomeAdditionsSound`, `BiomeMoodSound` and `BiomeParticle`.
  `Biome.to_registry_item(id)` returns the registry entry as a dictionary;
  options that are not set are left out of it.
- `blockworld.bvh` – `Aabb` boxes (`union`, `split_at`, `size`, `is_valid`) and
  `Bvh`, a bounding volume hierarchy. `build(pairs)` takes `(data, box)` pairs,
  `traverse()` returns the root as a `Leaf` or an `Internal` (or `None` when
  empty), and `Internal.split()` returns a node's box and its two children.
  Iterating a `Bvh` yields the `(data, box)` pairs; `len()` counts them.
- `blockworld.palette` – `encode_paletted_container`, `build_heightmap` and
  `log2_ceil`, used to build the encoded data of chunk sections.
- `blockworld.chunk` – `UnloadedChunk` and `LoadedChunk`. Both offer
  `height`, `get_block_state` / `set_block_state` (block offsets) and
  `get_biome` / `set_biome` (4×4×4 biome offsets); offsets out of bounds raise
  `IndexError`. A `LoadedChunk` records changed blocks:
  `block_change_packets(pos, min_y)` yields a `BlockChangeSingle` or a
  `BlockChangeMulti` for each changed section, `apply_modifications(n)`
  re-encodes changed sections and the `heightmap`, `chunk_data()` returns the
  encoded sections, and `to_unloaded()` returns a plain copy.
- `blockworld.chunks` – `Chunks(height=256, min_y=0, biome_registry_len=1)`,
  the loaded chunks of one world keyed by `ChunkPos` (or an `(x, z)` pair):
  `insert`, `remove`, `get`, `retain`, `clear`, iteration, and
  `get_block_state` / `set_block_state` in world coordinates, which return
  `None` / `False` outside loaded chunks. `update_created_this_tick()` and
  `update()` apply pending modifications.
- `blockworld.sphere` – `fibonacci_spiral(n)` yields `n` points spread evenly
  over the unit sphere.
- `blockworld.life` – `LifeBoard(size_x=100, size_z=100)`, Conway's game of
  life on a board whose edges wrap around. Cells are read and written as
  `board[x, z]`; there are also `clear`, `live_cells`, `live_neighbours` and
  `step`.
- `blockworld.terrain` – `TerrainGenerator(seed=None)` built on seeded 3-D
  simplex noise, with `has_terrain_at(x, y, z)` and `column(x, z, height)`,
  which returns the block names of one column from `y = 0` upwards (stone,
  dirt, gravel, grass blocks, water below height 55, grass and tall grass on
  top). The helpers `lerpstep`, `noise01` and `fbm` are public too.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from blockworld.block_pos import BlockFace, BlockPos
from blockworld.chunks import Chunks
from blockworld.chunk import UnloadedChunk

pos = BlockPos(0, 0, 0)
assert pos.get_in_direction(BlockFace.SOUTH) == BlockPos(0, 0, 1)
assert BlockPos.decode(pos.encode()) == pos

world = Chunks(height=64)
world.insert((0, 0), UnloadedChunk())
assert world.set_block_state((1, 10, 2), 9)
assert world.get_block_state((1, 10, 2)) == 9
assert world.get_block_state((100, 10, 2)) is None
```

A game of life step:

```python
from blockworld.life import LifeBoard

board = LifeBoard(10, 10)
for x in (3, 4, 5):
    board[x, 4] = True
board.step()
assert board[4, 3] and board[4, 5] and not board[3, 4]
```

## What it does not do

This is a library of world data only. It has no network protocol, no server
or client handling, no players or entities, and no registry of named block
states: blocks in chunks are raw integer IDs (0 is air), and the terrain
generator describes blocks by name without mapping them to IDs. There is no
command-line program.