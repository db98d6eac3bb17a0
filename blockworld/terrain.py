"""Procedural terrain columns built from layered simplex noise."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Protocol

WATER_HEIGHT = 55
"""Columns without terrain are filled with water below this height."""

AIR = "air"
STONE = "stone"
DIRT = "dirt"
GRAVEL = "gravel"
GRASS_BLOCK = "grass_block"
WATER = "water"
GRASS = "grass"
TALL_GRASS_LOWER = "tall_grass[half=lower]"
TALL_GRASS_UPPER = "tall_grass[half=upper]"

_U32 = 0xFFFFFFFF


class _Noise(Protocol):
    def get(self, xyz: Sequence[float]) -> float: ...


_GRADIENTS = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)
_F3 = 1.0 / 3.0
_G3 = 1.0 / 6.0


class _SimplexNoise:
    """Seeded three-dimensional simplex noise with output in [-1, 1]."""

    def __init__(self, seed: int) -> None:
        table = list(range(256))
        random.Random(seed).shuffle(table)
        self._perm = table * 2

    def _corner(self, gi: int, x: float, y: float, z: float) -> float:
        t = 0.6 - x * x - y * y - z * z
        if t <= 0.0:
            return 0.0
        gx, gy, gz = _GRADIENTS[gi]
        t *= t
        return t * t * (gx * x + gy * y + gz * z)

    def get(self, xyz: Sequence[float]) -> float:
        x, y, z = xyz
        s = (x + y + z) * _F3
        i, j, k = math.floor(x + s), math.floor(y + s), math.floor(z + s)
        t = (i + j + k) * _G3
        x0, y0, z0 = x - (i - t), y - (j - t), z - (k - t)

        if x0 >= y0:
            if y0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 1, 0
            elif x0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 0, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 1, 0, 1
        else:
            if y0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 0, 1, 1
            elif x0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 0, 1, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 1, 1, 0

        x1, y1, z1 = x0 - i1 + _G3, y0 - j1 + _G3, z0 - k1 + _G3
        x2, y2, z2 = x0 - i2 + 2 * _G3, y0 - j2 + 2 * _G3, z0 - k2 + 2 * _G3
        x3, y3, z3 = x0 - 1 + 3 * _G3, y0 - 1 + 3 * _G3, z0 - 1 + 3 * _G3

        p = self._perm
        ii, jj, kk = i & 255, j & 255, k & 255
        g0 = p[ii + p[jj + p[kk]]] % 12
        g1 = p[ii + i1 + p[jj + j1 + p[kk + k1]]] % 12
        g2 = p[ii + i2 + p[jj + j2 + p[kk + k2]]] % 12
        g3 = p[ii + 1 + p[jj + 1 + p[kk + 1]]] % 12

        total = (
            self._corner(g0, x0, y0, z0)
            + self._corner(g1, x1, y1, z1)
            + self._corner(g2, x2, y2, z2)
            + self._corner(g3, x3, y3, z3)
        )
        return max(-1.0, min(1.0, 32.0 * total))


def lerpstep(edge0: float, edge1: float, x: float) -> float:
    """Return 0 at or below ``edge0``, 1 at or above ``edge1``, linear between."""
    if x <= edge0:
        return 0.0
    if x >= edge1:
        return 1.0
    return (x - edge0) / (edge1 - edge0)


def noise01(noise: _Noise, xyz: Sequence[float]) -> float:
    """Sample ``noise`` at ``xyz`` and map its [-1, 1] output to [0, 1]."""
    return (noise.get(tuple(xyz)) + 1.0) / 2.0


def fbm(
    noise: _Noise,
    p: Sequence[float],
    octaves: int,
    lacunarity: float,
    persistence: float,
) -> float:
    """Fractal Brownian motion: a weighted sum of octaves, scaled to [0, 1]."""
    if octaves < 1:
        raise ValueError(f"fbm needs at least one octave, got {octaves}")
    freq = 1.0
    amp = 1.0
    amp_sum = 0.0
    total = 0.0
    for _ in range(octaves):
        total += noise01(noise, [a * freq for a in p]) * amp
        amp_sum += amp
        freq *= lacunarity
        amp *= persistence
    return total / amp_sum


class TerrainGenerator:
    """Generates hilly terrain with water, gravel beaches and grass."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = random.getrandbits(32)
        self.seed = seed & _U32
        (
            self._density,
            self._hilly,
            self._stone,
            self._gravel,
            self._grass,
        ) = (_SimplexNoise((self.seed + offset) & _U32) for offset in range(5))

    def has_terrain_at(self, x: int, y: int, z: int) -> bool:
        """Return True if the block at (x, y, z) is solid ground."""
        t = noise01(self._hilly, (x / 400.0, y / 400.0, z / 400.0)) ** 2
        hilly = 0.1 + (1.0 - 0.1) * t

        lower = 15.0 + 100.0 * hilly
        upper = lower + 100.0 * hilly

        if y <= lower:
            return True
        if y >= upper:
            return False

        density = 1.0 - lerpstep(lower, upper, float(y))
        n = fbm(self._density, (x / 100.0, y / 100.0, z / 100.0), 4, 2.0, 0.5)
        return n < density

    def column(self, x: int, z: int, height: int) -> list[str]:
        """Return the blocks of the column at (x, z), indexed by y from 0 up."""
        if height < 0:
            raise ValueError(f"column height must not be negative, got {height}")

        blocks = [AIR] * height
        in_terrain = False
        depth = 0

        for y in reversed(range(height)):
            if self.has_terrain_at(x, y, z):
                gravel_height = WATER_HEIGHT - 1 - math.floor(
                    fbm(self._gravel, (x / 10.0, y / 10.0, z / 10.0), 3, 2.0, 0.5) * 6.0
                )
                if in_terrain:
                    if depth > 0:
                        depth -= 1
                        blocks[y] = GRAVEL if y < gravel_height else DIRT
                    else:
                        blocks[y] = STONE
                else:
                    in_terrain = True
                    n = noise01(self._stone, (x / 15.0, y / 15.0, z / 15.0))
                    depth = math.floor(n * 5.0 + 0.5)
                    if y < gravel_height:
                        blocks[y] = GRAVEL
                    elif y < WATER_HEIGHT - 1:
                        blocks[y] = DIRT
                    else:
                        blocks[y] = GRASS_BLOCK
            else:
                in_terrain = False
                depth = 0
                blocks[y] = WATER if y < WATER_HEIGHT else AIR

        for y in reversed(range(1, height)):
            if blocks[y] != AIR or blocks[y - 1] != GRASS_BLOCK:
                continue
            density = fbm(self._grass, (x / 5.0, y / 5.0, z / 5.0), 4, 2.0, 0.7)
            if density <= 0.55:
                continue
            if density > 0.7 and y + 1 < height and blocks[y + 1] == AIR:
                blocks[y + 1] = TALL_GRASS_UPPER
                blocks[y] = TALL_GRASS_LOWER
            else:
                blocks[y] = GRASS

        return blocks