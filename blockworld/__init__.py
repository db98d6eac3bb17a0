"""Voxel world data structures: positions, chunks, biomes, a BVH, game of life and terrain."""

__version__ = "0.1.0"