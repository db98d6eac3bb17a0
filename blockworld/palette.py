"""Paletted container and heightmap encoding for chunk sections."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Iterator, Sequence
from itertools import islice

BLOCK_STATE_MASK = 0x7FFF
"""Bits of a stored block value that hold the raw block state ID."""

MODIFIED_BIT = 0x8000
"""Bit of a stored block value that marks an unsent modification."""

AIR = 0
"""Raw block state ID of air."""

MAX_RAW_BLOCK_STATE = BLOCK_STATE_MASK
"""Largest raw block state ID that can be stored in a section."""

SECTION_BLOCKS = 16 * 16 * 16
SECTION_BIOMES = 4 * 4 * 4


def log2_ceil(n: int) -> int:
    """Return the base-2 logarithm of ``n`` rounded up."""
    if n <= 0:
        raise ValueError(f"log2_ceil needs a positive argument, got {n}")
    return (n - 1).bit_length()


def _varint(value: int) -> bytes:
    value &= 0xFFFFFFFF
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _to_i64(value: int) -> int:
    value &= 0xFFFFFFFFFFFFFFFF
    return value - (1 << 64) if value >= 1 << 63 else value


def _pack_words(values: Iterable[int], bits: int) -> Iterator[int]:
    """Pack ``values`` of ``bits`` width into 64-bit words, low bits first."""
    per_word = 64 // bits
    it = iter(values)
    while group := list(islice(it, per_word)):
        word = 0
        for slot, value in enumerate(group):
            word |= value << (slot * bits)
        yield word


def _encode_words(words: Sequence[int]) -> bytes:
    return _varint(len(words)) + struct.pack(f">{len(words)}Q", *words)


def encode_paletted_container(
    entries: Iterable[int],
    min_bits_per_idx: int,
    direct_threshold: int,
    direct_bits_per_idx: int,
) -> bytes:
    """Encode ``entries`` as a paletted container.

    A single distinct value is written without a data array; a palette that
    needs at least ``direct_threshold`` bits per index is skipped in favour of
    the raw values packed at ``direct_bits_per_idx`` bits each.
    """
    values = list(entries)
    if not values:
        raise ValueError("a paletted container needs at least one entry")

    palette = list(dict.fromkeys(values))
    bits_per_idx = log2_ceil(len(palette))

    out = bytearray([bits_per_idx])

    if bits_per_idx == 0:
        out += _varint(palette[0])
        out += _varint(0)
    elif bits_per_idx >= direct_threshold:
        out += _encode_words(list(_pack_words(values, direct_bits_per_idx)))
    else:
        out += _varint(len(palette))
        for value in palette:
            out += _varint(value)
        index_of = {value: idx for idx, value in enumerate(palette)}
        width = max(bits_per_idx, min_bits_per_idx)
        out += _encode_words(list(_pack_words((index_of[v] for v in values), width)))

    return bytes(out)


def build_heightmap(sections: Sequence[Sequence[int]]) -> list[int]:
    """Build the MOTION_BLOCKING heightmap of a chunk.

    ``sections`` holds the stored block values of each 16-block section,
    bottom first, in x, z, y order. The result is a list of signed 64-bit words.
    """
    height = len(sections) * 16
    bits = log2_ceil(height)
    per_word = 64 // bits
    words = [0] * math.ceil(256 / per_word)

    for x in range(16):
        for z in range(16):
            top = next(
                (
                    y
                    for y in reversed(range(height))
                    if sections[y // 16][x + z * 16 + (y % 16) * 256] & BLOCK_STATE_MASK
                    != AIR
                ),
                None,
            )
            if top is not None:
                column = x * 16 + z
                words[column // per_word] |= top << (column % per_word * bits)

    return [_to_i64(word) for word in words]