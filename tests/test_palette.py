import struct

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blockworld.palette import (
    AIR,
    SECTION_BLOCKS,
    build_heightmap,
    encode_paletted_container,
    log2_ceil,
)


def _read_varint(data, pos):
    result = shift = 0
    while True:
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            break
    if result >= 1 << 31:
        result -= 1 << 32
    return result, pos


def _decode_container(data, count, min_bits, threshold, direct_bits):
    bits = data[0]
    pos = 1
    if bits == 0:
        value, pos = _read_varint(data, pos)
        length, pos = _read_varint(data, pos)
        assert length == 0
        return [value] * count, pos
    palette = None
    if bits >= threshold:
        width = direct_bits
    else:
        size, pos = _read_varint(data, pos)
        palette = []
        for _ in range(size):
            value, pos = _read_varint(data, pos)
            palette.append(value)
        width = max(bits, min_bits)
    nwords, pos = _read_varint(data, pos)
    words = struct.unpack_from(f">{nwords}Q", data, pos)
    pos += 8 * nwords
    per = 64 // width
    mask = (1 << width) - 1
    values = [(w >> (i * width)) & mask for w in words for i in range(per)][:count]
    if palette is not None:
        values = [palette[v] for v in values]
    return values, pos


def _heights(words, height):
    bits = log2_ceil(height)
    per = 64 // bits
    mask = (1 << bits) - 1
    return [
        ((words[i // per] & 0xFFFFFFFFFFFFFFFF) >> (i % per * bits)) & mask
        for i in range(256)
    ]


@given(st.integers(min_value=1, max_value=1 << 20))
def test_log2_ceil_bounds(n):
    k = log2_ceil(n)
    assert 2**k >= n
    assert k == 0 or 2 ** (k - 1) < n


def test_log2_ceil_of_one_is_zero():
    assert log2_ceil(1) == 0


@pytest.mark.parametrize("n", [0, -3])
def test_log2_ceil_rejects_non_positive(n):
    with pytest.raises(ValueError):
        log2_ceil(n)


def test_single_value_container():
    assert encode_paletted_container([7] * 64, 0, 4, 6) == bytes([0, 7, 0])


def test_empty_container_rejected():
    with pytest.raises(ValueError):
        encode_paletted_container([], 4, 9, 15)


@given(st.lists(st.integers(min_value=0, max_value=300), min_size=1, max_size=300))
def test_indirect_round_trip(entries):
    data = encode_paletted_container(entries, 4, 9, 15)
    values, end = _decode_container(data, len(entries), 4, 9, 15)
    assert values == entries
    assert end == len(data)


def test_header_holds_unclamped_bits():
    entries = [1, 2] * 32
    data = encode_paletted_container(entries, 4, 9, 15)
    assert data[0] == log2_ceil(2)
    values, _ = _decode_container(data, len(entries), 4, 9, 15)
    assert values == entries


def test_direct_round_trip():
    entries = [i % 600 for i in range(SECTION_BLOCKS)]
    data = encode_paletted_container(entries, 4, 9, 15)
    assert data[0] >= 9
    values, end = _decode_container(data, len(entries), 4, 9, 15)
    assert values == entries
    assert end == len(data)


def test_heightmap_of_air_is_zero():
    words = build_heightmap([[AIR] * SECTION_BLOCKS])
    assert set(words) == {0}
    assert _heights(words, 16) == [0] * 256


def test_heightmap_records_topmost_block():
    lower = [AIR] * SECTION_BLOCKS
    upper = [AIR] * SECTION_BLOCKS
    lower[3 + 5 * 16 + 2 * 256] = 1
    upper[3 + 5 * 16 + 4 * 256] = 9
    lower[0 + 15 * 16 + 15 * 256] = 2
    words = build_heightmap([lower, upper])
    heights = _heights(words, 32)
    assert heights[3 * 16 + 5] == 20
    assert heights[0 * 16 + 15] == 15
    assert sum(1 for h in heights if h) == 2


def test_heightmap_ignores_modified_bit_on_air():
    blocks = [AIR] * SECTION_BLOCKS
    blocks[0] = AIR | 0x8000
    assert set(build_heightmap([blocks])) == {0}


def test_heightmap_words_are_signed_64_bit():
    blocks = [AIR] * SECTION_BLOCKS
    for z in range(16):
        blocks[z * 16 + 15 * 256] = 1
    words = build_heightmap([blocks])
    assert all(-(1 << 63) <= w < (1 << 63) for w in words)
    assert _heights(words, 16)[:16] == [15] * 16


def test_heightmap_needs_sections():
    with pytest.raises(ValueError):
        build_heightmap([])