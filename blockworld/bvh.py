"""A bounding volume hierarchy over axis-aligned boxes."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import reduce
from typing import Generic, TypeVar

T = TypeVar("T")

Vec3 = tuple[float, float, float]

_EPSILON = sys.float_info.epsilon * 100.0
_MAX_NODES = 0xFFFFFFFF


@dataclass(frozen=True, slots=True)
class Aabb:
    """An axis-aligned bounding box."""

    min: Vec3
    max: Vec3

    def union(self, other: Aabb) -> Aabb:
        """Return the smallest box containing both boxes."""
        return Aabb(
            tuple(map(min, self.min, other.min)),
            tuple(map(max, self.max, other.max)),
        )

    def split_at(self, axis: int, value: float) -> tuple[Aabb, Aabb]:
        """Cut the box with the plane ``axis == value`` into a lower and upper half."""
        upper_of_left = list(self.max)
        upper_of_left[axis] = value
        lower_of_right = list(self.min)
        lower_of_right[axis] = value
        return Aabb(self.min, tuple(upper_of_left)), Aabb(tuple(lower_of_right), self.max)

    def size(self) -> Vec3:
        """Return the extent of the box along each axis."""
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    def is_valid(self) -> bool:
        """Return True if no minimum exceeds its maximum."""
        return all(lo <= hi for lo, hi in zip(self.min, self.max))

    def _is_degenerate(self) -> bool:
        return all(abs(hi - lo) <= _EPSILON for lo, hi in zip(self.min, self.max))


@dataclass(frozen=True, slots=True)
class Leaf(Generic[T]):
    """A leaf of the hierarchy: one stored item and its box."""

    data: T
    bb: Aabb


@dataclass(slots=True)
class _InternalNode:
    bb: Aabb | None = None
    left: int = -1
    right: int = -1


class Internal(Generic[T]):
    """An internal node of the hierarchy with two children."""

    __slots__ = ("_bvh", "_idx")

    def __init__(self, bvh: Bvh[T], idx: int) -> None:
        self._bvh = bvh
        self._idx = idx

    @property
    def bb(self) -> Aabb:
        return self._bvh._internal[self._idx].bb

    def split(self) -> tuple[Aabb, Leaf[T] | Internal[T], Leaf[T] | Internal[T]]:
        """Return this node's box and its left and right children."""
        node = self._bvh._internal[self._idx]
        return node.bb, self._bvh._node(node.left), self._bvh._node(node.right)


def _middle(bb: Aabb, axis: int) -> float:
    return (bb.min[axis] + bb.max[axis]) / 2.0


def _partition(items: list, lo: int, hi: int, pred: Callable) -> int:
    """Move items satisfying ``pred`` to the front of items[lo:hi]; return their count."""
    front, back = lo, hi
    count = 0
    while True:
        while front < back and pred(items[front]):
            count += 1
            front += 1
        if front == back:
            break
        head = front
        front += 1
        while back > front and not pred(items[back - 1]):
            back -= 1
        if back == front:
            break
        back -= 1
        items[head], items[back] = items[back], items[head]
        count += 1
    return count


class Bvh(Generic[T]):
    """A bounding volume hierarchy built from (item, box) pairs."""

    def __init__(self) -> None:
        self._internal: list[_InternalNode] = []
        self._leaves: list[Leaf[T]] = []
        self._root = -1

    def build(self, leaves: Iterable[tuple[T, Aabb]]) -> None:
        """Replace the contents with ``leaves`` and rebuild the tree."""
        self._leaves = [Leaf(data, bb) for data, bb in leaves]
        self._internal = []
        self._root = -1

        leaf_count = len(self._leaves)
        if leaf_count == 0:
            return
        if 2 * leaf_count - 1 > _MAX_NODES:
            raise OverflowError("too many elements in BVH")

        self._internal = [_InternalNode() for _ in range(leaf_count - 1)]
        scene_bounds = reduce(Aabb.union, (leaf.bb for leaf in self._leaves))
        self._root = self._build(0, scene_bounds, 0, leaf_count)[0]

    def _build(self, idx: int, bounds: Aabb, lo: int, hi: int) -> tuple[int, Aabb]:
        count = hi - lo
        if count == 1:
            return len(self._leaves) - 1 + idx, self._leaves[lo].bb

        while True:
            dx, dy, dz = bounds.size()
            if dx >= dy and dx >= dz:
                axis = 0
            elif dy >= dz:
                axis = 1
            else:
                axis = 2

            mid = (bounds.min[axis] + bounds.max[axis]) / 2.0
            bounds_left, bounds_right = bounds.split_at(axis, mid)
            split = _partition(
                self._leaves, lo, hi, lambda leaf: _middle(leaf.bb, axis) <= mid
            )

            # Neither half may be empty; overlapping points are split arbitrarily.
            if split == 0:
                if bounds_right._is_degenerate() or bounds_right == bounds:
                    split = 1
                else:
                    bounds = bounds_right
                    continue
            elif split == count:
                if bounds_left._is_degenerate() or bounds_left == bounds:
                    split -= 1
                else:
                    bounds = bounds_left
                    continue
            break

        left, left_bb = self._build(idx, bounds_left, lo, lo + split)
        right, right_bb = self._build(idx + split, bounds_right, lo + split, hi)

        node = self._internal[idx + split - 1]
        node.bb = left_bb.union(right_bb)
        node.left = left
        node.right = right
        return idx + split - 1, node.bb

    def _node(self, idx: int) -> Leaf[T] | Internal[T]:
        if idx < len(self._internal):
            return Internal(self, idx)
        return self._leaves[idx - len(self._internal)]

    def traverse(self) -> Leaf[T] | Internal[T] | None:
        """Return the root node, or None when the hierarchy is empty."""
        if not self._leaves:
            return None
        return self._node(self._root)

    def __iter__(self) -> Iterator[tuple[T, Aabb]]:
        return ((leaf.data, leaf.bb) for leaf in self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)