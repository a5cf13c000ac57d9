"""A block-based bump allocator with a per-node occupancy bitmap.

Memory is handed out as integer addresses. Each allocation is preceded by a
one-word header, so an address is never zero. When the current node cannot
hold a request, a new node of the same geometry is chained on, up to
``max_nodes`` nodes in total.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["ArenaError", "Arena", "next_power_of_two"]

_WORD = 8


class ArenaError(Exception):
    """Raised when an arena request cannot be satisfied or is invalid."""


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is at least ``n`` (1 for 0)."""
    if n < 0:
        raise ValueError("n must not be negative")
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


@dataclass
class _Node:
    bitmap: bytearray
    memory: bytearray
    cursor: int = 0
    live: dict[int, int] = field(default_factory=dict)


class Arena:
    """An arena of fixed-size nodes, either byte-granular or block-aligned."""

    def __init__(self, size: int, max_nodes: int = 1, block_size: int | None = None):
        if size <= 0:
            raise ArenaError("arena size must be positive")
        self.aligned = block_size is not None
        if block_size is not None:
            if block_size < _WORD:
                raise ArenaError(f"block size must be at least {_WORD} bytes")
            self.block_size = next_power_of_two(block_size)
        else:
            self.block_size = 1
        self.size = next_power_of_two(size)
        self.bitmap_size = self.size // (8 * self.block_size)
        if self.bitmap_size == 0:
            raise ArenaError("arena too small for its block size")
        self.max_nodes = max_nodes
        self._unit = self.block_size + _WORD if self.aligned else 1
        self._capacity = self.size // self.block_size
        self._region = self._capacity * self._unit
        self._nodes = [self._new_node()]

    @property
    def node_count(self) -> int:
        """Number of nodes currently chained in the arena."""
        return len(self._nodes)

    def alloc(self, size: int) -> int:
        """Reserve ``size`` bytes and return the address of the first one."""
        if size <= 0:
            raise ArenaError("allocation size must be positive")
        blocks = self._blocks(size)
        if blocks > self._capacity:
            raise ArenaError("allocation larger than an arena node")
        node = self._nodes[-1]
        if node.cursor + blocks > self._capacity:
            if len(self._nodes) >= self.max_nodes:
                raise ArenaError("arena exhausted")
            node = self._new_node()
            self._nodes.append(node)
        index = node.cursor
        node.live[index] = size
        self._mark(node, index, blocks, True)
        node.cursor += blocks
        node_index = len(self._nodes) - 1
        return node_index * self._region + index * self._unit + _WORD

    def alloc_array(self, obj_size: int, count: int) -> int:
        """Reserve room for ``count`` objects of ``obj_size`` bytes each."""
        return self.alloc(obj_size * count)

    def realloc(self, ptr: int, size: int) -> int:
        """Move an allocation to a new one of ``size`` bytes, keeping its data."""
        _, _, old_size = self._locate(ptr)
        if size < old_size:
            raise ArenaError("reallocation cannot shrink an allocation")
        data = self.read(ptr)
        new_ptr = self.alloc(size)
        self.write(new_ptr, data)
        self.free(ptr)
        return new_ptr

    def strdup(self, text: str) -> int:
        """Copy ``text`` as NUL-terminated UTF-8 into the arena."""
        encoded = text.encode("utf-8") + b"\0"
        ptr = self.alloc(len(encoded))
        self.write(ptr, encoded)
        return ptr

    def read(self, ptr: int, length: int | None = None) -> bytes:
        """Return ``length`` bytes (default: the whole allocation) at ``ptr``."""
        node, index, size = self._locate(ptr)
        if length is None:
            length = size
        if length < 0 or length > size:
            raise ArenaError("read outside of the allocation")
        start = index * self._unit + _WORD
        return bytes(node.memory[start:start + length])

    def write(self, ptr: int, data: bytes) -> None:
        """Store ``data`` at the start of the allocation at ``ptr``."""
        node, index, size = self._locate(ptr)
        if len(data) > size:
            raise ArenaError("write outside of the allocation")
        start = index * self._unit + _WORD
        node.memory[start:start + len(data)] = data

    def free(self, ptr: int) -> None:
        """Release the allocation at ``ptr`` and zero its memory."""
        node, index, size = self._locate(ptr)
        blocks = self._blocks(size)
        start = index * self._unit
        end = start + blocks * self._unit
        node.memory[start:end] = bytes(end - start)
        self._mark(node, index, blocks, False)
        del node.live[index]

    def reset(self) -> None:
        """Drop every allocation and every extra node."""
        self._nodes = [self._new_node()]

    def used(self) -> int:
        """Bytes marked as in use across all nodes."""
        bits = sum(byte.bit_count() for node in self._nodes for byte in node.bitmap)
        return bits * self.block_size

    def describe(self) -> str:
        """A short human-readable summary of the arena."""
        return "\n".join([
            "Arena:",
            f"  aligned:     {'true' if self.aligned else 'false'};",
            f"  size bitmap: {self.bitmap_size} bytes;",
            f"  size block:  {self.block_size} bytes;",
            f"  size:        {self.size} bytes;",
            f"  size used:   {self.used()} bytes;",
            f"  max nodes:   {self.max_nodes};",
            f"  nº nodes:    {self.node_count};",
        ])

    def _new_node(self) -> _Node:
        return _Node(bitmap=bytearray(self.bitmap_size), memory=bytearray(self._region))

    def _blocks(self, nbytes: int) -> int:
        if self.aligned:
            return -(-(nbytes + _WORD) // self.block_size)
        return nbytes + _WORD

    def _locate(self, ptr: int) -> tuple[_Node, int, int]:
        if not isinstance(ptr, int) or isinstance(ptr, bool) or ptr < _WORD:
            raise ArenaError("invalid pointer")
        node_index, offset = divmod(ptr - _WORD, self._region)
        if node_index >= len(self._nodes) or offset % self._unit:
            raise ArenaError("pointer is not in the arena")
        node = self._nodes[node_index]
        index = offset // self._unit
        size = node.live.get(index)
        if size is None:
            raise ArenaError("pointer does not refer to a live allocation")
        return node, index, size

    @staticmethod
    def _mark(node: _Node, start: int, count: int, on: bool) -> None:
        for i in range(start, start + count):
            byte, bit = divmod(i, 8)
            if on:
                node.bitmap[byte] |= 1 << bit
            else:
                node.bitmap[byte] &= ~(1 << bit) & 0xFF