"""A separately chained string-keyed hash map with power-of-two buckets."""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from typing import Any

__all__ = ["HashMap", "hash_key", "MIN_LOAD_THRESHOLD"]

MIN_LOAD_THRESHOLD = 0.75

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1
_MISSING = object()


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def _signed(byte: int) -> int:
    return byte - 256 if byte > 127 else byte


def hash_key(key: str, bucket_count: int) -> int:
    """Return the bucket index of ``key`` for a power-of-two ``bucket_count``."""
    if bucket_count <= 0:
        raise ValueError("bucket count must be positive")
    chars = [_signed(b) for b in key.encode("utf-8")]
    value = 0
    for c in chars:
        value = (value * 31 + c) & _MASK64
    if len(chars) >= 2:
        high = ((chars[0] + chars[1]) & _MASK32) << 16 & _MASK32
        low = (chars[-2] + chars[-1]) & _MASK32
        value ^= high | low
    return value & (bucket_count - 1)


def _check_key(key: Any) -> None:
    if not isinstance(key, str):
        raise TypeError(f"keys must be str, not {type(key).__name__}")


class HashMap(MutableMapping):
    """A mapping from strings to values that doubles its buckets as it fills."""

    def __init__(self, buckets: int = 16, load_threshold: float = MIN_LOAD_THRESHOLD):
        if buckets <= 0:
            raise ValueError("bucket count must be positive")
        if load_threshold < MIN_LOAD_THRESHOLD:
            raise ValueError(f"load threshold must be at least {MIN_LOAD_THRESHOLD}")
        self.load_threshold = load_threshold
        self._buckets: list[list[list[Any]]] = [[] for _ in range(_next_power_of_two(buckets))]
        self._size = 0

    @property
    def bucket_count(self) -> int:
        """Current number of buckets."""
        return len(self._buckets)

    def _chain(self, key: str) -> list[list[Any]]:
        return self._buckets[hash_key(key, len(self._buckets))]

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return any(entry[0] == key for entry in self._chain(key))

    def __getitem__(self, key: str) -> Any:
        _check_key(key)
        for entry in self._chain(key):
            if entry[0] == key:
                return entry[1]
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        _check_key(key)
        chain = self._chain(key)
        for entry in chain:
            if entry[0] == key:
                entry[1] = value
                return
        collided = bool(chain)
        chain.append([key, value])
        self._size += 1
        # Growth is only considered when a new key lands in an occupied bucket.
        if collided and self._size / len(self._buckets) >= self.load_threshold:
            self._grow()

    def __delitem__(self, key: str) -> None:
        _check_key(key)
        chain = self._chain(key)
        for position, entry in enumerate(chain):
            if entry[0] == key:
                del chain[position]
                self._size -= 1
                return
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        keys = [entry[0] for chain in self._buckets for entry in chain]
        return iter(keys)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if it is absent."""
        try:
            return self[key]
        except KeyError:
            return default

    def pop(self, key: str, default: Any = _MISSING) -> Any:
        """Remove ``key`` and return its value, or ``default`` if absent."""
        try:
            value = self[key]
        except KeyError:
            if default is _MISSING:
                raise
            return default
        del self[key]
        return value

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"HashMap({{{items}}})"

    def _grow(self) -> None:
        count = len(self._buckets) * 2
        buckets: list[list[list[Any]]] = [[] for _ in range(count)]
        for chain in self._buckets:
            for entry in chain:
                buckets[hash_key(entry[0], count)].append(entry)
        self._buckets = buckets