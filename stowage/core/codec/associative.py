"""
Key-based collections.

Every collection is written as `[u64 count]` followed by its elements (or
key/value pairs) in the container's own iteration order. Python sets and
dicts iterate in hash or insertion order, so two equal containers can
produce different bytes: the output is not a canonical form. Pass
`ordered=True` to sort at encode time when a stable byte image matters.

Unique-key decoding keeps the first occurrence of a key; a later duplicate
is ignored, the same way inserting an existing key into an ordered map is
a no-op. Multi-key shapes keep every occurrence. Decoded elements and keys
must be hashable, so a `Vector` used as a key needs `factory=tuple`.
"""
import collections
from collections.abc import Iterable, Mapping, Set as AbstractSet
from typing import Any

from stowage.core.buffer import ByteBuffer
from stowage.core.codec.pair import Pair
from stowage.core.codec.primitive import read_count, write_count
from stowage.core.errors import ShapeError
from stowage.core.ports.shape import Shape


def _sorted(name: str, items: Iterable, key=None) -> list:
    try:
        return sorted(items, key=key)
    except TypeError as ex:
        raise ShapeError(f"{name} elements are not orderable: {ex}") from ex


def _unhashable(name: str, ex: TypeError) -> ShapeError:
    return ShapeError(
        f"{name} decoded an unhashable element ({ex}); give its shape factory=tuple"
    )


class Set:
    kind = "set"

    def __init__(self, element: Shape, ordered: bool = False) -> None:
        self.element = element
        self.ordered = ordered
        self.name = f"{self.kind}<{element.name}>"

    def _items(self, value: Any) -> list:
        if not isinstance(value, AbstractSet):
            raise ShapeError(f"{self.name} expects a set, got {type(value).__name__}")
        return _sorted(self.name, value) if self.ordered else list(value)

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        items = self._items(value)
        buffer.log("write", self.name, f"data size: {len(items)}")
        write_count(buffer, len(items))
        for item in items:
            self.element.encode(buffer, item)

    def decode(self, buffer: ByteBuffer) -> Any:
        size = read_count(buffer)
        buffer.log("read", self.name, f"data size: {size}")
        result = set()
        for _ in range(size):
            item = self.element.decode(buffer)
            try:
                result.add(item)
            except TypeError as ex:
                raise _unhashable(self.name, ex) from ex
        return result

    def __repr__(self) -> str:
        return self.name


class FrozenSet(Set):
    kind = "frozenset"

    def decode(self, buffer: ByteBuffer) -> frozenset:
        return frozenset(super().decode(buffer))


class MultiSet:
    """
    Counted set backed by `collections.Counter`. The envelope count is the
    total multiplicity and each occurrence is written separately.
    """
    def __init__(self, element: Shape, ordered: bool = False) -> None:
        self.element = element
        self.ordered = ordered
        self.name = f"multiset<{element.name}>"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        if not isinstance(value, collections.Counter):
            raise ShapeError(f"{self.name} expects a Counter, got {type(value).__name__}")
        items = list(value.elements())
        if self.ordered:
            items = _sorted(self.name, items)

        buffer.log("write", self.name, f"data size: {len(items)}")
        write_count(buffer, len(items))
        for item in items:
            self.element.encode(buffer, item)

    def decode(self, buffer: ByteBuffer) -> collections.Counter:
        size = read_count(buffer)
        buffer.log("read", self.name, f"data size: {size}")
        result: collections.Counter = collections.Counter()
        for _ in range(size):
            item = self.element.decode(buffer)
            try:
                result[item] += 1
            except TypeError as ex:
                raise _unhashable(self.name, ex) from ex
        return result

    def __repr__(self) -> str:
        return self.name


class Map:
    """
    Unique-key mapping decoded into a dict. Each entry is a
    `Pair(key, value)`.
    """
    def __init__(self, key: Shape, value: Shape, ordered: bool = False) -> None:
        self.key = key
        self.value = value
        self.ordered = ordered
        self.entry = Pair(key, value)
        self.name = f"map<{key.name}, {value.name}>"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        if not isinstance(value, Mapping):
            raise ShapeError(f"{self.name} expects a mapping, got {type(value).__name__}")
        items = list(value.items())
        if self.ordered:
            items = _sorted(self.name, items, key=lambda kv: kv[0])

        buffer.log("write", self.name, f"data size: {len(items)}")
        write_count(buffer, len(items))
        for item in items:
            self.entry.encode(buffer, item)

    def decode(self, buffer: ByteBuffer) -> dict:
        size = read_count(buffer)
        buffer.log("read", self.name, f"data size: {size}")
        result: dict = {}
        for _ in range(size):
            key, value = self.entry.decode(buffer)
            try:
                result.setdefault(key, value)
            except TypeError as ex:
                raise _unhashable(self.name, ex) from ex
        return result

    def __repr__(self) -> str:
        return self.name


class MultiMap:
    """
    Multi-key mapping represented as `dict[key, list[value]]`.

    The envelope count is the number of (key, value) pairs, not the number
    of distinct keys. Values under one key keep their relative order.
    """
    def __init__(self, key: Shape, value: Shape, ordered: bool = False) -> None:
        self.key = key
        self.value = value
        self.ordered = ordered
        self.entry = Pair(key, value)
        self.name = f"multimap<{key.name}, {value.name}>"

    def _pairs(self, value: Any) -> list[tuple]:
        if not isinstance(value, Mapping):
            raise ShapeError(f"{self.name} expects a mapping, got {type(value).__name__}")

        keys = list(value)
        if self.ordered:
            keys = _sorted(self.name, keys)

        pairs = []
        for key in keys:
            group = value[key]
            if isinstance(group, (str, bytes)) or not isinstance(group, Iterable):
                raise ShapeError(f"{self.name} expects a list of values under {key!r}")
            pairs.extend((key, item) for item in group)
        return pairs

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        pairs = self._pairs(value)
        buffer.log("write", self.name, f"data size: {len(pairs)}")
        write_count(buffer, len(pairs))
        for pair in pairs:
            self.entry.encode(buffer, pair)

    def decode(self, buffer: ByteBuffer) -> dict[Any, list]:
        size = read_count(buffer)
        buffer.log("read", self.name, f"data size: {size}")
        result: dict[Any, list] = {}
        for _ in range(size):
            key, value = self.entry.decode(buffer)
            try:
                result.setdefault(key, []).append(value)
            except TypeError as ex:
                raise _unhashable(self.name, ex) from ex
        return result

    def __repr__(self) -> str:
        return self.name
