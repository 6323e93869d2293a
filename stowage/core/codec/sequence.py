import collections
from collections.abc import Callable, Iterable
from typing import Any

from stowage.core.buffer import ByteBuffer
from stowage.core.codec.primitive import Bool, read_count, write_count
from stowage.core.errors import ShapeError
from stowage.core.ports.shape import Shape


def _materialize(name: str, value: Any) -> list:
    if isinstance(value, (str, bytes, bytearray)):
        raise ShapeError(f"{name} expects a sequence, got {type(value).__name__}")
    try:
        return list(value)
    except TypeError as ex:
        raise ShapeError(f"{name} expects a sequence, got {type(value).__name__}") from ex


class Vector:
    """
    Variable-length ordered sequence: `[u64 count][element]*`.

    Elements are written in forward iteration order and read back in the
    same order into a new container built by `factory` (a list by default).
    Python has no separate linked-list types, so this shape also stands for
    singly- and doubly-linked sequences.
    """
    kind = "vector"

    def __init__(self, element: Shape, factory: Callable[[Iterable], Any] = list) -> None:
        self.element = element
        self.factory = factory
        self.name = f"{self.kind}<{element.name}>"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        items = _materialize(self.name, value)
        buffer.log("write", self.name, f"data size: {len(items)}")
        write_count(buffer, len(items))
        for item in items:
            self.element.encode(buffer, item)

    def decode(self, buffer: ByteBuffer) -> Any:
        size = read_count(buffer)
        buffer.log("read", self.name, f"data size: {size}")
        return self.factory(self.element.decode(buffer) for _ in range(size))

    def __repr__(self) -> str:
        return self.name


class Deque(Vector):
    """
    Double-ended queue, decoded into `collections.deque`.
    """
    kind = "deque"

    def __init__(self, element: Shape) -> None:
        super().__init__(element, factory=collections.deque)


def BoolVector() -> Vector:
    """
    Sequence of booleans. Each flag takes one byte; nothing is bit-packed
    and there is a single count in front.
    """
    return Vector(Bool)


class FixedArray:
    """
    Sequence whose length is part of the shape. No count is written: both
    sides already know how many elements there are.
    """
    def __init__(self, element: Shape, length: int) -> None:
        if length < 0:
            raise ShapeError(f"Array length cannot be negative, got {length}")
        self.element = element
        self.length = length
        self.name = f"array<{element.name}, {length}>"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        items = _materialize(self.name, value)
        if len(items) != self.length:
            raise ShapeError(f"{self.name} expects {self.length} elements, got {len(items)}")

        buffer.log("write", self.name, f"data size: {self.length}")
        for item in items:
            self.element.encode(buffer, item)

    def decode(self, buffer: ByteBuffer) -> list:
        buffer.log("read", self.name, f"data size: {self.length}")
        return [self.element.decode(buffer) for _ in range(self.length)]

    def __repr__(self) -> str:
        return self.name
