import struct
from dataclasses import dataclass, field
from typing import Annotated

from stowage.core.buffer import ByteBuffer
from stowage.core.codec.primitive import Text, UInt32
from stowage.core.codec.record import Record


def native(fmt: str, *values) -> bytes:
    return struct.pack("=" + fmt, *values)


def count(n: int) -> bytes:
    return native("Q", n)


@dataclass
class Point:
    x1: Annotated[int, UInt32]
    x2: Annotated[int, UInt32]


@dataclass
class Segment:
    label: Annotated[str, Text]
    start: Annotated[Point, Record(Point)]
    end: Annotated[Point, Record(Point)]
    length: float = field(default=0.0, init=False)


@dataclass
class Unshaped:
    label: Annotated[str, Text]
    point: Point


class Handle:
    """
    Holds a resource that cannot be copied as bytes; only its numbers are
    part of the wire form.
    """

    def __init__(self, x1: int, x2: int):
        self.x1 = x1
        self.x2 = x2
        self.resource = object()

    def serialize_into(self, buffer: ByteBuffer) -> None:
        UInt32.encode(buffer, self.x1)
        UInt32.encode(buffer, self.x2)

    @classmethod
    def deserialize_from(cls, buffer: ByteBuffer) -> "Handle":
        return cls(UInt32.decode(buffer), UInt32.decode(buffer))
