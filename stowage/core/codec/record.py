"""
User-defined aggregates.

Aggregates are never dumped as a memory image. Each type states its layout
explicitly, either declaratively through annotated dataclass fields:

    @dataclass
    class Point:
        x: Annotated[int, UInt32]
        y: Annotated[int, UInt32]

    Record(Point)

or imperatively by implementing the `Serializable` protocol and using
`Custom(cls)`. Both write the fields one by one with their own shapes, so
the wire form carries no padding and no host-specific layout beyond the
scalar byte order.
"""
import dataclasses
import typing
from typing import Any

from stowage.core.buffer import ByteBuffer
from stowage.core.errors import ShapeError
from stowage.core.ports.shape import Serializable, Shape


def _is_shape(obj: Any) -> bool:
    return hasattr(obj, "encode") and hasattr(obj, "decode") and hasattr(obj, "name")


def field_shapes(cls: type) -> list[tuple[str, Shape]]:
    """
    Return `(field name, shape)` for every init field of a dataclass, in
    declaration order. The shape is the first shape found in the field's
    `Annotated` metadata; a bare shape class is instantiated with no
    arguments.
    """
    if not dataclasses.is_dataclass(cls) or not isinstance(cls, type):
        raise ShapeError(f"{cls!r} is not a dataclass type")

    hints = typing.get_type_hints(cls, include_extras=True)
    shapes = []
    for field in dataclasses.fields(cls):
        if not field.init:
            continue

        shape = None
        for meta in getattr(hints.get(field.name), "__metadata__", ()):
            if isinstance(meta, type) and hasattr(meta, "encode") and hasattr(meta, "decode"):
                meta = meta()
            if _is_shape(meta):
                shape = meta
                break

        if shape is None:
            raise ShapeError(
                f"Field '{cls.__name__}.{field.name}' has no shape; "
                "annotate it as Annotated[<type>, <shape>]"
            )
        shapes.append((field.name, shape))

    return shapes


class Record:
    """
    Dataclass encoded field by field in declaration order. Fields declared
    with `init=False` are not part of the wire form.
    """
    def __init__(self, cls: type) -> None:
        self.cls = cls
        self.fields = field_shapes(cls)
        self.name = cls.__name__

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        if not isinstance(value, self.cls):
            raise ShapeError(f"{self.name} expects a {self.name}, got {type(value).__name__}")

        buffer.log("write", self.name, "data: [record]")
        for name, shape in self.fields:
            shape.encode(buffer, getattr(value, name))

    def decode(self, buffer: ByteBuffer) -> Any:
        values = {name: shape.decode(buffer) for name, shape in self.fields}
        buffer.log("read", self.name, "data: [record]")
        return self.cls(**values)

    def __repr__(self) -> str:
        return f"Record({self.name})"


class Custom:
    """
    Type that implements `Serializable` and writes its own fields.
    """
    def __init__(self, cls: type) -> None:
        if not (isinstance(cls, type) and issubclass(cls, Serializable)):
            raise ShapeError(
                f"{cls.__name__} must define serialize_into() and deserialize_from()"
            )
        self.cls = cls
        self.name = cls.__name__

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        if not isinstance(value, self.cls):
            raise ShapeError(f"{self.name} expects a {self.name}, got {type(value).__name__}")

        buffer.log("write", self.name, "data: [custom]")
        value.serialize_into(buffer)

    def decode(self, buffer: ByteBuffer) -> Any:
        value = self.cls.deserialize_from(buffer)
        buffer.log("read", self.name, "data: [custom]")
        return value

    def __repr__(self) -> str:
        return f"Custom({self.name})"
