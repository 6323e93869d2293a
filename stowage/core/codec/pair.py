from typing import Any

from stowage.core.buffer import ByteBuffer
from stowage.core.errors import ShapeError
from stowage.core.ports.shape import Shape


class Tuple:
    """
    Heterogeneous fixed-arity composite. Components are encoded one after
    another with their own shapes; there is no count on the wire.
    """
    def __init__(self, *shapes: Shape) -> None:
        if not shapes:
            raise ShapeError("Tuple needs at least one component shape")
        self.shapes = shapes
        self.name = f"tuple<{', '.join(s.name for s in shapes)}>"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        try:
            items = tuple(value)
        except TypeError as ex:
            raise ShapeError(f"{self.name} expects a tuple, got {type(value).__name__}") from ex
        if len(items) != len(self.shapes):
            raise ShapeError(
                f"{self.name} expects {len(self.shapes)} components, got {len(items)}"
            )

        buffer.log("write", self.name)
        for shape, item in zip(self.shapes, items):
            shape.encode(buffer, item)

    def decode(self, buffer: ByteBuffer) -> tuple:
        buffer.log("read", self.name)
        return tuple(shape.decode(buffer) for shape in self.shapes)

    def __repr__(self) -> str:
        return self.name


class Pair(Tuple):
    """
    Two-part composite: first component, then second. Maps are built from
    pairs of their key and value shapes.
    """
    def __init__(self, first: Shape, second: Shape) -> None:
        super().__init__(first, second)
        self.first = first
        self.second = second
        self.name = f"pair<{first.name}, {second.name}>"
