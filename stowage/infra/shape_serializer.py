from typing import Any

from stowage.core.buffer import ByteBuffer
from stowage.core.errors import TrailingDataError
from stowage.core.ports.serializer import Serializer
from stowage.core.ports.shape import Shape


class ShapeSerializer(Serializer):
    """
    One-shot Serializer bound to a single shape.

    Each call works on a fresh ByteBuffer, so instances hold no state
    between calls and can be shared freely.
    """
    def __init__(self, shape: Shape) -> None:
        self.shape = shape

    def serialize(self, value: Any) -> bytes:
        buffer = ByteBuffer()
        self.shape.encode(buffer, value)
        return buffer.getvalue()

    def deserialize(self, data: bytes) -> Any:
        buffer = ByteBuffer(data)
        value = self.shape.decode(buffer)
        if buffer.remaining:
            raise TrailingDataError(
                f"{buffer.remaining} bytes left after decoding {self.shape.name}"
            )
        return value
