from typing import Any, Protocol, Self, runtime_checkable

from stowage.core.buffer import ByteBuffer


class Shape(Protocol):
    """
    Describes how one kind of value travels through a ByteBuffer.

    A shape is the codec for a value: it knows the exact byte layout,
    writes it on `encode` and reads it back on `decode`. Composite shapes
    hold the shapes of their elements and delegate to them, so any nesting
    of containers is expressed by nesting shape objects:

        Map(Text(), Vector(UInt32))

    Implementations must be symmetric: `decode` consumes exactly the bytes
    `encode` produced, in the same order, and nothing else.
    """

    name: str
    """
    Human readable name used in trace output, e.g. "vector<u32>".
    """

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        """Append the wire form of `value` at the buffer's write cursor."""

    def decode(self, buffer: ByteBuffer) -> Any:
        """Consume one value from the buffer's read cursor."""


@runtime_checkable
class Serializable(Protocol):
    """
    Capability implemented by user types that define their own field-by-field
    layout. The `Custom` shape routes encode/decode through these methods.
    """

    def serialize_into(self, buffer: ByteBuffer) -> None:
        """Write every field of this instance into the buffer."""

    @classmethod
    def deserialize_from(cls, buffer: ByteBuffer) -> Self:
        """Read the fields written by `serialize_into` and rebuild an instance."""
