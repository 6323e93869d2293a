from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for turning one value into a standalone byte
    string and back.

    Implementations must be:
    - deterministic for a given value and iteration order
    - pure (no state carried between calls)
    - strict: input that does not decode to exactly one value is rejected
    """

    def serialize(self, value: Any) -> bytes:
        """Encode a Python object into bytes."""

    def deserialize(self, data: bytes) -> Any:
        """Decode bytes into a Python object."""
