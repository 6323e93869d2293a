"""
Fixed-width scalars and length-prefixed byte strings.

Scalars are packed with `struct` in host byte order using standard sizes,
so a value occupies exactly its declared width with no padding. Nothing is
normalized: a stream is only portable between hosts sharing the same byte
order.

    Int8/UInt8       1 byte      Float32     4 bytes
    Int16/UInt16     2 bytes     Float64     8 bytes
    Int32/UInt32     4 bytes     Bool        1 byte
    Int64/UInt64     8 bytes     Char        1 byte

Text and Bytes are framed as `[u64 length][raw bytes]`; the length counts
encoded bytes, not characters.
"""
import struct
from typing import Any

from stowage.core.buffer import ByteBuffer
from stowage.core.errors import ShapeError


class Scalar:
    """
    A fixed-width value packed with a single `struct` format character.
    """
    def __init__(self, name: str, fmt: str) -> None:
        self.name = name
        self._struct = struct.Struct("=" + fmt)

    @property
    def size(self) -> int:
        return self._struct.size

    def pack(self, value: Any) -> bytes:
        try:
            return self._struct.pack(value)
        except (struct.error, OverflowError) as ex:
            raise ShapeError(f"Cannot encode {value!r} as {self.name}: {ex}") from ex

    def unpack(self, data: bytes) -> Any:
        return self._struct.unpack(data)[0]

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        buffer.append(self.pack(value))
        buffer.log("write", self.name, f"data: {value!r}")

    def decode(self, buffer: ByteBuffer) -> Any:
        value = self.unpack(buffer.consume(self.size))
        buffer.log("read", self.name, f"data: {value!r}")
        return value

    def __repr__(self) -> str:
        return self.name


class _Integer(Scalar):
    def pack(self, value: Any) -> bytes:
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            raise ShapeError(f"{self.name} expects an int, got {type(value).__name__}")
        return super().pack(value)


class _Float(Scalar):
    def pack(self, value: Any) -> bytes:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ShapeError(f"{self.name} expects a float, got {type(value).__name__}")
        return super().pack(value)


class _Bool(Scalar):
    def pack(self, value: Any) -> bytes:
        if not isinstance(value, bool):
            raise ShapeError(f"{self.name} expects a bool, got {type(value).__name__}")
        return super().pack(value)


class _Char(Scalar):
    """
    A single latin-1 character, one byte on the wire.
    """
    def pack(self, value: Any) -> bytes:
        if isinstance(value, str):
            try:
                value = value.encode("latin-1")
            except UnicodeEncodeError as ex:
                raise ShapeError(f"{value!r} is not a single-byte character") from ex
        if not isinstance(value, bytes) or len(value) != 1:
            raise ShapeError(f"{self.name} expects one character, got {value!r}")
        return super().pack(value)

    def unpack(self, data: bytes) -> str:
        return super().unpack(data).decode("latin-1")


Int8 = _Integer("i8", "b")
UInt8 = _Integer("u8", "B")
Int16 = _Integer("i16", "h")
UInt16 = _Integer("u16", "H")
Int32 = _Integer("i32", "i")
UInt32 = _Integer("u32", "I")
Int64 = _Integer("i64", "q")
UInt64 = _Integer("u64", "Q")
Float32 = _Float("f32", "f")
Float64 = _Float("f64", "d")
Bool = _Bool("bool", "?")
Char = _Char("char", "c")

COUNT = UInt64
"""
Width of every envelope count and text length prefix.
"""


def write_count(buffer: ByteBuffer, count: int) -> None:
    buffer.append(COUNT.pack(count))


def read_count(buffer: ByteBuffer) -> int:
    return COUNT.unpack(buffer.consume(COUNT.size))


class Bytes:
    """
    Raw byte string: `[u64 length][bytes]`.
    """
    name = "bytes"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise ShapeError(f"{self.name} expects bytes, got {type(value).__name__}")
        data = bytes(value)
        buffer.log("write", self.name, f"size: {len(data)}")
        write_count(buffer, len(data))
        buffer.append(data)

    def decode(self, buffer: ByteBuffer) -> bytes:
        size = read_count(buffer)
        data = buffer.consume(size)
        buffer.log("read", self.name, f"size: {size}")
        return data

    def __repr__(self) -> str:
        return self.name


class Text:
    """
    Character string: `[u64 byte length][encoded bytes]`.

    The decoder reads the length, then exactly that many bytes, and decodes
    them with the same encoding the encoder used.
    """
    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self.name = "text" if encoding == "utf-8" else f"text[{encoding}]"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        if not isinstance(value, str):
            raise ShapeError(f"{self.name} expects a str, got {type(value).__name__}")
        try:
            data = value.encode(self.encoding)
        except UnicodeEncodeError as ex:
            raise ShapeError(f"Cannot encode {value!r} as {self.encoding}") from ex
        write_count(buffer, len(data))
        buffer.append(data)
        buffer.log("write", self.name, f"data: {value!r}")

    def decode(self, buffer: ByteBuffer) -> str:
        data = buffer.consume(read_count(buffer))
        try:
            value = data.decode(self.encoding)
        except UnicodeDecodeError as ex:
            raise ShapeError(f"Stored bytes are not valid {self.encoding}") from ex
        buffer.log("read", self.name, f"data: {value!r}")
        return value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Text) and other.encoding == self.encoding

    def __hash__(self) -> int:
        return hash(("text", self.encoding))

    def __repr__(self) -> str:
        return self.name
