import io
import logging
import os
from typing import Any, Self

from stowage.core.buffer import ByteBuffer
from stowage.core.codec.infer import infer_shape
from stowage.core.directive import Directive
from stowage.core.errors import StowageError
from stowage.core.persistence import load_file, save_file
from stowage.core.ports.shape import Shape
from stowage.core.ports.storage import BlobStore


class BinarySerializer:
    """
    Fluent front end over a ByteBuffer.

    Values are appended with `put` and extracted with `get`, each driven by
    a shape. Calls compose into a session whose decode order must mirror the
    encode order exactly:

        out = BinarySerializer()
        out.put(123, UInt64).put("Some text...", Text())
        out.save("easy.bin")

        inp = BinarySerializer()
        inp.load("easy.bin")
        number, text = inp.get_many(UInt64, Text())

    A failing put or get marks the buffer unhealthy before the error
    propagates, so `good` reflects the whole session. Persistence never
    raises: `save`, `load`, `save_to` and `load_from` return a boolean.

    Trace output is emitted at DEBUG level on the injected logger when the
    trace flag is set, either at construction or through the
    ENABLE_TRACE directive.
    """
    def __init__(
        self,
        trace: bool = False,
        logger: logging.Logger | None = None
    ) -> None:
        self._logger = logger or logging.getLogger("stowage.serializer")
        self.buffer = ByteBuffer(trace=trace, logger=self._logger)

    @property
    def good(self) -> bool:
        return self.buffer.good

    @property
    def trace(self) -> bool:
        return self.buffer.trace

    def __len__(self) -> int:
        return len(self.buffer)

    def getvalue(self) -> bytes:
        return self.buffer.getvalue()

    def put(self, value: Any, shape: Shape | None = None) -> Self:
        try:
            if shape is None:
                shape = infer_shape(value)
            shape.encode(self.buffer, value)
        except StowageError:
            self.buffer.fail()
            raise
        return self

    def put_many(self, *items: tuple[Any, Shape | None]) -> Self:
        for value, shape in items:
            self.put(value, shape)
        return self

    def get(self, shape: Shape) -> Any:
        try:
            return shape.decode(self.buffer)
        except StowageError:
            self.buffer.fail()
            raise

    def get_many(self, *shapes: Shape) -> tuple:
        return tuple(self.get(shape) for shape in shapes)

    def apply(self, *directives: Directive) -> Self:
        for directive in directives:
            self.buffer.apply(directive)
        return self

    def clear(self) -> Self:
        return self.apply(Directive.CLEAR)

    def seek_write_start(self) -> Self:
        return self.apply(Directive.SEEK_WRITE_START)

    def seek_write_end(self) -> Self:
        return self.apply(Directive.SEEK_WRITE_END)

    def enable_trace(self) -> Self:
        return self.apply(Directive.ENABLE_TRACE)

    def disable_trace(self) -> Self:
        return self.apply(Directive.DISABLE_TRACE)

    def tell(self) -> int:
        return self.buffer.tell()

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self.buffer.seek(offset, whence)

    def save(self, path: str | os.PathLike) -> bool:
        ok = save_file(path, self.buffer.getvalue())
        if ok:
            self._logger.debug(f"Saved {len(self.buffer)} bytes to {path}")
        return ok

    def load(self, path: str | os.PathLike) -> bool:
        """
        Replace the buffer content with the file at `path`.

        The write cursor moves to the start, so a following `put` overwrites
        the loaded bytes. The read cursor is not rewound: call `seek(0)`
        before decoding when this serializer already consumed data.
        """
        data = load_file(path)
        if data is None:
            return False
        self.buffer.replace(data)
        self._logger.debug(f"Loaded {len(data)} bytes from {path}")
        return True

    def save_to(self, store: BlobStore, key: bytes) -> bool:
        try:
            store.put(key, self.buffer.getvalue())
        except StowageError as ex:
            self._logger.warning(f"Failed to save buffer under {key!r}: {ex}")
            return False
        return True

    def load_from(self, store: BlobStore, key: bytes) -> bool:
        """
        Same contract as `load`, reading the image stored under `key`.
        A missing key is a failure.
        """
        try:
            data = store.get(key)
        except StowageError as ex:
            self._logger.warning(f"Failed to load buffer under {key!r}: {ex}")
            return False

        if data is None:
            self._logger.warning(f"No buffer stored under {key!r}")
            return False
        self.buffer.replace(data)
        self._logger.debug(f"Loaded {len(data)} bytes from {key!r}")
        return True

    def __repr__(self) -> str:
        return f"BinarySerializer({self.buffer!r})"
