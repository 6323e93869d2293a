import io
import logging
from typing import Self

from stowage.core.directive import Directive, DirectiveDispatcher
from stowage.core.errors import BufferStateError, BufferUnderflowError, SeekError


class ByteBuffer:
    """
    In-memory byte staging area with independent read and write cursors.

    Writes land at the write cursor: when the cursor sits before the end the
    existing bytes are overwritten, otherwise the buffer grows. Reads start
    at the read cursor and never look at the write cursor, so a buffer can be
    filled and drained in the same session.

    The cursors only move in three ways:
    - `append` / `consume` advance them by the number of bytes moved
    - the seek directives reposition the write cursor
    - `seek()` repositions the read cursor

    Health follows stream semantics. A read past the end or an invalid seek
    marks the buffer as failed; from then on every read and write raises
    `BufferStateError` until `clear()` resets it. Callers are expected to
    check `good` after a sequence of operations before trusting the values
    they extracted.

    The trace flag only controls whether progress lines are emitted on the
    injected logger. It never changes the bytes.

    ByteBuffer is not thread-safe: one instance belongs to one thread of
    control at a time.
    """
    def __init__(
        self,
        data: bytes = b"",
        trace: bool = False,
        logger: logging.Logger | None = None
    ) -> None:
        self._data = bytearray(data)
        self._wpos = len(self._data)
        self._rpos = 0
        self._good = True
        self._trace = trace
        self._logger = logger or logging.getLogger("stowage.buffer")

    @property
    def good(self) -> bool:
        return self._good

    @property
    def trace(self) -> bool:
        return self._trace

    @property
    def write_position(self) -> int:
        return self._wpos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._rpos

    def __len__(self) -> int:
        return len(self._data)

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def append(self, data: bytes) -> Self:
        self._ensure_good()
        end = self._wpos + len(data)
        self._data[self._wpos:end] = data
        self._wpos = end
        return self

    def consume(self, count: int) -> bytes:
        self._ensure_good()
        if count < 0:
            raise ValueError(f"Cannot consume a negative byte count: {count}")

        end = self._rpos + count
        if end > len(self._data):
            self._good = False
            raise BufferUnderflowError(
                f"Need {count} bytes at offset {self._rpos}, "
                f"only {self.remaining} available"
            )

        chunk = bytes(self._data[self._rpos:end])
        self._rpos = end
        return chunk

    def clear(self) -> None:
        self._data.clear()
        self._wpos = 0
        self._rpos = 0
        self._good = True

    def replace(self, data: bytes) -> None:
        """
        Swap the whole content for `data`, as done by a load.

        The write cursor goes back to the start and health is restored. The
        read cursor keeps its offset, clamped to the new length; callers
        must position it with `seek()` before decoding.
        """
        self._data = bytearray(data)
        self._wpos = 0
        self._rpos = min(self._rpos, len(self._data))
        self._good = True

    def fail(self) -> None:
        self._good = False

    def seek_write_start(self) -> None:
        self._wpos = 0

    def seek_write_end(self) -> None:
        self._wpos = len(self._data)

    def tell(self) -> int:
        return self._rpos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            base = 0
        elif whence == io.SEEK_CUR:
            base = self._rpos
        elif whence == io.SEEK_END:
            base = len(self._data)
        else:
            raise ValueError(f"Invalid whence value: {whence}")

        target = base + offset
        if not 0 <= target <= len(self._data):
            self._good = False
            raise SeekError(
                f"Read position {target} outside buffer of {len(self._data)} bytes"
            )

        self._rpos = target
        return self._rpos

    def set_trace(self, enabled: bool) -> None:
        self._trace = enabled

    def enable_trace(self) -> None:
        self._trace = True

    def disable_trace(self) -> None:
        self._trace = False

    def apply(self, directive: Directive) -> Self:
        directives.dispatch(directive, self)
        return self

    def log(self, op: str, what: str, detail: str = "") -> None:
        if not self._trace:
            return
        suffix = f" {detail}" if detail else ""
        self._logger.debug(f"{op} {what}: good={self._good}{suffix}")

    def _ensure_good(self) -> None:
        if not self._good:
            raise BufferStateError("Buffer is in a failed state; clear() it first")

    def __repr__(self) -> str:
        return (
            f"ByteBuffer(size={len(self._data)}, read={self._rpos}, "
            f"write={self._wpos}, good={self._good})"
        )


directives = DirectiveDispatcher()


@directives.directive(Directive.CLEAR)
def _clear(buffer: ByteBuffer) -> None:
    buffer.clear()


@directives.directive(Directive.SEEK_WRITE_START)
def _seek_write_start(buffer: ByteBuffer) -> None:
    buffer.seek_write_start()


@directives.directive(Directive.SEEK_WRITE_END)
def _seek_write_end(buffer: ByteBuffer) -> None:
    buffer.seek_write_end()


@directives.directive(Directive.ENABLE_TRACE)
def _enable_trace(buffer: ByteBuffer) -> None:
    buffer.enable_trace()


@directives.directive(Directive.DISABLE_TRACE)
def _disable_trace(buffer: ByteBuffer) -> None:
    buffer.disable_trace()
