import enum
import functools
from typing import Any, Protocol

from stowage.core.errors import DirectiveError


class Directive(enum.Enum):
    """
    Control commands understood by a ByteBuffer.

    Directives are stateless values consumed immediately; they never reach
    the wire.
    """
    CLEAR = "clear"
    """
    Drop all content and reset both cursors.
    """

    SEEK_WRITE_START = "seek-write-start"
    """
    Move the write cursor to the first byte. The read cursor is untouched.
    """

    SEEK_WRITE_END = "seek-write-end"
    """
    Move the write cursor past the last byte. The read cursor is untouched.
    """

    ENABLE_TRACE = "enable-trace"
    DISABLE_TRACE = "disable-trace"


class DirectiveHandler(Protocol):
    def __call__(self, target: Any) -> None:
        ...


class DirectiveDispatcher:
    def __init__(self) -> None:
        self._handlers: dict[Directive, DirectiveHandler] = {}

    def dispatch(self, directive: Directive, target: Any) -> None:
        handler = self._handlers.get(directive)
        if handler is None:
            raise DirectiveError(f"Unknown directive '{directive}'")
        handler(target)

    def directive(self, directive: Directive):
        def decorator(func: DirectiveHandler):

            @functools.wraps(func)
            def wrapper(target: Any) -> None:
                func(target)

            self._handlers[directive] = wrapper

            return wrapper

        return decorator

    def __contains__(self, directive: object) -> bool:
        return directive in self._handlers
