class StowageError(Exception):
    """Base class for every error raised by stowage."""


class ShapeError(StowageError, TypeError):
    """A value does not fit its shape, or a shape cannot be built."""


class BufferUnderflowError(StowageError, EOFError):
    """A decode asked for more bytes than the buffer holds."""


class BufferStateError(StowageError):
    """The buffer is unhealthy and refuses further reads and writes."""


class SeekError(StowageError, ValueError):
    """The requested read cursor position is outside the buffer."""


class DirectiveError(StowageError, ValueError):
    """No handler is registered for a directive."""


class TrailingDataError(StowageError, ValueError):
    """A one-shot decode finished with unread bytes left over."""


class StoreError(StowageError):
    """The blob store backend failed."""


class ConfigurationError(StowageError):
    """Settings could not be loaded or validated."""
