"""
File persistence for buffer images.

A persisted file is the exact byte content of the buffer: no header, no
checksum. Failures are reported as a boolean (or None) and logged; nothing
here raises on I/O errors.
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger("stowage.persistence")


def save_file(path: str | os.PathLike, data: bytes) -> bool:
    """
    Write `data` to `path`, truncating any previous content. Returns True
    only if the file was opened and every byte was written and flushed.
    """
    try:
        with open(path, "wb") as fp:
            written = fp.write(data)
            fp.flush()
    except OSError as ex:
        logger.warning(f"Failed to save buffer to {path}: {ex}")
        return False

    if written != len(data):
        logger.warning(f"Short write to {path}: {written}/{len(data)} bytes")
        return False
    return True


def load_file(path: str | os.PathLike) -> bytes | None:
    """
    Read the whole content of `path`, or return None if it cannot be read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as ex:
        logger.warning(f"Failed to load buffer from {path}: {ex}")
        return None
