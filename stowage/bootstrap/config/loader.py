import os
from functools import lru_cache
from pathlib import Path

from stowage.core.errors import ConfigurationError


@lru_cache
def get_configfile() -> Path | None:
    # Priority: ENV > default file in current working directory > none
    raw = os.getenv("STOWAGECONFIG")

    if raw is None:
        file = Path.cwd() / "stowage.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise ConfigurationError(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Fix or unset the STOWAGECONFIG environment variable\n"
            "  - Or place a 'stowage.yaml' file in the current working directory."
        )

    return file
