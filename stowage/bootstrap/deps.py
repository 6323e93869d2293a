import json
import logging
from functools import lru_cache

from pydantic import ValidationError

from stowage.bootstrap.config.settings import StowageSettings
from stowage.core.errors import ConfigurationError
from stowage.core.helpers.utils import setup_logging
from stowage.core.serializer import BinarySerializer
from stowage.infra.lmdb_store import LMDBBlobStore


@lru_cache
def get_settings() -> StowageSettings:
    try:
        settings = StowageSettings()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise ConfigurationError("\n".join(msg)) from ex

    setup_logging(settings.log_level)
    return settings


@lru_cache
def get_store() -> LMDBBlobStore | None:
    config = get_settings().store
    if config.path is None:
        return None

    return LMDBBlobStore(
        path=config.path,
        map_size=config.map_size,
        max_dbs=config.max_dbs,
        keyspace=config.keyspace.encode("utf-8")
    )


def get_serializer() -> BinarySerializer:
    # Not cached: a serializer owns its buffer and must not be shared.
    settings = get_settings()
    return BinarySerializer(
        trace=settings.trace,
        logger=logging.getLogger(settings.logger_name)
    )
