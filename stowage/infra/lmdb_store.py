import logging
import os
import threading
from collections.abc import Iterator
from typing import Self

import lmdb

from stowage.core.errors import StoreError


class LMDBBlobStore:
    """
    BlobStore backed by an LMDB environment.

    Every buffer image is stored as one value inside a named database
    (the keyspace). Reads and writes each run in their own short
    transaction. Any lmdb failure is surfaced as StoreError.
    """
    def __init__(
        self,
        path: str | os.PathLike,
        map_size: int = 1 << 30,
        max_dbs: int = 8,
        keyspace: bytes = b"blobs",
        sync: bool = True,
        lock: bool = True,
    ) -> None:
        self._keyspace = keyspace
        self._logger = logging.getLogger("stowage.infra.lmdb_store")
        try:
            self._env = lmdb.open(
                str(path),
                map_size=map_size,
                max_dbs=max_dbs,
                sync=sync,
                lock=lock,
            )
        except lmdb.Error as ex:
            raise StoreError(f"Cannot open LMDB environment at {path}: {ex}") from ex
        self._dbi = None
        self._dbi_lock = threading.Lock()
        self._closed = False

    def put(self, key: bytes, blob: bytes) -> None:
        dbi = self._get_dbi()
        try:
            with self._env.begin(db=dbi, write=True) as txn:
                txn.put(key, blob)
        except lmdb.Error as ex:
            raise StoreError(f"Failed to store {key!r}: {ex}") from ex
        self._logger.debug(f"Stored {len(blob)} bytes under {key!r}")

    def get(self, key: bytes) -> bytes | None:
        dbi = self._get_dbi()
        try:
            with self._env.begin(db=dbi, write=False) as txn:
                return txn.get(key)
        except lmdb.Error as ex:
            raise StoreError(f"Failed to read {key!r}: {ex}") from ex

    def delete(self, key: bytes) -> None:
        dbi = self._get_dbi()
        try:
            with self._env.begin(db=dbi, write=True) as txn:
                txn.delete(key)
        except lmdb.Error as ex:
            raise StoreError(f"Failed to delete {key!r}: {ex}") from ex

    def keys(self) -> Iterator[bytes]:
        dbi = self._get_dbi()
        try:
            with self._env.begin(db=dbi, write=False) as txn:
                with txn.cursor() as cursor:
                    keys = list(cursor.iternext(keys=True, values=False))
        except lmdb.Error as ex:
            raise StoreError(f"Failed to list keys: {ex}") from ex
        return iter(keys)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._dbi = None
        self._env.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_dbi(self) -> object:
        if self._closed:
            raise StoreError("Store is closed")
        with self._dbi_lock:
            if self._dbi is None:
                try:
                    self._dbi = self._env.open_db(self._keyspace)
                except lmdb.Error as ex:
                    raise StoreError(f"Cannot open keyspace {self._keyspace!r}: {ex}") from ex
            return self._dbi
