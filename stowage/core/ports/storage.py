from typing import Protocol, Iterator


class BlobStore(Protocol):
    """
    Minimal synchronous interface for a store of opaque byte images.

    A BlobStore keeps whole buffer contents under byte keys. It does not
    look inside the blobs and does not prescribe durability beyond what the
    backend offers.
    """

    def put(self, key: bytes, blob: bytes) -> None:
        """
        Store `blob` under `key`, replacing any previous image.
        """

    def get(self, key: bytes) -> bytes | None:
        """
        Return the image stored under `key`, or None if it does not exist.

        Implementations must not raise exceptions for missing keys.
        """

    def delete(self, key: bytes) -> None:
        """
        Remove the image stored under `key`. Deleting a missing key
        succeeds silently.
        """

    def keys(self) -> Iterator[bytes]:
        """
        Iterate over stored keys in lexicographic order.
        """

    def close(self) -> None:
        """
        Release the underlying resources. The store must not be used
        afterwards.
        """
