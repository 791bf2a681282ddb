from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable

from .tiger import Tiger

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def _as_bytes(value: Any):
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return value
    raise TypeError(f"Unsupported type for Tiger hashing: {type(value)!r}")


@dataclass(frozen=True)
class TigerDigest:
    _digest: bytes

    def digest(self) -> bytes:
        return self._digest

    def hexdigest(self) -> str:
        return self._digest.hex()

    def intdigest(self) -> int:
        return int.from_bytes(self._digest, byteorder="big", signed=False)


def tiger_hash(data: Any) -> TigerDigest:
    """
    Hash a single value with Tiger.

    Args:
        data: bytes, bytearray, memoryview, or str (encoded as UTF-8)

    Returns:
        TigerDigest object with digest(), hexdigest(), and intdigest() methods.

    Raises:
        TypeError: If data is not bytes-like or str
    """
    return TigerDigest(Tiger(_as_bytes(data)).finalize())


def hash_chunks(chunks: Iterable[Any]) -> TigerDigest:
    """Hash the concatenation of an iterable of bytes-like or str chunks."""
    hasher = Tiger()
    for chunk in chunks:
        hasher.update(_as_bytes(chunk))
    return TigerDigest(hasher.finalize())


def file_digest(fileobj: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> TigerDigest:
    """
    Hash a binary file object by reading it in bounded chunks.

    Args:
        fileobj: Object opened for binary reading (``open(path, "rb")``, BytesIO, ...)
        chunk_size: Maximum number of bytes read per call

    Raises:
        ValueError: If chunk_size is not positive
        TypeError: If the file yields text instead of bytes
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    hasher = Tiger()
    total = 0
    while True:
        chunk = fileobj.read(chunk_size)
        if not chunk:
            break
        if isinstance(chunk, str):
            raise TypeError("file_digest requires a file opened in binary mode")
        hasher.update(chunk)
        total += len(chunk)

    logger.debug("Hashed %d bytes from %r", total, getattr(fileobj, "name", fileobj))
    return TigerDigest(hasher.finalize())


__all__ = ["DEFAULT_CHUNK_SIZE", "TigerDigest", "file_digest", "hash_chunks", "tiger_hash"]
