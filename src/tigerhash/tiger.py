from __future__ import annotations

from typing import Any

from .buffer import BlockBuffer
from .compress import (
    _MASK_64,
    BLOCK_SIZE,
    DIGEST_SIZE,
    INITIAL_STATE,
    compress,
    encode_state,
)

_BYTES_LIKE = (bytes, bytearray, memoryview)


class TigerFinalizedError(RuntimeError):
    """Raised when a finalized Tiger engine is used without reset()."""


class Tiger:
    """
    Pure-Python Tiger (192-bit) implementation with a streaming API.

    The interface mirrors hashlib-style objects. ``digest()`` works on a
    copy and leaves the engine usable; ``finalize()`` is terminal and the
    engine refuses further use until ``reset()`` is called.

    The bit-length counter wraps modulo 2**64; messages longer than that
    are not supported.
    """

    name = "tiger"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data: Any = b""):
        self._state = INITIAL_STATE
        self._buffer = BlockBuffer()
        self._bit_length = 0
        self._finalized = False
        self.update(data)

    def copy(self) -> "Tiger":
        self._check_live()
        dup = self.__class__.__new__(self.__class__)
        dup._state = self._state
        dup._buffer = self._buffer.copy()
        dup._bit_length = self._bit_length
        dup._finalized = False
        return dup

    def update(self, data: Any) -> "Tiger":
        if not isinstance(data, _BYTES_LIKE):
            raise TypeError("data must be bytes-like")
        self._check_live()

        view = memoryview(data).cast("B")
        self._bit_length = (self._bit_length + (len(view) << 3)) & _MASK_64
        self._buffer.input(view, self._process_block)
        return self

    input = update

    def write(self, data: Any) -> int:
        """
        File-like sink, so the engine can be the target of shutil.copyfileobj()
        or print(..., file=hasher). Text is hashed as UTF-8.

        Returns the number of items written, as file objects do.
        """
        if isinstance(data, str):
            self.update(data.encode("utf-8"))
            return len(data)
        self.update(data)
        return len(memoryview(data).cast("B"))

    def finalize(self) -> bytes:
        self._check_live()
        self._finalized = True
        self._buffer.pad_with_length(self._bit_length, self._process_block)
        return encode_state(self._state)

    def digest(self) -> bytes:
        return self.copy().finalize()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def reset(self) -> None:
        self._state = INITIAL_STATE
        self._buffer.reset()
        self._bit_length = 0
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    # Internal helpers -------------------------------------------------
    def _process_block(self, block, offset: int) -> None:
        self._state = compress(self._state, block, offset)

    def _check_live(self) -> None:
        if self._finalized:
            raise TigerFinalizedError(
                "Tiger engine already finalized; call reset() before reuse"
            )


def tiger(data: Any = b"") -> Tiger:
    """Convenience constructor matching hashlib-style usage."""
    return Tiger(data)


new = tiger


__all__ = ["Tiger", "TigerFinalizedError", "new", "tiger"]
