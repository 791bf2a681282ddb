from __future__ import annotations

import struct
from typing import Any, Callable

from .compress import BLOCK_SIZE

# Called with (buffer, offset) for every complete block.
BlockCallback = Callable[[Any, int], None]

_LENGTH_OFFSET = BLOCK_SIZE - 8


class BlockBuffer:
    """
    Split an arbitrary stream of byte runs into whole 64-byte blocks.

    At most 63 bytes are held between calls. Complete blocks inside the
    caller's data are handed out in place, without copying the data.
    """

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending = bytearray()

    def __len__(self) -> int:
        return len(self._pending)

    def copy(self) -> "BlockBuffer":
        dup = self.__class__()
        dup._pending[:] = self._pending
        return dup

    def input(self, data: Any, process: BlockCallback) -> None:
        view = memoryview(data).cast("B")
        size = len(view)
        pos = 0

        if self._pending:
            pos = min(BLOCK_SIZE - len(self._pending), size)
            self._pending += view[:pos]
            if len(self._pending) < BLOCK_SIZE:
                return
            process(self._pending, 0)
            self._pending.clear()

        end = pos + (size - pos) // BLOCK_SIZE * BLOCK_SIZE
        for offset in range(pos, end, BLOCK_SIZE):
            process(view, offset)

        self._pending += view[end:]

    def pad_with_length(self, bit_length: int, process: BlockCallback) -> None:
        """
        Apply Tiger padding and flush the final one or two blocks.

        The marker byte is 0x80, followed by zeros up to 56 mod 64 and the
        message length in bits as a little-endian 64-bit integer.
        """
        pending = self._pending
        pending.append(0x80)
        if len(pending) > _LENGTH_OFFSET:
            pending.extend(bytes(BLOCK_SIZE - len(pending)))
            process(pending, 0)
            pending.clear()

        pending.extend(bytes(_LENGTH_OFFSET - len(pending)))
        pending += struct.pack("<Q", bit_length)
        process(pending, 0)
        pending.clear()

    def reset(self) -> None:
        self._pending.clear()


__all__ = ["BlockBuffer", "BlockCallback"]
