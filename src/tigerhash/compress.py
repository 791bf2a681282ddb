from __future__ import annotations

import struct
from typing import List, Tuple

from .sboxes import T1, T2, T3, T4

_MASK_64 = 0xFFFFFFFFFFFFFFFF

BLOCK_SIZE = 64
DIGEST_SIZE = 24

INITIAL_STATE = (0x0123456789ABCDEF, 0xFEDCBA9876543210, 0xF096A5B4C3B2E187)

State = Tuple[int, int, int]

_BLOCK_WORDS = struct.Struct("<8Q")


def key_schedule(x: List[int]) -> None:
    """Diffuse the eight message words in place between two passes."""
    x[0] = (x[0] - (x[7] ^ 0xA5A5A5A5A5A5A5A5)) & _MASK_64
    x[1] ^= x[0]
    x[2] = (x[2] + x[1]) & _MASK_64
    x[3] = (x[3] - (x[2] ^ (((x[1] ^ _MASK_64) << 19) & _MASK_64))) & _MASK_64
    x[4] ^= x[3]
    x[5] = (x[5] + x[4]) & _MASK_64
    x[6] = (x[6] - (x[5] ^ ((x[4] ^ _MASK_64) >> 23))) & _MASK_64
    x[7] ^= x[6]
    x[0] = (x[0] + x[7]) & _MASK_64
    x[1] = (x[1] - (x[0] ^ (((x[7] ^ _MASK_64) << 19) & _MASK_64))) & _MASK_64
    x[2] ^= x[1]
    x[3] = (x[3] + x[2]) & _MASK_64
    x[4] = (x[4] - (x[3] ^ ((x[2] ^ _MASK_64) >> 23))) & _MASK_64
    x[5] ^= x[4]
    x[6] = (x[6] + x[5]) & _MASK_64
    x[7] = (x[7] - (x[6] ^ 0x0123456789ABCDEF)) & _MASK_64


def tiger_round(a: int, b: int, c: int, x: int, mul: int) -> State:
    """Mix one message word into the registers playing roles ``(a, b, c)``."""
    c ^= x
    a = (
        a
        - (
            T1[c & 0xFF]
            ^ T2[(c >> 16) & 0xFF]
            ^ T3[(c >> 32) & 0xFF]
            ^ T4[(c >> 48) & 0xFF]
        )
    ) & _MASK_64
    b = (
        b
        + (
            T4[(c >> 8) & 0xFF]
            ^ T3[(c >> 24) & 0xFF]
            ^ T2[(c >> 40) & 0xFF]
            ^ T1[(c >> 56) & 0xFF]
        )
    ) & _MASK_64
    b = (b * mul) & _MASK_64
    return a, b, c


def tiger_pass(a: int, b: int, c: int, x: List[int], mul: int) -> State:
    """
    Run eight rounds, one per message word.

    After every round the roles rotate one step, so the returned triple is
    ordered by role for the next pass, not by register. Eight rotations
    leave ``(c, a, b)`` relative to the input order.
    """
    for word in x:
        a, b, c = tiger_round(a, b, c, word, mul)
        a, b, c = b, c, a
    return a, b, c


def compress(state: State, block, offset: int = 0) -> State:
    """
    Fold one 64-byte block into the chaining state.

    Args:
        state: Current ``(a, b, c)`` chaining value
        block: Bytes-like object holding at least ``offset + 64`` bytes
        offset: Position of the block inside ``block``

    Returns:
        The next ``(a, b, c)`` chaining value
    """
    x = list(_BLOCK_WORDS.unpack_from(block, offset))
    a, b, c = state

    # Roles after pass 1 are (c, a, b) and after pass 2 (b, c, a), which is
    # exactly the order the next pass starts from.
    r = tiger_pass(a, b, c, x, 5)
    key_schedule(x)
    r = tiger_pass(r[0], r[1], r[2], x, 7)
    key_schedule(x)
    na, nb, nc = tiger_pass(r[0], r[1], r[2], x, 9)

    return (
        na ^ a,
        (nb - b) & _MASK_64,
        (nc + c) & _MASK_64,
    )


def encode_state(state: State) -> bytes:
    """Serialize ``(a, b, c)`` as three little-endian 64-bit words."""
    return struct.pack("<3Q", *state)


__all__ = [
    "BLOCK_SIZE",
    "DIGEST_SIZE",
    "INITIAL_STATE",
    "compress",
    "encode_state",
    "key_schedule",
    "tiger_pass",
    "tiger_round",
]
