import sys
import os
import io
import shutil
import struct

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

import pytest

from tigerhash.buffer import BlockBuffer
from tigerhash.compress import (
    INITIAL_STATE,
    compress,
    encode_state,
    key_schedule,
    tiger_pass,
    tiger_round,
)
from tigerhash.content import TigerDigest, file_digest, hash_chunks, tiger_hash
from tigerhash.sboxes import T1, T2, T3, T4
from tigerhash.tiger import Tiger, TigerFinalizedError, new, tiger

TIGER_VECTORS = {
    b"": "4441BE75F6018773C206C22745374B924AA8313FEF919F41",
    b"a": "67E6AE8E9E968999F70A23E72AEAA9251CBC7C78A7916636",
    b"abc": "F68D7BC5AF4B43A06E048D7829560D4A9415658BB0B1F3BF",
    b"message digest": "E29419A1B5FA259DE8005E7DE75078EA81A542EF2552462D",
    b"abcdefghijklmnopqrstuvwxyz": "F5B6B6A78C405C8547E91CD8624CB8BE83FC804A474488FD",
    b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq": "A6737F3997E8FBB63D20D2DF88F86376B5FE2D5CE36646A9",
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789": "EA9AB6228CEE7B51B77544FCA6066C8CBB5BBAE6319505CD",
    b"1234567890" * 8: "D85278115329EBAA0EEC85ECDC5396FDA8AA3A5820942FFF",
}

ONE_MILLION_A = "E068281F060F551628CC5715B9D0226796914D45F7717CF4"


def test_tiger_vectors_match_reference():
    for message, expected_hex in TIGER_VECTORS.items():
        hasher = tiger()
        hasher.update(message)
        assert hasher.hexdigest() == expected_hex.lower()
        assert hasher.finalize() == bytes.fromhex(expected_hex)


def test_one_million_a_in_uneven_chunks():
    hasher = Tiger()
    remaining = 1_000_000
    sizes = [1, 63, 64, 65, 1000, 4093]
    idx = 0
    while remaining:
        size = min(sizes[idx % len(sizes)], remaining)
        hasher.update(b"a" * size)
        remaining -= size
        idx += 1
    assert hasher.finalize() == bytes.fromhex(ONE_MILLION_A)


def test_sboxes_have_published_shape():
    for table in (T1, T2, T3, T4):
        assert len(table) == 256
        assert all(0 <= word <= 0xFFFFFFFFFFFFFFFF for word in table)
    assert T1[0] == 0x02AAB17CF7E90C5E
    assert T4[255] == 0xC3A0396F7363A51F


def test_chunking_does_not_change_digest():
    message = bytes(range(256)) * 3
    expected = Tiger(message).digest()
    for split in (0, 1, 55, 56, 57, 63, 64, 65, 127, 128, 500, len(message)):
        hasher = Tiger()
        hasher.update(message[:split])
        hasher.update(message[split:])
        assert hasher.digest() == expected

    hasher = Tiger()
    for byte in message:
        hasher.update(bytes([byte]))
    assert hasher.digest() == expected


def test_accepts_all_bytes_like_inputs():
    expected = Tiger(b"message digest").digest()
    assert Tiger(bytearray(b"message digest")).digest() == expected
    assert Tiger(memoryview(b"message digest")).digest() == expected
    assert Tiger().update(b"message ").update(b"digest").digest() == expected


def test_rejects_non_bytes_input():
    with pytest.raises(TypeError):
        Tiger().update("abc")  # type: ignore
    with pytest.raises(TypeError):
        tiger(123)  # type: ignore


def test_zero_length_update_is_noop():
    hasher = Tiger(b"abc")
    hasher.update(b"")
    assert hasher.hexdigest() == TIGER_VECTORS[b"abc"].lower()


def test_empty_and_single_byte_differ():
    assert Tiger().digest() != Tiger(b"\x00").digest()
    assert Tiger(b"a").digest() != Tiger(b"b").digest()


def test_digest_is_repeatable_and_non_destructive():
    hasher = Tiger(b"abc")
    first = hasher.digest()
    assert hasher.digest() == first
    hasher.update(b"def")
    assert hasher.digest() == Tiger(b"abcdef").digest()


def test_copy_is_independent():
    h1 = Tiger(b"abc")
    h2 = h1.copy()
    h2.update(b"def")
    assert h1.hexdigest() == TIGER_VECTORS[b"abc"].lower()
    assert h1.hexdigest() != h2.hexdigest()


def test_finalize_is_terminal():
    hasher = Tiger(b"abc")
    assert hasher.finalize() == bytes.fromhex(TIGER_VECTORS[b"abc"])
    assert hasher.finalized
    with pytest.raises(TigerFinalizedError):
        hasher.update(b"more")
    with pytest.raises(TigerFinalizedError):
        hasher.finalize()
    with pytest.raises(TigerFinalizedError):
        hasher.digest()
    with pytest.raises(TigerFinalizedError):
        hasher.copy()


def test_reset_matches_fresh_engine():
    hasher = Tiger(b"some unrelated prefix" * 10)
    hasher.finalize()
    hasher.reset()
    assert not hasher.finalized
    hasher.update(b"abc")
    assert hasher.digest() == Tiger(b"abc").digest()

    hasher = Tiger(b"x" * 100)
    hasher.reset()
    hasher.input(b"message digest")
    assert hasher.hexdigest() == TIGER_VECTORS[b"message digest"].lower()


def test_hashlib_style_attributes():
    hasher = new()
    assert hasher.name == "tiger"
    assert hasher.digest_size == 24
    assert hasher.block_size == 64
    assert len(hasher.digest()) == 24
    assert len(hasher.hexdigest()) == 48


def test_compress_single_padded_block():
    block = b"\x80" + bytes(63)
    assert encode_state(compress(INITIAL_STATE, block)) == bytes.fromhex(TIGER_VECTORS[b""])

    shifted = bytes(5) + block
    assert compress(INITIAL_STATE, shifted, 5) == compress(INITIAL_STATE, block)


def test_key_schedule_mutates_in_place():
    words = [0] * 8
    key_schedule(words)
    assert words != [0] * 8
    assert all(0 <= w <= 0xFFFFFFFFFFFFFFFF for w in words)

    again = [0] * 8
    key_schedule(again)
    assert again == words


def test_tiger_pass_matches_unrolled_rounds():
    words = [0x0101010101010101 * i for i in range(1, 9)]
    a, b, c = INITIAL_STATE
    a, b, c = tiger_round(a, b, c, words[0], 7)
    b, c, a = tiger_round(b, c, a, words[1], 7)
    c, a, b = tiger_round(c, a, b, words[2], 7)
    a, b, c = tiger_round(a, b, c, words[3], 7)
    b, c, a = tiger_round(b, c, a, words[4], 7)
    c, a, b = tiger_round(c, a, b, words[5], 7)
    a, b, c = tiger_round(a, b, c, words[6], 7)
    b, c, a = tiger_round(b, c, a, words[7], 7)
    assert tiger_pass(*INITIAL_STATE, words, 7) == (c, a, b)


class _Recorder:
    def __init__(self):
        self.blocks = []

    def __call__(self, buf, offset):
        self.blocks.append(bytes(buf[offset:offset + 64]))


def test_block_buffer_carries_tail():
    buf = BlockBuffer()
    rec = _Recorder()
    buf.input(b"x" * 40, rec)
    assert rec.blocks == [] and len(buf) == 40
    buf.input(b"y" * 100, rec)
    assert rec.blocks == [b"x" * 40 + b"y" * 24, b"y" * 64]
    assert len(buf) == 12
    buf.input(b"z" * 180, rec)
    assert len(rec.blocks) == 5
    assert rec.blocks[2] == b"y" * 12 + b"z" * 52
    assert len(buf) == 0

    buf.input(b"w" * 3, rec)
    buf.reset()
    assert len(buf) == 0


@pytest.mark.parametrize("tail, blocks", [(0, 1), (55, 1), (56, 2), (63, 2)])
def test_padding_block_count(tail, blocks):
    buf = BlockBuffer()
    rec = _Recorder()
    buf.input(b"q" * tail, rec)
    buf.pad_with_length(tail * 8, rec)
    assert len(rec.blocks) == blocks
    assert rec.blocks[0][tail] == 0x80
    assert rec.blocks[-1][56:] == struct.pack("<Q", tail * 8)
    assert len(buf) == 0


def test_tiger_hash_helpers():
    result = tiger_hash("abc")
    assert isinstance(result, TigerDigest)
    assert result.hexdigest() == TIGER_VECTORS[b"abc"].lower()
    assert result.intdigest() == int(TIGER_VECTORS[b"abc"], 16)
    assert hash_chunks([b"message", " ", bytearray(b"digest")]).digest() == bytes.fromhex(
        TIGER_VECTORS[b"message digest"]
    )
    with pytest.raises(TypeError) as excinfo:
        tiger_hash(42)  # type: ignore
    assert "Unsupported type" in str(excinfo.value)


def test_file_digest_reads_in_chunks():
    data = b"1234567890" * 8
    for chunk_size in (1, 7, 64, 4096):
        assert file_digest(io.BytesIO(data), chunk_size=chunk_size).hexdigest() == (
            TIGER_VECTORS[data].lower()
        )


def test_file_digest_rejects_bad_arguments():
    with pytest.raises(ValueError):
        file_digest(io.BytesIO(b"abc"), chunk_size=0)
    with pytest.raises(TypeError):
        file_digest(io.StringIO("abc"))


def test_padding_marker_is_0x80():
    # A 0x01 marker yields the older, incompatible digest for the empty message.
    assert Tiger().hexdigest() != "3293ac630c13f0245f92bbb1766e16167a4e58492dde73f3"
    buf = BlockBuffer()
    rec = _Recorder()
    buf.pad_with_length(0, rec)
    assert rec.blocks == [b"\x80" + bytes(63)]


def test_engine_is_a_writable_sink():
    data = b"1234567890" * 500
    hasher = Tiger()
    shutil.copyfileobj(io.BytesIO(data), hasher, 777)
    assert hasher.digest() == file_digest(io.BytesIO(data)).digest()
    assert hasher.write(b"abc") == 3

    printed = Tiger()
    print("message", "digest", end="", file=printed)
    assert printed.hexdigest() == TIGER_VECTORS[b"message digest"].lower()
