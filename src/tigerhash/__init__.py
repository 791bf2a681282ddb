"""
Pure-Python Tiger (192-bit) hashing for byte streams, files and columnar data.
"""

import logging

from .tiger import Tiger, TigerFinalizedError, new, tiger
from .content import TigerDigest, file_digest, hash_chunks, tiger_hash
from .vectorized import (
    hash_arrow_array,
    hash_pandas_series,
    hash_polars_series,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Tiger",
    "TigerDigest",
    "TigerFinalizedError",
    "file_digest",
    "hash_chunks",
    "new",
    "tiger",
    "tiger_hash",
    "hash_arrow_array",
    "hash_pandas_series",
    "hash_polars_series",
]
