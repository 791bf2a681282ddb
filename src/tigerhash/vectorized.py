from __future__ import annotations

import logging
from typing import Any, List, Optional

from .content import tiger_hash

logger = logging.getLogger(__name__)


def _digest_or_none(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    return tiger_hash(value).digest()


def _digest_all(values) -> List[Optional[bytes]]:
    digests = [_digest_or_none(val) for val in values]
    logger.debug("Hashed %d column values", len(digests))
    return digests


def hash_pandas_series(series: Any):
    """
    Hash a pandas Series of bytes/str values into a Series of hex digests.
    """
    try:
        import pandas as pd  # type: ignore
    except ModuleNotFoundError as exc:  # optional dependency
        raise ImportError(
            "Install pandas to use hash_pandas_series: pip install pandas"
        ) from exc

    values = [
        None if val is None or (pd.api.types.is_scalar(val) and pd.isna(val)) else val
        for val in series
    ]
    hashes = [
        None if digest is None else digest.hex() for digest in _digest_all(values)
    ]
    index = series.index if isinstance(series, pd.Series) else None
    return pd.Series(hashes, index=index, dtype="object")


def hash_arrow_array(array: Any):
    """
    Hash a pyarrow Array (or values coercible to one) into a binary(24) Array.
    """
    try:
        import pyarrow as pa  # type: ignore
    except ModuleNotFoundError as exc:  # optional dependency
        raise ImportError(
            "Install pyarrow to use hash_arrow_array: pip install pyarrow"
        ) from exc

    arr = array if hasattr(array, "to_pylist") else pa.array(array)
    return pa.array(_digest_all(arr.to_pylist()), type=pa.binary(24))


def hash_polars_series(series: Any):
    """
    Hash a polars Series of bytes/str values into a Binary Series.
    """
    try:
        import polars as pl  # type: ignore
    except ModuleNotFoundError as exc:  # optional dependency
        raise ImportError(
            "Install polars to use hash_polars_series: pip install polars"
        ) from exc

    ser = series if hasattr(series, "dtype") else pl.Series(series)
    name = getattr(ser, "name", None) or "tiger"
    return pl.Series(name=name, values=_digest_all(ser.to_list()), dtype=pl.Binary)


__all__ = ["hash_arrow_array", "hash_pandas_series", "hash_polars_series"]
