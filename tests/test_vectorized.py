import sys
import os
from unittest.mock import patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

import pytest

from tigerhash.content import tiger_hash

ABC_HEX = "f68d7bc5af4b43a06e048d7829560d4a9415658bb0b1f3bf"


def test_pandas_series_hex_digests():
    pd = pytest.importorskip("pandas")
    from tigerhash.vectorized import hash_pandas_series

    series = pd.Series([b"abc", "abc", None], index=["x", "y", "z"])
    result = hash_pandas_series(series)
    assert list(result.index) == ["x", "y", "z"]
    assert result["x"] == ABC_HEX
    assert result["y"] == ABC_HEX
    assert result["z"] is None


def test_arrow_array_binary_digests():
    pa = pytest.importorskip("pyarrow")
    from tigerhash.vectorized import hash_arrow_array

    result = hash_arrow_array(pa.array(["abc", None, "a"]))
    assert result.type == pa.binary(24)
    assert result.to_pylist() == [
        bytes.fromhex(ABC_HEX),
        None,
        tiger_hash(b"a").digest(),
    ]

    coerced = hash_arrow_array([b"abc"])
    assert coerced.to_pylist() == [bytes.fromhex(ABC_HEX)]


def test_polars_series_binary_digests():
    pl = pytest.importorskip("polars")
    from tigerhash.vectorized import hash_polars_series

    result = hash_polars_series(pl.Series("payload", ["abc", "a"]))
    assert result.name == "payload"
    assert result.dtype == pl.Binary
    assert result.to_list() == [bytes.fromhex(ABC_HEX), tiger_hash("a").digest()]


def test_unsupported_column_values_raise():
    pa = pytest.importorskip("pyarrow")
    from tigerhash.vectorized import hash_arrow_array

    with pytest.raises(TypeError):
        hash_arrow_array(pa.array([1, 2, 3]))


def test_unsupported_pandas_values_raise_type_error():
    pd = pytest.importorskip("pandas")
    from tigerhash.vectorized import hash_pandas_series

    with pytest.raises(TypeError) as excinfo:
        hash_pandas_series(pd.Series([[1, 2], b"a"], dtype=object))
    assert "Unsupported type" in str(excinfo.value)


@pytest.mark.parametrize(
    "func_name, module_name",
    [
        ("hash_pandas_series", "pandas"),
        ("hash_arrow_array", "pyarrow"),
        ("hash_polars_series", "polars"),
    ],
)
def test_vectorized_import_errors(func_name, module_name):
    from tigerhash import vectorized

    func = getattr(vectorized, func_name)
    # A None entry in sys.modules makes the lazy import fail as if uninstalled
    with patch.dict(sys.modules, {module_name: None}):
        with pytest.raises(ImportError) as excinfo:
            func([b"abc"])
    assert f"pip install {module_name}" in str(excinfo.value)
