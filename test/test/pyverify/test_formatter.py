"""
Tests for module pyverify.formatter
"""
import logging
from typing import Any

import numpy as np
import pandas as pd
import pytest

from pyverify.formatter import OperandFormatter, ReprOperandFormatter

log = logging.getLogger(__name__)


class _MultiLine:
    def __repr__(self) -> str:
        return "MultiLine(\n    a=1,\n    b=2,\n)"


def test_default_formatter() -> None:
    formatter = OperandFormatter.default()
    assert isinstance(formatter, ReprOperandFormatter)
    assert formatter is OperandFormatter.default()
    assert formatter.single_line
    assert formatter.max_length is None
    assert repr(formatter) == "ReprOperandFormatter(single_line=True, max_length=None)"

    with pytest.raises(TypeError):
        # noinspection PyAbstractClass
        OperandFormatter()


@pytest.mark.parametrize(  # type:ignore
    "operand, text",
    [
        (23, "23"),
        (1.5, "1.5"),
        ("abc", "'abc'"),
        (None, "None"),
        ([1, "a"], "[1, 'a']"),
        ({"a": 1}, "{'a': 1}"),
    ],
)
def test_python_operands(operand: Any, text: str) -> None:
    assert OperandFormatter.default().to_text(operand) == text


def test_numpy_operands() -> None:
    formatter = OperandFormatter.default()

    assert formatter.to_text(np.array([1, 2])) == "array([1, 2])"
    assert formatter.to_text(np.array([[1, 2], [3, 4]])) == "array([[1, 2], [3, 4]])"
    assert formatter.to_text(np.array([0.5])) == "array([0.5])"
    assert formatter.to_text(np.int64(3)) == "3"
    assert formatter.to_text(np.float64(1.5)) == "1.5"
    assert formatter.to_text(np.bool_(True)) == "True"


def test_pandas_operands() -> None:
    formatter = OperandFormatter.default()

    assert formatter.to_text(pd.Series([1, 2])) == "Series([1, 2])"
    assert formatter.to_text(pd.Index(["a", "b"])) == "Index(['a', 'b'])"
    assert (
        formatter.to_text(pd.DataFrame({"a": [1, 2], "b": ["x", "y"]}))
        == "DataFrame({'a': [1, 2], 'b': ['x', 'y']})"
    )


def test_line_breaks() -> None:
    assert OperandFormatter.default().to_text(_MultiLine()) == "MultiLine( a=1, b=2, )"

    formatter = ReprOperandFormatter(single_line=False)
    assert not formatter.single_line
    assert formatter.to_text(_MultiLine()) == repr(_MultiLine())


def test_max_length() -> None:
    formatter = ReprOperandFormatter(max_length=8)
    assert formatter.max_length == 8

    assert formatter.to_text("abcdefgh") == "'abcdef…"
    assert len(formatter.to_text("abcdefgh")) == 8
    assert formatter.to_text("abcdef") == "'abcdef'"
    assert formatter.to_text(12345678) == "12345678"
    assert formatter.to_text(123456789) == "1234567…"

    # line breaks are collapsed before truncating
    assert ReprOperandFormatter(max_length=12).to_text(_MultiLine()) == "MultiLine( …"

    assert ReprOperandFormatter(max_length=1).to_text("abc") == "…"

    with pytest.raises(
        ValueError, match=r"^arg max_length=0 must be a positive integer$"
    ):
        ReprOperandFormatter(max_length=0)

    with pytest.raises(TypeError, match=r"^arg max_length requires an instance of"):
        # noinspection PyTypeChecker
        ReprOperandFormatter(max_length="8")


def test_custom_formatter() -> None:
    class UpperFormatter(OperandFormatter):
        def to_text(self, operand: Any) -> str:
            return str(operand).upper()

    assert UpperFormatter().to_text("abc") == "ABC"
