"""
Tests for module pyverify.expression
"""
import logging
from typing import Tuple

import numpy as np
import pytest

from pyverify import Comparator, NonComparableOperandsError
from pyverify.expression import BinaryExpression, ExpressionNode, UnaryExpression
from pyverify.formatter import ReprOperandFormatter

log = logging.getLogger(__name__)


class _Unprintable:
    def __repr__(self) -> str:
        raise TypeError("no text representation")


def test_unary_expression() -> None:
    expression = UnaryExpression(0)
    assert expression.operand == 0
    assert expression.to_text() == "0"
    assert str(expression) == "0"
    assert repr(expression) == "UnaryExpression(operand=0)"

    assert expression.evaluate() is False
    assert UnaryExpression([1]).evaluate() is True

    with pytest.raises(
        RuntimeError, match=r"^UnaryExpression has already been evaluated$"
    ):
        expression.evaluate()

    # rendering is permitted after evaluation
    assert expression.to_text() == "0"


def test_binary_expression() -> None:
    expression = BinaryExpression(23, Comparator.LT, 42)
    assert expression.operand1 == 23
    assert expression.comparator is Comparator.LT
    assert expression.operand2 == 42
    assert expression.to_text() == "23 < 42"
    assert (
        expression.to_text(ReprOperandFormatter(max_length=1)) == "… < …"
    )
    assert (
        repr(expression)
        == 'BinaryExpression(operand1=23, comparator=Comparator("<"), operand2=42)'
    )

    assert expression.evaluate() is True

    with pytest.raises(
        RuntimeError, match=r"^BinaryExpression has already been evaluated$"
    ):
        expression.evaluate()

    with pytest.raises(
        TypeError,
        match=r"^arg comparator requires an instance of Comparator but got: str$",
    ):
        # noinspection PyTypeChecker
        BinaryExpression(23, "<", 42)


def test_no_implicit_evaluation(spies: Tuple) -> None:
    spy1, spy2 = spies

    unary = UnaryExpression(spy1)
    binary = BinaryExpression(spy1, Comparator.LT, spy2)

    for expression in (unary, binary):
        assert isinstance(expression, ExpressionNode)
        with pytest.raises(TypeError, match="does not permit casting to bool type"):
            bool(expression)
        assert expression.to_text()

    assert binary.to_text() == "Spy(23) < Spy(42)"
    assert (spy1.comparisons, spy1.truth_tests) == (0, 0)

    assert binary.evaluate() is True
    assert unary.evaluate() is True
    assert (spy1.comparisons, spy1.truth_tests) == (1, 1)
    assert (spy2.comparisons, spy2.truth_tests) == (0, 0)


def test_non_comparable_operands() -> None:
    with pytest.raises(
        NonComparableOperandsError,
        match=r"^cannot compare operands of types int and str using <: ",
    ) as error_info:
        BinaryExpression(1, Comparator.LT, "a").evaluate()
    assert isinstance(error_info.value, TypeError)
    assert isinstance(error_info.value.__cause__, TypeError)

    with pytest.raises(NonComparableOperandsError) as error_info:
        BinaryExpression(np.array([1, 2]), Comparator.EQ, np.array([1, 2])).evaluate()
    assert isinstance(error_info.value.__cause__, ValueError)

    with pytest.raises(
        NonComparableOperandsError,
        match=r"^cannot determine the truth value of an operand of type ndarray: ",
    ) as error_info:
        UnaryExpression(np.array([1, 2])).evaluate()
    assert isinstance(error_info.value.__cause__, ValueError)

    # a single-element array has a truth value
    assert UnaryExpression(np.array([1])).evaluate() is True


def test_unprintable_operands() -> None:
    with pytest.raises(
        NonComparableOperandsError,
        match=r"^cannot render an operand of type _Unprintable as text: ",
    ):
        UnaryExpression(_Unprintable()).to_text()

    with pytest.raises(NonComparableOperandsError):
        BinaryExpression(1, Comparator.EQ, _Unprintable()).to_text()

    # evaluation does not depend on rendering
    assert BinaryExpression(1, Comparator.EQ, _Unprintable()).evaluate() is False
