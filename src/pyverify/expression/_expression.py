"""
Implementation of :mod:`pyverify.expression`.
"""
import logging
from abc import ABCMeta, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from .._errors import NonComparableOperandsError
from ..api import AllTracker, inheritdoc, validate_type
from ..comparator import Comparator
from ..formatter import OperandFormatter

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = [
    "ExpressionNode",
    "UnaryExpression",
    "BinaryExpression",
]


#
# Type variables
#

T_Operand = TypeVar("T_Operand")
T_Operand1 = TypeVar("T_Operand1")
T_Operand2 = TypeVar("T_Operand2")


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Class definitions
#


class ExpressionNode(metaclass=ABCMeta):
    """
    One level of a decomposed boolean expression.

    Constructing a node binds its operands without evaluating anything.
    The node is evaluated by calling :meth:`evaluate`, which is permitted exactly
    once: evaluating a comparison may have side effects, and a second evaluation
    raises a :class:`RuntimeError`.

    Nodes refuse conversion to :class:`bool`, so that they are never evaluated
    implicitly.
    """

    def __init__(self) -> None:
        self._evaluated = False

    def evaluate(self) -> bool:
        """
        Evaluate this expression.

        :return: the truth value of this expression
        :raise NonComparableOperandsError: the truth value of this expression cannot
            be determined for the given operands
        :raise RuntimeError: this expression has already been evaluated
        """
        if self._evaluated:
            raise RuntimeError(f"{type(self).__name__} has already been evaluated")
        self._evaluated = True
        return self._evaluate()

    @abstractmethod
    def to_text(self, formatter: Optional[OperandFormatter] = None) -> str:
        """
        Render this expression as text, substituting each operand with its value.

        Rendering does not evaluate the expression.

        :param formatter: the formatter to use for rendering operands
            (default: the default operand formatter)
        :return: the text representing this expression
        :raise NonComparableOperandsError: an operand cannot be rendered as text
        """
        pass

    @abstractmethod
    def _evaluate(self) -> bool:
        pass

    def __bool__(self) -> bool:
        raise TypeError(
            f"{ExpressionNode.__name__} does not permit casting to bool type; "
            f"call method {ExpressionNode.evaluate.__name__}() instead"
        )

    def __str__(self) -> str:
        return self.to_text()


@inheritdoc(match="[see superclass]")
class UnaryExpression(ExpressionNode, Generic[T_Operand]):
    """
    An expression consisting of a single operand, evaluated by its truth value.
    """

    def __init__(self, operand: T_Operand) -> None:
        """
        :param operand: the operand
        """
        super().__init__()
        self._operand = operand

    @property
    def operand(self) -> T_Operand:
        """
        The operand of this expression.
        """
        return self._operand

    def to_text(self, formatter: Optional[OperandFormatter] = None) -> str:
        """[see superclass]"""
        return _operand_to_text(self._operand, formatter)

    def _evaluate(self) -> bool:
        operand = self._operand
        try:
            return bool(operand)
        except (TypeError, ValueError) as error:
            raise NonComparableOperandsError(
                "cannot determine the truth value of an operand of type "
                f"{type(operand).__name__}: {error}"
            ) from error

    def __repr__(self) -> str:
        return f"{type(self).__name__}(operand={self._operand!r})"


@inheritdoc(match="[see superclass]")
class BinaryExpression(ExpressionNode, Generic[T_Operand1, T_Operand2]):
    """
    A comparison of two operands.
    """

    def __init__(
        self, operand1: T_Operand1, comparator: Comparator, operand2: T_Operand2
    ) -> None:
        """
        :param operand1: the left-hand operand
        :param comparator: the comparison to apply to both operands
        :param operand2: the right-hand operand
        """
        super().__init__()
        validate_type(comparator, expected_type=Comparator, name="arg comparator")
        self._operand1 = operand1
        self._comparator = comparator
        self._operand2 = operand2

    @property
    def operand1(self) -> T_Operand1:
        """
        The left-hand operand of this comparison.
        """
        return self._operand1

    @property
    def comparator(self) -> Comparator:
        """
        The comparison applied to both operands.
        """
        return self._comparator

    @property
    def operand2(self) -> T_Operand2:
        """
        The right-hand operand of this comparison.
        """
        return self._operand2

    def to_text(self, formatter: Optional[OperandFormatter] = None) -> str:
        """[see superclass]"""
        return (
            _operand_to_text(self._operand1, formatter)
            + self._comparator.glyph
            + _operand_to_text(self._operand2, formatter)
        )

    def _evaluate(self) -> bool:
        operand1 = self._operand1
        operand2 = self._operand2
        try:
            return self._comparator.evaluate(operand1, operand2)
        except (TypeError, ValueError) as error:
            raise NonComparableOperandsError(
                f"cannot compare operands of types {type(operand1).__name__} and "
                f"{type(operand2).__name__} using {self._comparator.symbol}: {error}"
            ) from error

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(operand1={self._operand1!r}, "
            f"comparator={self._comparator!r}, operand2={self._operand2!r})"
        )


__tracker.validate()


def _operand_to_text(operand: Any, formatter: Optional[OperandFormatter]) -> str:
    if formatter is None:
        formatter = OperandFormatter.default()
    try:
        return formatter.to_text(operand)
    except TypeError as error:
        raise NonComparableOperandsError(
            f"cannot render an operand of type {type(operand).__name__} as text: "
            f"{error}"
        ) from error
