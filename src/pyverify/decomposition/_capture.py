"""
Implementation of the capture protocol in :mod:`pyverify.decomposition`.
"""
import logging
from abc import ABCMeta, abstractmethod
from typing import Any, Generic, NoReturn, Optional, TypeVar, Union

from .._errors import UnsupportedOperatorError
from ..api import AllTracker, inheritdoc, validate_type
from ..comparator import Comparator
from ..expression import BinaryExpression, UnaryExpression
from ..formatter import OperandFormatter
from ._decomposition import Decomposition, make_decomposition

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = [
    "Decomposer",
    "FirstOperand",
    "SecondOperand",
    "decompose",
]


#
# Type variables
#

T_Operand1 = TypeVar("T_Operand1")
T_Operand2 = TypeVar("T_Operand2")


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Class definitions
#


class Decomposer:
    """
    Entry point of the capture protocol, decomposing one boolean expression.

    Stores the source text of the expression, and captures the expression's first
    operand using operator ``<<`` (or method :meth:`capture`).
    Since ``<<`` binds more tightly than any comparison, only the left-hand
    operand of a comparison is captured; the comparison itself is then applied to
    the resulting :class:`.FirstOperand`:

    .. code-block:: python

        (Decomposer("a < b") << a < b).finish()  # captures a and b
        (Decomposer("a") << a).finish()          # captures a

    All operators binding less tightly than ``<<`` and more tightly than the
    comparisons, i.e., ``&``, ``|``, and ``^``, as well as a second ``<<`` or
    ``>>``, cannot be decomposed and raise an :class:`.UnsupportedOperatorError`.
    Operators binding more tightly than ``<<`` are part of the captured operand:
    in ``Decomposer("a + b < c") << a + b < c``, the first operand is ``a + b``.
    """

    def __init__(
        self, code: str, *, formatter: Optional[OperandFormatter] = None
    ) -> None:
        """
        :param code: the source text of the expression to decompose
        :param formatter: the formatter to use for rendering the operands of the
            expression (default: the default operand formatter)
        """
        validate_type(code, expected_type=str, name="arg code")
        validate_type(
            formatter,
            expected_type=OperandFormatter,
            optional=True,
            name="arg formatter",
        )
        self._code = code
        self._formatter = formatter

    @property
    def code(self) -> str:
        """
        The source text of the expression to decompose.
        """
        return self._code

    def capture(self, operand1: T_Operand1) -> "FirstOperand[T_Operand1]":
        """
        Capture the first operand of the expression; same as operator ``<<``.

        :param operand1: the first operand
        :return: the capture object holding the source text and the first operand
        """
        return FirstOperand(self._code, operand1, formatter=self._formatter)

    def __lshift__(self, operand1: T_Operand1) -> "FirstOperand[T_Operand1]":
        return self.capture(operand1)


class _Capture(metaclass=ABCMeta):
    # base class of capture objects, rejecting all operators that would otherwise
    # bind to a capture object in place of one of its operands

    def __init__(self, code: str, formatter: Optional[OperandFormatter]) -> None:
        self._code = code
        self._formatter = formatter

    @property
    def code(self) -> str:
        """
        The source text of the expression to decompose.
        """
        return self._code

    @abstractmethod
    def finish(self) -> Decomposition:
        """
        Finish capturing the expression, then evaluate it exactly once.

        :return: the decomposition of the expression
        """
        pass

    def _reject(self, operator: str) -> NoReturn:
        raise UnsupportedOperatorError(
            f"operator {operator} cannot be decomposed in expression: {self._code}"
        )

    def __bool__(self) -> NoReturn:
        raise UnsupportedOperatorError(
            "logical operators and chained comparisons cannot be decomposed; "
            f"call {type(self).__name__}.finish() to get a decomposition of "
            f"expression: {self._code}"
        )

    def __lshift__(self, other: Any) -> NoReturn:
        self._reject("<<")

    def __rshift__(self, other: Any) -> NoReturn:
        self._reject(">>")

    def __and__(self, other: Any) -> NoReturn:
        self._reject("&")

    def __xor__(self, other: Any) -> NoReturn:
        self._reject("^")

    def __or__(self, other: Any) -> NoReturn:
        self._reject("|")

    __hash__ = None


@inheritdoc(match="[see superclass]")
class FirstOperand(_Capture, Generic[T_Operand1]):
    """
    Capture object holding the source text and the first operand of an expression.

    Applying one of the six comparison operators to a first operand captures the
    second operand, and returns a :class:`.SecondOperand`.
    Calling :meth:`finish` instead decomposes the first operand as a unary
    expression.
    """

    def __init__(
        self,
        code: str,
        operand1: T_Operand1,
        *,
        formatter: Optional[OperandFormatter] = None,
    ) -> None:
        """
        :param code: the source text of the expression to decompose
        :param operand1: the first operand of the expression
        :param formatter: the formatter to use for rendering the operands of the
            expression (default: the default operand formatter)
        """
        super().__init__(code, formatter)
        self._operand1 = operand1

    @property
    def operand1(self) -> T_Operand1:
        """
        The first operand of the expression.
        """
        return self._operand1

    def compare(
        self, comparator: Comparator, operand2: T_Operand2
    ) -> "SecondOperand[T_Operand1, T_Operand2]":
        """
        Capture a comparison with a second operand.

        :param comparator: the comparison between the first and the second operand
        :param operand2: the second operand
        :return: the capture object holding the source text, both operands, and
            the comparator
        """
        return SecondOperand(
            self._code,
            self._operand1,
            comparator,
            operand2,
            formatter=self._formatter,
        )

    def finish(self) -> Decomposition[UnaryExpression[T_Operand1]]:
        """[see superclass]"""
        return make_decomposition(
            self._code, UnaryExpression(self._operand1), formatter=self._formatter
        )

    def __eq__(self, operand2: Any) -> "SecondOperand":
        return self.compare(Comparator.EQ, operand2)

    def __ne__(self, operand2: Any) -> "SecondOperand":
        return self.compare(Comparator.NE, operand2)

    def __le__(self, operand2: Any) -> "SecondOperand":
        return self.compare(Comparator.LE, operand2)

    def __ge__(self, operand2: Any) -> "SecondOperand":
        return self.compare(Comparator.GE, operand2)

    def __lt__(self, operand2: Any) -> "SecondOperand":
        return self.compare(Comparator.LT, operand2)

    def __gt__(self, operand2: Any) -> "SecondOperand":
        return self.compare(Comparator.GT, operand2)


@inheritdoc(match="[see superclass]")
class SecondOperand(_Capture, Generic[T_Operand1, T_Operand2]):
    """
    Capture object holding the source text, both operands, and the comparator of
    a comparison.

    Calling :meth:`finish` decomposes the comparison as a binary expression.
    Only one comparison can be decomposed; applying another comparison operator
    raises an :class:`.UnsupportedOperatorError`.
    """

    def __init__(
        self,
        code: str,
        operand1: T_Operand1,
        comparator: Comparator,
        operand2: T_Operand2,
        *,
        formatter: Optional[OperandFormatter] = None,
    ) -> None:
        """
        :param code: the source text of the expression to decompose
        :param operand1: the first operand of the comparison
        :param comparator: the comparison between the first and the second operand
        :param operand2: the second operand of the comparison
        :param formatter: the formatter to use for rendering the operands of the
            expression (default: the default operand formatter)
        """
        super().__init__(code, formatter)
        validate_type(comparator, expected_type=Comparator, name="arg comparator")
        self._operand1 = operand1
        self._comparator = comparator
        self._operand2 = operand2

    @property
    def operand1(self) -> T_Operand1:
        """
        The first operand of the comparison.
        """
        return self._operand1

    @property
    def comparator(self) -> Comparator:
        """
        The comparison between the first and the second operand.
        """
        return self._comparator

    @property
    def operand2(self) -> T_Operand2:
        """
        The second operand of the comparison.
        """
        return self._operand2

    def finish(self) -> Decomposition[BinaryExpression[T_Operand1, T_Operand2]]:
        """[see superclass]"""
        return make_decomposition(
            self._code,
            BinaryExpression(self._operand1, self._comparator, self._operand2),
            formatter=self._formatter,
        )

    def __eq__(self, other: Any) -> NoReturn:
        self._reject_comparison(Comparator.EQ)

    def __ne__(self, other: Any) -> NoReturn:
        self._reject_comparison(Comparator.NE)

    def __le__(self, other: Any) -> NoReturn:
        self._reject_comparison(Comparator.LE)

    def __ge__(self, other: Any) -> NoReturn:
        self._reject_comparison(Comparator.GE)

    def __lt__(self, other: Any) -> NoReturn:
        self._reject_comparison(Comparator.LT)

    def __gt__(self, other: Any) -> NoReturn:
        self._reject_comparison(Comparator.GT)

    def _reject_comparison(self, comparator: Comparator) -> NoReturn:
        raise UnsupportedOperatorError(
            f"cannot decompose a second comparison {comparator.symbol} "
            f"in expression: {self._code}"
        )


def decompose(
    code: str,
    operand1: Any,
    *comparison: Any,
    formatter: Optional[OperandFormatter] = None,
) -> Decomposition:
    """
    Decompose an expression, given its source text and its operands.

    For a unary expression, pass only the first operand:

    .. code-block:: python

        decompose("x", x)

    For a comparison, also pass the comparator (a :class:`.Comparator` or its
    symbol) and the second operand:

    .. code-block:: python

        decompose("a < b", a, Comparator.LT, b)
        decompose("a < b", a, "<", b)

    :param code: the source text of the expression
    :param operand1: the first operand of the expression
    :param comparison: nothing for a unary expression; the comparator and the second
        operand for a comparison
    :param formatter: the formatter to use for rendering the operands of the
        expression (default: the default operand formatter)
    :return: the decomposition of the expression
    """
    if len(comparison) not in (0, 2):
        raise TypeError(
            "a comparison requires exactly two arguments, a comparator and a second "
            f"operand, but got {len(comparison)} argument(s)"
        )

    first = Decomposer(code, formatter=formatter).capture(operand1)

    if not comparison:
        return first.finish()

    comparator: Union[Comparator, str]
    comparator, operand2 = comparison
    if isinstance(comparator, str):
        comparator = Comparator.from_symbol(comparator)

    return first.compare(comparator, operand2).finish()


__tracker.validate()
