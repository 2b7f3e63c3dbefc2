"""
Implementation of the decomposition results in :mod:`pyverify.decomposition`.
"""
import logging
from typing import Generic, Optional, TypeVar

from ..api import AllTracker, validate_type
from ..expression import ExpressionNode
from ..formatter import OperandFormatter

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = [
    "Decomposition",
    "NegatedDecomposition",
    "make_decomposition",
]


#
# Type variables
#

T_Expression = TypeVar("T_Expression", bound=ExpressionNode)


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Class definitions
#


class Decomposition(Generic[T_Expression]):
    """
    The decomposition of a boolean expression: its source text, its expression
    node, and the truth value the expression evaluated to.

    Decompositions are immutable, and are usually created by calling
    :meth:`.FirstOperand.finish` or :meth:`.SecondOperand.finish` at the end of
    the capture protocol, or by one of the functions :func:`.make_decomposition`,
    :func:`.decompose`, or :func:`.verify`.

    The truth value of a decomposition is the truth value of the decomposed
    expression:

    .. code-block:: python

        if verify("a < b"):
            ...

    Converted to a string, a decomposition shows the source text, the decomposed
    expression with all operands substituted by their values, and the truth
    value, e.g.: ``verify(a < b) => verify(23 < 42) => true``.

    Operator ``~`` (or method :meth:`not_`) negates a decomposition, returning a
    :class:`.NegatedDecomposition` without evaluating the expression again.
    Negating a negated decomposition restores the original decomposition.

    Decompositions hold references to the operands of the expression.
    They are meant to be consumed within the statement that created them; since
    the decomposed text is rendered upon creation, later changes to a mutable
    operand are not reflected in the text.
    """

    #: prefix in the text representation, marking negated decompositions
    _NEGATION_PREFIX = ""

    def __init__(
        self, code: str, expression: T_Expression, value: bool, expression_text: str
    ) -> None:
        """
        :param code: the source text of the decomposed expression
        :param expression: the decomposed expression
        :param value: the truth value the expression evaluated to
        :param expression_text: the text of the decomposed expression, with
            operands substituted by their values
        """
        validate_type(code, expected_type=str, name="arg code")
        validate_type(expression, expected_type=ExpressionNode, name="arg expression")
        validate_type(expression_text, expected_type=str, name="arg expression_text")
        self._code = code
        self._expression = expression
        self._value = bool(value)
        self._expression_text = expression_text

    @property
    def code(self) -> str:
        """
        The source text of the decomposed expression, as written by the caller.
        """
        return self._code

    @property
    def expression(self) -> T_Expression:
        """
        The decomposed expression.
        """
        return self._expression

    @property
    def expression_text(self) -> str:
        """
        The text of the decomposed expression, with operands substituted by their
        values.
        """
        return self._expression_text

    @property
    def value(self) -> bool:
        """
        The truth value the decomposed expression evaluated to, regardless of
        negation.
        """
        return self._value

    @property
    def negated(self) -> bool:
        """
        ``True`` if this decomposition is negated, ``False`` otherwise.
        """
        return False

    def not_(self) -> "Decomposition[T_Expression]":
        """
        Negate this decomposition; same as operator ``~``.

        :return: the negated decomposition
        """
        return NegatedDecomposition(
            self._code, self._expression, self._value, self._expression_text
        )

    def __invert__(self) -> "Decomposition[T_Expression]":
        return self.not_()

    def __bool__(self) -> bool:
        return self._value

    def __str__(self) -> str:
        prefix = self._NEGATION_PREFIX
        return (
            f"{prefix}verify({self._code}) => "
            f"{prefix}verify({self._expression_text}) => "
            f"{'true' if self else 'false'}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class NegatedDecomposition(Decomposition[T_Expression]):
    """
    The negation of a :class:`.Decomposition`.

    Shares the source text, expression, and value of the decomposition it negates.
    Its truth value is the complement of the value of the decomposed expression,
    and its text representation marks the negation, e.g.:
    ``!verify(a < b) => !verify(23 < 42) => false``.
    """

    _NEGATION_PREFIX = "!"

    @property
    def negated(self) -> bool:
        """
        ``True``, as this decomposition is negated.
        """
        return True

    def not_(self) -> "Decomposition[T_Expression]":
        """
        Negate this decomposition; same as operator ``~``.

        :return: the original, non-negated decomposition
        """
        return Decomposition(
            self._code, self._expression, self._value, self._expression_text
        )

    def __bool__(self) -> bool:
        return not self._value


def make_decomposition(
    code: str,
    expression: T_Expression,
    *,
    formatter: Optional[OperandFormatter] = None,
) -> Decomposition[T_Expression]:
    """
    Evaluate and render an expression, and create the resulting decomposition.

    The expression is evaluated exactly once.

    :param code: the source text of the expression
    :param expression: the expression to evaluate; must not have been evaluated
        before
    :param formatter: the formatter to use for rendering the operands of the
        expression (default: the default operand formatter)
    :return: the decomposition of the expression
    :raise NonComparableOperandsError: the expression cannot be evaluated, or its
        operands cannot be rendered
    """
    validate_type(code, expected_type=str, name="arg code")
    validate_type(expression, expected_type=ExpressionNode, name="arg expression")
    validate_type(
        formatter, expected_type=OperandFormatter, optional=True, name="arg formatter"
    )
    value = expression.evaluate()
    return Decomposition(code, expression, value, expression.to_text(formatter))


__tracker.validate()
