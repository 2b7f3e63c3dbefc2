"""
Decomposition of boolean expressions given as source text.
"""
import ast
import inspect
import io
import logging
import tokenize
from types import CodeType
from typing import Any, Dict, NoReturn, Optional, Tuple

from ._errors import UnsupportedOperatorError
from .api import AllTracker, validate_type
from .comparator import Comparator
from .decomposition import Decomposer, Decomposition
from .formatter import OperandFormatter

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = ["verify"]


#
# Constants
#

# the file name reported in tracebacks of evaluated operands
_FILENAME = "<verify>"

_COMPARATORS: Dict[type, Comparator] = {
    ast.Eq: Comparator.EQ,
    ast.NotEq: Comparator.NE,
    ast.LtE: Comparator.LE,
    ast.GtE: Comparator.GE,
    ast.Lt: Comparator.LT,
    ast.Gt: Comparator.GT,
}

_UNSUPPORTED_COMPARISONS: Dict[type, str] = {
    ast.In: "in",
    ast.NotIn: "not in",
    ast.Is: "is",
    ast.IsNot: "is not",
}

_UNSUPPORTED_BINARY_OPERATORS: Dict[type, str] = {
    ast.LShift: "<<",
    ast.RShift: ">>",
    ast.BitAnd: "&",
    ast.BitOr: "|",
    ast.BitXor: "^",
}

_BOOLEAN_OPERATORS: Dict[type, str] = {ast.And: "and", ast.Or: "or"}

# tokens without effect on the structure of an expression
_IGNORED_TOKENS = {
    tokenize.COMMENT,
    tokenize.NL,
    tokenize.NEWLINE,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENDMARKER,
}

_OPENING_BRACKETS = ("(", "[", "{")
_CLOSING_BRACKETS = (")", "]", "}")


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Functions
#


def verify(
    expression: str,
    *,
    globals_: Optional[Dict[str, Any]] = None,
    locals_: Optional[Dict[str, Any]] = None,
    formatter: Optional[OperandFormatter] = None,
) -> Decomposition:
    """
    Evaluate and decompose a boolean expression, given as source text.

    The expression is evaluated in the namespace of the calling frame, unless
    namespaces are passed explicitly:

    .. code-block:: python

        def check(a: int, b: int) -> None:
            result = verify("a < b")
            if not result:
                raise AssertionError(str(result))

        check(42, 23)
        # AssertionError: verify(a < b) => verify(42 < 23) => false

    A comparison using one of the operators ``==``, ``!=``, ``<=``, ``>=``,
    ``<``, or ``>`` is decomposed into its two operands, which are evaluated
    exactly once, left operand first.
    Any other expression is evaluated exactly once and decomposed as a unary
    expression.

    Expressions are rejected before any part of them is evaluated if they
    are a logical ``and`` or ``or``, a conditional expression, a chained
    comparison, a membership or identity test, or an unparenthesized tuple.
    Shift and bitwise operators (``<<``, ``>>``, ``&``, ``|``, ``^``) are
    rejected at the top of the expression, and at the top of the left operand of
    a comparison.
    A parenthesized expression or left operand is evaluated as a whole, and is
    never rejected.
    This matches the expressions that can be decomposed using a
    :class:`.Decomposer`, e.g., ``Decomposer("(a | b) < c") << (a | b) < c``.

    :param expression: the source text of the expression to decompose
    :param globals_: the global namespace to evaluate the expression in
        (default: the global namespace of the calling frame)
    :param locals_: the local namespace to evaluate the expression in; names in
        the local namespace shadow names in the global namespace (default: the
        local namespace of the calling frame if no global namespace is given,
        otherwise the global namespace)
    :param formatter: the formatter to use for rendering the operands of the
        expression (default: the default operand formatter)
    :return: the decomposition of the expression
    :raise SyntaxError: the expression is not a valid Python expression
    :raise UnsupportedOperatorError: the expression cannot be decomposed
    """
    validate_type(expression, expected_type=str, name="arg expression")
    validate_type(globals_, expected_type=dict, optional=True, name="arg globals_")
    validate_type(locals_, expected_type=dict, optional=True, name="arg locals_")

    code = expression.strip()
    node = ast.parse(code, filename=_FILENAME, mode="eval").body
    comparison = _split_comparison(node, code)

    if globals_ is None:
        frame = inspect.currentframe().f_back
        try:
            globals_ = frame.f_globals
            if locals_ is None:
                locals_ = frame.f_locals
        finally:
            del frame
    elif locals_ is None:
        locals_ = globals_

    namespace = {**globals_, **locals_}
    decomposer = Decomposer(code, formatter=formatter)

    if comparison is None:
        log.debug(f"decomposing unary expression: {code}")
        return decomposer.capture(_evaluate(node, namespace)).finish()

    left, comparator, right = comparison
    log.debug(f"decomposing comparison {comparator.symbol}: {code}")
    operand1 = _evaluate(left, namespace)
    operand2 = _evaluate(right, namespace)
    return decomposer.capture(operand1).compare(comparator, operand2).finish()


__tracker.validate()


#
# Private helpers
#


def _split_comparison(
    node: ast.expr, code: str
) -> Optional[Tuple[ast.expr, Comparator, ast.expr]]:
    # get the operands and comparator if the node is a comparison, or None if the
    # node is a unary expression; raise if the node cannot be decomposed

    if _is_enclosed(code):
        return None
    elif isinstance(node, ast.Tuple):
        _reject(",", code)
    elif isinstance(node, ast.BoolOp):
        _reject(_BOOLEAN_OPERATORS[type(node.op)], code)
    elif isinstance(node, ast.IfExp):
        _reject("if-else", code)
    elif isinstance(node, ast.Compare):
        if len(node.ops) > 1:
            raise UnsupportedOperatorError(
                f"chained comparisons cannot be decomposed in expression: {code}"
            )
        op_type = type(node.ops[0])
        if op_type in _UNSUPPORTED_COMPARISONS:
            _reject(_UNSUPPORTED_COMPARISONS[op_type], code)

        left = node.left
        if not _is_parenthesized(left, start=(node.lineno, node.col_offset)):
            _check_capture_boundary(left, code)
        return left, _COMPARATORS[op_type], node.comparators[0]

    _check_capture_boundary(node, code)
    return None


def _is_enclosed(code: str) -> bool:
    # True if the whole code is enclosed in one pair of parentheses
    tokens = [
        token
        for token in tokenize.generate_tokens(io.StringIO(code).readline)
        if token.type not in _IGNORED_TOKENS
    ]
    if not tokens or tokens[0].string != "(":
        return False

    depth = 0
    for i, token in enumerate(tokens):
        if token.type == tokenize.OP:
            if token.string in _OPENING_BRACKETS:
                depth += 1
            elif token.string in _CLOSING_BRACKETS:
                depth -= 1
        if depth == 0:
            return i == len(tokens) - 1
    return False


def _is_parenthesized(node: ast.expr, *, start: Tuple[int, int]) -> bool:
    # the position of a parenthesized node excludes the opening parenthesis, so
    # the node starts after the construct enclosing it
    return (node.lineno, node.col_offset) > start


def _check_capture_boundary(node: ast.expr, code: str) -> None:
    if isinstance(node, ast.BinOp) and type(node.op) in _UNSUPPORTED_BINARY_OPERATORS:
        _reject(_UNSUPPORTED_BINARY_OPERATORS[type(node.op)], code)


def _reject(operator: str, code: str) -> NoReturn:
    raise UnsupportedOperatorError(
        f"operator {operator} cannot be decomposed in expression: {code}"
    )


def _evaluate(node: ast.expr, namespace: Dict[str, Any]) -> Any:
    return eval(_compile(node), namespace)


def _compile(node: ast.expr) -> CodeType:
    return compile(
        ast.fix_missing_locations(ast.Expression(body=node)), _FILENAME, "eval"
    )
