"""
Expression nodes, representing one level of a decomposed boolean expression.

There are two shapes of expression nodes:

- a :class:`.UnaryExpression` wraps a single operand, and evaluates to the truth
  value of that operand
- a :class:`.BinaryExpression` wraps two operands and a :class:`.Comparator`, and
  evaluates to the result of the comparison

Expression nodes bind their operands without evaluating them, and are evaluated
exactly once by calling :meth:`.ExpressionNode.evaluate`.
"""

from ._expression import *
