"""
Decomposition of boolean expressions, reporting the values of their operands.

A failed check is easier to diagnose if its message shows not only the checked
expression, but also the values of the operands it was evaluated with.
:func:`.verify` evaluates an expression and reports both:

.. code-block:: python

    a, b = 23, 42
    result = verify("a > b")
    bool(result)  # False
    str(result)   # "verify(a > b) => verify(23 > 42) => false"

Where the source text of the expression is available separately from its operands,
the :class:`.Decomposer` captures the operands using operator overloading:

.. code-block:: python

    result = (Decomposer("a > b") << a > b).finish()

Both evaluate every operand exactly once.
Expressions are decomposed one level deep: a single operand, or two operands
and one of the comparisons ``==``, ``!=``, ``<=``, ``>=``, ``<``, and ``>``.

Decompositions are negated using operator ``~``, e.g., to report a condition that
is expected to be false:

.. code-block:: python

    if fail := ~verify("b != 0"):
        raise ZeroDivisionError(str(fail))
        # "!verify(b != 0) => !verify(0 != 0) => true"
"""

from ._errors import *
from ._verify import *
from .comparator import Comparator
from .decomposition import Decomposer, decompose

__version__ = "1.0.0"
