"""
Decomposition of boolean expressions into their operands and comparison.

A decomposition is created by capturing an expression with a :class:`.Decomposer`,
and finishing the capture once all operands have been captured:

.. code-block:: python

    a, b = 23, 42
    result = (Decomposer("a < b") << a < b).finish()
    bool(result)  # True
    str(result)   # "verify(a < b) => verify(23 < 42) => true"

The expression is evaluated exactly once, when the capture is finished.
The same decomposition can be obtained by passing the operands explicitly to
function :func:`.decompose`:

.. code-block:: python

    decompose("a < b", a, "<", b)

Decompositions are negated using operator ``~``:

.. code-block:: python

    str(~result)  # "!verify(a < b) => !verify(23 < 42) => false"
"""

from ._decomposition import *
from ._capture import *
