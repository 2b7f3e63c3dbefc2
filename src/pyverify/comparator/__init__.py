"""
Comparator tags for the six comparisons that can be decomposed.

Each :class:`.Comparator` pairs the evaluation rule of a comparison with the glyph
used to display it:

.. code-block:: python

    Comparator.LT.evaluate(23, 42)  # True
    Comparator.LT.glyph             # " < "
    Comparator.from_symbol("<=")    # Comparator.LE
"""

from ._comparator import *
