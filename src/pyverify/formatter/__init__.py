"""
Text representations of the operands of decomposed expressions.

The decomposed form of an expression substitutes each operand with a text
representation of its value, generated by an :class:`.OperandFormatter`.
Unless specified otherwise, the default formatter is used, which is based on
:func:`repr`:

.. code-block:: python

    OperandFormatter.default().to_text(23)                  # "23"
    OperandFormatter.default().to_text(np.array([1, 2]))    # "array([1, 2])"
    ReprOperandFormatter(max_length=8).to_text("abcdefgh")  # "'abcdef…"
"""

from ._formatter import *
