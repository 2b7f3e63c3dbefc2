"""
Exceptions raised when an expression cannot be decomposed.
"""
import logging

from .api import AllTracker

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = [
    "UnsupportedOperatorError",
    "NonComparableOperandsError",
]


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Classes
#


class UnsupportedOperatorError(TypeError):
    """
    Raised when an expression uses an operator at the decomposition boundary that
    cannot be decomposed.

    These are the shift operators ``<<`` and ``>>``, the bitwise operators
    ``&``, ``|``, and ``^``, the logical operators ``and``, ``or``, and ``not``
    applied to a capture object, chained comparisons, and any comparison following
    the one comparison that has already been captured.

    The error is raised while the expression is being captured, before the
    expression is evaluated.
    """


class NonComparableOperandsError(TypeError):
    """
    Raised when the operands of a decomposed expression lack a capability the
    decomposition needs: the requested comparison, a determinable truth value, or
    a text representation.
    """


__tracker.validate()
