"""
Implementation of :mod:`pyverify.comparator`.
"""
import logging
import operator
from typing import Any, Callable, Mapping, NoReturn, Tuple

from ..api import AllTracker, validate_type

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = ["Comparator"]


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Class definitions
#


class Comparator:
    """
    A tag for one of the six comparisons that can be decomposed.

    Each comparator pairs an evaluation rule with a glyph for display.
    The rule defers to the comparison operator the operands themselves define;
    comparators neither convert nor coerce their operands.

    The six comparators are available as class attributes, e.g.,
    ``Comparator.LT`` for ``<``.
    Comparators are immutable, and there is exactly one instance for each
    comparison; the class cannot be instantiated directly.
    """

    __slots__ = ("_symbol", "_rule")

    EQ: "Comparator"  #: The ``==`` comparison.
    NE: "Comparator"  #: The ``!=`` comparison.
    LE: "Comparator"  #: The ``<=`` comparison.
    GE: "Comparator"  #: The ``>=`` comparison.
    LT: "Comparator"  #: The ``<`` comparison.
    GT: "Comparator"  #: The ``>`` comparison.

    def __new__(cls, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError(
            f"{cls.__name__} cannot be instantiated; use one of "
            f"{', '.join(f'{cls.__name__}.{name}' for name in _COMPARATOR_NAMES)}"
        )

    @property
    def symbol(self) -> str:
        """
        The Python symbol for this comparison, e.g., ``<=``.
        """
        return self._symbol

    @property
    def glyph(self) -> str:
        """
        The symbol for this comparison, surrounded by single spaces, as it is
        displayed between two rendered operands.
        """
        return f" {self._symbol} "

    def evaluate(self, operand1: Any, operand2: Any) -> bool:
        """
        Compare two operands.

        :param operand1: the left-hand operand
        :param operand2: the right-hand operand
        :return: the truth value of the native comparison of both operands
        """
        return bool(self._rule(operand1, operand2))

    @staticmethod
    def all() -> Tuple["Comparator", ...]:
        """
        Get all comparators.

        :return: the six comparators, in the order ``==``, ``!=``, ``<=``, ``>=``,
            ``<``, ``>``
        """
        return tuple(_COMPARATORS_BY_SYMBOL.values())

    @staticmethod
    def from_symbol(symbol: str) -> "Comparator":
        """
        Get the comparator for the given symbol.

        :param symbol: one of ``==``, ``!=``, ``<=``, ``>=``, ``<``, or ``>``
        :return: the comparator for the symbol
        :raise ValueError: no comparator exists for the symbol
        """
        validate_type(symbol, expected_type=str, name="arg symbol")
        try:
            return _COMPARATORS_BY_SYMBOL[symbol]
        except KeyError:
            raise ValueError(
                f"arg symbol={symbol!r} must be one of "
                f"{', '.join(_COMPARATORS_BY_SYMBOL)}"
            ) from None

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable: {key}")

    def __reduce__(self) -> Tuple[Callable[[str], "Comparator"], Tuple[str]]:
        return Comparator.from_symbol, (self._symbol,)

    def __repr__(self) -> str:
        return f'{type(self).__name__}("{self._symbol}")'

    def __str__(self) -> str:
        return self._symbol


__tracker.validate()


_COMPARATOR_NAMES = ("EQ", "NE", "LE", "GE", "LT", "GT")


def _make_comparator(symbol: str, rule: Callable[[Any, Any], Any]) -> Comparator:
    comparator = object.__new__(Comparator)
    object.__setattr__(comparator, "_symbol", symbol)
    object.__setattr__(comparator, "_rule", rule)
    return comparator


Comparator.EQ = _make_comparator("==", operator.eq)
Comparator.NE = _make_comparator("!=", operator.ne)
Comparator.LE = _make_comparator("<=", operator.le)
Comparator.GE = _make_comparator(">=", operator.ge)
Comparator.LT = _make_comparator("<", operator.lt)
Comparator.GT = _make_comparator(">", operator.gt)

_COMPARATORS_BY_SYMBOL: Mapping[str, Comparator] = {
    comparator.symbol: comparator
    for comparator in (getattr(Comparator, name) for name in _COMPARATOR_NAMES)
}
