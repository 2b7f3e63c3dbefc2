"""
Implementation of :mod:`pyverify.formatter`.
"""
import logging
import re
from abc import ABCMeta, abstractmethod
from typing import Any, Optional

import numpy as np
import pandas as pd

from ..api import AllTracker, inheritdoc, validate_type

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = [
    "OperandFormatter",
    "ReprOperandFormatter",
]


#
# Constants
#

# a line break, including any whitespace around it
_RE_LINE_BREAK = re.compile(r"\s*\n\s*")

_ELLIPSIS = "…"


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Class definitions
#


class OperandFormatter(metaclass=ABCMeta):
    """
    Generates the text representations of operands in a decomposed expression.

    This is an abstract base class; use :meth:`default` to get the default operand
    formatter.
    """

    @abstractmethod
    def to_text(self, operand: Any) -> str:
        """
        Construct a text representation of the given operand.

        :param operand: the operand to represent as text
        :return: a text representation of the operand
        """
        pass

    @staticmethod
    def default() -> "OperandFormatter":
        """
        Get the default operand formatter.

        :return: a :class:`.ReprOperandFormatter` with default settings
        """
        return _DEFAULT_FORMATTER


@inheritdoc(match="[see superclass]")
class ReprOperandFormatter(OperandFormatter):
    """
    Formats operands using their :func:`repr` representation.

    NumPy and pandas objects are represented by their contents rather than by their
    multi-line tabular output:

    - arrays are formatted as ``array([...])``
    - NumPy scalars are formatted as the equivalent Python scalar
    - series and indices are formatted as ``Series([...])`` and ``Index([...])``
    - data frames are formatted as ``DataFrame({column: [...], ...})``
    """

    def __init__(
        self, *, single_line: bool = True, max_length: Optional[int] = None
    ) -> None:
        """
        :param single_line: if ``True``, replace line breaks and the indentation
            around them with a single space (default: ``True``)
        :param max_length: the maximum length of the text representing an operand;
            longer representations are truncated and end with ``…``
            (default: unlimited)
        """
        validate_type(
            max_length, expected_type=int, optional=True, name="arg max_length"
        )
        if max_length is not None and max_length < 1:
            raise ValueError(f"arg max_length={max_length} must be a positive integer")
        self._single_line = single_line
        self._max_length = max_length

    @property
    def single_line(self) -> bool:
        """
        ``True`` if this formatter replaces line breaks with spaces.
        """
        return self._single_line

    @property
    def max_length(self) -> Optional[int]:
        """
        The maximum length of the text representing an operand; ``None`` if unlimited.
        """
        return self._max_length

    def to_text(self, operand: Any) -> str:
        """[see superclass]"""
        text = _repr(operand)

        if self._single_line:
            text = _RE_LINE_BREAK.sub(" ", text)

        max_length = self._max_length
        if max_length is not None and len(text) > max_length:
            text = text[: max_length - 1] + _ELLIPSIS

        return text

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}"
            f"(single_line={self._single_line}, max_length={self._max_length})"
        )


__tracker.validate()


_DEFAULT_FORMATTER = ReprOperandFormatter()


def _repr(operand: Any) -> str:
    if isinstance(operand, np.ndarray):
        return f"array({operand.tolist()!r})"
    elif isinstance(operand, np.generic):
        return repr(operand.item())
    elif isinstance(operand, pd.DataFrame):
        return f"DataFrame({operand.to_dict(orient='list')!r})"
    elif isinstance(operand, (pd.Series, pd.Index)):
        return f"{type(operand).__name__}({operand.tolist()!r})"
    else:
        return repr(operand)
