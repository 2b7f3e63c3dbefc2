"""
Core implementation of :mod:`pyverify.api`.
"""

import logging
from typing import Optional, Tuple, Type, TypeVar, Union

from ._alltracker import AllTracker

log = logging.getLogger(__name__)

__all__ = [
    "validate_type",
]


#
# Type variables
#

T = TypeVar("T")


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Functions
#


def validate_type(
    value: T,
    *,
    expected_type: Union[Type[T], Tuple[Type[T], ...]],
    optional: bool = False,
    name: Optional[str] = None,
) -> T:
    """
    Validate that a value implements the expected type.

    :param value: an arbitrary object
    :param expected_type: expected type of the value, or a tuple of alternative types
        of which the value must match at least one
    :param optional: if ``True``, accept ``None`` as a valid value (default: ``False``)
    :param name: optional name of the argument or callable with/to which the value
        was passed; use ``"arg …"`` for arguments
    :return: the value passed as arg `value`
    :raise TypeError: the value did not match the expected type(s)
    """
    if expected_type is object:
        return value

    if optional and value is None:
        return None

    if not isinstance(value, expected_type):
        if optional:
            expected_type = (
                (*expected_type, type(None))
                if isinstance(expected_type, tuple)
                else (expected_type, type(None))
            )
        _raise_type_mismatch(
            name=name, expected_type=expected_type, mismatched_type=type(value)
        )

    return value


__tracker.validate()


def _raise_type_mismatch(
    *,
    name: Optional[str],
    expected_type: Union[type, Tuple[type, ...]],
    mismatched_type: type,
) -> None:
    message_head = f"{name} requires" if name else "expected"

    if isinstance(expected_type, type):
        expected_type_str = expected_type.__name__
    else:
        expected_type_str = f"one of {{{', '.join(t.__name__ for t in expected_type)}}}"

    raise TypeError(
        f"{message_head} an instance of {expected_type_str} "
        f"but got: {mismatched_type.__name__}"
    )
