"""
Core implementation of decorators in :mod:`pyverify.api`.
"""

import logging
from typing import Any, Callable, Optional, Type, TypeVar

from ._alltracker import AllTracker

log = logging.getLogger(__name__)


#
# Type variables
#

T_Type = TypeVar("T_Type", bound=Type[Any])


__all__ = ["inheritdoc"]


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


def inheritdoc(*, match: str) -> Callable[[T_Type], T_Type]:
    """
    Class decorator to inherit docstrings of overridden methods.

    Usage:

    .. code-block:: python

      class A:
          def to_text(self) -> str:
              \"""Some documentation\"""
              # …

      @inheritdoc(match="[see superclass]")
      class B(A):
          def to_text(self) -> str:
              \"""[see superclass]\"""
              # …

    In this example, the docstring of ``B.to_text`` will be replaced with the
    docstring of ``A.to_text``, or with ``None`` if that method has no docstring.

    :param match: the parent docstring will be inherited if the current docstring
        is equal to match
    :return: the parameterized decorator
    """

    def _inheritdoc_inner(_cls: T_Type) -> T_Type:
        if not isinstance(_cls, type):
            raise TypeError(
                f"@{inheritdoc.__name__} can only decorate classes, "
                f"not a {type(_cls).__name__}"
            )

        match_found = False

        if _cls.__doc__ == match:
            _cls.__doc__ = _cls.mro()[1].__doc__
            match_found = True

        for name, member in vars(_cls).items():
            if _get_docstring(member) == match:
                _set_docstring(member, _get_inherited_docstring(_cls, name))
                match_found = True

        if not match_found:
            log.warning(
                f"{inheritdoc.__name__}: "
                f"no match found for docstring {match!r} in class {_cls.__name__}"
            )

        return _cls

    return _inheritdoc_inner


__tracker.validate()


def _get_docstring(obj: Any) -> Optional[str]:
    try:
        return obj.__func__.__doc__
    except AttributeError:
        return getattr(obj, "__doc__", None)


def _set_docstring(obj: Any, docstring: Optional[str]) -> None:
    try:
        obj.__func__.__doc__ = docstring
    except AttributeError:
        obj.__doc__ = docstring


def _get_inherited_docstring(child_class: type, attr_name: str) -> Optional[str]:
    # get the docstring for a given attribute from the base class of the given class
    return _get_docstring(getattr(super(child_class, child_class), attr_name, None))
