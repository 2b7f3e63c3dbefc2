import logging
from typing import Any, Callable, List, Tuple

import pytest

logging.basicConfig(level=logging.DEBUG)
log = logging.getLogger(__name__)


class Spy:
    # operand counting how often it is compared or tested for its truth value

    def __init__(self, value: int) -> None:
        self.value = value
        self.comparisons = 0
        self.truth_tests = 0

    def __lt__(self, other: Any) -> bool:
        self.comparisons += 1
        return self.value < getattr(other, "value", other)

    def __gt__(self, other: Any) -> bool:
        self.comparisons += 1
        return self.value > getattr(other, "value", other)

    def __bool__(self) -> bool:
        self.truth_tests += 1
        return bool(self.value)

    def __repr__(self) -> str:
        return f"Spy({self.value})"


@pytest.fixture  # type:ignore
def spies() -> Tuple[Spy, Spy]:
    return Spy(23), Spy(42)


@pytest.fixture  # type:ignore
def calls() -> List[str]:
    # names of the tracked functions, in the order they were called
    return []


@pytest.fixture  # type:ignore
def tracked(calls: List[str]) -> Callable[[str, Any], Callable[[], Any]]:
    # create functions returning a value, and recording each call in fixture calls

    def _tracked(name: str, value: Any) -> Callable[[], Any]:
        def _f() -> Any:
            calls.append(name)
            return value

        return _f

    return _tracked
