"""Strict equality matcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .support import message, message_with_diff
from .types import Matcher, MatcherError


def _strict_equal(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_strict_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_strict_equal(v, b[k]) for k, v in a.items())
    if isinstance(a, BaseException):
        return _strict_equal(list(a.args), list(b.args)) and _strict_equal(vars(a), vars(b))
    if type(a).__eq__ is object.__eq__ and hasattr(a, "__dict__"):
        return a is b or _strict_equal(vars(a), vars(b))
    return bool(a == b)


@dataclass(eq=False)
class EqualMatcher(Matcher):
    """Matches values of the same type that are deeply equal."""

    expected: Any

    def match(self, actual: Any) -> bool:
        if actual is None and self.expected is None:
            raise MatcherError(
                "Refusing to compare <nil> to <nil>.\nBe explicit and use BeNil() instead.  "
                "This is to avoid mistakes where both sides of an assertion are erroneously uninitialized."
            )
        return _strict_equal(actual, self.expected)

    def failure_message(self, actual: Any) -> str:
        if isinstance(actual, str) and isinstance(self.expected, str):
            return message_with_diff(actual, "to equal", self.expected)
        return message(actual, "to equal", self.expected)

    def negated_failure_message(self, actual: Any) -> str:
        return message(actual, "not to equal", self.expected)