"""Core matcher protocol shared by every matcher in the package."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class MatcherError(Exception):
    """Raised when a matcher cannot be applied to the value it was given."""


class Matcher(ABC):
    """A matcher decides whether a value matches and explains failures."""

    @abstractmethod
    def match(self, actual: Any) -> bool:
        """Return whether ``actual`` matches; raise MatcherError if it cannot tell."""

    @abstractmethod
    def failure_message(self, actual: Any) -> str:
        """Explain why ``actual`` did not match."""

    @abstractmethod
    def negated_failure_message(self, actual: Any) -> str:
        """Explain why ``actual`` matched when it should not have."""


class OracleMatcher(Matcher):
    """A matcher that can tell whether its result may change on a later attempt."""

    @abstractmethod
    def match_may_change_in_the_future(self, actual: Any) -> bool:
        """Return False once the result for ``actual`` can no longer change."""


_MATCHER_METHODS = ("match", "failure_message", "negated_failure_message")


def is_matcher(value: Any) -> bool:
    """Return True if ``value`` behaves like a matcher instance."""
    if isinstance(value, Matcher):
        return True
    if value is None or isinstance(value, type):
        return False
    return all(callable(getattr(value, name, None)) for name in _MATCHER_METHODS)


def match_may_change_in_the_future(matcher: Any, value: Any) -> bool:
    """Ask ``matcher`` whether its result may change; default to True."""
    oracle = getattr(matcher, "match_may_change_in_the_future", None)
    if not callable(oracle):
        return True
    return bool(oracle(value))