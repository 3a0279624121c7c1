"""Matcher applied to the value behind any number of references."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .support import message
from .types import Matcher, MatcherError

MAX_INDIRECTIONS = 31


@dataclass
class Ref:
    """A reference to a value; a reference to None is a dangling one."""

    value: Any = None


@dataclass(eq=False)
class HaveValueMatcher(Matcher):
    """Follows Refs to the value they hold and applies ``matcher`` to it.

    None, at the top or behind a Ref, is an error, as is a chain of more
    than 30 Refs.
    """

    matcher: Matcher
    _resolved: Any = field(default=None, init=False, repr=False)

    def match(self, actual: Any) -> bool:
        value = actual
        for _ in range(MAX_INDIRECTIONS):
            if value is None:
                raise MatcherError(message(actual, "not to be <nil>"))
            if isinstance(value, Ref):
                value = value.value
                continue
            self._resolved = value
            return self.matcher.match(value)
        raise MatcherError(message(actual, "too many indirections"))

    def failure_message(self, actual: Any) -> str:
        return self.matcher.failure_message(self._resolved)

    def negated_failure_message(self, actual: Any) -> str:
        return self.matcher.negated_failure_message(self._resolved)


def have_value(matcher: Matcher) -> HaveValueMatcher:
    """Build a matcher that applies ``matcher`` to the value behind any Refs."""
    return HaveValueMatcher(matcher)