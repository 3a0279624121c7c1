"""Matcher that succeeds when any of several matchers succeeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .support import message
from .types import Matcher, OracleMatcher, match_may_change_in_the_future


@dataclass(eq=False)
class OrMatcher(OracleMatcher):
    """Tries matchers in order and stops at the first success or error."""

    matchers: Sequence[Matcher] = ()
    _first_successful: Optional[Matcher] = field(default=None, init=False, repr=False)

    def match(self, actual: Any) -> bool:
        self._first_successful = None
        for matcher in self.matchers:
            if matcher.match(actual):
                self._first_successful = matcher
                return True
        return False

    def failure_message(self, actual: Any) -> str:
        listed = ", ".join(repr(m) for m in self.matchers)
        return message(actual, f"To satisfy at least one of these matchers: [{listed}]")

    def negated_failure_message(self, actual: Any) -> str:
        if self._first_successful is None:
            raise RuntimeError("no matcher has succeeded; call match() first")
        return self._first_successful.negated_failure_message(actual)

    def match_may_change_in_the_future(self, actual: Any) -> bool:
        if self._first_successful is not None:
            return match_may_change_in_the_future(self._first_successful, actual)
        return any(match_may_change_in_the_future(m, actual) for m in self.matchers)