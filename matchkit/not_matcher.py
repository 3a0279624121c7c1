"""Matcher that inverts another matcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import Matcher, OracleMatcher, match_may_change_in_the_future


@dataclass(eq=False)
class NotMatcher(OracleMatcher):
    """Succeeds where the wrapped matcher fails; errors pass through."""

    matcher: Matcher

    def match(self, actual: Any) -> bool:
        return not self.matcher.match(actual)

    def failure_message(self, actual: Any) -> str:
        return self.matcher.negated_failure_message(actual)

    def negated_failure_message(self, actual: Any) -> str:
        return self.matcher.failure_message(actual)

    def match_may_change_in_the_future(self, actual: Any) -> bool:
        return match_may_change_in_the_future(self.matcher, actual)