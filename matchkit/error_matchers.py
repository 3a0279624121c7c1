"""Matchers on raised or returned exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .support import format_object, indent_string, is_error, is_string, message
from .types import Matcher, MatcherError, is_matcher


def _error_type_check(actual: Any) -> None:
    if not is_error(actual):
        raise MatcherError("Expected an error-type.  Got:\n" + format_object(actual, 1))


@dataclass(eq=False)
class HaveOccurredMatcher(Matcher):
    """Matches any exception; None does not match."""

    def match(self, actual: Any) -> bool:
        if actual is None:
            return False
        _error_type_check(actual)
        return True

    def failure_message(self, actual: Any) -> str:
        return "Expected an error to have occurred.  Got:\n" + format_object(actual, 1)

    def negated_failure_message(self, actual: Any) -> str:
        return "\n".join(
            [
                "Unexpected error:",
                format_object(actual, 1),
                indent_string(str(actual), 1),
                "occurred",
            ]
        )


@dataclass(eq=False)
class SucceedMatcher(Matcher):
    """Matches None; any exception fails."""

    def match(self, actual: Any) -> bool:
        if actual is None:
            return True
        _error_type_check(actual)
        return False

    def failure_message(self, actual: Any) -> str:
        return (
            "Expected success, but got an error:\n"
            f"{format_object(actual, 1)}\n{indent_string(str(actual), 1)}"
        )

    def negated_failure_message(self, actual: Any) -> str:
        return "Expected failure, but got no error."


def _errors_equal(a: BaseException, b: BaseException) -> bool:
    if a is b:
        return True
    return type(a) is type(b) and a.args == b.args and vars(a) == vars(b)


def _chain(error: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: Any = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


@dataclass(eq=False)
class MatchErrorMatcher(Matcher):
    """Matches an exception against an exception, its message, or a matcher on its message."""

    expected: Any

    def match(self, actual: Any) -> bool:
        if actual is None:
            raise MatcherError("Expected an error, got nil")
        if not is_error(actual):
            raise MatcherError("Expected an error.  Got:\n" + format_object(actual, 1))

        expected = self.expected
        if is_error(expected):
            if _errors_equal(actual, expected):
                return True
            return any(link is expected or link == expected for link in _chain(actual))
        if is_string(expected):
            return str(actual) == expected
        if is_matcher(expected):
            return expected.match(str(actual))
        raise MatcherError(
            "MatchError must be passed an error, a string, or a Matcher that can match on strings. Got:\n"
            + format_object(expected, 1)
        )

    def failure_message(self, actual: Any) -> str:
        return message(actual, "to match error", self.expected)

    def negated_failure_message(self, actual: Any) -> str:
        return message(actual, "not to match error", self.expected)