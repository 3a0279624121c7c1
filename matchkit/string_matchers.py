"""Matchers on the text of strings and string-convertible values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .support import format_object, message, to_string
from .types import Matcher, MatcherError


def _expand(template: str, args: tuple) -> str:
    return template % tuple(args) if args else template


@dataclass(eq=False)
class HavePrefixMatcher(Matcher):
    """Matches text that starts with ``prefix`` (formatted with ``args`` if given)."""

    prefix: str
    args: tuple = ()

    def _expected(self) -> str:
        return _expand(self.prefix, self.args)

    def match(self, actual: Any) -> bool:
        text = to_string(actual)
        if text is None:
            raise MatcherError(
                "HavePrefix matcher requires a string or stringer.  Got:\n" + format_object(actual, 1)
            )
        return text.startswith(self._expected())

    def failure_message(self, actual: Any) -> str:
        return message(actual, "to have prefix", self._expected())

    def negated_failure_message(self, actual: Any) -> str:
        return message(actual, "not to have prefix", self._expected())


@dataclass(eq=False)
class HaveSuffixMatcher(Matcher):
    """Matches text that ends with ``suffix`` (formatted with ``args`` if given)."""

    suffix: str
    args: tuple = ()

    def _expected(self) -> str:
        return _expand(self.suffix, self.args)

    def match(self, actual: Any) -> bool:
        text = to_string(actual)
        if text is None:
            raise MatcherError(
                "HaveSuffix matcher requires a string or stringer.  Got:\n" + format_object(actual, 1)
            )
        return text.endswith(self._expected())

    def failure_message(self, actual: Any) -> str:
        return message(actual, "to have suffix", self._expected())

    def negated_failure_message(self, actual: Any) -> str:
        return message(actual, "not to have suffix", self._expected())


@dataclass(eq=False)
class MatchRegexpMatcher(Matcher):
    """Matches text in which the regular expression finds a match anywhere."""

    regexp: str
    args: tuple = ()

    def _pattern(self) -> str:
        return _expand(self.regexp, self.args)

    def match(self, actual: Any) -> bool:
        text = to_string(actual)
        if text is None:
            raise MatcherError(
                "RegExp matcher requires a string or stringer.\nGot:" + format_object(actual, 1)
            )
        try:
            compiled = re.compile(self._pattern())
        except re.error as exc:
            raise MatcherError(f"RegExp match failed to compile with error:\n\t{exc}") from exc
        return compiled.search(text) is not None

    def failure_message(self, actual: Any) -> str:
        return message(actual, "to match regular expression", self._pattern())

    def negated_failure_message(self, actual: Any) -> str:
        return message(actual, "not to match regular expression", self._pattern())