"""Matchers on the length, capacity and keys of collections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .equal import EqualMatcher
from .support import INDENT, cap_of, format_object, is_mapping, length_of, message
from .types import Matcher, MatcherError, is_matcher


def _as_matcher(value: Any) -> Matcher:
    return value if is_matcher(value) else EqualMatcher(value)


@dataclass(eq=False)
class HaveLenMatcher(Matcher):
    """Matches strings, sequences, mappings and channels of a given length."""

    count: int

    def match(self, actual: Any) -> bool:
        length = length_of(actual)
        if length is None:
            raise MatcherError(
                "HaveLen matcher expects a string/array/map/channel/slice.  Got:\n"
                + format_object(actual, 1)
            )
        return length == self.count

    def failure_message(self, actual: Any) -> str:
        return f"Expected\n{format_object(actual, 1)}\nto have length {self.count}"

    def negated_failure_message(self, actual: Any) -> str:
        return f"Expected\n{format_object(actual, 1)}\nnot to have length {self.count}"


@dataclass(eq=False)
class HaveCapMatcher(Matcher):
    """Matches sequences and channels of a given capacity."""

    count: int

    def match(self, actual: Any) -> bool:
        capacity = cap_of(actual)
        if capacity is None:
            raise MatcherError(
                "HaveCap matcher expects a array/channel/slice.  Got:\n" + format_object(actual, 1)
            )
        return capacity == self.count

    def failure_message(self, actual: Any) -> str:
        return f"Expected\n{format_object(actual, 1)}\nto have capacity {self.count}"

    def negated_failure_message(self, actual: Any) -> str:
        return f"Expected\n{format_object(actual, 1)}\nnot to have capacity {self.count}"


@dataclass(eq=False)
class HaveKeyMatcher(Matcher):
    """Matches mappings with a key equal to, or matched by, ``key``."""

    key: Any

    def match(self, actual: Any) -> bool:
        if not is_mapping(actual):
            raise MatcherError("HaveKey matcher expects a map.  Got:" + format_object(actual, 1))
        key_matcher = _as_matcher(self.key)
        for key in actual:
            try:
                found = key_matcher.match(key)
            except MatcherError as exc:
                raise MatcherError(f"HaveKey's key matcher failed with:\n{INDENT}{exc}") from exc
            if found:
                return True
        return False

    def failure_message(self, actual: Any) -> str:
        text = "to have key matching" if is_matcher(self.key) else "to have key"
        return message(actual, text, self.key)

    def negated_failure_message(self, actual: Any) -> str:
        text = "not to have key matching" if is_matcher(self.key) else "not to have key"
        return message(actual, text, self.key)


@dataclass(eq=False)
class HaveKeyWithValueMatcher(Matcher):
    """Matches mappings whose first key matching ``key`` holds a value matching ``value``."""

    key: Any
    value: Any

    def match(self, actual: Any) -> bool:
        if not is_mapping(actual):
            raise MatcherError(
                "HaveKeyWithValue matcher expects a map.  Got:" + format_object(actual, 1)
            )
        key_matcher = _as_matcher(self.key)
        value_matcher = _as_matcher(self.value)
        for key, value in actual.items():
            try:
                found = key_matcher.match(key)
            except MatcherError as exc:
                raise MatcherError(
                    f"HaveKeyWithValue's key matcher failed with:\n{INDENT}{exc}"
                ) from exc
            if found:
                try:
                    return value_matcher.match(value)
                except MatcherError as exc:
                    raise MatcherError(
                        f"HaveKeyWithValue's value matcher failed with:\n{INDENT}{exc}"
                    ) from exc
        return False

    def failure_message(self, actual: Any) -> str:
        text = "to have {key: value}"
        if is_matcher(self.key) or is_matcher(self.value):
            text += " matching"
        try:
            expected: Any = {self.key: self.value}
        except TypeError:
            expected = [(self.key, self.value)]
        return message(actual, text, expected)

    def negated_failure_message(self, actual: Any) -> str:
        key_text = "not to have key matching" if is_matcher(self.key) else "not to have key"
        value_text = (
            "or to have that key's value not matching"
            if is_matcher(self.value)
            else "or that key's value not be"
        )
        return message(actual, key_text, self.key, value_text, self.value)