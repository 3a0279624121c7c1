"""Matchers comparing JSON and YAML documents by their decoded content."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import yaml

from .support import deep_equal, format_object, formatted_message, message, to_string
from .types import Matcher, MatcherError


def _to_strings(label: str, actual: Any, expected: Any) -> tuple[str, str]:
    actual_text = to_string(actual)
    if actual_text is None:
        raise MatcherError(
            f"{label} matcher requires a string, stringer, or []byte.  Got actual:\n"
            + format_object(actual, 1)
        )
    expected_text = to_string(expected)
    if expected_text is None:
        raise MatcherError(
            f"{label} matcher requires a string, stringer, or []byte.  Got expected:\n"
            + format_object(expected, 1)
        )
    return actual_text, expected_text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name}")


def _load_json(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _indent_json(text: str) -> str:
    return json.dumps(_load_json(text), indent=2, ensure_ascii=False)


@dataclass(eq=False)
class MatchJSONMatcher(Matcher):
    """Matches JSON text that decodes to the same data as ``json_to_match``."""

    json_to_match: Any
    _failure_path: list = field(default_factory=list, init=False, repr=False)

    def _pretty_print(self, actual: Any) -> tuple[str, str]:
        actual_text, expected_text = _to_strings("MatchJSONMatcher", actual, self.json_to_match)
        try:
            actual_pretty = _indent_json(actual_text)
        except ValueError as exc:
            raise MatcherError(
                f"Actual '{actual_text}' should be valid JSON, but it is not.\nUnderlying error:{exc}"
            ) from exc
        try:
            expected_pretty = _indent_json(expected_text)
        except ValueError as exc:
            raise MatcherError(
                f"Expected '{expected_text}' should be valid JSON, but it is not.\n"
                f"Underlying error:{exc}"
            ) from exc
        return actual_pretty, expected_pretty

    def _pretty_or_blank(self, actual: Any) -> tuple[str, str]:
        try:
            return self._pretty_print(actual)
        except MatcherError:
            return "", ""

    def match(self, actual: Any) -> bool:
        actual_pretty, expected_pretty = self._pretty_print(actual)
        equal, self._failure_path = deep_equal(_load_json(actual_pretty), _load_json(expected_pretty))
        return equal

    def failure_message(self, actual: Any) -> str:
        actual_pretty, expected_pretty = self._pretty_or_blank(actual)
        return formatted_message(
            message(actual_pretty, "to match JSON of", expected_pretty), self._failure_path
        )

    def negated_failure_message(self, actual: Any) -> str:
        actual_pretty, expected_pretty = self._pretty_or_blank(actual)
        return formatted_message(
            message(actual_pretty, "not to match JSON of", expected_pretty), self._failure_path
        )


def _dump_yaml(value: Any) -> str:
    try:
        text = yaml.safe_dump(value, default_flow_style=False, allow_unicode=True, sort_keys=True)
    except TypeError:
        text = yaml.safe_dump(value, default_flow_style=False, allow_unicode=True, sort_keys=False)
    text = text.strip()
    if text.endswith("\n..."):
        text = text[: -len("\n...")].strip()
    elif text == "...":
        text = ""
    return text


def _normalise(text: str) -> str:
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MatcherError(f"cannot normalise invalid YAML: {exc}") from exc
    return _dump_yaml(value)


@dataclass(eq=False)
class MatchYAMLMatcher(Matcher):
    """Matches YAML text that decodes to the same data as ``yaml_to_match``."""

    yaml_to_match: Any
    _failure_path: list = field(default_factory=list, init=False, repr=False)

    def match(self, actual: Any) -> bool:
        actual_text, expected_text = _to_strings("MatchYAMLMatcher", actual, self.yaml_to_match)
        try:
            actual_value = yaml.safe_load(actual_text)
        except yaml.YAMLError as exc:
            raise MatcherError(
                f"Actual '{actual_text}' should be valid YAML, but it is not.\nUnderlying error:{exc}"
            ) from exc
        try:
            expected_value = yaml.safe_load(expected_text)
        except yaml.YAMLError as exc:
            raise MatcherError(
                f"Expected '{expected_text}' should be valid YAML, but it is not.\n"
                f"Underlying error:{exc}"
            ) from exc
        equal, self._failure_path = deep_equal(actual_value, expected_value)
        return equal

    def _normalised(self, actual: Any) -> tuple[str, str]:
        try:
            actual_text, expected_text = _to_strings("MatchYAMLMatcher", actual, self.yaml_to_match)
        except MatcherError:
            actual_text, expected_text = "", ""
        return _normalise(actual_text), _normalise(expected_text)

    def failure_message(self, actual: Any) -> str:
        actual_text, expected_text = self._normalised(actual)
        return formatted_message(
            message(actual_text, "to match YAML of", expected_text), self._failure_path
        )

    def negated_failure_message(self, actual: Any) -> str:
        actual_text, expected_text = self._normalised(actual)
        return formatted_message(
            message(actual_text, "not to match YAML of", expected_text), self._failure_path
        )