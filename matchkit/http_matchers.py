"""Matchers on the status, headers and body of HTTP responses."""

from __future__ import annotations

import io
import json
from dataclasses import dataclass, field
from email.message import Message
from http import HTTPStatus
from typing import Any, Optional

from .equal import EqualMatcher
from .support import INDENT, format_object, indent_string
from .types import Matcher, MatcherError, is_matcher


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _read_body(body: Any) -> bytes:
    """Return the whole body; readable bodies are read once and closed."""
    if isinstance(body, (str, bytes, bytearray, memoryview)):
        return _as_bytes(body)
    try:
        data = body.read()
    finally:
        close = getattr(body, "close", None)
        if callable(close):
            close()
    return _as_bytes(data)


def _copy_headers(headers: Message) -> Message:
    copy = Message()
    for name, value in headers.items():
        copy[name] = value
    return copy


@dataclass
class Response:
    """An HTTP response: status, headers and a body (bytes, text or a readable object)."""

    status_code: int = 0
    status: str = ""
    headers: Message = field(default_factory=Message)
    body: Any = None


@dataclass
class ResponseRecorder:
    """Records what a handler wrote; ``result()`` turns it into a Response."""

    code: int = 0
    headers: Message = field(default_factory=Message)
    body: Any = None

    def result(self) -> Response:
        """Build a fresh Response; a zero code reads as 200."""
        code = self.code or 200
        try:
            phrase = HTTPStatus(code).phrase
        except ValueError:
            phrase = ""
        data = _as_bytes(self.body) if self.body is not None else b""
        return Response(
            status_code=code,
            status=f"{code:03d} {phrase}",
            headers=_copy_headers(self.headers),
            body=io.BytesIO(data),
        )


def _as_response(actual: Any) -> Optional[Response]:
    if isinstance(actual, Response):
        return actual
    if isinstance(actual, ResponseRecorder):
        return actual.result()
    return None


def _not_a_response(name: str, actual: Any) -> MatcherError:
    return MatcherError(
        f"{name} matcher expects Response or ResponseRecorder. Got:\n" + format_object(actual, 1)
    )


@dataclass(eq=False)
class HaveHTTPBodyMatcher(Matcher):
    """Matches responses whose body equals a string or bytes, or satisfies a matcher."""

    expected: Any
    _cached: Optional[bytes] = field(default=None, init=False, repr=False)

    def _body(self, actual: Any) -> bytes:
        if self._cached is not None:
            return self._cached
        response = _as_response(actual)
        if response is None:
            raise _not_a_response("HaveHTTPBody", actual)
        if response.body is None:
            return b""
        try:
            self._cached = _read_body(response.body)
        except (OSError, ValueError) as exc:
            raise MatcherError(f"error reading response body: {exc}") from exc
        return self._cached

    def _unsupported(self) -> str:
        return "HaveHTTPBody matcher expects string, bytes, or Matcher. Got:\n" + format_object(
            self.expected, 1
        )

    def _sub_matcher(self, body: bytes) -> Optional[tuple[Matcher, Any]]:
        expected = self.expected
        if isinstance(expected, str):
            return EqualMatcher(expected), body.decode("utf-8", errors="replace")
        if isinstance(expected, (bytes, bytearray, memoryview)):
            return EqualMatcher(bytes(expected)), body
        if is_matcher(expected):
            return expected, body
        return None

    def match(self, actual: Any) -> bool:
        body = self._body(actual)
        chosen = self._sub_matcher(body)
        if chosen is None:
            raise MatcherError(self._unsupported())
        matcher, value = chosen
        return matcher.match(value)

    def _describe(self, actual: Any, negated: bool) -> str:
        try:
            body = self._body(actual)
        except MatcherError as exc:
            return f"failed to read body: {exc}"
        chosen = self._sub_matcher(body)
        if chosen is None:
            return self._unsupported()
        matcher, value = chosen
        if negated:
            return matcher.negated_failure_message(value)
        return matcher.failure_message(value)

    def failure_message(self, actual: Any) -> str:
        return self._describe(actual, negated=False)

    def negated_failure_message(self, actual: Any) -> str:
        return self._describe(actual, negated=True)


@dataclass(eq=False)
class HaveHTTPHeaderWithValueMatcher(Matcher):
    """Matches responses whose first value of ``header`` equals or satisfies ``value``."""

    header: str
    value: Any

    def _extract(self, actual: Any) -> str:
        response = _as_response(actual)
        if response is None:
            raise _not_a_response("HaveHTTPHeaderWithValue", actual)
        found = response.headers.get(self.header)
        return "" if found is None else str(found)

    def _sub_matcher(self) -> Matcher:
        if isinstance(self.value, str):
            return EqualMatcher(self.value)
        if is_matcher(self.value):
            return self.value
        raise MatcherError(
            "HaveHTTPHeaderWithValue matcher must be passed a string or a Matcher. Got:\n"
            + format_object(self.value, 1)
        )

    def match(self, actual: Any) -> bool:
        header_value = self._extract(actual)
        return self._sub_matcher().match(header_value)

    def _describe(self, actual: Any, negated: bool) -> str:
        header_value = self._extract(actual)
        matcher = self._sub_matcher()
        text = (
            matcher.negated_failure_message(header_value)
            if negated
            else matcher.failure_message(header_value)
        )
        return f"HTTP header {json.dumps(self.header)}:\n{indent_string(text, 1)}"

    def failure_message(self, actual: Any) -> str:
        return self._describe(actual, negated=False)

    def negated_failure_message(self, actual: Any) -> str:
        return self._describe(actual, negated=True)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _plain(value: Any) -> Any:
    return int(value) if _is_int(value) else value


def _format_field(value: Any) -> str:
    if isinstance(value, str):
        return "<string>: " + json.dumps(value, ensure_ascii=False)
    return format_object(_plain(value), 0)


def format_http_response(value: Any) -> str:
    """Render a response's status, status code and body for failure messages."""
    response = _as_response(value)
    if response is None:
        return "cannot format invalid HTTP response"
    if response.body is None:
        body = "<nil>"
    else:
        try:
            data = _read_body(response.body)
        except (OSError, ValueError):
            data = b"<error reading body>"
        body = _format_field(data.decode("utf-8", errors="replace"))
    lines = [
        f"{INDENT}<{type(value).__name__}>: {{",
        f"{INDENT}{INDENT}Status:     {_format_field(response.status)}",
        f"{INDENT}{INDENT}StatusCode: {_format_field(response.status_code)}",
        f"{INDENT}{INDENT}Body:       {body}",
        f"{INDENT}}}",
    ]
    return "\n".join(lines)


class HaveHTTPStatusMatcher(Matcher):
    """Matches responses whose status code (int) or status line (str) is any of ``expected``."""

    def __init__(self, *expected: Any) -> None:
        self.expected = tuple(expected)

    def __repr__(self) -> str:
        return f"HaveHTTPStatusMatcher{self.expected!r}"

    def match(self, actual: Any) -> bool:
        response = _as_response(actual)
        if response is None:
            raise _not_a_response("HaveHTTPStatus", actual)
        if not self.expected:
            raise MatcherError("HaveHTTPStatus matcher must be passed an int or a string. Got nothing")
        for expected in self.expected:
            if _is_int(expected):
                if response.status_code == expected:
                    return True
            elif isinstance(expected, str):
                if response.status == expected:
                    return True
            else:
                raise MatcherError(
                    "HaveHTTPStatus matcher must be passed int or string types. Got:\n"
                    + format_object(expected, 1)
                )
        return False

    def _expected_text(self) -> str:
        return "\n".join(format_object(_plain(expected), 1) for expected in self.expected)

    def failure_message(self, actual: Any) -> str:
        return (
            f"Expected\n{format_http_response(actual)}\nto have HTTP status\n{self._expected_text()}"
        )

    def negated_failure_message(self, actual: Any) -> str:
        return (
            f"Expected\n{format_http_response(actual)}\n"
            f"not to have HTTP status\n{self._expected_text()}"
        )