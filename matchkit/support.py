"""Value inspection, message formatting and structured-data comparison helpers."""

from __future__ import annotations

import json
import threading
from collections import deque
from collections.abc import Mapping
from typing import Any, Optional

INDENT = "    "
_TRUNCATE_THRESHOLD = 50
_CHARS_AROUND_MISMATCH = 5


class Channel:
    """A thread-safe queue with a fixed capacity that can be closed."""

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("channel capacity cannot be negative")
        self.capacity = capacity
        self._items: deque = deque()
        self._closed = False
        self._sent = 0
        self._taken = 0
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items) if self.capacity else 0

    def send(self, value: Any) -> None:
        """Put ``value`` on the channel, blocking until there is room for it."""
        with self._cond:
            if self._closed:
                raise ValueError("send on closed channel")
            while len(self._items) >= max(self.capacity, 1):
                self._cond.wait()
                if self._closed:
                    raise ValueError("send on closed channel")
            self._items.append(value)
            ticket = self._sent
            self._sent += 1
            self._cond.notify_all()
            if self.capacity == 0:
                while self._taken <= ticket and not self._closed:
                    self._cond.wait()

    def close(self) -> None:
        with self._cond:
            if self._closed:
                raise ValueError("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def try_receive(self) -> tuple[bool, Any]:
        """Take a value without blocking; return (received, value)."""
        with self._cond:
            if self._items:
                value = self._items.popleft()
                self._taken += 1
                self._cond.notify_all()
                return True, value
            return False, None


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float64"
    if isinstance(value, str):
        return "string"
    name = type(value).__qualname__
    if isinstance(value, (bytes, bytearray, list, tuple, Mapping, set, frozenset)):
        return f"{name} | len:{len(value)}"
    return name


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return repr(value)


def format_object(value: Any, indent: int) -> str:
    """Render ``value`` with its type, indented ``indent`` levels."""
    prefix = INDENT * indent
    if value is None:
        return f"{prefix}<nil>: nil"
    rendered = _render(value).replace("\n", "\n" + prefix)
    return f"{prefix}<{_type_name(value)}>: {rendered}"


def indent_string(text: str, indent: int) -> str:
    prefix = INDENT * indent
    return "\n".join(prefix + line for line in text.split("\n"))


def message(actual: Any, text: str, *args: Any) -> str:
    """Build an 'Expected ... <text> ...' message.

    ``args`` alternate between expected values and further connecting texts.
    """
    parts = ["Expected", format_object(actual, 1), text]
    for position, arg in enumerate(args):
        parts.append(format_object(arg, 1) if position % 2 == 0 else arg)
    return "\n".join(parts)


def _first_mismatch(a: str, b: str) -> int:
    for index, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return index
    return min(len(a), len(b))


def _truncate(text: str, index: int) -> str:
    left = "..."
    right = "..."
    start = index - _CHARS_AROUND_MISMATCH
    if start < 0:
        start, left = 0, ""
    end = index + _CHARS_AROUND_MISMATCH + 1
    if end > len(text):
        end, right = len(text), ""
    return f'"{left}{text[start:end]}{right}"'


def _escape(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)[1:-1]


def message_with_diff(actual: str, text: str, expected: str) -> str:
    """Like message() for two strings, pointing at where long strings differ."""
    if len(actual) >= _TRUNCATE_THRESHOLD and len(expected) >= _TRUNCATE_THRESHOLD:
        point = _first_mismatch(actual, expected)
        short_actual = _truncate(actual, point)
        short_expected = _truncate(expected, point)
        spaces = _first_mismatch(short_actual, short_expected)
        gap = len(INDENT) + len("<string>: ") - len(text)
        padding = " " * (gap + spaces) + "|"
        return message(short_actual, text + padding, short_expected)
    return message(_escape(actual), text, _escape(expected))


def is_error(value: Any) -> bool:
    return isinstance(value, BaseException)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_stringer(value: Any) -> bool:
    if value is None or isinstance(value, (bool, int, float, BaseException)):
        return False
    return type(value).__str__ is not object.__str__


def to_string(value: Any) -> Optional[str]:
    """Return the text of a string, bytes or string-convertible object, else None."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if _is_stringer(value):
        return str(value)
    return None


_SIZED = (str, bytes, bytearray, list, tuple, Mapping, set, frozenset, Channel)


def length_of(value: Any) -> Optional[int]:
    if isinstance(value, _SIZED):
        return len(value)
    return None


def cap_of(value: Any) -> Optional[int]:
    if isinstance(value, Channel):
        return value.capacity
    if isinstance(value, (list, tuple, bytearray)):
        return len(value)
    return None


def formatted_failure_path(failure_path: list) -> str:
    """Render a key path, outermost key first, as e.g. '"a"."b"[1]'."""
    parts = []
    for position, key in enumerate(failure_path):
        if isinstance(key, int) and not isinstance(key, bool):
            parts.append(f"[{key}]")
        else:
            if position != 0:
                parts.append(".")
            parts.append(f'"{key}"')
    return "".join(parts)


def formatted_message(comparison_message: str, failure_path: list) -> str:
    if not failure_path:
        return comparison_message
    return f"{comparison_message}\n\nfirst mismatched key: {formatted_failure_path(failure_path)}"


def _kind(value: Any) -> Any:
    return float if is_number(value) else type(value)


def deep_equal(a: Any, b: Any) -> tuple[bool, list]:
    """Compare decoded JSON/YAML data; return (equal, path to first mismatch)."""
    if _kind(a) is not _kind(b):
        return False, []
    if isinstance(a, list):
        if len(a) != len(b):
            return False, []
        for index, (x, y) in enumerate(zip(a, b)):
            equal, path = deep_equal(x, y)
            if not equal:
                return False, [index, *path]
        return True, []
    if isinstance(a, dict):
        if len(a) != len(b):
            return False, []
        for key, left in a.items():
            if key not in b:
                return False, []
            equal, path = deep_equal(left, b[key])
            if not equal:
                return False, [key, *path]
        return True, []
    return a == b, []