"""Matcher that takes a value from a channel without blocking."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .support import Channel, format_object, message
from .types import OracleMatcher, is_matcher

_MUST_RECEIVE = "When passed a matcher, ReceiveMatcher's channel *must* receive something."


@dataclass
class Box:
    """Holds the value received from a channel; ``kind``, if set, restricts its type."""

    value: Any = None
    kind: Optional[type] = None


@dataclass(eq=False)
class ReceiveMatcher(OracleMatcher):
    """Matches if a value can be received from a channel right now.

    ``arg`` may be a matcher applied to the received value, or a Box that the
    received value is stored in.
    """

    arg: Any = None
    _received: bool = field(default=False, init=False, repr=False)
    _received_value: Any = field(default=None, init=False, repr=False)
    _channel_closed: bool = field(default=False, init=False, repr=False)

    def match(self, actual: Any) -> bool:
        from .types import MatcherError

        if not isinstance(actual, Channel):
            raise MatcherError("ReceiveMatcher expects a channel.  Got:\n" + format_object(actual, 1))

        has_sub_matcher = self.arg is not None and is_matcher(self.arg)
        if self.arg is not None and not has_sub_matcher and not isinstance(self.arg, Box):
            raise MatcherError(
                f"Cannot assign a value from the channel:\n{format_object(actual, 1)}\n"
                f"To:\n{format_object(self.arg, 1)}\nYou need to pass a Box!"
            )

        was_closed = actual.closed
        received, value = actual.try_receive()
        closed = not received and was_closed
        self._channel_closed = closed
        if closed or not received:
            return False

        if has_sub_matcher:
            self._received = True
            self._received_value = value
            return self.arg.match(value)

        if isinstance(self.arg, Box):
            if self.arg.kind is not None and not isinstance(value, self.arg.kind):
                raise MatcherError(
                    f"Cannot assign a value from the channel:\n{format_object(actual, 1)}\n"
                    f"Type:\n{format_object(value, 1)}\nTo:\n{format_object(self.arg, 1)}"
                )
            self.arg.value = value
        return True

    def _closed_addendum(self) -> str:
        return " The channel is closed." if self._channel_closed else ""

    def failure_message(self, actual: Any) -> str:
        if self.arg is not None and is_matcher(self.arg):
            if self._received:
                return self.arg.failure_message(self._received_value)
            return _MUST_RECEIVE
        return message(actual, "to receive something." + self._closed_addendum())

    def negated_failure_message(self, actual: Any) -> str:
        if self.arg is not None and is_matcher(self.arg):
            if self._received:
                return self.arg.negated_failure_message(self._received_value)
            return _MUST_RECEIVE
        return message(actual, "not to receive anything." + self._closed_addendum())

    def match_may_change_in_the_future(self, actual: Any) -> bool:
        if not isinstance(actual, Channel):
            return False
        return not self._channel_closed