# matchkit

matchkit is a set of matcher objects for test assertions. A matcher decides
whether a value matches. When it does not, the matcher can explain why in a
readable failure message.

## The matcher protocol

Every matcher subclasses `matchkit.types.Matcher` and provides three methods:

- `match(actual)` returns `True` or `False`. It raises `MatcherError` when the
  value cannot be compared at all. One example is a `HaveLenMatcher` applied to
  an integer.
- `failure_message(actual)` explains why a positive assertion failed.
- `negated_failure_message(actual)` explains why a negated assertion failed.

`is_matcher(value)` tells whether a value behaves like a matcher. Matchers
that accept an expected value use this check: when that value is a matcher,
they apply it; when it is not, they compare with an `EqualMatcher`.

Some matchers subclass `OracleMatcher`. Such a matcher can report whether its
result might change on a later attempt. The function
`match_may_change_in_the_future(matcher, value)` asks any matcher this
question. For a matcher that has no such method, it returns `True`.

## Example

```python
from matchkit.equal import EqualMatcher
from matchkit.collection_matchers import HaveLenMatcher
from matchkit.or_matcher import OrMatcher
from matchkit.types import MatcherError

m = OrMatcher([EqualMatcher("hip"), HaveLenMatcher(2)])
assert m.match("hi")

eq = EqualMatcher("eric")
if not eq.match("tim"):
    print(eq.failure_message("tim"))
# Expected
#     <string>: tim
# to equal
#     <string>: eric

try:
    HaveLenMatcher(0).match(0)
except MatcherError as exc:
    print(exc)
```

## Available matchers

- `matchkit.equal`: `EqualMatcher`. It compares strictly, so the two values
  must be of the same type and deeply equal. Comparing `None` with `None`
  raises `MatcherError`. When two long strings differ, the failure message
  points at the first differing character.
- `matchkit.not_matcher`: `NotMatcher` inverts another matcher.
- `matchkit.or_matcher`: `OrMatcher` succeeds at the first matcher that
  succeeds.
- `matchkit.collection_matchers`:
  - `HaveLenMatcher` works on strings, bytes, sequences, sets, mappings and
    channels.
  - `HaveCapMatcher` works on lists, tuples, bytearrays and channels.
  - `HaveKeyMatcher` and `HaveKeyWithValueMatcher` work on mappings.
- `matchkit.string_matchers`: `HavePrefixMatcher`, `HaveSuffixMatcher` and
  `MatchRegexpMatcher`. The expected text can be a `%`-style template filled
  in from `args`. The regular expression is searched for anywhere in the
  text.
- `matchkit.error_matchers`:
  - `HaveOccurredMatcher` matches any exception.
  - `SucceedMatcher` matches `None`.
  - `MatchErrorMatcher` compares an exception with an exception, with a
    message string, or with a matcher applied to the message. An expected
    exception also matches when it appears in the actual exception's
    `__cause__`/`__context__` chain.
- `matchkit.structured`: `MatchJSONMatcher` and `MatchYAMLMatcher` compare
  documents by their decoded content. When such a comparison fails, the
  failure message names the first mismatched key.
- `matchkit.match_xml`: `MatchXMLMatcher` compares XML documents by
  structure and ignores attribute order. `parse_xml_content` returns the
  parsed `XmlNode` tree.
- `matchkit.receive`: `ReceiveMatcher` takes a value from a
  `matchkit.support.Channel` without blocking. It can apply a matcher to the
  value it received. It can also store that value in a `Box`; a `Box` may
  restrict the value's type with `kind`.
- `matchkit.http_matchers`: `HaveHTTPBodyMatcher`,
  `HaveHTTPHeaderWithValueMatcher` and `HaveHTTPStatusMatcher`. These work on
  a `Response` or a `ResponseRecorder`. `ResponseRecorder.result()` builds a
  `Response` from it, and a zero code reads as 200.
- `matchkit.have_value`: `HaveValueMatcher` and `have_value(matcher)` follow
  `Ref` objects to the value they hold. A `None` at the top or behind a `Ref`
  raises `MatcherError`, and so does a chain of more than 30 `Ref`s.

The matchers in `matchkit.structured`, `matchkit.match_xml` and
`matchkit.string_matchers` accept `str`, `bytes` or any object with its own
`__str__`.

## Helpers

`matchkit.support` holds the formatting helpers used in messages:
`format_object`, `indent_string`, `message` and `message_with_diff`. It also
holds the helpers that inspect values: `to_string`, `length_of`, `cap_of`,
`deep_equal` and `formatted_message`. `Channel(capacity)` is a thread-safe
queue with three methods: `send`, `close` and `try_receive`.

`matchkit.bipartite` computes a maximum bipartite matching with the
Hopcroft–Karp algorithm:

```python
from matchkit.bipartite import build_bipartite_graph

graph = build_bipartite_graph([1, 2], [2, 1], lambda a, b: a == b)
print(len(graph.largest_matching()))  # 2
print(graph.free_left_right(graph.largest_matching()))  # ([], [])
```

## What is not included

matchkit provides matchers only. It has no assertion runner: nothing like
`expect(...)`, and no polling helpers that retry an assertion until it passes
or times out. To use a matcher, call `match` yourself and report the failure
message.

matchkit also has no matchers of the following kinds:

- matchers that read an object's attributes by name;
- matchers that call a function and check what it raises;
- matchers that apply an arbitrary predicate or transform to a value.

## Installing and testing

```
pip install matchkit
pip install "matchkit[test]"
pytest
```