import io
from dataclasses import dataclass
from email.message import Message

import pytest

from matchkit.http_matchers import (
    HaveHTTPBodyMatcher,
    HaveHTTPHeaderWithValueMatcher,
    HaveHTTPStatusMatcher,
    Response,
    ResponseRecorder,
    format_http_response,
)
from matchkit.structured import MatchJSONMatcher
from matchkit.support import message
from matchkit.types import Matcher, MatcherError

BODY = "this is the body"


@dataclass(eq=False)
class ContainSubstring(Matcher):
    substring: str

    def match(self, actual):
        if not isinstance(actual, str):
            raise MatcherError("ContainSubstring matcher requires a string")
        return self.substring in actual

    def failure_message(self, actual):
        return message(actual, "to contain substring", self.substring)

    def negated_failure_message(self, actual):
        return message(actual, "not to contain substring", self.substring)


def body_response(text):
    return Response(body=io.BytesIO(text.encode()))


def header_response(*pairs):
    headers = Message()
    for name, value in pairs:
        headers[name] = value
    return Response(headers=headers)


# --- body ---------------------------------------------------------------


def test_body_matches_response():
    assert HaveHTTPBodyMatcher(BODY).match(body_response(BODY)) is True


def test_body_mismatches_response():
    assert HaveHTTPBodyMatcher("something else").match(body_response(BODY)) is False


def test_body_matches_recorder():
    assert HaveHTTPBodyMatcher(BODY).match(ResponseRecorder(body=BODY.encode())) is True


def test_body_mismatches_recorder():
    recorder = ResponseRecorder(body=BODY.encode())
    assert HaveHTTPBodyMatcher("something else").match(recorder) is False


def test_body_rejects_non_response():
    with pytest.raises(MatcherError) as info:
        HaveHTTPBodyMatcher("bar").match("foo")
    assert str(info.value) == (
        "HaveHTTPBody matcher expects Response or ResponseRecorder. Got:\n    <string>: foo"
    )


def test_body_with_bytes_expected():
    assert HaveHTTPBodyMatcher(BODY.encode()).match(body_response(BODY)) is True
    assert HaveHTTPBodyMatcher(b"something else").match(body_response(BODY)) is False


def test_body_with_submatcher():
    assert HaveHTTPBodyMatcher(MatchJSONMatcher('{ "some": "json" }')).match(
        body_response('{"some":"json"}')
    )
    assert not HaveHTTPBodyMatcher(MatchJSONMatcher('{ "something": "different" }')).match(
        body_response('{"some":"json"}')
    )


def test_body_rejects_unsupported_expected():
    with pytest.raises(MatcherError) as info:
        HaveHTTPBodyMatcher({}).match(body_response("body"))
    assert str(info.value) == (
        "HaveHTTPBody matcher expects string, bytes, or Matcher. Got:\n    <dict | len:0>: {}"
    )


def test_body_is_cached_after_reading():
    response = body_response(BODY)
    matcher = HaveHTTPBodyMatcher("this is a different body")
    assert matcher.match(response) is False
    assert matcher.failure_message(response) == (
        "Expected\n    <string>: this is the body\nto equal\n    <string>: this is a different body"
    )


def test_body_failure_message_bytes():
    response = body_response(BODY)
    matcher = HaveHTTPBodyMatcher(b"this is a different body")
    matcher.match(response)
    assert matcher.failure_message(response) == (
        "Expected\n    <bytes | len:16>: this is the body\n"
        "to equal\n    <bytes | len:24>: this is a different body"
    )


def test_body_failure_message_submatcher():
    response = body_response('{"some":"json"}')
    matcher = HaveHTTPBodyMatcher(MatchJSONMatcher('{"other":"stuff"}'))
    assert matcher.match(response) is False
    assert matcher.failure_message(response) == (
        'Expected\n    <string>: {\n      "some": "json"\n    }\n'
        'to match JSON of\n    <string>: {\n      "other": "stuff"\n    }'
    )


def test_body_negated_failure_message_string():
    response = body_response(BODY)
    matcher = HaveHTTPBodyMatcher(BODY)
    assert matcher.match(response) is True
    assert matcher.negated_failure_message(response) == (
        "Expected\n    <string>: this is the body\nnot to equal\n    <string>: this is the body"
    )


def test_body_negated_failure_message_bytes():
    response = body_response(BODY)
    matcher = HaveHTTPBodyMatcher(BODY.encode())
    assert matcher.match(response) is True
    assert matcher.negated_failure_message(response) == (
        "Expected\n    <bytes | len:16>: this is the body\n"
        "not to equal\n    <bytes | len:16>: this is the body"
    )


def test_body_negated_failure_message_submatcher():
    text = '{"some":"json"}'
    response = body_response(text)
    matcher = HaveHTTPBodyMatcher(MatchJSONMatcher(text))
    assert matcher.match(response) is True
    assert matcher.negated_failure_message(response) == (
        'Expected\n    <string>: {\n      "some": "json"\n    }\n'
        'not to match JSON of\n    <string>: {\n      "some": "json"\n    }'
    )


def test_body_failure_message_for_non_response():
    assert HaveHTTPBodyMatcher("bar").failure_message(3).startswith(
        "failed to read body: HaveHTTPBody matcher expects"
    )


# --- headers ------------------------------------------------------------


def test_header_matches():
    response = header_response(("fake-header", "fake value"))
    assert HaveHTTPHeaderWithValueMatcher("fake-header", "fake value").match(response) is True


def test_header_lookup_ignores_case():
    response = header_response(("Fake-Header", "fake value"))
    assert HaveHTTPHeaderWithValueMatcher("fake-header", "fake value").match(response) is True


def test_header_mismatches():
    response = header_response(("fake-header", "fake value"))
    assert HaveHTTPHeaderWithValueMatcher("other-header", "fake value").match(response) is False
    assert HaveHTTPHeaderWithValueMatcher("fake-header", "other value").match(response) is False


def test_header_set_twice_matches_first_value():
    response = header_response(("fake-header", "fake value1"), ("fake-header", "fake value2"))
    assert HaveHTTPHeaderWithValueMatcher("fake-header", "fake value1").match(response) is True
    assert HaveHTTPHeaderWithValueMatcher("fake-header", "fake value2").match(response) is False


def test_header_on_recorder():
    recorder = ResponseRecorder()
    recorder.headers["fake-header"] = "fake value"
    assert HaveHTTPHeaderWithValueMatcher("fake-header", "fake value").match(recorder) is True
    assert HaveHTTPHeaderWithValueMatcher("other-header", "fake value").match(recorder) is False
    assert HaveHTTPHeaderWithValueMatcher("fake-header", "other value").match(recorder) is False


def test_header_rejects_non_response():
    with pytest.raises(MatcherError) as info:
        HaveHTTPHeaderWithValueMatcher("bar", "baz").match("foo")
    assert str(info.value) == (
        "HaveHTTPHeaderWithValue matcher expects Response or ResponseRecorder. Got:\n"
        "    <string>: foo"
    )


def test_header_with_submatcher():
    response = header_response(("fake-header", "fake value"))
    assert HaveHTTPHeaderWithValueMatcher("fake-header", ContainSubstring("value")).match(response)
    assert not HaveHTTPHeaderWithValueMatcher("fake-header", ContainSubstring("foo")).match(
        response
    )


def test_header_rejects_unsupported_value():
    with pytest.raises(MatcherError) as info:
        HaveHTTPHeaderWithValueMatcher("bar", 42).match(Response())
    assert str(info.value) == (
        "HaveHTTPHeaderWithValue matcher must be passed a string or a Matcher. Got:\n"
        "    <int>: 42"
    )


def test_header_failure_message_string():
    response = header_response(("fake-header", "fake value"))
    matcher = HaveHTTPHeaderWithValueMatcher("fake-header", "other value")
    assert matcher.match(response) is False
    assert matcher.failure_message(response) == (
        'HTTP header "fake-header":\n    Expected\n        <string>: fake value\n'
        "    to equal\n        <string>: other value"
    )


def test_header_failure_message_matcher():
    response = header_response(("fake-header", "fake value"))
    matcher = HaveHTTPHeaderWithValueMatcher("fake-header", ContainSubstring("other"))
    assert matcher.match(response) is False
    assert matcher.failure_message(response) == (
        'HTTP header "fake-header":\n    Expected\n        <string>: fake value\n'
        "    to contain substring\n        <string>: other"
    )


def test_header_negated_failure_message_string():
    response = header_response(("fake-header", "fake value"))
    matcher = HaveHTTPHeaderWithValueMatcher("fake-header", "fake value")
    assert matcher.match(response) is True
    assert matcher.negated_failure_message(response) == (
        'HTTP header "fake-header":\n    Expected\n        <string>: fake value\n'
        "    not to equal\n        <string>: fake value"
    )


def test_header_negated_failure_message_matcher():
    response = header_response(("fake-header", "fake value"))
    matcher = HaveHTTPHeaderWithValueMatcher("fake-header", ContainSubstring("value"))
    assert matcher.match(response) is True
    assert matcher.negated_failure_message(response) == (
        'HTTP header "fake-header":\n    Expected\n        <string>: fake value\n'
        "    not to contain substring\n        <string>: value"
    )


# --- status -------------------------------------------------------------


def test_status_single_int():
    response = Response(status_code=200)
    assert HaveHTTPStatusMatcher(200).match(response) is True
    assert HaveHTTPStatusMatcher(404).match(response) is False


def test_status_single_string():
    response = Response(status="200 OK")
    assert HaveHTTPStatusMatcher("200 OK").match(response) is True
    assert HaveHTTPStatusMatcher("404 Not Found").match(response) is False


def test_status_empty_expected():
    with pytest.raises(MatcherError) as info:
        HaveHTTPStatusMatcher().match(Response(status_code=200))
    assert str(info.value) == "HaveHTTPStatus matcher must be passed an int or a string. Got nothing"


def test_status_rejects_bool():
    with pytest.raises(MatcherError) as info:
        HaveHTTPStatusMatcher(True).match(Response(status_code=200))
    assert str(info.value) == (
        "HaveHTTPStatus matcher must be passed int or string types. Got:\n    <bool>: True"
    )


@pytest.mark.parametrize(
    "expected, result",
    [
        ((200, 204, 404), True),
        (("204 Feeling Fine", "200 OK", "404 Not Found"), True),
        (("204 Feeling Fine", 200, "404 Not Found"), True),
        ((204, "200 OK", 404), True),
        ((404, 204, 410), False),
        (("204 Feeling Fine", "201 Sleeping", "404 Not Found"), False),
        ((404, "404 Not Found", 410), False),
    ],
)
def test_status_list(expected, result):
    response = Response(status="200 OK", status_code=200)
    assert HaveHTTPStatusMatcher(*expected).match(response) is result


def test_status_list_with_bad_type():
    with pytest.raises(MatcherError) as info:
        HaveHTTPStatusMatcher(410, "204 No Content", True, 404).match(Response(status_code=200))
    assert str(info.value) == (
        "HaveHTTPStatus matcher must be passed int or string types. Got:\n    <bool>: True"
    )


def test_status_recorder():
    recorder = ResponseRecorder(code=200)
    assert HaveHTTPStatusMatcher(200).match(recorder) is True
    assert HaveHTTPStatusMatcher(404).match(recorder) is False
    assert HaveHTTPStatusMatcher("200 OK").match(recorder) is True
    assert HaveHTTPStatusMatcher("404 Not Found").match(recorder) is False


def test_status_recorder_with_none_expected():
    with pytest.raises(MatcherError) as info:
        HaveHTTPStatusMatcher(None).match(ResponseRecorder(code=200))
    assert str(info.value) == (
        "HaveHTTPStatus matcher must be passed int or string types. Got:\n    <nil>: nil"
    )


def test_status_rejects_non_response():
    with pytest.raises(MatcherError) as info:
        HaveHTTPStatusMatcher(200).match("foo")
    assert str(info.value) == (
        "HaveHTTPStatus matcher expects Response or ResponseRecorder. Got:\n    <string>: foo"
    )


def bad_gateway():
    return Response(
        status_code=502, status="502 Bad Gateway", body=io.BytesIO(b"did not like it")
    )


def test_status_failure_message_single():
    assert HaveHTTPStatusMatcher(200).failure_message(bad_gateway()) == (
        "Expected\n"
        "    <Response>: {\n"
        '        Status:     <string>: "502 Bad Gateway"\n'
        "        StatusCode: <int>: 502\n"
        '        Body:       <string>: "did not like it"\n'
        "    }\n"
        "to have HTTP status\n"
        "    <int>: 200"
    )


def test_status_failure_message_multiple():
    assert HaveHTTPStatusMatcher(200, 404, "204 No content").failure_message(bad_gateway()) == (
        "Expected\n"
        "    <Response>: {\n"
        '        Status:     <string>: "502 Bad Gateway"\n'
        "        StatusCode: <int>: 502\n"
        '        Body:       <string>: "did not like it"\n'
        "    }\n"
        "to have HTTP status\n"
        "    <int>: 200\n"
        "    <int>: 404\n"
        "    <string>: 204 No content"
    )


def ok_response():
    return Response(status_code=200, status="200 OK", body=io.BytesIO(b"got it!"))


def test_status_negated_failure_message_single():
    assert HaveHTTPStatusMatcher(200).negated_failure_message(ok_response()) == (
        "Expected\n"
        "    <Response>: {\n"
        '        Status:     <string>: "200 OK"\n'
        "        StatusCode: <int>: 200\n"
        '        Body:       <string>: "got it!"\n'
        "    }\n"
        "not to have HTTP status\n"
        "    <int>: 200"
    )


def test_status_negated_failure_message_multiple():
    matcher = HaveHTTPStatusMatcher(200, "204 No content", 410)
    assert matcher.negated_failure_message(ok_response()) == (
        "Expected\n"
        "    <Response>: {\n"
        '        Status:     <string>: "200 OK"\n'
        "        StatusCode: <int>: 200\n"
        '        Body:       <string>: "got it!"\n'
        "    }\n"
        "not to have HTTP status\n"
        "    <int>: 200\n"
        "    <string>: 204 No content\n"
        "    <int>: 410"
    )


# --- helpers ------------------------------------------------------------


def test_format_http_response_invalid():
    assert format_http_response("nope") == "cannot format invalid HTTP response"


def test_format_http_response_without_body():
    assert format_http_response(Response(status_code=204, status="204 No Content")) == (
        "    <Response>: {\n"
        '        Status:     <string>: "204 No Content"\n'
        "        StatusCode: <int>: 204\n"
        "        Body:       <nil>\n"
        "    }"
    )


def test_recorder_result_defaults_to_200():
    response = ResponseRecorder().result()
    assert (response.status_code, response.status) == (200, "200 OK")


def test_recorder_result_status_line():
    assert ResponseRecorder(code=404).result().status == "404 Not Found"