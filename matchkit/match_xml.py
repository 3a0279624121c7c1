"""Matcher comparing XML documents by structure, ignoring attribute order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union
from xml.parsers import expat

from .support import format_object, to_string
from .types import Matcher, MatcherError

_SEPARATOR = " "


@dataclass
class XmlNode:
    """One element: its name, attributes, text, comments, instructions and children."""

    name: tuple = ("", "")
    comments: list = field(default_factory=list)
    proc_insts: list = field(default_factory=list)
    attrs: list = field(default_factory=list)
    content: str = ""
    nodes: list = field(default_factory=list)


def _split_name(name: str) -> tuple:
    space, _, local = name.rpartition(_SEPARATOR)
    return space, local


def _trim_parent_contents(node: XmlNode) -> None:
    if node.nodes:
        node.content = node.content.strip()
        for child in node.nodes:
            _trim_parent_contents(child)


def parse_xml_content(content: Union[str, bytes]) -> XmlNode:
    """Parse an XML document into its root node; raise ValueError if it is not XML."""
    stack: list[XmlNode] = []
    pending_namespaces: list[tuple] = []

    def current() -> XmlNode:
        return stack[-1] if stack else XmlNode()

    def on_namespace(prefix: Any, uri: str) -> None:
        if prefix:
            pending_namespaces.append(("xmlns", prefix, uri))
        else:
            pending_namespaces.append(("", "xmlns", uri))

    def on_start(name: str, attributes: dict) -> None:
        attrs = [(*_split_name(key), value) for key, value in attributes.items()]
        attrs.extend(pending_namespaces)
        pending_namespaces.clear()
        attrs.sort(key=lambda attr: (attr[0], attr[1]))
        stack.append(XmlNode(name=_split_name(name), attrs=attrs))

    def on_end(name: str) -> None:
        if len(stack) > 1:
            child = stack.pop()
            stack[-1].nodes.append(child)

    def on_text(data: str) -> None:
        current().content += data

    def on_comment(data: str) -> None:
        current().comments.append(data)

    def on_instruction(target: str, data: str) -> None:
        current().proc_insts.append((target, data))

    parser = expat.ParserCreate(namespace_separator=_SEPARATOR)
    parser.buffer_text = True
    parser.StartNamespaceDeclHandler = on_namespace
    parser.StartElementHandler = on_start
    parser.EndElementHandler = on_end
    parser.CharacterDataHandler = on_text
    parser.CommentHandler = on_comment
    parser.ProcessingInstructionHandler = on_instruction
    try:
        parser.Parse(content, True)
    except (expat.ExpatError, LookupError) as exc:
        raise ValueError(f"failed to decode next token: {exc}") from exc

    if not stack:
        raise ValueError("found no nodes")
    root = stack[0]
    _trim_parent_contents(root)
    return root


def _parse_source(value: Any, text: str) -> Union[str, bytes]:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return text


@dataclass(eq=False)
class MatchXMLMatcher(Matcher):
    """Matches XML text with the same elements, attributes and content as ``xml_to_match``."""

    xml_to_match: Any

    def _formatted_print(self, actual: Any) -> tuple[str, str]:
        actual_text = to_string(actual)
        if actual_text is None:
            raise MatcherError(
                "MatchXMLMatcher matcher requires a string, stringer, or []byte.  Got actual:\n"
                + format_object(actual, 1)
            )
        expected_text = to_string(self.xml_to_match)
        if expected_text is None:
            raise MatcherError(
                "MatchXMLMatcher matcher requires a string, stringer, or []byte.  Got expected:\n"
                + format_object(self.xml_to_match, 1)
            )
        return actual_text, expected_text

    def _texts_or_blank(self, actual: Any) -> tuple[str, str]:
        try:
            return self._formatted_print(actual)
        except MatcherError:
            return "", ""

    def match(self, actual: Any) -> bool:
        actual_text, expected_text = self._formatted_print(actual)
        try:
            actual_node = parse_xml_content(_parse_source(actual, actual_text))
        except ValueError as exc:
            raise MatcherError(
                f"Actual '{actual_text}' should be valid XML, but it is not.\nUnderlying error:{exc}"
            ) from exc
        try:
            expected_node = parse_xml_content(_parse_source(self.xml_to_match, expected_text))
        except ValueError as exc:
            raise MatcherError(
                f"Expected '{expected_text}' should be valid XML, but it is not.\n"
                f"Underlying error:{exc}"
            ) from exc
        return actual_node == expected_node

    def failure_message(self, actual: Any) -> str:
        actual_text, expected_text = self._texts_or_blank(actual)
        return f"Expected\n{actual_text}\nto match XML of\n{expected_text}"

    def negated_failure_message(self, actual: Any) -> str:
        actual_text, expected_text = self._texts_or_blank(actual)
        return f"Expected\n{actual_text}\nnot to match XML of\n{expected_text}"