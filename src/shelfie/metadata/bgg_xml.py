# ABOUTME: Generic XML tree for BoardGameGeek payloads, built on ElementTree.
# ABOUTME: Nodes carry tag, attributes, text and children; fields are found by predicates.

import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field


class XmlParseError(ValueError):
    """Raised when an upstream XML payload cannot be parsed."""


@dataclass
class XmlNode:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    children: list["XmlNode"] = field(default_factory=list)

    def find(self, predicate: Callable[["XmlNode"], bool]) -> "XmlNode | None":
        """First direct child matching the predicate."""
        return next(self.find_all(predicate), None)

    def find_all(self, predicate: Callable[["XmlNode"], bool]) -> Iterator["XmlNode"]:
        """Direct children matching the predicate, in document order."""
        return (child for child in self.children if predicate(child))


def tag_is(tag: str, type_: str | None = None) -> Callable[[XmlNode], bool]:
    """Predicate on tag name and, optionally, the ``type`` attribute."""

    def predicate(node: XmlNode) -> bool:
        return node.tag == tag and (type_ is None or node.attrs.get("type") == type_)

    return predicate


def _to_node(element: ET.Element) -> XmlNode:
    text = element.text.strip() if element.text and element.text.strip() else None
    return XmlNode(
        tag=element.tag,
        attrs=dict(element.attrib),
        text=text,
        children=[_to_node(child) for child in element],
    )


def parse_xml(payload: str) -> XmlNode:
    """Parse an XML document into an XmlNode tree rooted at the document element."""
    try:
        root = ET.fromstring(payload)
    except ET.ParseError as exc:
        raise XmlParseError(f"Malformed XML: {exc}") from exc
    return _to_node(root)
