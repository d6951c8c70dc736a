"""Decode catalog XML payloads into nested dictionaries."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any

from vehicle_catalog.core.exceptions import XmlParsingError

TEXT_KEY = "_"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_to_node(element: ET.Element) -> Any:
    """Leaves become trimmed text; parents become dicts, repeated tags lists."""
    text = (element.text or "").strip()
    children = list(element)
    if not children:
        return text

    node: dict[str, Any] = {}
    for child in children:
        key = _local_name(child.tag)
        value = _element_to_node(child)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]
    if text:
        node[TEXT_KEY] = text
    return node


def parse_xml(text: Any) -> dict[str, Any]:
    """Parse ``text`` into ``{root_tag: node}``.

    Attributes are ignored and leaf text is trimmed. A repeated sibling element
    decodes to a list while a singleton decodes to a single node; use
    :func:`as_record_list` to read either shape uniformly.

    Raises:
        XmlParsingError: empty or non-string input, markup that does not
            decode to a document, or nesting too deep to convert
    """
    if not isinstance(text, str) or not text:
        raise XmlParsingError("Invalid XML input: expected non-empty string")

    try:
        root = ET.fromstring(text)
        return {_local_name(root.tag): _element_to_node(root)}
    except (ET.ParseError, RecursionError) as exc:
        raise XmlParsingError(f"Failed to parse XML: {exc}") from exc


def dig(tree: Any, *keys: str) -> Any:
    """Follow ``keys`` through nested mappings, returning None on any gap."""
    node = tree
    for key in keys:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def as_record_list(value: Any) -> list[Any]:
    """Normalize a decoded node into a list of 0, 1 or N records."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


__all__ = ["TEXT_KEY", "as_record_list", "dig", "parse_xml"]
