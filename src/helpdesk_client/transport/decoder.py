"""Decoding of XML responses into nested mappings."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from ..errors import TransportError

ATTRIBUTES_KEY = "_attributes"
CONTENTS_KEY = "_contents"


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    if not children and not element.attrib:
        return (element.text or "").strip()

    value: dict[str, Any] = {}
    if element.attrib:
        value[ATTRIBUTES_KEY] = dict(element.attrib)
    if children:
        _collect_children(element, value)
    else:
        value[CONTENTS_KEY] = (element.text or "").strip()
    return value


def _collect_children(element: ET.Element, target: dict[str, Any]) -> None:
    for child in element:
        child_value = _element_to_value(child)
        if child.tag not in target:
            # Structured elements always come as a list
            target[child.tag] = [child_value] if isinstance(child_value, dict) else child_value
        else:
            existing = target[child.tag]
            if isinstance(existing, list):
                existing.append(child_value)
            else:
                target[child.tag] = [existing, child_value]


def decode_xml(text: str | bytes) -> dict[str, Any]:
    """
    Decode an API response body.

    The root element is dropped; its children become the top-level keys.

    Raises:
        TransportError: If the body is not well-formed XML
    """
    if not text or not text.strip():
        return {}
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise TransportError(f"Malformed XML response: {e}") from e

    result: dict[str, Any] = {}
    _collect_children(root, result)
    return result
