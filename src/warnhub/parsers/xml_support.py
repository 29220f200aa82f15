"""Shared XML loading for XML based report formats (CheckStyle, PMD)."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from warnhub.exceptions import ParseError


def load_document(text: str, root_tag: str) -> ET.Element:
    """Parse an XML report and check its root element.

    Args:
        text: Raw XML content.
        root_tag: Expected tag of the document element.

    Returns:
        The document element.

    Raises:
        ParseError: If the text is not well-formed XML or the root element
            is not ``root_tag``.
    """
    if not text.strip():
        raise ParseError("Empty document")
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ParseError(f"Malformed XML: {exc}") from exc
    if root.tag != root_tag:
        raise ParseError(f"Expected <{root_tag}> document but found <{root.tag}>")
    return root


def int_attribute(element: ET.Element, name: str, default: int = 0) -> int:
    """Read an integer attribute, falling back to ``default``."""
    value = element.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default
