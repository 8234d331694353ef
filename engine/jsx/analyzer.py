"""
Inspector JSX Engine: Structure Analyzer

Read-only listing of every element with the path expressions that address
it. Used by the inspector panel to discover paths, and by tests.
"""

from __future__ import annotations

import re

from engine.jsx.tree import build_element_tree
from engine.jsx.types import ElementRecord, PathSegment, StructureEntry
from engine.jsx.xpath import format_path

ATTRIBUTE_SPLIT_PATTERN = re.compile(r"\s+(?=\w+=)")


def split_attributes(attributes: str) -> list[str]:
    """Raw attribute tokens, split on whitespace that precedes `name=`."""
    return [token.strip() for token in ATTRIBUTE_SPLIT_PATTERN.split(attributes) if token.strip()]


def indexed_path(element: ElementRecord) -> str:
    """
    Path expression that resolves back to exactly this element.

    Every element with the same tag path competes for the same ordinal, so
    only the leaf carries one, and only when the element is not the first.
    """
    segments = [PathSegment(tag) for tag in element.path[:-1]]
    segments.append(PathSegment(element.tag, element.index_in_parent))
    return format_path(segments)


def _attribute_text(element: ElementRecord) -> str:
    if element.is_self_closing:
        return element.attributes.rstrip()[:-1]
    return element.attributes


def analyze_structure(code: str) -> list[StructureEntry]:
    """One StructureEntry per element, in document order."""
    return [
        StructureEntry(
            tag=element.tag,
            path=list(element.path),
            xpath="//" + "/".join(element.path),
            indexed_xpath=indexed_path(element),
            depth=element.depth,
            index_in_parent=element.index_in_parent,
            has_style="style=" in element.attributes,
            attributes=split_attributes(_attribute_text(element)),
            position=element.start,
        )
        for element in build_element_tree(code)
    ]
