"""
Inspector JSX Engine: Attribute/Style Patcher

Rewrites one element's open tag so its inline style object literal carries
new property values. Only the `style={{ ... }}` substring is touched; every
other attribute is spliced back verbatim. Existing values are kept as their
source literal text, so properties the edit does not name survive unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from engine.jsx.types import ElementRecord

STYLE_ATTR_PATTERN = re.compile(r"(?<![\w-])style\s*=\s*\{")
QUOTED_PATTERN = re.compile(r"""^(['"`]).*\1$""", re.DOTALL)
CSS_NAME_PATTERN = re.compile(r"^-?[A-Za-z][\w-]*$")
HYPHEN_LETTER_PATTERN = re.compile(r"-([a-z])")

# Raw line terminators end a quoted JS string literal
LINE_BREAK_ESCAPES = {"\n": "\\n", "\r": "\\r", "\u2028": "\\u2028", "\u2029": "\\u2029"}

# key -> value literal as source text (None for spreads and shorthands)
StyleObject = dict[str, str | None]


@dataclass
class StyleAttribute:
    """Location of `style={{...}}` inside an element's attribute text."""

    start: int  # index of "style"
    end: int  # one past the final "}"
    content: str  # text between the inner braces


def to_camel_case(name: str) -> str:
    """font-size -> fontSize. Names already in camelCase pass through."""
    return HYPHEN_LETTER_PATTERN.sub(lambda m: m.group(1).upper(), name.strip())


def _matching_brace(text: str, open_index: int) -> int | None:
    """Index of the "}" closing the "{" at open_index, ignoring quoted braces."""
    depth = 0
    quote: str | None = None
    i = open_index

    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1

    return None


def extract_style_attribute(attributes: str) -> StyleAttribute | None:
    """
    Find an inline object-literal style (`style={{ ... }}`) in attribute text.

    Returns None when there is no style attribute, when its value is not an
    object literal (e.g. `style={styles.box}`), or when braces never balance.
    """
    m = STYLE_ATTR_PATTERN.search(attributes)
    if not m:
        return None

    outer_open = m.end() - 1
    outer_close = _matching_brace(attributes, outer_open)
    if outer_close is None:
        return None

    inner = attributes[outer_open + 1:outer_close].strip()
    if not (inner.startswith("{") and inner.endswith("}")):
        return None

    return StyleAttribute(start=m.start(), end=outer_close + 1, content=inner[1:-1])


def _split_top_level(text: str, sep: str) -> list[str]:
    """Split on `sep` outside quotes and (), [], {} nesting."""
    parts: list[str] = []
    depth = 0
    quote: str | None = None
    last = 0
    i = 0

    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif ch == sep and depth == 0:
            parts.append(text[last:i])
            last = i + 1
        i += 1

    parts.append(text[last:])
    return parts


def _normalize_key(raw: str) -> str:
    """Bare or quoted CSS names become camelCase; anything else stays as written."""
    key = raw.strip()
    if QUOTED_PATTERN.match(key):
        inner = key[1:-1]
        if CSS_NAME_PATTERN.match(inner) and not inner.startswith("--"):
            return to_camel_case(inner)
        return key
    if CSS_NAME_PATTERN.match(key):
        return to_camel_case(key)
    return key


def parse_style_object(content: str) -> StyleObject:
    """
    Parse the inside of a style object literal into key -> value text.

    Quoted strings, numbers and bare expressions are all kept as written.
    Spreads (`...base`) and shorthands (`{color}`) map to None so they
    serialize back unchanged.
    """
    styles: StyleObject = {}

    for item in _split_top_level(content, ","):
        item = item.strip()
        if not item:
            continue

        if item.startswith("..."):
            styles[item] = None
            continue

        pieces = _split_top_level(item, ":")
        if len(pieces) < 2:
            styles[item] = None
            continue

        key = _normalize_key(pieces[0])
        styles[key] = ":".join(pieces[1:]).strip()

    return styles


def format_style_value(value: Any) -> str:
    """
    Render an edit value as an object-literal value.

    Numbers are bare, text that is already quote-wrapped is used as-is,
    everything else becomes a single-quoted string. Line breaks are escaped
    in both string forms.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)

    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)

    if QUOTED_PATTERN.match(text):
        return _escape_line_breaks(text)

    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{_escape_line_breaks(escaped)}'"


def _escape_line_breaks(text: str) -> str:
    for raw, escape in LINE_BREAK_ESCAPES.items():
        text = text.replace(raw, escape)
    return text


def serialize_style(styles: StyleObject) -> str:
    """key: value pairs joined by ", "."""
    return ", ".join(key if value is None else f"{key}: {value}" for key, value in styles.items())


def merge_style(existing: StyleObject, updates: dict[str, Any]) -> StyleObject:
    """Overlay updates by camelCase key. Existing order is kept; new keys append."""
    merged = dict(existing)
    for prop, value in updates.items():
        merged[to_camel_case(prop)] = format_style_value(value)
    return merged


def apply_style(code: str, element: ElementRecord, style: dict[str, Any]) -> str:
    """
    Return `code` with `element`'s open tag rewritten to include `style`.

    Merges into an existing `style={{...}}` or prepends a new one. The
    element must come from a tree built over this exact `code`.
    """
    if not style:
        return code

    attributes = element.attributes
    found = extract_style_attribute(attributes)

    if found is not None:
        merged = merge_style(parse_style_object(found.content), style)
        new_attributes = (
            attributes[: found.start]
            + f"style={{{{{serialize_style(merged)}}}}}"
            + attributes[found.end:]
        )
    else:
        body = serialize_style(merge_style({}, style))
        rest = attributes if not attributes or attributes[0].isspace() else f" {attributes}"
        new_attributes = f" style={{{{{body}}}}}{rest}"

    return code[: element.start] + f"<{element.name}{new_attributes}>" + code[element.end:]
