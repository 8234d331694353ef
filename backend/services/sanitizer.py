"""
Input sanitizer for component code and edit sets.

validate_code() rejects source containing script-injection patterns before
it is stored or served. sanitize_properties() reduces a client edit set to
allow-listed style properties and scrubbed text.
"""

from __future__ import annotations

import re
from typing import Any

from engine.jsx.style import to_camel_case

DANGEROUS_PATTERNS = [
    re.compile(r"eval\s*\(", re.IGNORECASE),
    re.compile(r"Function\s*\(", re.IGNORECASE),
    re.compile(r"setTimeout\s*\(", re.IGNORECASE),
    re.compile(r"setInterval\s*\(", re.IGNORECASE),
    re.compile(r"document\.write", re.IGNORECASE),
    re.compile(r"innerHTML\s*=", re.IGNORECASE),
    re.compile(r"outerHTML\s*=", re.IGNORECASE),
    re.compile(r"dangerouslySetInnerHTML", re.IGNORECASE),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
]

ALLOWED_STYLE_PROPERTIES = frozenset(
    {
        "color",
        "backgroundColor",
        "fontSize",
        "fontWeight",
        "fontFamily",
        "padding",
        "margin",
        "borderRadius",
        "border",
        "width",
        "height",
        "display",
        "textAlign",
        "lineHeight",
        "opacity",
        "transform",
        "boxShadow",
        "textDecoration",
        "textTransform",
    }
)

MAX_STYLE_VALUE_LENGTH = 200

SCRIPT_BLOCK_PATTERN = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
JAVASCRIPT_URL_PATTERN = re.compile(r"javascript:", re.IGNORECASE)
EVENT_HANDLER_PATTERN = re.compile(r"on\w+\s*=", re.IGNORECASE)
UNSAFE_CSS_PATTERNS = [
    re.compile(r"url\s*\(\s*javascript:", re.IGNORECASE),
    JAVASCRIPT_URL_PATTERN,
    re.compile(r"expression\s*\(", re.IGNORECASE),
    re.compile(r"@import", re.IGNORECASE),
]


class UnsafeCodeError(ValueError):
    """Code failed the safety or structure checks."""

    pass


def validate_code(code: Any) -> None:
    """
    Reject code that is not a string, contains a dangerous pattern, or has
    no markup at all. Raises UnsafeCodeError naming the first problem.
    """
    if not isinstance(code, str):
        raise UnsafeCodeError("Code must be a string")

    for pattern in DANGEROUS_PATTERNS:
        if pattern.search(code):
            raise UnsafeCodeError(f"Potentially unsafe code detected: {pattern.pattern}")

    if "<" not in code or ">" not in code:
        raise UnsafeCodeError("Code must contain valid JSX elements")


def sanitize_text(text: str) -> str:
    text = SCRIPT_BLOCK_PATTERN.sub("", text)
    text = JAVASCRIPT_URL_PATTERN.sub("", text)
    return EVENT_HANDLER_PATTERN.sub("", text)


def sanitize_style_value(value: Any) -> str | int | float | None:
    """Scrubbed value, or None when the value must be dropped."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    if not isinstance(value, str):
        return value

    for pattern in UNSAFE_CSS_PATTERNS:
        value = pattern.sub("", value)

    if len(value) > MAX_STYLE_VALUE_LENGTH or "<script" in value.lower():
        return None
    return value


def sanitize_properties(properties: Any) -> dict[str, dict[str, Any]]:
    """
    Return the safe subset of an edit set.

    Non-mapping entries are dropped. Style keys are camelCased and kept only
    when allow-listed. Entries with nothing left are dropped. Key order is
    preserved.
    """
    if not isinstance(properties, dict):
        raise UnsafeCodeError("Properties must be an object")

    sanitized: dict[str, dict[str, Any]] = {}

    for path, props in properties.items():
        if not isinstance(props, dict):
            continue

        clean: dict[str, Any] = {}

        text = props.get("textContent")
        if isinstance(text, str):
            clean["textContent"] = sanitize_text(text)

        style = props.get("style")
        if isinstance(style, dict):
            clean_style = {}
            for prop, value in style.items():
                if not isinstance(prop, str):
                    continue
                key = to_camel_case(prop)
                if key not in ALLOWED_STYLE_PROPERTIES:
                    continue
                cleaned = sanitize_style_value(value)
                if cleaned is not None:
                    clean_style[key] = cleaned
            if clean_style:
                clean["style"] = clean_style

        if clean:
            sanitized[path] = clean

    return sanitized
