"""
Inspector JSX Engine: Path Expression Parser

Turns "//div/section[2]/p" into [div#0, section#1, p#0]. Ordinals in the
expression are 1-based; segments carry them zero-based.
"""

from __future__ import annotations

import re

from engine.jsx.errors import PathSyntaxError
from engine.jsx.types import PathSegment

# One path segment: tag name with an optional 1-based ordinal, e.g. "p[2]"
SEGMENT_PATTERN = re.compile(r"^(\w+)(?:\[(\d+)\])?$")


def parse_path(expression: str) -> list[PathSegment]:
    """
    Parse a path expression into root-to-target segments.

    Raises PathSyntaxError when the expression is empty after stripping the
    leading "//", or when any segment is not `tag` or `tag[N]`. `tag[0]`
    means the first occurrence, same as a bare `tag`.
    """
    if not isinstance(expression, str):
        raise PathSyntaxError(repr(expression), "must be a string")

    body = expression.strip()
    if body.startswith("//"):
        body = body[2:]
    if not body:
        raise PathSyntaxError(expression, "empty path")

    segments: list[PathSegment] = []
    for part in body.split("/"):
        match = SEGMENT_PATTERN.match(part)
        if not match:
            raise PathSyntaxError(expression, f"bad segment {part!r}")

        ordinal = match.group(2)
        segments.append(
            PathSegment(
                tag=match.group(1).lower(),
                index=max(int(ordinal) - 1, 0) if ordinal else 0,
            )
        )

    return segments


def format_path(segments: list[PathSegment]) -> str:
    """Inverse of parse_path: "//" + segments, first-occurrence ordinals omitted."""
    return "//" + "/".join(str(s) for s in segments)
