"""
Inspector JSX Engine: Path Resolver

Selects the one ElementRecord a path expression addresses. Persisted edit
sets depend on these exact semantics, so the partition-by-prefix filter
below is deliberately literal.
"""

from __future__ import annotations

import logging

from engine.jsx.errors import ElementNotFoundError
from engine.jsx.types import ElementRecord, PathSegment
from engine.jsx.xpath import format_path

logger = logging.getLogger(__name__)


def resolve_element(elements: list[ElementRecord], path: list[PathSegment]) -> ElementRecord:
    """
    Resolve `path` against a freshly built element list.

    1. Keep elements whose tag path equals the expression's tag sequence.
    2. For each level (root to leaf) whose ordinal is > 0, group the
       survivors by their tag path up to that level and keep, per group,
       the survivor at that ordinal. Groups without one drop out.
    3. First survivor in document order wins.

    Raises ElementNotFoundError when step 1 or 2 leaves nothing.
    """
    tags = tuple(segment.tag for segment in path)
    candidates = [e for e in elements if e.path == tags]

    if not candidates:
        logger.warning("No elements found matching path: %s", "/".join(tags))
        raise ElementNotFoundError(format_path(path))

    for level, segment in enumerate(path):
        if segment.index <= 0:
            continue

        groups: dict[tuple[str, ...], list[ElementRecord]] = {}
        for candidate in candidates:
            groups.setdefault(candidate.path[: level + 1], []).append(candidate)

        narrowed: list[ElementRecord] = []
        for group in groups.values():
            at_level = [e for e in group if len(e.path) > level]
            if segment.index < len(at_level):
                narrowed.append(at_level[segment.index])
        candidates = narrowed

    if not candidates:
        logger.warning("No elements found at specified indices for path: %s", format_path(path))
        raise ElementNotFoundError(format_path(path))

    result = candidates[0]
    logger.debug(
        "Found element: %s at path %s (index %d)",
        result.tag,
        "/".join(result.path),
        result.index_in_parent,
    )
    return result


def find_first_by_tag(elements: list[ElementRecord], tag: str) -> ElementRecord:
    """Degraded targeting: first element with this tag name, ancestry ignored."""
    tag = tag.lower()
    for element in elements:
        if element.tag == tag:
            return element
    raise ElementNotFoundError(f"//{tag}")
