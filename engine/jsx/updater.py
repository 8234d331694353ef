"""
Inspector JSX Engine: Patch Orchestrator

Applies an edit set ({path expression: {style, textContent}}) to JSX source.
Entries run strictly in caller order. Every step re-scans the current text:
a style splice changes the open tag's length and shifts every later
offset, so no element index survives a mutation.

Per-edit failures (bad path, no such element, no closing tag) are logged
and skipped. Only an unusable call raises PatchError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from engine.jsx.errors import CloseTagNotFoundError, ElementNotFoundError, PatchError, PathSyntaxError
from engine.jsx.resolver import find_first_by_tag, resolve_element
from engine.jsx.style import apply_style
from engine.jsx.text import apply_text
from engine.jsx.tree import build_element_tree
from engine.jsx.types import ElementEdit, PathSegment, ValidationResult
from engine.jsx.xpath import parse_path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def update_source(code: str, edits: Mapping[str, Any], *, fallback: bool = False) -> str:
    """
    Apply `edits` to `code` and return the patched source.

    Args:
        code: JSX source text
        edits: ordered mapping of path expression -> {"style": {...}, "textContent": "..."}
        fallback: when a style target cannot be resolved, patch the first
            element with the target's tag name instead (degraded mode)

    Raises:
        PatchError: source is not a string, edits is not a mapping, an
            entry is malformed, or any step fails unexpectedly
    """
    if not isinstance(code, str):
        raise PatchError(f"Failed to update JSX code: source must be a string, got {type(code).__name__}")
    if not isinstance(edits, Mapping):
        raise PatchError(f"Failed to update JSX code: edits must be a mapping, got {type(edits).__name__}")

    logger.debug("Updating JSX code with %d path edit(s)", len(edits))

    updated = code
    try:
        for expression, raw_edit in edits.items():
            updated = apply_edit(updated, expression, ElementEdit.from_value(raw_edit), fallback=fallback)
    except PatchError:
        raise
    except Exception as e:
        raise PatchError(f"Failed to update JSX code: {e}") from e

    return updated


def apply_edit(code: str, expression: str, edit: ElementEdit, *, fallback: bool = False) -> str:
    """
    Apply one element's edits: style first, then text against a rebuilt tree.
    Returns `code` unchanged for whatever part cannot be applied.
    """
    try:
        path = parse_path(expression)
    except PathSyntaxError as e:
        logger.warning("Could not parse path %r: %s", expression, e)
        return code

    if edit.style:
        code = _apply_style_edit(code, expression, path, edit.style, fallback)

    if edit.text_content is not None:
        code = _apply_text_edit(code, expression, path, edit.text_content)

    return code


def validate_jsx(code: Any) -> ValidationResult:
    """
    Coarse pre-filter: the source must contain markup and its "<" and ">"
    counts must balance. Not a grammar check.
    """
    if not isinstance(code, str):
        return ValidationResult(valid=False, error="Code must be a string")

    if code.count("<") != code.count(">"):
        return ValidationResult(valid=False, error="Mismatched JSX tags")

    if "<" not in code or ">" not in code:
        return ValidationResult(valid=False, error="No JSX elements found")

    return ValidationResult(valid=True)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def _apply_style_edit(
    code: str,
    expression: str,
    path: list[PathSegment],
    style: dict[str, Any],
    fallback: bool,
) -> str:
    elements = build_element_tree(code)
    try:
        target = resolve_element(elements, path)
    except ElementNotFoundError:
        if not fallback:
            logger.warning("No target element found for path %r; style edit skipped", expression)
            return code
        try:
            target = find_first_by_tag(elements, path[-1].tag)
        except ElementNotFoundError:
            logger.warning("Fallback: no <%s> element found for path %r", path[-1].tag, expression)
            return code
        logger.warning(
            "Fallback targeting for %r: using first <%s> at %d",
            expression,
            target.tag,
            target.start,
        )

    updated = apply_style(code, target, style)
    if updated == code:
        logger.debug("Style edit for %r left the source unchanged", expression)
    return updated


def _apply_text_edit(code: str, expression: str, path: list[PathSegment], text: str) -> str:
    try:
        target = resolve_element(build_element_tree(code), path)
        return apply_text(code, target, text)
    except (ElementNotFoundError, CloseTagNotFoundError) as e:
        logger.warning("Text edit for %r skipped: %s", expression, e)
        return code
