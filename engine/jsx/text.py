"""
Inspector JSX Engine: Text Content Patcher

Replaces everything between an element's open tag and the next `</tag>`
after it. The new text is inserted verbatim; sanitizing it is the caller's
job.
"""

from __future__ import annotations

import re

from engine.jsx.errors import CloseTagNotFoundError
from engine.jsx.types import ElementRecord


def find_close_tag(code: str, element: ElementRecord) -> re.Match[str] | None:
    """First `</tag>` at or after the end of the element's open tag."""
    pattern = re.compile(rf"</{re.escape(element.tag)}\s*>", re.IGNORECASE)
    return pattern.search(code, element.end)


def apply_text(code: str, element: ElementRecord, text: str) -> str:
    """
    Return `code` with the element's children replaced by `text`.

    Raises CloseTagNotFoundError for self-closing elements and when no
    closing tag follows the open tag.
    """
    if element.is_self_closing:
        raise CloseTagNotFoundError(element.tag, element.start)

    close = find_close_tag(code, element)
    if close is None:
        raise CloseTagNotFoundError(element.tag, element.start)

    return code[: element.end] + text + code[close.start():]
