"""
Inspector JSX Engine: Shared Types

Data classes passed between the path parser, tree builder, resolver and
patchers. Everything here is rebuilt per patch call; nothing carries
identity across calls except path-expression strings.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PathSegment:
    """One step of a path expression: lowercase tag + zero-based ordinal."""

    tag: str
    index: int = 0

    def __str__(self) -> str:
        return f"{self.tag}[{self.index + 1}]" if self.index > 0 else self.tag


@dataclass(frozen=True)
class ElementRecord:
    """
    One opening tag found in the source.

    start/end span the open tag only (end is exclusive). For a self-closing
    element the open tag is the whole element. close_start/close_end point at
    the matched closing tag, or are None when none was matched.
    """

    tag: str  # lowercase
    name: str  # as spelled in the source
    attributes: str  # raw text between the tag name and ">"
    start: int
    end: int
    path: tuple[str, ...]
    depth: int
    index_in_parent: int
    is_self_closing: bool
    close_start: int | None = None
    close_end: int | None = None

    @property
    def open_tag(self) -> str:
        return f"<{self.name}{self.attributes}>"


@dataclass
class ElementEdit:
    """Edits for one element: style properties and/or replacement text."""

    style: dict[str, Any] = field(default_factory=dict)
    text_content: str | None = None

    @classmethod
    def from_value(cls, value: Any) -> ElementEdit:
        """
        Build from a wire-format mapping ({"style": {...}, "textContent": "..."}).
        Accepts an ElementEdit unchanged. Raises TypeError on anything else.
        """
        if isinstance(value, ElementEdit):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"edit must be a mapping, got {type(value).__name__}")

        style = value.get("style") or {}
        if not isinstance(style, Mapping):
            raise TypeError(f"style must be a mapping, got {type(style).__name__}")

        text = value.get("textContent", value.get("text_content"))
        if text is not None and not isinstance(text, str):
            raise TypeError(f"textContent must be a string, got {type(text).__name__}")

        return cls(style=dict(style), text_content=text)


@dataclass
class StructureEntry:
    """One row of the structure listing used for path discovery."""

    tag: str
    path: list[str]
    xpath: str
    indexed_xpath: str
    depth: int
    index_in_parent: int
    has_style: bool
    attributes: list[str]
    position: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "path": list(self.path),
            "xpath": self.xpath,
            "indexedXPath": self.indexed_xpath,
            "depth": self.depth,
            "indexInParent": self.index_in_parent,
            "hasStyle": self.has_style,
            "attributes": list(self.attributes),
            "position": self.position,
        }


@dataclass
class ValidationResult:
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"valid": self.valid}
        if self.error is not None:
            d["error"] = self.error
        return d


@dataclass
class CompileError:
    """Structured compile failure reported by the compiler collaborator."""

    message: str
    line: int | None = None
    column: int | None = None
    type: str = "syntax"

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "line": self.line, "column": self.column, "type": self.type}


@dataclass
class CompiledComponent:
    """A renderable unit: the component name plus the source it was parsed from."""

    name: str
    code: str
    wrapped: bool = False
