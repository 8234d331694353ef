"""
Inspector JSX Engine: locate elements in JSX source by path expression and
patch their inline style and text in place.

Components:
  xpath: "//div/section[2]/p" -> PathSegments
  tree: one-pass scan of source into ElementRecords
  resolver: PathSegments + ElementRecords -> target element
  style: merge edits into `style={{ ... }}`
  text: replace children text
  analyzer: element listing with addressable paths
  updater: edit-set orchestration, coarse validation
  compiler: tree-sitter syntax gate for the live preview
"""

from engine.jsx.analyzer import analyze_structure
from engine.jsx.errors import (
    CloseTagNotFoundError,
    ElementNotFoundError,
    MalformedInputError,
    PatchError,
    PathSyntaxError,
)
from engine.jsx.resolver import resolve_element
from engine.jsx.tree import build_element_tree
from engine.jsx.types import ElementEdit, ElementRecord, PathSegment, StructureEntry, ValidationResult
from engine.jsx.updater import update_source, validate_jsx
from engine.jsx.xpath import parse_path

__all__ = [
    "analyze_structure",
    "build_element_tree",
    "parse_path",
    "resolve_element",
    "update_source",
    "validate_jsx",
    "ElementEdit",
    "ElementRecord",
    "PathSegment",
    "StructureEntry",
    "ValidationResult",
    "PatchError",
    "PathSyntaxError",
    "ElementNotFoundError",
    "CloseTagNotFoundError",
    "MalformedInputError",
]
