"""
Inspector JSX Engine: Compiler

Syntax gate in front of the live preview. Uses tree-sitter's TSX grammar to
decide whether pasted source parses, and reports the first error with a
1-based line and 0-based column (the same convention the browser-side
Babel build uses).

Bare JSX expressions (`<div>...</div>`) are wrapped in a function component
before parsing; positions are mapped back to the caller's text.

One JSXCompiler per process: get_compiler() builds it on first use.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

import tree_sitter_typescript as _ts_mod
from tree_sitter import Language, Parser

from engine.jsx.errors import MalformedInputError
from engine.jsx.types import CompileError, CompiledComponent

WRAP_PREFIX = "function Component() { return ("
WRAP_SUFFIX = "\n); }"

DECLARATION_PATTERN = re.compile(r"(?:export|import|function|const|let|var|class)\s")
COMPONENT_NAME_PATTERNS = (
    re.compile(r"export\s+default\s+function\s+([A-Za-z_]\w*)"),
    re.compile(r"function\s+([A-Z]\w*)"),
    re.compile(r"(?:const|let|var)\s+([A-Z]\w*)\s*="),
    re.compile(r"class\s+([A-Z]\w*)"),
)


class JSXCompiler:
    """Parses JSX/TSX source and reports syntax errors."""

    def __init__(self) -> None:
        self._language = Language(_ts_mod.language_tsx())
        self._parser = Parser(self._language)

    def check(self, code: str) -> CompileError | None:
        """Return the first syntax error, or None when the source parses."""
        if not code or not code.strip():
            return CompileError(message="No code provided")

        source, wrapped = _prepare(code)
        tree = self._parser.parse(source.encode("utf-8"))
        if not tree.root_node.has_error:
            return None

        node = _first_error_node(tree.root_node)
        if node is None:
            return CompileError(message="Syntax error")

        row, column = node.start_point[0], node.start_point[1]
        if wrapped and row == 0:
            column = max(column - len(WRAP_PREFIX), 0)

        if node.is_missing:
            message = f"Missing {node.type!r}"
        else:
            snippet = node.text.decode("utf-8", errors="replace").strip().splitlines()
            message = f"Unexpected token {snippet[0][:40]!r}" if snippet else "Unexpected token"

        return CompileError(message=f"{message} ({row + 1}:{column})", line=row + 1, column=column)

    def compile(self, code: str) -> CompiledComponent:
        """
        Return a renderable unit for `code`.

        Raises MalformedInputError with line/column when the source does not parse.
        """
        error = self.check(code)
        if error is not None:
            raise MalformedInputError(error.message, line=error.line, column=error.column)

        source, wrapped = _prepare(code)
        return CompiledComponent(name=component_name(source), code=source, wrapped=wrapped)


@lru_cache(maxsize=1)
def get_compiler() -> JSXCompiler:
    """Process-wide compiler, built on first call."""
    return JSXCompiler()


def component_name(code: str) -> str:
    """Best-effort name of the component a module declares."""
    for pattern in COMPONENT_NAME_PATTERNS:
        m = pattern.search(code)
        if m:
            return m.group(1)
    return "Component"


def _prepare(code: str) -> tuple[str, bool]:
    """Wrap a bare JSX expression in a function component."""
    if DECLARATION_PATTERN.match(code.lstrip()) or ("function" in code and "return" in code):
        return code, False
    return f"{WRAP_PREFIX}{code}{WRAP_SUFFIX}", True


def _first_error_node(root: Any) -> Any | None:
    """Depth-first, document-order search for an ERROR or MISSING node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None
