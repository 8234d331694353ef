"""Error taxonomy for the JSX locator and patcher."""

from __future__ import annotations


class PatchError(Exception):
    """A patch call could not run at all (bad arguments, internal failure)."""

    pass


class PathSyntaxError(PatchError):
    """Path expression does not parse."""

    def __init__(self, expression: str, reason: str = "") -> None:
        self.expression = expression
        message = f"Invalid path expression {expression!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ElementNotFoundError(PatchError):
    """No element in the source matches the path expression."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No element found for path {path!r}")


class CloseTagNotFoundError(PatchError):
    """Text edit target has no closing tag after its open tag."""

    def __init__(self, tag: str, position: int) -> None:
        self.tag = tag
        self.position = position
        super().__init__(f"Could not find closing tag for <{tag}> opened at {position}")


class MalformedInputError(Exception):
    """Source cannot be parsed by the compiler. Distinct from patch errors."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        super().__init__(message)
