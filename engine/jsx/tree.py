"""
Inspector JSX Engine: Element Tree Builder

Single forward scan over JSX source producing a flat, document-ordered list
of ElementRecords. No grammar engine: tags are found by text scanning, with
an explicit stack of open elements for depth, ancestry and close matching.

The list is an index into the *current* text. Any splice invalidates it;
callers rebuild rather than shift offsets.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import replace

from engine.jsx.types import ElementRecord

# Start of a tag name right after "<" or "</"
TAG_NAME_PATTERN = re.compile(r"[A-Za-z_]\w*")


def find_tag_end(code: str, pos: int) -> int | None:
    """
    Return the index of the ">" that ends the tag whose attributes start at
    `pos`, or None when the text runs out first.

    A ">" inside {...}, '...', "..." or `...` does not end the tag. Braces
    inside quoted or template regions are not counted.
    """
    depth = 0
    quote: str | None = None
    i = pos
    n = len(code)

    while i < n:
        ch = code[i]

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
            # stray closer: clamp so one bad brace does not swallow the file
            depth = max(depth - 1, 0)
        elif ch == ">" and depth == 0:
            return i

        i += 1

    return None


def build_element_tree(code: str) -> list[ElementRecord]:
    """
    Scan `code` once and return every opening tag as an ElementRecord.

    - Tag names compare case-insensitively; `tag` is stored lowercase.
    - Self-closing tags are recorded but never pushed on the stack.
    - A closing tag pops the nearest unclosed opener with the same name
      (anything opened above it is implicitly closed).
    - A closing tag with no matching opener is ignored.
    - index_in_parent counts earlier records with the identical tag path.
    """
    elements: list[ElementRecord] = []
    # indices into `elements` of the currently open tags
    stack: list[int] = []
    closes: dict[int, tuple[int, int]] = {}
    seen: Counter[tuple[str, ...]] = Counter()

    i = 0
    n = len(code)

    while i < n:
        lt = code.find("<", i)
        if lt == -1:
            break

        # Closing tag: </name ...>
        if code.startswith("</", lt):
            m = TAG_NAME_PATTERN.match(code, lt + 2)
            if not m:
                i = lt + 1
                continue
            gt = code.find(">", m.end())
            if gt == -1:
                break

            tag = m.group(0).lower()
            for depth in range(len(stack) - 1, -1, -1):
                if elements[stack[depth]].tag == tag:
                    closes[stack[depth]] = (lt, gt + 1)
                    del stack[depth:]
                    break

            i = gt + 1
            continue

        # Opening tag: <name ...> or <name ... />
        m = TAG_NAME_PATTERN.match(code, lt + 1)
        if not m:
            i = lt + 1
            continue

        gt = find_tag_end(code, m.end())
        if gt is None:
            i = lt + 1
            continue

        name = m.group(0)
        tag = name.lower()
        attributes = code[m.end():gt]
        path = tuple(elements[j].tag for j in stack) + (tag,)

        record = ElementRecord(
            tag=tag,
            name=name,
            attributes=attributes,
            start=lt,
            end=gt + 1,
            path=path,
            depth=len(stack),
            index_in_parent=seen[path],
            is_self_closing=attributes.rstrip().endswith("/"),
        )
        seen[path] += 1
        elements.append(record)

        if not record.is_self_closing:
            stack.append(len(elements) - 1)

        i = gt + 1

    return [
        replace(element, close_start=closes[j][0], close_end=closes[j][1]) if j in closes else element
        for j, element in enumerate(elements)
    ]
