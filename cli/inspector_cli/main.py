"""Main entry point for the Inspector CLI."""

from __future__ import annotations

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import NoReturn

import httpx

from engine.jsx.analyzer import analyze_structure
from engine.jsx.compiler import get_compiler
from engine.jsx.errors import MalformedInputError, PatchError
from engine.jsx.updater import update_source, validate_jsx
from inspector_cli import __version__
from inspector_cli.client import ApiClient, ApiError

DEFAULT_API_URL = "http://localhost:8000"

LOCAL_COMMANDS = ("patch", "analyze", "validate", "compile")
REMOTE_COMMANDS = ("save", "load", "list")


def print_help():
    """Print help message."""
    print(f"""
Inspector CLI v{__version__}

Usage:
  inspector <command> [args] [options]

Local commands:
  patch FILE --edits EDITS.json [-o OUT] [--fallback]
                    Apply an edit set to a JSX file
  analyze FILE      List elements with their path expressions
  validate FILE     Coarse markup check
  compile FILE      Syntax check (reports line:column)

Remote commands:
  save FILE [--edits EDITS.json] [--title TITLE]
                    Save a component, print its id and share URL
  load ID [-o OUT]  Print (or write) a saved component's code
  list [--page N] [--limit N]
                    List saved components

Options:
  --api-url URL     API endpoint (default: {DEFAULT_API_URL})
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  INSPECTOR_API_URL Override API endpoint (--api-url wins)

Edit sets are JSON objects keyed by path expression:
  {{"//div/h1": {{"style": {{"color": "red"}}, "textContent": "Hi"}}}}
""")


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None
        target: str | None (FILE or ID)
        edits: str | None
        output: str | None
        title: str | None
        page: int
        limit: int
        fallback: bool
        api_url: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "target": None,
        "edits": None,
        "output": None,
        "title": None,
        "page": 1,
        "limit": 10,
        "fallback": False,
        "api_url": None,
        "show_help": False,
        "show_version": False,
    }
    valued = {"--edits": "edits", "-o": "output", "--output": "output", "--title": "title", "--api-url": "api_url"}
    numeric = {"--page": "page", "--limit": "limit"}

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in valued or arg in numeric:
            if i + 1 >= len(args):
                _fail(f"{arg} requires a value")
            value = args[i + 1]
            if arg in numeric:
                if not value.isdigit() or int(value) < 1:
                    _fail(f"{arg} must be a positive integer")
                result[numeric[arg]] = int(value)
            else:
                result[valued[arg]] = value
            i += 1
        elif arg == "--fallback":
            result["fallback"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            _fail(f"Unknown option: {arg}. Run 'inspector --help' for usage.")
        elif result["command"] is None:
            if arg not in LOCAL_COMMANDS + REMOTE_COMMANDS:
                _fail(f"Unknown command: {arg}. Run 'inspector --help' for usage.")
            result["command"] = arg
        elif result["target"] is None:
            result["target"] = arg
        else:
            _fail(f"Unexpected argument: {arg}")

        i += 1

    return result


def resolve_api_url(flag: str | None) -> str:
    return (flag or os.environ.get("INSPECTOR_API_URL") or DEFAULT_API_URL).rstrip("/")


def read_edits(path: str | None) -> dict:
    if path is None:
        return {}
    try:
        edits = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as e:
        _fail(f"Could not read edits from {path}: {e}")
    if not isinstance(edits, dict):
        _fail(f"{path} must contain a JSON object keyed by path expression")
    return edits


def _read_source(path: str | None) -> str:
    if path is None:
        _fail("a FILE argument is required")
    try:
        return Path(path).read_text()
    except OSError as e:
        _fail(f"Could not read {path}: {e}")


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text)
        print(f"Wrote {output}", file=sys.stderr)
    else:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_patch(args: dict) -> int:
    code = _read_source(args["target"])
    if args["edits"] is None:
        _fail("patch requires --edits EDITS.json")
    try:
        updated = asyncio.run(update_source(code, read_edits(args["edits"]), fallback=args["fallback"]))
    except PatchError as e:
        _fail(str(e))
    _write_output(updated, args["output"])
    return 0


def cmd_analyze(args: dict) -> int:
    entries = analyze_structure(_read_source(args["target"]))
    for entry in entries:
        style = "  [style]" if entry.has_style else ""
        print(f"{'  ' * entry.depth}{entry.indexed_xpath}  @{entry.position}{style}")
    if not entries:
        print("No elements found")
    return 0


def cmd_validate(args: dict) -> int:
    result = validate_jsx(_read_source(args["target"]))
    if result.valid:
        print("Valid")
        return 0
    print(f"Invalid: {result.error}")
    return 1


def cmd_compile(args: dict) -> int:
    try:
        compiled = get_compiler().compile(_read_source(args["target"]))
    except MalformedInputError as e:
        print(f"Compilation failed: {e}")
        return 1
    wrapped = " (wrapped bare JSX)" if compiled.wrapped else ""
    print(f"OK: {compiled.name}{wrapped}")
    return 0


def cmd_save(client: ApiClient, args: dict) -> int:
    code = _read_source(args["target"])
    data = client.save_component(code, read_edits(args["edits"]), title=args["title"])
    print(f"Saved {data['id']}")
    print(f"  url:   {data['url']}")
    print(f"  share: {data['shareUrl']}")
    return 0


def cmd_load(client: ApiClient, args: dict) -> int:
    if args["target"] is None:
        _fail("load requires a component ID")
    data = client.load_component(args["target"])
    _write_output(data["code"], args["output"])
    return 0


def cmd_list(client: ApiClient, args: dict) -> int:
    data = client.list_components(page=args["page"], limit=args["limit"])
    for item in data["items"]:
        print(f"{item['id']}  {item['updatedAt'][:19]}  {item['title']}")
    p = data["pagination"]
    print(f"page {p['page']}/{max(p['pages'], 1)} ({p['total']} total)")
    return 0


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    # Handle help and version first
    if args["show_version"]:
        print(f"inspector-cli {__version__}")
        return

    if args["show_help"] or args["command"] is None:
        print_help()
        return

    command = args["command"]
    if command in LOCAL_COMMANDS:
        handler = {"patch": cmd_patch, "analyze": cmd_analyze, "validate": cmd_validate, "compile": cmd_compile}
        sys.exit(handler[command](args))

    client = ApiClient(resolve_api_url(args["api_url"]))
    try:
        handler = {"save": cmd_save, "load": cmd_load, "list": cmd_list}
        sys.exit(handler[command](client, args))
    except ApiError as e:
        _fail(str(e))
    except httpx.TransportError as e:
        _fail(f"Could not reach {client.api_url}: {e}")
    finally:
        client.close()


if __name__ == "__main__":
    main()
