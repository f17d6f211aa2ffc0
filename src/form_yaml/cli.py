"""Command line tool: parse form definition files and print the result.

Provides the ``form-yaml`` entry point via ``main()``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO

from .errors import ParseError
from .model import Value
from .scanner import parse


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a scalar for compact one-line display."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if value == int(value):
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return repr(value)


def _fmt_inspect(value: Value, level: int = 0, indent: int = 2) -> str:
    """Pretty-print a parsed document as an indented tree."""
    pad = " " * (indent * (level + 1))
    closing = " " * (indent * level)

    if isinstance(value, dict):
        if not value:
            return "Mapping {}"
        width = max(len(k) for k in value)
        lines = ["Mapping {"]
        for k, v in value.items():
            lines.append(f"{pad}{k:<{width}}: {_fmt_inspect(v, level + 1, indent)}")
        lines.append(closing + "}")
        return "\n".join(lines)

    if isinstance(value, list):
        if not value:
            return "Sequence []"
        lines = ["Sequence ["]
        for i, v in enumerate(value, 1):
            lines.append(f"{pad}{i}: {_fmt_inspect(v, level + 1, indent)}")
        lines.append(closing + "]")
        return "\n".join(lines)

    return _fmt_inline(value)


def render(document: Value, fmt: str = "json", indent: int = 2) -> str:
    if fmt == "inspect":
        return _fmt_inspect(document, indent=indent)
    return json.dumps(document, indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Processing
# ---------------------------------------------------------------------------

def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def _process_source(
    path: str,
    fmt: str,
    indent: int,
    dest: IO[str],
    err: IO[str],
) -> int:
    """Parse one file (``-`` for stdin) and print it.  Returns an exit status."""
    label = "<stdin>" if path == "-" else path

    try:
        text = _read_source(path)
    except OSError as exc:
        print(f"Error reading '{path}': {exc}", file=err)
        return 2

    try:
        document = parse(text)
    except ParseError as exc:
        print(f"Error in {label}: {exc}", file=err)
        return 1

    print(render(document, fmt, indent), file=dest)
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="form-yaml",
        description="Parse form definition files and print the resulting data.",
    )
    parser.add_argument(
        "files", nargs="*", metavar="FILE",
        help="files to parse; reads stdin when omitted or given as '-'",
    )
    parser.add_argument(
        "-f", "--format", choices=("json", "inspect"), default="json",
        help="output format (default: json)",
    )
    parser.add_argument("--indent", type=int, default=2, help="indentation width")
    parser.add_argument("-v", "--verbose", action="store_true", help="log parser steps")
    return parser


def main(argv: list[str] | None = None) -> int:
    """``form-yaml`` / ``python -m form_yaml``."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    status = 0
    for path in args.files or ["-"]:
        result = _process_source(path, args.format, args.indent, sys.stdout, sys.stderr)
        status = max(status, result)
    return status


if __name__ == "__main__":
    sys.exit(main())
