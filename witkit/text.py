"""Helpers for producing WIT text, and documentation comments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DOC_PREFIX = "///"
LINE_LENGTH = 80

_UNWRAP_CHARS = 50
_UNWRAP_LINES = 5

WIT_KEYWORDS = frozenset(
    {
        "enum",
        "export",
        "flags",
        "func",
        "import",
        "include",
        "interface",
        "package",
        "record",
        "resource",
        "result",
        "static",
        "type",
        "variant",
        "world",
    }
)


def indent(s: str) -> str:
    """Indent every non-empty line of s with a tab."""
    ws = "\t"
    text = (ws + s.replace("\n", "\n" + ws)).removesuffix(ws)
    return text.replace(ws + "\n", "\n")


def unwrap(s: str) -> str:
    """Join a short multi-line declaration onto a single line.

    The string is left alone if it is longer than 50 bytes, has more than
    5 line breaks, or contains a comment.
    """
    if (
        len(s.encode("utf-8")) > _UNWRAP_CHARS
        or s.count("\n") > _UNWRAP_LINES
        or "//" in s
    ):
        return s
    return " ".join(line.strip(" \t\r\n") for line in s.split("\n"))


def escape(name: str) -> str:
    """Prefix name with % if it is a WIT keyword."""
    if name in WIT_KEYWORDS:
        return "%" + name
    return name


@dataclass
class Docs:
    """Documentation text extracted from WIT comments."""

    contents: str = ""

    def wit_kind(self) -> str:
        return "docs"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        """Render the contents as ``///`` comment lines, wrapping long lines."""
        if not self.contents:
            return ""
        prefix_len = len(DOC_PREFIX)
        out: list[str] = []
        line_length = 0
        for c in self.contents:
            if line_length == 0:
                out.append(DOC_PREFIX)
                line_length = prefix_len
            if c == "\n":
                out.append("\n")
                line_length = 0
                continue
            if c == " ":
                if line_length == prefix_len:
                    continue  # ignore leading spaces
                if line_length > LINE_LENGTH:
                    out.append("\n")
                    line_length = 0
                    continue
            elif line_length == prefix_len:
                out.append(" ")
                line_length += 1
            out.append(c)
            line_length += 1
        if line_length != 0:
            out.append("\n")
        return "".join(out)