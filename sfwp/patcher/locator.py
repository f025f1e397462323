"""Insertion-point lookup for PHP widget classes.

The injector only needs two kinds of location: the first line inside the
class body, and the body of a named method.  Both are found with regular
expressions rather than a PHP parser; everything that depends on this module
goes through ``find_class_body_start`` and ``find_method_body``.

Known limitation: a method body ends at the first ``}`` after its opening
brace, so a method containing a nested ``{...}`` block is mis-bounded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

CONTROLS_METHODS: tuple[str, ...] = ("register_controls",)
RENDER_METHODS: tuple[str, ...] = ("render", "render_raw")

_CLASS_OPEN = re.compile(
    r"""
    ^[ \t]*(?:(?:abstract|final|readonly)\s+)*   # optional modifiers
    class\s+[A-Za-z_][A-Za-z0-9_]*               # class name
    [^{;]*\{                                     # header up to its own brace
    [^\n]*(?:\n|\Z)                              # rest of the brace line
    """,
    re.VERBOSE | re.MULTILINE,
)


@dataclass(frozen=True)
class MethodBody:
    """Location of a method body inside a source string."""

    name: str
    start: int  # just after the opening brace
    end: int  # index of the closing brace
    header_indent: str

    def text(self, source: str) -> str:
        return source[self.start:self.end]


def _method_pattern(names: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(n) for n in names)
    return re.compile(
        rf"function\s+({alternatives})\s*\(\s*\)\s*(?::\s*\??[\w\\]+\s*)?\{{(.*?)\}}",
        re.DOTALL,
    )


def find_class_body_start(source: str) -> int | None:
    """Return the offset of the first line inside the first class body.

    That is the line after the class's opening brace, even when a comment
    or code follows the brace on its own line.  ``None`` when no class declaration with an opening brace is found.
    """
    match = _CLASS_OPEN.search(source)
    if match is None:
        return None
    return match.end()


def find_method_body(source: str, names: tuple[str, ...]) -> MethodBody | None:
    """Return the body of whichever method in *names* appears first.

    Methods must take no parameters, matching the page-builder widget API.
    """
    match = _method_pattern(names).search(source)
    if match is None:
        return None
    line_start = source.rfind("\n", 0, match.start()) + 1
    indent = re.match(r"[ \t]*", source[line_start:match.start()])
    return MethodBody(
        name=match.group(1),
        start=match.start(2),
        end=match.end(2),
        header_indent=indent.group(0) if indent else "",
    )
