"""Idempotent trait injection into existing widget classes.

For every trait three fragments are inserted into a widget's PHP source: a
``use`` declaration at the top of the class body, a controls-registration call
at the top of ``register_controls()`` and a render call at the top of
``render()`` / ``render_raw()``.  A fragment that is already present is left
alone, so running the same injection twice changes nothing the second time.
Traits are applied one after another to the same evolving text, which lets a
later trait see the insertions of an earlier one.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field
from rich.markup import escape
from rich.table import Table

from sfwp.config import DEFAULT_TRAIT_NAMESPACE, Config
from sfwp.errors import InvalidName, SourceMissing
from sfwp.patcher.fragments import TraitFragments, trait_fragments
from sfwp.patcher.locator import (
    CONTROLS_METHODS,
    RENDER_METHODS,
    find_class_body_start,
    find_method_body,
)
from sfwp.scaffolder.naming import derive, derive_trait
from sfwp.utils import console

DEFAULT_INDENT = "    "


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class FragmentKind(str, Enum):
    """Which of a trait's three fragments a report is about."""
    USE = "use"
    CONTROLS = "controls"
    RENDER = "render"


class FragmentStatus(str, Enum):
    """Outcome of one fragment insertion attempt."""
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"
    TARGET_NOT_FOUND = "target_not_found"


class FragmentReport(BaseModel):
    """What happened to a single fragment."""

    kind: FragmentKind
    statement: str
    status: FragmentStatus
    target: str | None = Field(
        default=None, description="Method the fragment was placed in, if any"
    )


class TraitReport(BaseModel):
    """Per-trait outcome: one report for each of the three fragments."""

    trait: str
    fragments: list[FragmentReport] = Field(default_factory=list)

    @property
    def inserted(self) -> list[FragmentReport]:
        return [f for f in self.fragments if f.status == FragmentStatus.INSERTED]

    @property
    def skipped(self) -> list[FragmentReport]:
        return [f for f in self.fragments if f.status != FragmentStatus.INSERTED]


class InjectionResult(BaseModel):
    """Patched text plus the reports describing how it was produced."""

    text: str
    changed: bool = False
    reports: list[TraitReport] = Field(default_factory=list)
    path: Path | None = None

    def statuses(self) -> list[tuple[str, FragmentKind, FragmentStatus]]:
        """Flatten the reports to ``(trait, kind, status)`` triples."""
        return [
            (report.trait, fragment.kind, fragment.status)
            for report in self.reports
            for fragment in report.fragments
        ]


# ---------------------------------------------------------------------------
# Pure injection
# ---------------------------------------------------------------------------

def inject_traits(
    source_text: str,
    traits: list[str],
    *,
    namespace: str = DEFAULT_TRAIT_NAMESPACE,
) -> InjectionResult:
    """Insert each trait's fragments into *source_text* exactly once.

    Args:
        source_text: Full PHP source of the widget.
        traits: Trait names; each is normalised (``"card"`` and
            ``"CardTrait"`` are the same trait).
        namespace: PHP namespace the trait ``use`` declarations reference.

    Returns:
        An ``InjectionResult`` whose ``changed`` flag is ``False`` when every
        fragment was already present (or had no target).

    Raises:
        InvalidName: If a trait reference has no words besides the
            ``Trait`` suffix.  Nothing is patched in that case.
    """
    for trait in traits:
        if derive_trait(trait).is_empty:
            raise InvalidName(f"Trait name {trait!r} contains no usable words")

    text = source_text
    newline = line_ending(source_text)
    reports: list[TraitReport] = []
    # Statements added by this call; later traits are placed after them so
    # the output keeps trait-list order.
    inserted: set[str] = set()

    for trait in traits:
        fragments = trait_fragments(trait, namespace)
        report = TraitReport(trait=fragments.type_name)

        text, use_report = _insert_use(text, fragments, inserted, newline)
        report.fragments.append(use_report)

        text, controls_report = _insert_call(
            text, fragments.controls_call, CONTROLS_METHODS, FragmentKind.CONTROLS,
            inserted, newline,
        )
        report.fragments.append(controls_report)

        text, render_report = _insert_call(
            text, fragments.render_call, RENDER_METHODS, FragmentKind.RENDER,
            inserted, newline,
        )
        report.fragments.append(render_report)

        reports.append(report)

    return InjectionResult(text=text, changed=text != source_text, reports=reports)


def line_ending(text: str) -> str:
    """``"\\r\\n"`` when *text* uses Windows line endings, else ``"\\n"``."""
    return "\r\n" if "\r\n" in text else "\n"


def _insert_use(
    text: str, fragments: TraitFragments, inserted: set[str], newline: str = "\n"
) -> tuple[str, FragmentReport]:
    if fragments.use in text:
        return text, FragmentReport(
            kind=FragmentKind.USE,
            statement=fragments.use,
            status=FragmentStatus.ALREADY_PRESENT,
        )

    offset = find_class_body_start(text)
    if offset is None:
        return text, FragmentReport(
            kind=FragmentKind.USE,
            statement=fragments.use,
            status=FragmentStatus.TARGET_NOT_FOUND,
        )

    offset = _skip_lines(text, offset, inserted)
    if offset == len(text) and text and not text.endswith("\n"):
        # class brace on the last line, no newline after it
        text += newline
        offset = len(text)
    patched = f"{text[:offset]}{DEFAULT_INDENT}{fragments.use}{newline}{text[offset:]}"
    inserted.add(fragments.use)
    return patched, FragmentReport(
        kind=FragmentKind.USE,
        statement=fragments.use,
        status=FragmentStatus.INSERTED,
        target="class",
    )


def _insert_call(
    text: str,
    statement: str,
    methods: tuple[str, ...],
    kind: FragmentKind,
    inserted: set[str],
    newline: str = "\n",
) -> tuple[str, FragmentReport]:
    body = find_method_body(text, methods)
    if body is None:
        return text, FragmentReport(
            kind=kind, statement=statement, status=FragmentStatus.TARGET_NOT_FOUND
        )

    if statement in body.text(text):
        return text, FragmentReport(
            kind=kind,
            statement=statement,
            status=FragmentStatus.ALREADY_PRESENT,
            target=body.name,
        )

    new_body = prepend_statement(
        body.text(text), statement, body.header_indent, after=inserted, newline=newline
    )
    patched = text[:body.start] + new_body + text[body.end:]
    inserted.add(statement)
    return patched, FragmentReport(
        kind=kind, statement=statement, status=FragmentStatus.INSERTED, target=body.name
    )


def _skip_lines(text: str, offset: int, statements: set[str]) -> int:
    """Advance *offset* past whole lines whose content is one of *statements*."""
    while offset < len(text):
        eol = text.find("\n", offset)
        end = len(text) if eol == -1 else eol
        if text[offset:end].strip() not in statements:
            break
        offset = end if eol == -1 else end + 1
    return offset


def prepend_statement(
    body: str,
    statement: str,
    closing_indent: str = "",
    *,
    after: set[str] | frozenset[str] = frozenset(),
    newline: str | None = None,
) -> str:
    """Return *body* with *statement* added as its first line.

    The statement takes the indentation of the first non-blank body line, or
    four spaces past *closing_indent* when there is none.  Leading lines whose
    content is in *after* stay above the new statement.  An empty or
    single-line body is expanded so the closing brace lands on its own line
    at *closing_indent*.  New line breaks use *newline*, which defaults to
    the body's own line ending.
    """
    nl = newline or line_ending(body)
    indent = body_indent(body) or closing_indent + DEFAULT_INDENT

    if not body.strip():
        return f"{nl}{indent}{statement}{nl}{closing_indent}"
    if not re.match(r"[ \t]*\r?\n", body):
        # Code shares the line with the opening brace.
        return f"{nl}{indent}{statement}{nl}{indent}{body.strip()}{nl}{closing_indent}"

    # lines keep their "\r" under CRLF, so only the added line needs one
    head, rest = body.lstrip(" \t").split("\n", 1)
    lines = rest.split("\n")
    skip = 0
    while skip < len(lines) and lines[skip].strip() in after:
        skip += 1
    lines.insert(skip, f"{indent}{statement}{nl[:-1]}")
    return head + "\n" + "\n".join(lines)


def body_indent(body: str) -> str | None:
    """Leading whitespace of the first non-blank line of *body*, if any."""
    lines = body.split("\n")
    # lines[0] is whatever follows the opening brace on its own line
    candidates = lines[1:] if len(lines) > 1 else []
    for line in candidates:
        if line.strip():
            return re.match(r"[ \t]*", line).group(0)
    return None


# ---------------------------------------------------------------------------
# File-level injection
# ---------------------------------------------------------------------------

class TraitInjector:
    """Applies trait injection to widget files on disk.

    The whole file is read, patched in memory and written back only when
    something changed.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    def widget_path(self, widget_name: str) -> Path:
        ids = derive(widget_name, prefix=self.config.brand)
        return self.config.widget_paths(ids.file_slug)["php"]

    def inject(self, widget_name: str, traits: list[str]) -> InjectionResult:
        """Inject *traits* into the widget called *widget_name*.

        Raises:
            SourceMissing: If ``widgets/<file-slug>.php`` does not exist.
        """
        path = self.widget_path(widget_name)
        return self.inject_file(path, traits)

    def inject_file(self, path: Path, traits: list[str]) -> InjectionResult:
        if not path.is_file():
            raise SourceMissing(str(path), path=path)

        # bytes in and out so CRLF sources keep their line endings
        source = path.read_bytes().decode("utf-8")
        result = inject_traits(source, traits, namespace=self.config.trait_namespace)
        result.path = path
        if result.changed:
            path.write_bytes(result.text.encode("utf-8"))
        return result


# ---------------------------------------------------------------------------
# Console reporting
# ---------------------------------------------------------------------------

_STATUS_STYLES: dict[FragmentStatus, tuple[str, str]] = {
    FragmentStatus.INSERTED: ("green", "Injected"),
    FragmentStatus.ALREADY_PRESENT: ("yellow", "Skipped (already present)"),
    FragmentStatus.TARGET_NOT_FOUND: ("red", "Skipped (target not found)"),
}


def print_injection_summary(result: InjectionResult, title: str = "Trait Injection Summary") -> None:
    """Render the per-fragment outcome of an injection as a Rich table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Trait", style="cyan", no_wrap=True)
    table.add_column("Fragment")
    table.add_column("Statement")
    table.add_column("Outcome")

    for report in result.reports:
        for fragment in report.fragments:
            color, label = _STATUS_STYLES[fragment.status]
            where = f" in {fragment.target}()" if fragment.target and fragment.kind != FragmentKind.USE else ""
            table.add_row(
                report.trait,
                fragment.kind.value,
                escape(fragment.statement),
                f"[{color}]{label}{where}[/{color}]",
            )

    console.print(table)
    console.print()
