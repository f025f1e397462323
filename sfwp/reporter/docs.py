"""Widget documentation metadata generator.

Reads a widget's PHP source, extracts the facts that can be read off it
(title, injected traits, whether it declares style/script dependencies) and
inserts a structured JSON block into the widget's markdown doc in place of
the ``<!-- SFWP_DOCS_PLACEHOLDER -->`` marker.  Leaves that cannot be derived
from the source are emitted empty or with a hint for manual completion.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from sfwp.config import DEFAULT_TRAIT_NAMESPACE, Config
from sfwp.errors import DocMissing, PlaceholderMissing, SourceMissing
from sfwp.scaffolder.naming import derive, strip_brand


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class NamedItem(BaseModel):
    name: str = ""
    description: str = ""


def _item_pair() -> list[NamedItem]:
    return [NamedItem(), NamedItem()]


class BackgroundMotivation(BaseModel):
    limitations: str = ""
    motivation: str = ""


class Architecture(BaseModel):
    """How the widget is built; hint strings list the accepted answers."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "Choose Any One: 'custom', 'extended', 'forked', or 'hooked'"
    base: str = "Choose Any One: 'Elementor' or 'ElementsKit'"
    extends: str = ""
    forked_from: str = ""
    traits: list[str] = Field(default_factory=list)
    is_separate_style_sheet: str = "no"
    is_js_used: str = Field(default="no", alias="is_JS_Used")
    pro_feature_hook_type: str = "Choose Any One: 'elementor' or 'wordpress'"
    icon_used: str = ""


class NextSteps(BaseModel):
    features: list[NamedItem] = Field(default_factory=_item_pair)


class UsageContext(BaseModel):
    used_in: list[str] = Field(default_factory=lambda: ["", "", ""])
    compatible_with: list[str] = Field(default_factory=lambda: ["", "", ""])


class DocBlock(BaseModel):
    """Documentation record inserted into ``docs/widgets/<slug>.md``."""

    widget_name: str = ""
    summary: str = ""
    free_features: list[NamedItem] = Field(default_factory=_item_pair)
    pro_features: list[NamedItem] = Field(default_factory=_item_pair)
    background_motivation: BackgroundMotivation = Field(default_factory=BackgroundMotivation)
    architecture: Architecture = Field(default_factory=Architecture)
    impact: list[str] = Field(default_factory=lambda: ["", "", "", ""])
    next: NextSteps = Field(default_factory=NextSteps)
    usage_context: UsageContext = Field(default_factory=UsageContext)

    def to_markdown(self) -> str:
        """Serialise as a fenced JSON code block."""
        payload = json.dumps(self.model_dump(by_alias=True), indent=2, ensure_ascii=False)
        return f"```json\n{payload}\n```"


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_RE_TITLE = re.compile(
    r"""get_title\s*\(\)\s*\{[^}]*?return\s+__\(\s*['"](.+?)['"]""",
)

_STYLE_DEPENDS = "get_style_depends"
_SCRIPT_DEPENDS = "get_script_depends"


def _trait_use_pattern(namespace: str) -> re.Pattern[str]:
    escaped = re.escape(namespace.strip("\\"))
    return re.compile(rf"use\s+\\?{escaped}\\([A-Za-z0-9_]+);")


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def extract_title(source_text: str, brand: str = "SF") -> str:
    """Return the widget title from ``get_title()``, brand token removed."""
    match = _RE_TITLE.search(source_text)
    if match is None:
        return ""
    return strip_brand(match.group(1).strip(), brand)


def extract_traits(source_text: str, namespace: str = DEFAULT_TRAIT_NAMESPACE) -> list[str]:
    """Return every trait used in *source_text*, in order, duplicates kept."""
    return [m.group(1).strip() for m in _trait_use_pattern(namespace).finditer(source_text)]


def compose_doc_block(
    source_text: str,
    *,
    brand: str = "SF",
    namespace: str = DEFAULT_TRAIT_NAMESPACE,
) -> DocBlock:
    """Build the documentation record for a widget's PHP source."""
    architecture = Architecture(
        traits=extract_traits(source_text, namespace),
        is_separate_style_sheet="yes" if _STYLE_DEPENDS in source_text else "no",
        is_js_used="yes" if _SCRIPT_DEPENDS in source_text else "no",
    )
    return DocBlock(
        widget_name=extract_title(source_text, brand),
        architecture=architecture,
    )


def insert_doc_block(markdown: str, block: DocBlock, placeholder: str) -> str:
    """Replace the single *placeholder* in *markdown* with *block*.

    Raises:
        PlaceholderMissing: If the marker is absent or appears more than once.
    """
    count = markdown.count(placeholder)
    if count != 1:
        detail = "is missing" if count == 0 else f"appears {count} times, expected once"
        raise PlaceholderMissing(f"{placeholder} {detail}")
    return markdown.replace(placeholder, block.to_markdown(), 1)


# ---------------------------------------------------------------------------
# DocsGenerator
# ---------------------------------------------------------------------------

class DocsGenerator:
    """Fills a widget's markdown doc with metadata composed from its source."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def paths(self, widget_name: str) -> tuple[Path, Path]:
        """Return ``(php_path, doc_path)`` for *widget_name*."""
        ids = derive(widget_name, prefix=self.config.brand)
        layout = self.config.widget_paths(ids.file_slug)
        return layout["php"], layout["readme"]

    def generate(self, widget_name: str) -> Path:
        """Insert the metadata block into the widget's doc file.

        All checks run before the doc is written, so a failure leaves it
        untouched.

        Raises:
            SourceMissing: The widget PHP file does not exist.
            DocMissing: The widget markdown file does not exist.
            PlaceholderMissing: The markdown lacks the placeholder marker.
        """
        php_path, doc_path = self.paths(widget_name)
        if not php_path.is_file():
            raise SourceMissing(str(php_path), path=php_path)
        if not doc_path.is_file():
            raise DocMissing(str(doc_path), path=doc_path)

        source = php_path.read_text(encoding="utf-8")
        markdown = doc_path.read_text(encoding="utf-8")
        block = compose_doc_block(
            source, brand=self.config.brand, namespace=self.config.trait_namespace
        )
        try:
            updated = insert_doc_block(markdown, block, self.config.docs_placeholder)
        except PlaceholderMissing as exc:
            raise PlaceholderMissing(f"{exc} in {doc_path}", path=doc_path) from exc

        doc_path.write_text(updated, encoding="utf-8")
        return doc_path
