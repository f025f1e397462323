"""Widget and trait scaffolding.

Takes a ``WidgetOptions`` (or a trait name) and writes the files that make up
a widget: the PHP class, optional stylesheet, script and markdown doc, all
rendered from the bundled stubs.  Existing files are never overwritten unless
the caller explicitly allows it; the overwrite decision itself (prompting)
belongs to the CLI.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from sfwp.config import Config
from sfwp.errors import AlreadyExists, InvalidName
from sfwp.patcher.fragments import parse_trait_list, trait_fragments
from sfwp.scaffolder.naming import IdentifierSet, derive, derive_trait
from sfwp.scaffolder.templates import TemplateRenderer

# Indentation of statements inside a generated class body / method body.
_MEMBER_INDENT = "    "
_STATEMENT_INDENT = "        "

# Generated-file kind -> logical template name.
WIDGET_TEMPLATES: dict[str, str] = {
    "php": "component-source",
    "css": "stylesheet",
    "js": "script",
    "readme": "readme",
}


# ---------------------------------------------------------------------------
# Option models
# ---------------------------------------------------------------------------


class WidgetOptions(BaseModel):
    """Pydantic model describing the widget to scaffold."""

    name: str = Field(..., min_length=1, description="Free-form widget name")
    css: bool = Field(default=True, description="Create assets/css/<slug>.css")
    js: bool = Field(default=True, description="Create assets/js/<slug>.js")
    readme: bool = Field(default=True, description="Create docs/widgets/<slug>.md")
    icon: str = Field(default="eicon-star", description="Page-builder icon class")
    traits: list[str] = Field(default_factory=list, description="Trait names to include")

    def enabled_kinds(self) -> list[str]:
        """Return the generated-file kinds this widget needs, PHP first."""
        flags = {"php": True, "css": self.css, "js": self.js, "readme": self.readme}
        return [kind for kind, enabled in flags.items() if enabled]


class WidgetPlan(BaseModel):
    """Everything needed to write a widget, computed before touching disk."""

    identifiers: IdentifierSet
    files: dict[str, Path] = Field(default_factory=dict)
    replacements: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Replacement maps
# ---------------------------------------------------------------------------


def _depends_method(method: str, handle: str) -> str:
    return (
        f"\n{_MEMBER_INDENT}public function {method}() {{\n"
        f"{_STATEMENT_INDENT}return [ '{handle}' ];\n"
        f"{_MEMBER_INDENT}}}\n"
    )


def build_widget_replacements(
    ids: IdentifierSet,
    options: WidgetOptions,
    config: Config,
) -> dict[str, str]:
    """Build the stub replacement map for a widget.

    Block placeholders (trait lines, dependency methods) carry their own
    indentation and trailing newline so that an empty value leaves no blank
    scaffolding behind.
    """
    fragments = [
        trait_fragments(t, config.trait_namespace) for t in parse_trait_list(options.traits)
    ]
    trait_uses = "".join(f"{_MEMBER_INDENT}{f.use}\n" for f in fragments)
    trait_controls = "".join(f"{_STATEMENT_INDENT}{f.controls_call}\n" for f in fragments)
    trait_render = "".join(f"{_STATEMENT_INDENT}{f.render_call}\n" for f in fragments)

    return {
        "CLASSNAME": ids.class_name,
        "FILENAME": ids.file_slug,
        "SLUG": f"{config.brand.lower()}_{ids.symbol_slug}",
        "ICON": options.icon or config.default_icon,
        "STYLE_DEPENDS": _depends_method("get_style_depends", ids.file_slug) if options.css else "",
        "SCRIPT_DEPENDS": _depends_method("get_script_depends", ids.file_slug) if options.js else "",
        "TRAIT_USES": trait_uses,
        "TRAIT_CONTROLS": trait_controls,
        "TRAIT_RENDER": trait_render,
        "WIDGET_NAME": ids.display_name,
    }


def build_trait_replacements(ids: IdentifierSet, config: Config) -> dict[str, str]:
    """Build the stub replacement map for a trait."""
    return {
        "TRAITNAME": ids.type_name,
        "TRAITSLUG": ids.symbol_slug,
        "TRAIT_NAMESPACE": config.trait_namespace.strip("\\"),
    }


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class WidgetGenerator:
    """Main scaffolding orchestrator.

    Given a ``Config``, generates:
    - ``widgets/<slug>.php`` page-builder widget class
    - ``assets/css/<slug>.css`` and ``assets/js/<slug>.js`` (optional)
    - ``docs/widgets/<slug>.md`` with the docs placeholder (optional)
    - ``core/helpers/traits/<slug>-trait.php`` trait skeletons
    """

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer(config.template_dir)

    # -- Widgets -----------------------------------------------------------

    def plan_widget(self, options: WidgetOptions) -> WidgetPlan:
        """Resolve identifiers, destination paths and replacements for a widget."""
        ids = derive(options.name, prefix=self.config.brand)
        if ids.is_empty:
            raise InvalidName(f"Widget name {options.name!r} contains no usable words")

        layout = self.config.widget_paths(ids.file_slug)
        files = {kind: layout[kind] for kind in options.enabled_kinds()}
        return WidgetPlan(
            identifiers=ids,
            files=files,
            replacements=build_widget_replacements(ids, options, self.config),
        )

    def existing_files(self, plan: WidgetPlan) -> list[Path]:
        """Return the planned files that already exist on disk."""
        return [path for path in plan.files.values() if path.exists()]

    def create_widget(
        self, options: WidgetOptions, *, allow_overwrite: bool = False
    ) -> list[Path]:
        """Generate every file for a widget.

        Args:
            options: What to generate.
            allow_overwrite: Replace files that already exist.

        Returns:
            Paths written, PHP class first.

        Raises:
            AlreadyExists: Some planned files exist and *allow_overwrite* is
                ``False``.  Nothing is written in that case.
        """
        plan = self.plan_widget(options)
        existing = self.existing_files(plan)
        if existing and not allow_overwrite:
            raise AlreadyExists(existing)

        written: list[Path] = []
        for kind, path in plan.files.items():
            written.append(
                self.renderer.render_to_file(WIDGET_TEMPLATES[kind], path, plan.replacements)
            )
        return written

    # -- Traits ------------------------------------------------------------

    def trait_path(self, name: str) -> Path:
        ids = derive_trait(name)
        return self.config.trait_path(ids.file_slug)

    def create_trait(self, name: str, *, allow_overwrite: bool = False) -> Path:
        """Generate ``core/helpers/traits/<slug>-trait.php`` for *name*.

        Raises:
            AlreadyExists: The trait file exists and *allow_overwrite* is
                ``False``.
        """
        ids = derive_trait(name)
        if ids.is_empty:
            raise InvalidName(f"Trait name {name!r} contains no usable words")

        return self.renderer.render_to_file(
            "trait-source",
            self.config.trait_path(ids.file_slug),
            build_trait_replacements(ids, self.config),
            allow_overwrite=allow_overwrite,
        )
