"""Stub template rendering for widget scaffolding.

Provides the TemplateRenderer class which loads ``.stub`` templates from the
``sfwp/scaffolder/stubs/`` directory (or a configured override) and renders
them by substituting ``{{PLACEHOLDER}}`` names.  Templates are located through
a Jinja2 loader, but their text is never evaluated as Jinja2: the stub
vocabulary is plain named placeholders plus authoring-only directive comments
(``/*__tag__*/``) that are stripped from the output.
"""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from jinja2 import TemplateNotFound as JinjaTemplateNotFound

from sfwp.errors import AlreadyExists, TemplateNotFound
from sfwp.utils import write_text


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "stubs"

# Logical template names used by the generators -> stub file names.
TEMPLATE_FILES: dict[str, str] = {
    "component-source": "widget.php.stub",
    "stylesheet": "style.css.stub",
    "script": "script.js.stub",
    "readme": "readme.md.stub",
    "trait-source": "trait.php.stub",
}


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_EMPTY_PLACEHOLDER = "{{}}"

# A line holding nothing but a directive comment, with its newline.
_LINE_DIRECTIVE = re.compile(
    r"^[ \t]*/\*__[a-z0-9_-]+__\*/[ \t]*(?:\r?\n|$)",
    re.IGNORECASE | re.MULTILINE,
)

_INLINE_DIRECTIVE = re.compile(r"/\*__[a-z0-9_-]+__\*/", re.IGNORECASE)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders stub templates for widget and trait scaffolding.

    Templates are addressed either by logical name (``"component-source"``)
    or by file name relative to the template directory
    (``"widget.php.stub"``).  Rendering is pure: the same template text and
    replacement map always give byte-identical output.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            keep_trailing_newline=True,
        )

    # -- Loading -----------------------------------------------------------

    def load(self, template_name: str) -> str:
        """Return the raw text of *template_name*.

        Raises:
            TemplateNotFound: If no such template exists.
        """
        file_name = TEMPLATE_FILES.get(template_name, template_name)
        try:
            source, _filename, _uptodate = self.env.loader.get_source(self.env, file_name)
        except JinjaTemplateNotFound as exc:
            raise TemplateNotFound(
                f"'{template_name}' in {self.template_dir}",
                path=self.template_dir / file_name,
            ) from exc
        return source

    # -- Rendering ---------------------------------------------------------

    def render(self, template_name: str, replacements: dict[str, str | None]) -> str:
        """Render a named template with the provided replacement map.

        Args:
            template_name: Logical name or stub file name.
            replacements: ``{PLACEHOLDER: value}``; falsy values render as
                an empty string.

        Returns:
            The rendered template content as a string.
        """
        return self.render_string(self.load(template_name), replacements)

    def render_string(self, template_text: str, replacements: dict[str, str | None]) -> str:
        """Render inline template text with the provided replacement map."""
        content = template_text
        for key, value in replacements.items():
            content = content.replace("{{" + key + "}}", value or "")

        content = content.replace(_EMPTY_PLACEHOLDER, "")
        content = _LINE_DIRECTIVE.sub("", content)
        content = _INLINE_DIRECTIVE.sub("", content)
        return content

    def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        replacements: dict[str, str | None],
        *,
        allow_overwrite: bool = True,
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  An existing file is
        overwritten unless *allow_overwrite* is ``False``, in which case
        ``AlreadyExists`` is raised and nothing is rendered or written.
        """
        out = Path(output_path)
        if not allow_overwrite and out.exists():
            raise AlreadyExists([out])
        content = self.render(template_name, replacements)
        return write_text(out, content)

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.stub`` files in the template directory."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            self.env.list_templates(filter_func=lambda name: name.endswith(".stub"))
        )
