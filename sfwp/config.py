"""SFWP CLI configuration.

Centralised, typed configuration for every command. All settings use Pydantic
v2 models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TRAIT_NAMESPACE = "SFWPStudio\\Core\\Helpers\\Traits"
DEFAULT_DOCS_PLACEHOLDER = "<!-- SFWP_DOCS_PLACEHOLDER -->"


class Config(BaseModel):
    """Global SFWP configuration.

    Holds the project root, the branding used in generated names, and the
    on-disk layout of a widget plugin.  Instances are created once by the CLI
    entry point and then passed to the generators, injector and composers.
    """

    root: Path = Field(default_factory=Path.cwd, description="Plugin project root")
    brand: str = Field(default="SF", min_length=1, description="Two-letter brand token")
    trait_namespace: str = Field(default=DEFAULT_TRAIT_NAMESPACE)
    default_icon: str = Field(default="eicon-star")
    docs_placeholder: str = Field(default=DEFAULT_DOCS_PLACEHOLDER, min_length=1)

    widgets_dir: str = Field(default="widgets")
    css_dir: str = Field(default="assets/css")
    js_dir: str = Field(default="assets/js")
    docs_dir: str = Field(default="docs/widgets")
    traits_dir: str = Field(default="core/helpers/traits")
    registry_file: str = Field(default="traits.json")
    wp_config_name: str = Field(default="wp-config.php")

    # ``None`` means the stubs bundled with the package.
    template_dir: Path | None = Field(default=None)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def widgets_path(self) -> Path:
        """Directory holding widget PHP classes."""
        return self.root / self.widgets_dir

    @property
    def css_path(self) -> Path:
        return self.root / self.css_dir

    @property
    def js_path(self) -> Path:
        return self.root / self.js_dir

    @property
    def docs_path(self) -> Path:
        """Directory holding per-widget markdown docs."""
        return self.root / self.docs_dir

    @property
    def traits_path(self) -> Path:
        """Directory scanned for ``*-trait.php`` files."""
        return self.root / self.traits_dir

    @property
    def registry_path(self) -> Path:
        """Path to the generated ``traits.json`` registry."""
        return self.root / self.registry_file

    def widget_paths(self, file_slug: str) -> dict[str, Path]:
        """Return the ``{kind: path}`` layout for a widget's generated files."""
        return {
            "php": self.widgets_path / f"{file_slug}.php",
            "css": self.css_path / f"{file_slug}.css",
            "js": self.js_path / f"{file_slug}.js",
            "readme": self.docs_path / f"{file_slug}.md",
        }

    def trait_path(self, file_slug: str) -> Path:
        return self.traits_path / f"{file_slug}-trait.php"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<root>/sfwp.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.root / "sfwp.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SFWP_ROOT, SFWP_BRAND, SFWP_TRAIT_NAMESPACE, SFWP_DEFAULT_ICON,
            SFWP_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SFWP_ROOT"):
            kwargs["root"] = Path(os.environ["SFWP_ROOT"])
        if os.environ.get("SFWP_BRAND"):
            kwargs["brand"] = os.environ["SFWP_BRAND"]
        if os.environ.get("SFWP_TRAIT_NAMESPACE"):
            kwargs["trait_namespace"] = os.environ["SFWP_TRAIT_NAMESPACE"]
        if os.environ.get("SFWP_DEFAULT_ICON"):
            kwargs["default_icon"] = os.environ["SFWP_DEFAULT_ICON"]
        if os.environ.get("SFWP_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["SFWP_TEMPLATE_DIR"])
        return cls(**kwargs)
