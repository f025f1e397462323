"""Shared pytest fixtures for the SFWP CLI test suite.

Provides reusable fixtures for:
- A ``Config`` rooted in a temporary plugin directory
- A minimal widget PHP source with the three injection targets
- A fully generated sample widget on disk
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from sfwp.config import Config
from sfwp.scaffolder.generator import WidgetGenerator, WidgetOptions


# ---------------------------------------------------------------------------
# Paths & Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def plugin_root(tmp_path: Path) -> Path:
    """Temporary plugin project directory (auto-cleanup)."""
    root = tmp_path / "sfwp-plugin"
    root.mkdir()
    return root


@pytest.fixture
def config(plugin_root: Path) -> Config:
    """Config with default layout rooted in ``plugin_root``."""
    return Config(root=plugin_root)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SFWP_* variables from the developer's shell out of the tests."""
    for name in (
        "SFWP_ROOT",
        "SFWP_BRAND",
        "SFWP_TRAIT_NAMESPACE",
        "SFWP_DEFAULT_ICON",
        "SFWP_TEMPLATE_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Widget sources
# ---------------------------------------------------------------------------

MINIMAL_WIDGET = textwrap.dedent(
    """\
    <?php
    namespace SFWPStudio\\Widgets;

    class Card_Box extends Widget_Base {

        public function get_title() {
            return __( 'SF Card Box', 'sfwp-studio' );
        }

        protected function register_controls() {
            $this->start_controls_section( 'content' );
        }

        protected function render() {
            echo 'card';
        }
    }
    """
)


@pytest.fixture
def minimal_widget_source() -> str:
    """A widget class with a class body, register_controls() and render()."""
    return MINIMAL_WIDGET


@pytest.fixture
def sample_widget(config: Config) -> dict[str, Path]:
    """Generate the ``Card Box`` widget (all files) and return its layout."""
    WidgetGenerator(config).create_widget(WidgetOptions(name="Card Box"))
    return config.widget_paths("card-box")
