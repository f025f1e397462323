"""Tests for the argparse CLI (sfwp.cli).

Covers:
- Argument parsing for every subcommand
- Configuration loading (env, --root, sfwp.json)
- Non-interactive and interactive ``create`` (prompts mocked)
- Overwrite confirmation and --force
- Error boundary: error kinds map to exit codes
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from sfwp.cli import build_parser, load_config, main
from sfwp.config import Config


def run(root: Path, *argv: str) -> int:
    return main(["--root", str(root), *argv])


# ---------------------------------------------------------------------------
# Parsing & configuration
# ---------------------------------------------------------------------------


class TestParser:
    @pytest.mark.unit
    def test_create_options(self):
        args = build_parser().parse_args(
            ["create", "Card", "Box", "--no-js", "--traits", "Card,Icon", "Button", "--force"]
        )
        assert args.name == ["Card", "Box"]
        assert args.no_js is True
        assert args.no_css is False
        assert args.traits == ["Card,Icon", "Button"]
        assert args.force is True

    @pytest.mark.unit
    def test_traits_repeatable(self):
        args = build_parser().parse_args(["create", "x", "--traits", "A", "--traits", "B"])
        assert args.traits == ["A", "B"]

    @pytest.mark.unit
    def test_add_trait_requires_target(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["add:trait", "Card"])
        assert exc_info.value.code == 2

    @pytest.mark.unit
    def test_debug_choices(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["debug", "maybe"])
        assert exc_info.value.code == 2

    @pytest.mark.unit
    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])


class TestLoadConfig:
    @pytest.mark.unit
    def test_root_override(self, tmp_path: Path):
        assert load_config(str(tmp_path)).root == tmp_path

    @pytest.mark.unit
    def test_env_root(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SFWP_ROOT", str(tmp_path))
        monkeypatch.setenv("SFWP_BRAND", "AC")
        config = load_config()
        assert config.root == tmp_path
        assert config.brand == "AC"

    @pytest.mark.unit
    def test_project_file(self, tmp_path: Path):
        Config(root=Path("/elsewhere"), brand="XY").save(tmp_path / "sfwp.json")
        config = load_config(str(tmp_path))
        assert config.brand == "XY"
        assert config.root == tmp_path


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreateCommand:
    @pytest.mark.unit
    def test_create_widget(self, config: Config, capsys):
        code = run(config.root, "create", "Card", "Box", "--no-js", "--traits", "Card")
        assert code == 0
        layout = config.widget_paths("card-box")
        assert layout["php"].is_file()
        assert layout["css"].is_file()
        assert not layout["js"].exists()
        assert "$this->render_card();" in layout["php"].read_text()
        assert "created" in capsys.readouterr().out

    @pytest.mark.unit
    def test_create_refreshes_registry(self, config: Config):
        config.traits_path.mkdir(parents=True)
        (config.traits_path / "card-trait.php").write_text("<?php\n")
        run(config.root, "create", "Heading")
        assert json.loads(config.registry_path.read_text()) == ["CardTrait"]

    @pytest.mark.unit
    def test_declined_overwrite(self, config: Config, sample_widget: dict[str, Path]):
        sample_widget["php"].write_text("mine")
        with patch("sfwp.cli.Confirm.ask", return_value=False) as mock_confirm:
            code = run(config.root, "create", "Card Box")
        assert code == 6
        mock_confirm.assert_called_once()
        assert sample_widget["php"].read_text() == "mine"

    @pytest.mark.unit
    def test_accepted_overwrite(self, config: Config, sample_widget: dict[str, Path]):
        sample_widget["php"].write_text("mine")
        with patch("sfwp.cli.Confirm.ask", return_value=True):
            code = run(config.root, "create", "Card Box")
        assert code == 0
        assert "class Card_Box" in sample_widget["php"].read_text()

    @pytest.mark.unit
    def test_force_skips_prompt(self, config: Config, sample_widget: dict[str, Path]):
        sample_widget["php"].write_text("mine")
        with patch("sfwp.cli.Confirm.ask") as mock_confirm:
            code = run(config.root, "create", "Card Box", "--force")
        assert code == 0
        mock_confirm.assert_not_called()

    @pytest.mark.unit
    def test_invalid_name(self, config: Config, capsys):
        assert run(config.root, "create", "_") == 2
        assert "Invalid name" in capsys.readouterr().out


class TestInteractiveCreate:
    @pytest.mark.unit
    def test_widget_flow(self, config: Config):
        with patch("sfwp.cli.Prompt.ask", side_effect=["widget", "Icon Box", "eicon-code"]), \
                patch("sfwp.cli.Confirm.ask", side_effect=[True, False, True]):
            code = run(config.root, "create")
        assert code == 0
        layout = config.widget_paths("icon-box")
        assert layout["css"].is_file()
        assert not layout["js"].exists()
        assert layout["readme"].is_file()
        assert "return 'eicon-code';" in layout["php"].read_text()

    @pytest.mark.unit
    def test_widget_flow_with_registry_traits(self, config: Config):
        config.traits_path.mkdir(parents=True)
        for name in ("button-trait.php", "card-trait.php"):
            (config.traits_path / name).write_text("<?php\n")

        answers = ["widget", "Promo", "eicon-star", "2, Icon"]
        with patch("sfwp.cli.Prompt.ask", side_effect=answers), \
                patch("sfwp.cli.Confirm.ask", side_effect=[False, False, False]):
            code = run(config.root, "create")

        assert code == 0
        php = config.widget_paths("promo")["php"].read_text()
        assert "$this->render_card();" in php
        assert "$this->render_icon();" in php
        assert "render_button" not in php

    @pytest.mark.unit
    def test_trait_flow(self, config: Config):
        with patch("sfwp.cli.Prompt.ask", side_effect=["trait", "Card"]):
            code = run(config.root, "create")
        assert code == 0
        assert config.trait_path("card").is_file()
        assert json.loads(config.registry_path.read_text()) == ["CardTrait"]

    @pytest.mark.unit
    def test_trait_overwrite_declined(self, config: Config):
        config.traits_path.mkdir(parents=True)
        config.trait_path("card").write_text("custom")
        with patch("sfwp.cli.Prompt.ask", side_effect=["trait", "CardTrait"]), \
                patch("sfwp.cli.Confirm.ask", return_value=False):
            code = run(config.root, "create")
        assert code == 6
        assert config.trait_path("card").read_text() == "custom"

    @pytest.mark.unit
    def test_empty_widget_name(self, config: Config):
        with patch("sfwp.cli.Prompt.ask", side_effect=["widget", "   "]):
            assert run(config.root, "create") == 2

    @pytest.mark.unit
    def test_keyboard_interrupt(self, config: Config):
        with patch("sfwp.cli.Prompt.ask", side_effect=KeyboardInterrupt):
            assert run(config.root, "create") == 130


# ---------------------------------------------------------------------------
# add:trait / docs / zip / debug
# ---------------------------------------------------------------------------


class TestOtherCommands:
    @pytest.mark.unit
    def test_add_trait(self, config: Config, sample_widget: dict[str, Path], capsys):
        code = run(config.root, "add:trait", "Card,Icon", "--to", "Card Box")
        assert code == 0
        php = sample_widget["php"].read_text()
        assert php.index("$this->render_card();") < php.index("$this->render_icon();")
        assert "Updated" in capsys.readouterr().out

    @pytest.mark.unit
    def test_add_trait_twice_reports_no_changes(
        self, config: Config, sample_widget: dict[str, Path], capsys
    ):
        run(config.root, "add:trait", "Card", "--to", "Card Box")
        capsys.readouterr()
        assert run(config.root, "add:trait", "Card", "--to", "Card Box") == 0
        assert "No changes made" in capsys.readouterr().out

    @pytest.mark.unit
    def test_add_trait_missing_widget(self, config: Config, capsys):
        assert run(config.root, "add:trait", "Card", "--to", "Nope") == 3
        assert "Widget file not found" in capsys.readouterr().out

    @pytest.mark.unit
    def test_docs(self, config: Config, sample_widget: dict[str, Path]):
        assert run(config.root, "docs", "Card Box") == 0
        assert "```json" in sample_widget["readme"].read_text()

    @pytest.mark.unit
    def test_docs_missing_placeholder(self, config: Config, sample_widget: dict[str, Path]):
        sample_widget["readme"].write_text("# no marker\n")
        assert run(config.root, "docs", "Card Box") == 4

    @pytest.mark.unit
    def test_zip(self, config: Config, sample_widget: dict[str, Path]):
        assert run(config.root, "zip", "release") == 0
        assert (config.root / "release.zip").is_file()

    @pytest.mark.unit
    def test_debug_on_off(self, config: Config):
        wp_config = config.root / "wp-config.php"
        wp_config.write_text("<?php\ndefine( 'WP_DEBUG', false );\n")
        assert run(config.root, "debug", "on") == 0
        assert "WP_DEBUG_DISPLAY" in wp_config.read_text()
        assert run(config.root, "debug", "off") == 0
        assert "WP_DEBUG_DISPLAY" not in wp_config.read_text()

    @pytest.mark.unit
    def test_debug_missing_define(self, config: Config):
        (config.root / "wp-config.php").write_text("<?php\n")
        assert run(config.root, "debug", "on") == 5

    @pytest.mark.unit
    def test_debug_missing_wp_config(self, config: Config):
        Config(root=config.root, wp_config_name="absent-wp-config-91c2.php").save()
        assert run(config.root, "debug", "on") == 3
