"""SFWP command-line interface.

Usage::

    sfwp create "Card Box" --traits Card,Icon
    sfwp create                       # interactive: widget or trait
    sfwp add:trait Card Icon --to "Card Box"
    sfwp docs "Card Box"
    sfwp zip release
    sfwp debug on

``main()`` is the single error boundary: every ``SfwpError`` raised by a
command is printed as ``"<kind>: <message>"`` and turned into its exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from sfwp import __version__
from sfwp.archive import zip_directory
from sfwp.config import Config
from sfwp.errors import AlreadyExists, InvalidName, SfwpError
from sfwp.patcher.debug import toggle_debug_mode
from sfwp.patcher.fragments import parse_trait_list
from sfwp.patcher.injector import TraitInjector, print_injection_summary
from sfwp.reporter.docs import DocsGenerator
from sfwp.scaffolder.generator import WidgetGenerator, WidgetOptions
from sfwp.scaffolder.registry import sync_registry
from sfwp.utils import (
    console,
    create_status,
    print_banner,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)

CONFIG_FILE = "sfwp.json"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def load_config(root: str | None = None) -> Config:
    """Build the session configuration.

    Environment variables come first; ``--root`` overrides ``SFWP_ROOT``; a
    ``sfwp.json`` in the resulting root replaces both, except for the root
    itself.
    """
    config = Config.from_env()
    if root:
        config = config.model_copy(update={"root": Path(root)})

    config_file = config.root / CONFIG_FILE
    if config_file.is_file():
        config = Config.load(config_file).model_copy(update={"root": config.root})
    return config


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


def _confirm_overwrite(existing: list[Path], question: str) -> None:
    """Ask before replacing *existing*; a refusal raises ``AlreadyExists``."""
    for path in existing:
        print_warning(f"Already exists: {path}")
    if not Confirm.ask(question, default=False):
        raise AlreadyExists(existing, "Aborted, existing files were kept")


def _choose_traits(available: list[str]) -> list[str]:
    """Let the user pick traits from the registry by number or by name."""
    if not available:
        return []

    table = Table(title="Available traits", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Trait", style="cyan")
    for index, name in enumerate(available, start=1):
        table.add_row(str(index), name)
    console.print(table)

    answer = Prompt.ask(
        "Traits to include (numbers or names, comma-separated; blank for none)",
        default="",
    )
    chosen: list[str] = []
    for token in answer.split(","):
        token = token.strip()
        if token.isdigit() and 1 <= int(token) <= len(available):
            chosen.append(available[int(token) - 1])
        elif token:
            chosen.append(token)
    return parse_trait_list(chosen)


def _widget_options_from_prompts(config: Config, available: list[str]) -> WidgetOptions:
    name = Prompt.ask("Widget name (e.g. Heading, Icon Box)").strip()
    if not name:
        raise InvalidName("Widget name is required")
    return WidgetOptions(
        name=name,
        css=Confirm.ask("Create CSS file?", default=True),
        js=Confirm.ask("Create JS file?", default=False),
        readme=Confirm.ask("Create README.md?", default=True),
        icon=Prompt.ask("Elementor icon class", default=config.default_icon),
        traits=_choose_traits(available),
    )


def create_widget(config: Config, options: WidgetOptions, force: bool = False) -> list[Path]:
    """Scaffold a widget, asking before any existing file is replaced."""
    generator = WidgetGenerator(config)
    plan = generator.plan_widget(options)

    existing = generator.existing_files(plan)
    if existing and not force:
        _confirm_overwrite(existing, "Overwrite existing files?")

    with create_status(f"Creating widget {plan.identifiers.display_name}..."):
        written = generator.create_widget(options, allow_overwrite=True)

    print_summary_table(
        {kind: str(path) for kind, path in plan.files.items()},
        title=f"Widget {plan.identifiers.display_name}",
    )
    print_success(f"Widget '{plan.identifiers.display_name}' created.")
    return written


def create_trait(config: Config, name: str, force: bool = False) -> Path:
    """Scaffold a trait skeleton and refresh the registry."""
    generator = WidgetGenerator(config)
    path = generator.trait_path(name)
    if path.exists() and not force:
        _confirm_overwrite([path], "Trait already exists. Do you want to overwrite it?")

    written = generator.create_trait(name, allow_overwrite=True)
    sync_registry(config)
    print_success(f"Trait created: {written}")
    return written


def cmd_create(args: argparse.Namespace, config: Config) -> int:
    available = sync_registry(config)

    if args.name:
        options = WidgetOptions(
            name=" ".join(args.name),
            css=not args.no_css,
            js=not args.no_js,
            readme=not args.no_readme,
            icon=args.icon or config.default_icon,
            traits=parse_trait_list(args.traits),
        )
        create_widget(config, options, force=args.force)
        return 0

    print_banner()
    kind = Prompt.ask("What do you want to create?", choices=["widget", "trait"], default="widget")
    if kind == "trait":
        name = Prompt.ask("Enter trait name (e.g. CardTrait)").strip()
        if not name:
            raise InvalidName("Trait name is required")
        create_trait(config, name, force=args.force)
    else:
        create_widget(config, _widget_options_from_prompts(config, available), force=args.force)
    return 0


# ---------------------------------------------------------------------------
# add:trait / docs / zip / debug
# ---------------------------------------------------------------------------


def cmd_add_trait(args: argparse.Namespace, config: Config) -> int:
    traits = parse_trait_list(args.traits)
    if not traits:
        raise InvalidName("No trait names given")

    result = TraitInjector(config).inject(args.to, traits)
    print_injection_summary(result, title=f"Traits for {args.to}")
    if result.changed:
        print_success(f"Updated {result.path}")
    else:
        print_warning(f"No changes made to {result.path}")
    return 0


def cmd_docs(args: argparse.Namespace, config: Config) -> int:
    with create_status("Generating widget documentation..."):
        doc_path = DocsGenerator(config).generate(args.name)
    print_success(f"Documentation block inserted into {doc_path}")
    return 0


def cmd_zip(args: argparse.Namespace, config: Config) -> int:
    with create_status("Creating zip..."):
        output = zip_directory(config.root, args.filename)
    print_success(f"Zip created: {output}")
    return 0


def cmd_debug(args: argparse.Namespace, config: Config) -> int:
    enable = args.state == "on"
    result = toggle_debug_mode(config.root, enable, filename=config.wp_config_name)

    if result.block_already_present:
        print_info("Debug block already present.")
    if result.changed:
        state = "enabled" if enable else "disabled"
        print_success(f"Debug mode {state} in {result.path}")
    else:
        print_warning(f"No changes made to {result.path}")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfwp",
        description="SFWP CLI -- scaffold and patch page-builder widgets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  sfwp create \"Card Box\" --traits Card,Icon\n"
            "  sfwp add:trait Card --to \"Card Box\"\n"
            "  sfwp docs \"Card Box\"\n"
            "  sfwp debug on\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--root",
        default=None,
        help="Plugin project root (default: $SFWP_ROOT or the current directory)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create a widget (or, interactively, a trait)")
    create.add_argument("name", nargs="*", help="Widget name; omit for the interactive flow")
    create.add_argument("--no-css", action="store_true", help="Skip the stylesheet")
    create.add_argument("--no-js", action="store_true", help="Skip the script")
    create.add_argument("--no-readme", action="store_true", help="Skip the markdown doc")
    create.add_argument(
        "--traits",
        nargs="+",
        action="extend",
        default=[],
        help="Traits to include (space- or comma-separated)",
    )
    create.add_argument("--icon", default=None, help="Elementor icon class")
    create.add_argument("--force", action="store_true", help="Overwrite without asking")
    create.set_defaults(handler=cmd_create)

    add_trait = sub.add_parser("add:trait", help="Inject traits into an existing widget")
    add_trait.add_argument("traits", nargs="+", help="Trait names (space- or comma-separated)")
    add_trait.add_argument("--to", required=True, help="Target widget name")
    add_trait.set_defaults(handler=cmd_add_trait)

    docs = sub.add_parser("docs", help="Insert the metadata block into a widget's doc")
    docs.add_argument("name", help="Widget name")
    docs.set_defaults(handler=cmd_docs)

    zip_cmd = sub.add_parser("zip", help="Zip the project into <filename>.zip")
    zip_cmd.add_argument("filename", help="Archive name (.zip is appended when missing)")
    zip_cmd.set_defaults(handler=cmd_zip)

    debug = sub.add_parser("debug", help="Toggle WP_DEBUG in the nearest wp-config.php")
    debug.add_argument("state", choices=["on", "off"])
    debug.set_defaults(handler=cmd_debug)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``sfwp`` and ``python -m sfwp``."""
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.root)
        return args.handler(args, config)
    except SfwpError as exc:
        print_error(f"{exc.kind}: {escape(str(exc))}")
        return exc.exit_code
    except KeyboardInterrupt:
        print_warning("Aborted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
