"""Trait registry.

The list of known traits is never maintained by hand: it is whatever
``core/helpers/traits/*-trait.php`` contains at the moment of asking.
``scan_traits`` computes that view; ``sync_registry`` also writes it to
``traits.json`` for tools that read the registry file.
"""

from __future__ import annotations

from pathlib import Path

from sfwp.config import Config
from sfwp.scaffolder.naming import derive_trait
from sfwp.utils import save_json

TRAIT_FILE_SUFFIX = "-trait.php"


def scan_traits(traits_dir: str | Path) -> list[str]:
    """Return the sorted trait type names found in *traits_dir*.

    ``card-box-trait.php`` is reported as ``CardBoxTrait``.  A missing
    directory yields an empty list.
    """
    directory = Path(traits_dir)
    if not directory.is_dir():
        return []

    names: set[str] = set()
    for path in directory.iterdir():
        if not path.is_file() or not path.name.endswith(TRAIT_FILE_SUFFIX):
            continue
        ids = derive_trait(path.name[: -len(TRAIT_FILE_SUFFIX)])
        if not ids.is_empty:
            names.add(ids.type_name)
    return sorted(names)


def sync_registry(config: Config) -> list[str]:
    """Regenerate ``traits.json`` from the traits directory and return its content."""
    traits = scan_traits(config.traits_path)
    save_json(traits, config.registry_path)
    return traits
