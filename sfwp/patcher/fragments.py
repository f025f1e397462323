"""Code fragments contributed by a trait.

The generator writes these strings into new widgets and the injector looks
for them (by exact substring) before inserting them into existing widgets, so
both must build them here and nowhere else.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sfwp.config import DEFAULT_TRAIT_NAMESPACE
from sfwp.scaffolder.naming import derive_trait


class TraitFragments(BaseModel):
    """The three statements a trait adds to a widget class."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    slug: str
    use: str
    controls_call: str
    render_call: str


def trait_fragments(trait: str, namespace: str = DEFAULT_TRAIT_NAMESPACE) -> TraitFragments:
    """Build the fragments for *trait*.

    Examples::

        trait_fragments("IconBoxTrait").controls_call
        -> "$this->register_icon_box_controls();"
    """
    ids = derive_trait(trait)
    namespace = namespace.strip("\\")
    return TraitFragments(
        type_name=ids.type_name,
        slug=ids.symbol_slug,
        use=f"use \\{namespace}\\{ids.type_name};",
        controls_call=f"$this->register_{ids.symbol_slug}_controls();",
        render_call=f"$this->render_{ids.symbol_slug}();",
    )


def parse_trait_list(values: list[str] | None) -> list[str]:
    """Flatten space- or comma-separated trait arguments into type names.

    Empty entries are dropped and duplicates collapse to their first
    occurrence, keeping input order.
    """
    names: list[str] = []
    for value in values or []:
        for part in str(value).split(","):
            ids = derive_trait(part)
            if ids.is_empty or ids.type_name in names:
                continue
            names.append(ids.type_name)
    return names
