"""Identifier derivation for widgets and traits.

One free-form name (``"card box"``, ``"Card-Box"``, ``"CardBox"``) is turned
into the whole family of identifiers the generated files need.  Every form is
derived from the same normalised word tuple, so regenerating any of them later
(e.g. to check whether a trait was already injected) yields identical text.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

# lower-case letter or digit immediately followed by an upper-case letter
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_DELIMITERS = re.compile(r"[\s_-]+")


class IdentifierSet(BaseModel):
    """Immutable set of identifier forms derived from one name."""

    model_config = ConfigDict(frozen=True)

    words: tuple[str, ...] = Field(default=(), description="Normalised source words")
    type_name: str = Field(default="", description="PascalCase symbol, e.g. 'CardBoxTrait'")
    class_name: str = Field(default="", description="Widget class name, e.g. 'Card_Box'")
    symbol_slug: str = Field(default="", description="snake_case slug, e.g. 'card_box'")
    file_slug: str = Field(default="", description="kebab-case slug, e.g. 'card-box'")
    display_name: str = Field(default="", description="Human name, e.g. 'SF Card Box'")

    @property
    def is_empty(self) -> bool:
        return not self.words


def split_words(name: str) -> list[str]:
    """Split *name* into words on delimiters and camelCase boundaries.

    Examples::

        split_words("card box")   -> ["card", "box"]
        split_words("Card_Box")   -> ["Card", "Box"]
        split_words("CardBox")    -> ["Card", "Box"]
    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
    return [word.strip() for word in _DELIMITERS.split(spaced) if word.strip()]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def derive(
    name: str,
    *,
    suffix: str | None = None,
    prefix: str | None = None,
) -> IdentifierSet:
    """Derive the canonical identifier set for *name*.

    Args:
        name: Free-form user input.
        suffix: Kind suffix appended to ``type_name`` (``"Trait"`` for
            traits).  A trailing suffix word already present in *name* is
            dropped first, so ``derive("CardTrait", suffix="Trait")`` and
            ``derive("card", suffix="Trait")`` are equal.
        prefix: Brand token prepended to ``display_name``.  A leading word
            equal to the prefix (case-insensitively) is dropped first so the
            brand is never doubled.  The drop applies to every form, not
            just ``display_name``: ``"SF Card Box"`` and ``"Card Box"`` give
            the same ``file_slug`` (``card-box``) and ``type_name``
            (``CardBox``), so widget files resolve the same either way.

    Returns:
        The derived ``IdentifierSet``.  Input without any word characters
        produces an empty set; callers validate non-empty names beforehand.
    """
    words = split_words(name)
    if suffix and words and words[-1].lower() == suffix.lower():
        words = words[:-1]
    if prefix and words and words[0].lower() == prefix.lower():
        words = words[1:]
    if not words:
        return IdentifierSet()

    capitalized = [_capitalize(w) for w in words]
    lowered = [w.lower() for w in words]
    display = " ".join(capitalized)
    if prefix:
        display = f"{prefix} {display}"

    return IdentifierSet(
        words=tuple(lowered),
        type_name="".join(capitalized) + (suffix or ""),
        class_name="_".join(capitalized),
        symbol_slug="_".join(lowered),
        file_slug="-".join(lowered),
        display_name=display,
    )


def derive_trait(name: str) -> IdentifierSet:
    """Shortcut for trait references: ``derive(name, suffix="Trait")``."""
    return derive(name, suffix="Trait")


def strip_brand(text: str, brand: str) -> str:
    """Remove a leading *brand* token (and following whitespace) from *text*.

    The token must stand alone: ``"SF Card Box"`` becomes ``"Card Box"`` but
    ``"Sfera Box"`` is returned unchanged.  A bare lower-cased prefix match
    would also strip ``"SFCard"`` to ``"Card"``; here ``"SFCard"`` is kept
    as written, because the same rule would turn ``"Sfera"`` into ``"era"``.
    """
    stripped = text.strip()
    pattern = re.compile(rf"^{re.escape(brand)}(?:\s+|$)", re.IGNORECASE)
    return pattern.sub("", stripped, count=1)
