"""SFWP patcher -- in-place edits to existing PHP and config files."""

from sfwp.patcher.debug import toggle_debug_mode
from sfwp.patcher.fragments import TraitFragments, trait_fragments
from sfwp.patcher.injector import InjectionResult, TraitInjector, inject_traits

__all__ = [
    "InjectionResult",
    "TraitFragments",
    "TraitInjector",
    "inject_traits",
    "toggle_debug_mode",
    "trait_fragments",
]
