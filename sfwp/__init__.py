"""SFWP CLI -- scaffolding and idempotent patching for page-builder widgets."""

__version__ = "0.1.0"
