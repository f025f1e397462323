"""Error kinds raised by the SFWP core.

Every error carries an ``exit_code`` so the CLI boundary in :mod:`sfwp.cli`
can map a failure to a distinct process outcome without inspecting messages.
"""

from __future__ import annotations

from pathlib import Path


class SfwpError(Exception):
    """Base class for every failure the CLI reports to the user."""

    kind = "Error"
    exit_code = 1


class NotFoundError(SfwpError):
    """An expected template, source file, or companion file is absent."""

    kind = "Not found"
    exit_code = 3

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class TemplateNotFound(NotFoundError):
    """Raised when a named template cannot be loaded."""

    kind = "Template not found"


class SourceMissing(NotFoundError):
    """Raised when a widget source file does not exist."""

    kind = "Widget file not found"


class DocMissing(NotFoundError):
    """Raised when a widget's documentation file does not exist."""

    kind = "Markdown file not found"


class PlaceholderMissing(SfwpError):
    """The documentation marker is absent (or ambiguous) in the target file."""

    kind = "Placeholder not found"
    exit_code = 4

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class TargetSectionMissing(SfwpError):
    """An expected class or method boundary was not found in a source file."""

    kind = "Target section not found"
    exit_code = 5


class AlreadyExists(SfwpError):
    """One or more destination artefacts exist and overwriting was not allowed."""

    kind = "Already exists"
    exit_code = 6

    def __init__(self, paths: list[Path], message: str = "") -> None:
        self.paths = [Path(p) for p in paths]
        if not message:
            listed = ", ".join(str(p) for p in self.paths)
            message = f"Refusing to overwrite existing file(s): {listed}"
        super().__init__(message)


class InvalidName(SfwpError):
    """A widget or trait name yields no usable words."""

    kind = "Invalid name"
    exit_code = 2
