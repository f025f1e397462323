"""Zip a plugin project directory for distribution."""

from __future__ import annotations

import zipfile
from pathlib import Path


def archive_name(output_name: str) -> str:
    """Return *output_name* with a ``.zip`` suffix, added only when missing."""
    return output_name if output_name.endswith(".zip") else f"{output_name}.zip"


def zip_directory(root: str | Path, output_name: str) -> Path:
    """Write every file under *root* into ``<root>/<output_name>.zip``.

    Archive members are stored relative to *root*.  The archive being written
    is never added to itself.

    Returns:
        Path of the archive.
    """
    root_path = Path(root).resolve()
    output_path = root_path / archive_name(output_name)

    with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(root_path.rglob("*")):
            if not path.is_file() or path.resolve() == output_path:
                continue
            archive.write(path, path.relative_to(root_path).as_posix())
    return output_path
