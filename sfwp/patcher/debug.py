"""Toggle WordPress debug settings in ``wp-config.php``.

``wp-config.php`` is found by walking up from the plugin directory.  Turning
debug on sets ``WP_DEBUG`` to ``true`` and inserts a guarded
``WP_DEBUG_LOG`` / ``WP_DEBUG_DISPLAY`` block after it; turning it off sets
``WP_DEBUG`` to ``false`` and removes that block.  Both directions are
idempotent.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field

from sfwp.errors import NotFoundError, TargetSectionMissing
from sfwp.utils import find_upwards

DEBUG_BLOCK = """\
if ( ! defined( 'WP_DEBUG_LOG' ) ) {
  define( 'WP_DEBUG_LOG', true );
}

if ( ! defined( 'WP_DEBUG_DISPLAY' ) ) {
  define( 'WP_DEBUG_DISPLAY', true );
}"""

_WP_DEBUG_DEFINE = re.compile(r"""define\(\s*['"]WP_DEBUG['"]\s*,\s*(true|false)\s*\);""")

_WP_DEBUG_TRUE_LINE = re.compile(r"""define\(\s*['"]WP_DEBUG['"]\s*,\s*true\s*\);\s*""")

_DEBUG_BLOCK_PATTERN = re.compile(
    r"""
    \n?if\s*\(\s*!\s*defined\s*\(\s*['"]WP_DEBUG_LOG['"]\s*\)\s*\)\s*\{[^}]*\}
    \s*\n?if\s*\(\s*!\s*defined\s*\(\s*['"]WP_DEBUG_DISPLAY['"]\s*\)\s*\)\s*\{[^}]*\}\n?
    """,
    re.VERBOSE,
)


class DebugToggleResult(BaseModel):
    """Outcome of a debug toggle."""

    path: Path
    enabled: bool
    changed: bool = False
    block_already_present: bool = Field(
        default=False, description="Debug block was found when enabling"
    )


def apply_debug_mode(content: str, enable: bool) -> tuple[str, bool]:
    """Return ``(new_content, block_already_present)`` for *content*.

    Raises:
        TargetSectionMissing: When enabling and no ``WP_DEBUG`` define exists
            to anchor the debug block.
    """
    value = "true" if enable else "false"
    # A define already holding the wanted value keeps its original spelling.
    content = _WP_DEBUG_DEFINE.sub(
        lambda m: m.group(0) if m.group(1) == value else f"define('WP_DEBUG', {value});",
        content,
        count=1,
    )

    if not enable:
        stripped = _DEBUG_BLOCK_PATTERN.sub("", content)
        if stripped != content:
            content = stripped.rstrip() + "\n"
        return content, False

    if DEBUG_BLOCK in content:
        return content, True
    if not _WP_DEBUG_TRUE_LINE.search(content):
        raise TargetSectionMissing("no WP_DEBUG define to anchor the debug block")

    content = _WP_DEBUG_TRUE_LINE.sub(
        lambda _m: f"define('WP_DEBUG', true);\n\n{DEBUG_BLOCK}\n",
        content,
        count=1,
    )
    return content, False


def find_wp_config(start: str | Path, filename: str = "wp-config.php") -> Path:
    """Locate ``wp-config.php`` in *start* or one of its parents.

    Raises:
        NotFoundError: If no ancestor directory holds the file.
    """
    path = find_upwards(start, filename)
    if path is None:
        raise NotFoundError(
            f"{filename} not found; make sure you're inside a plugin/widget directory",
        )
    return path


def toggle_debug_mode(
    start: str | Path, enable: bool, filename: str = "wp-config.php"
) -> DebugToggleResult:
    """Enable or disable debug settings in the nearest ``wp-config.php``.

    The file is rewritten only when its content changes.
    """
    path = find_wp_config(start, filename)
    original = path.read_text(encoding="utf-8")
    updated, present = apply_debug_mode(original, enable)

    changed = updated != original
    if changed:
        path.write_text(updated, encoding="utf-8")
    return DebugToggleResult(
        path=path, enabled=enable, changed=changed, block_already_present=present
    )
