"""
electroforge.patches - Targeted Source Patches
==============================================

Text edits applied to the generated sources after the template trees are in
place. Each edit comes as a pure function over the file content (easy to unit
test against a given input) plus a file-level wrapper used by the composer.

The wrappers raise ``PatchWarning`` for anything that goes wrong: a missing
file, unreadable JSON and so on. These patches are cosmetic cleanup, so the
composer records the warning and carries on.

Patches
-------
- ``remove_preload_wiring``: drop the ``preload:`` BrowserWindow option from
  ``src/main.ts`` and the ``path`` import if it became unused.
- ``remove_effect_block``: drop the ``useEffect(() => {...}, [])`` block that
  talks to the preload bridge from ``src/App.tsx``.
- ``inject_imports``: add side-effect imports to ``src/main.ts``.
- ``prune_include``: remove an entry from ``tsconfig.json``'s ``include``.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

from electroforge.errors import PatchWarning


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path


LINE_BREAK = re.compile(r"\r?\n")
TRAILING_SEPARATOR = re.compile(r",\s*$")
PATH_IMPORT = re.compile(r"""^import\s+path\s+from\s+["']path["']""")
EFFECT_BLOCK = re.compile(
    r"\s*useEffect\(\(\) => \{.*?\}\s*,\s*\[\]\);?",
    re.DOTALL,
)
IMPORT_LINE = re.compile(r"^import ")

PRELOAD_MARKER = "preload"


# =============================================================================
# Pure Text Transforms
# =============================================================================

def _split(content: str) -> list[str]:
    return LINE_BREAK.split(content)


def remove_preload_wiring(content: str, marker: str = PRELOAD_MARKER) -> str:
    """
    Remove the first line mentioning ``marker`` and tidy up after it.

    The line before the removed one loses its trailing comma, since it is
    now the last property of the object literal. The default ``path`` import
    is dropped as well when no remaining line uses ``path.``.

    Examples
    --------
    >>> src = 'import path from "path";\\n  nodeIntegration: false,\\n  preload: path.join(x)\\n'
    >>> remove_preload_wiring(src)
    '  nodeIntegration: false\\n'
    """
    lines = _split(content)

    idx = next((i for i, line in enumerate(lines) if marker in line), None)
    if idx is not None:
        del lines[idx]
        if idx > 0:
            lines[idx - 1] = TRAILING_SEPARATOR.sub("", lines[idx - 1])

    import_idx = next(
        (i for i, line in enumerate(lines) if PATH_IMPORT.match(line)),
        None,
    )
    if import_idx is not None:
        still_used = any(
            "path." in line for i, line in enumerate(lines) if i != import_idx
        )
        if not still_used:
            del lines[import_idx]

    return "\n".join(lines)


def remove_effect_block(content: str) -> str:
    """Remove the first ``useEffect(() => {...}, []);`` block, non-greedily."""
    return EFFECT_BLOCK.sub("", content, count=1)


def inject_imports(content: str, modules: Iterable[str]) -> str:
    """
    Insert ``import '<module>';`` lines before the first non-import line.

    Modules that are already imported this way are not added twice.

    Only lines starting with ``import `` count as imports, so a statement
    split over several lines (``import {`` on the first, ``} from "x";``
    further down) ends the import block at its second line and the new
    imports land inside it.
    Keep the leading imports of patched files on one line each.

    Examples
    --------
    >>> inject_imports("import a from 'a';\\n\\nrun();", ["../auth.js"])
    "import a from 'a';\\nimport '../auth.js';\\n\\nrun();"
    """
    lines = _split(content)
    insert_at = next(
        (i for i, line in enumerate(lines) if not IMPORT_LINE.match(line)),
        len(lines),
    )
    for module in modules:
        statement = f"import '{module}';"
        if statement in lines:
            continue
        lines.insert(insert_at, statement)
        insert_at += 1
    return "\n".join(lines)


def prune_include(config: dict, entry: str) -> dict:
    """Return ``config`` with ``entry`` removed from its ``include`` list."""
    include = config.get("include")
    if isinstance(include, list):
        config["include"] = [item for item in include if item != entry]
    return config


# =============================================================================
# File Wrappers
# =============================================================================

def patch_file(path: Path, transform: Callable[[str], str]) -> bool:
    """
    Apply ``transform`` to a text file in place.

    Returns
    -------
    bool
        True if the file content changed.

    Raises
    ------
    PatchWarning
        If the file cannot be read or written.
    """
    try:
        original = path.read_text(encoding="utf-8")
        patched = transform(original)
        if patched != original:
            path.write_text(patched, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PatchWarning(f"Could not patch {path.name}: {e}") from e
    return patched != original


def patch_json_file(path: Path, transform: Callable[[dict], dict]) -> None:
    """
    Load a JSON file, transform it and write it back with two-space indents.

    Raises
    ------
    PatchWarning
        If the file is missing, not valid JSON or cannot be written.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        path.write_text(json.dumps(transform(data), indent=2) + "\n", encoding="utf-8")
    except (OSError, ValueError) as e:
        raise PatchWarning(f"Could not patch {path.name}: {e}") from e


def remove_file(path: Path) -> bool:
    """
    Delete a file if it exists.

    Returns
    -------
    bool
        True if a file was removed.

    Raises
    ------
    PatchWarning
        If the file exists but cannot be deleted.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise PatchWarning(f"Could not remove {path.name}: {e}") from e
    return True
