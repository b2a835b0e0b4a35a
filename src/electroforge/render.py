"""
electroforge.render - Token Substitution
========================================

Replaces ``{{TOKEN}}`` placeholders in the generated project's text files.

This is deliberately a flat find/replace, not a template language:

- Only names present in the token mapping are replaced; any other
  ``{{...}}`` (for example a JSX ``style={{ ... }}`` object) is left alone.
- All tokens are matched by a single combined pattern, so each file is
  rewritten in one pass and a replacement value that happens to contain a
  placeholder is never expanded again.
- Only files with known text extensions are touched. Images, fonts and
  other binary assets are never read.

Example
-------
>>> substitute_tokens("<title>{{WINDOW_TITLE}}</title>", {"WINDOW_TITLE": "Demo"})
'<title>Demo</title>'
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Collection, Mapping
    from pathlib import Path


# Extensions of files that may contain placeholders
TEXT_SUFFIXES = frozenset({
    ".cjs",
    ".css",
    ".html",
    ".js",
    ".json",
    ".jsx",
    ".md",
    ".mjs",
    ".scss",
    ".ts",
    ".tsx",
    ".txt",
    ".yaml",
    ".yml",
})

# Extension-less dotfiles that are also rendered
TEXT_FILENAMES = frozenset({
    ".editorconfig",
    ".env",
    ".eslintignore",
    ".gitignore",
    ".npmrc",
    ".prettierignore",
    ".prettierrc",
})

SKIP_DIRS = frozenset({".git", "node_modules"})


def is_renderable(path: Path) -> bool:
    return path.suffix.lower() in TEXT_SUFFIXES or path.name in TEXT_FILENAMES


def compile_tokens(tokens: Mapping[str, str]) -> re.Pattern[str] | None:
    """Build one alternation pattern matching every ``{{NAME}}`` in ``tokens``."""
    if not tokens:
        return None
    names = sorted(tokens, key=len, reverse=True)
    alternation = "|".join(re.escape(name) for name in names)
    return re.compile(r"\{\{(" + alternation + r")\}\}")


def substitute_tokens(
    content: str,
    tokens: Mapping[str, str],
    pattern: re.Pattern[str] | None = None,
) -> str:
    """
    Replace every known placeholder in ``content`` in a single pass.

    Parameters
    ----------
    content : str
        Text to render.

    tokens : Mapping[str, str]
        Placeholder name (without braces) to replacement value.

    pattern : re.Pattern | None
        Precompiled pattern from ``compile_tokens``; built on demand if omitted.

    Returns
    -------
    str
        Rendered text.
    """
    if pattern is None:
        pattern = compile_tokens(tokens)
    if pattern is None:
        return content
    return pattern.sub(lambda m: tokens[m.group(1)], content)


def iter_renderable_files(
    root: Path,
    exclude: Collection[str] = (),
) -> list[Path]:
    """
    List eligible files under ``root`` in sorted order, skipping VCS and deps.

    ``exclude`` holds POSIX paths relative to ``root`` that are never listed.
    """
    files: list[Path] = []
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if any(part in SKIP_DIRS for part in relative.parts):
            continue
        if relative.as_posix() in exclude:
            continue
        if path.is_file() and is_renderable(path):
            files.append(path)
    return files


def render_template_files(
    root: Path,
    tokens: Mapping[str, str],
    exclude: Collection[str] = (),
) -> list[Path]:
    """
    Render placeholders across the whole output tree, in place.

    Parameters
    ----------
    root : Path
        Project directory.

    tokens : Mapping[str, str]
        Placeholder name to replacement value.

    exclude : Collection[str]
        Relative paths left as they are, such as files written from user
        input that must not be expanded.

    Returns
    -------
    list[Path]
        Files whose content changed.

    Raises
    ------
    OSError
        If a file cannot be read or written.
    UnicodeDecodeError
        If a file with a text extension is not valid UTF-8.
    """
    pattern = compile_tokens(tokens)
    if pattern is None:
        return []

    changed: list[Path] = []
    for path in iter_renderable_files(root, exclude):
        original = path.read_text(encoding="utf-8")
        rendered = substitute_tokens(original, tokens, pattern)
        if rendered != original:
            path.write_text(rendered, encoding="utf-8")
            changed.append(path)

    return changed
