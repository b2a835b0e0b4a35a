"""
electroforge.presets - Feature and Script Registry
==================================================

Static definitions the generator works from:

- ``FEATURES``: optional capabilities with their package fragments and any
  extra files or main-process imports they need.
- ``SCRIPTS``: package.json scripts and the dev-dependencies they require.
- ``IMPLICATIONS``: declarative "X implies feature Y" edges that the resolver
  closes over.
- ``BASE_DEPENDENCIES`` / ``BASE_DEV_DEPENDENCIES``: always present.

Template Layout
---------------
    templates/
    ├── base/              always copied
    ├── with-<feature>/    overlay copied when <feature> is selected
    └── with-dist/         overlay copied when the dist script is selected
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_TEMPLATE_ROOT = Path(__file__).parent / "templates"

BASE_TEMPLATE = "base"
OVERLAY_PREFIX = "with-"
DIST_TEMPLATE = "with-dist"

# Feature identifiers the composer refers to directly
PRELOAD = "preload"
FRAMELESS = "frameless"
DARKMODE = "darkmode"
GIT = "git"

ENTRY_POINT = "electron-main.mjs"


# =============================================================================
# Definitions
# =============================================================================

@dataclass(frozen=True, eq=False)
class FeatureDefinition:
    """
    A selectable feature.

    Attributes
    ----------
    id : str
        Identifier used in answers and overlay directory names.

    title : str
        Label shown in the wizard.

    mandatory : bool
        Always included, never offered as a choice.

    dependencies, dev_dependencies : dict[str, str]
        Package fragment merged into the manifest.

    extra_files : tuple[tuple[str, str], ...]
        ``(source, destination)`` pairs copied on a best-effort basis. Sources
        are relative to the template root, destinations to the project.

    main_imports : tuple[str, ...]
        Modules imported for their side effects by ``src/main.ts``.

    required_files : tuple[tuple[str, str], ...]
        Like ``extra_files``, but a failed copy aborts generation.
    """

    id: str
    title: str
    mandatory: bool = False
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    extra_files: tuple[tuple[str, str], ...] = ()
    main_imports: tuple[str, ...] = ()
    required_files: tuple[tuple[str, str], ...] = ()

    @property
    def has_package_fragment(self) -> bool:
        return bool(self.dependencies or self.dev_dependencies)


@dataclass(frozen=True, eq=False)
class ScriptDefinition:
    """A package.json script and the dev-dependencies it relies on."""

    id: str
    title: str
    command: str
    dev_dependencies: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Implication:
    """
    Edge stating that ``trigger`` implies the feature ``implies``.

    ``kind`` says whether the trigger is a feature or a script identifier.
    """

    trigger: str
    implies: str
    kind: str = "feature"
    message: str = ""


# =============================================================================
# Commands
# =============================================================================

def electron_command(entry: str = ENTRY_POINT) -> str:
    """
    Command that launches Electron on the entry point.

    Chromium refuses to start sandboxed as root, so ``--no-sandbox`` is added
    when the generator itself runs as root (containers, CI).
    """
    geteuid = getattr(os, "geteuid", None)
    if geteuid is not None and geteuid() == 0:
        return f"electron --no-sandbox {entry}"
    return f"electron {entry}"


VITE = "vite --config vite.config.js"
DEV_SERVER_URL = "http://localhost:5173"

TYPESCRIPT_TOOLCHAIN = {
    "typescript": "^5.4.5",
    "@types/node": "^20.0.0",
}


# =============================================================================
# Registry
# =============================================================================

BASE_DEPENDENCIES: dict[str, str] = {
    "react": "^18.0.0",
    "react-dom": "^18.0.0",
    "electron": "^29.0.0",
}

BASE_DEV_DEPENDENCIES: dict[str, str] = {
    "vite": "^4.5.14",
    "@vitejs/plugin-react": "^3.0.0",
    "typescript": "^5.4.5",
    "@types/node": "^20.0.0",
    "@types/react": "^18.0.0",
    "@types/react-dom": "^18.0.0",
}

FEATURES: dict[str, FeatureDefinition] = {
    feature.id: feature
    for feature in (
        FeatureDefinition(
            id=PRELOAD,
            title="Preload script (secure IPC bridge)",
        ),
        FeatureDefinition(
            id=FRAMELESS,
            title="Frameless window with custom controls",
        ),
        FeatureDefinition(
            id=DARKMODE,
            title="Dark mode toggle (nativeTheme)",
            required_files=(
                ("with-darkmode/src/darkmode.js", "src/darkmode.js"),
                ("with-darkmode/src/darkmode.js", "src/darkmode.js"),
            ),
        ),
        FeatureDefinition(
            id="sqlite",
            title="SQLite database (better-sqlite3)",
            dependencies={"better-sqlite3": "^12.2.0"},
        ),
        FeatureDefinition(
            id="sso",
            title="Single sign-on helper",
            dependencies={"node-fetch": "^3.3.2"},
            extra_files=(("with-sso/auth.js", "auth.js"),),
            main_imports=("../auth.js",),
        ),
        FeatureDefinition(
            id="eslint",
            title="ESLint",
            dev_dependencies={
                "eslint": "^8.56.0",
                "@typescript-eslint/parser": "^6.7.0",
                "@typescript-eslint/eslint-plugin": "^6.7.0",
            },
        ),
        FeatureDefinition(
            id="prettier",
            title="Prettier",
            dev_dependencies={"prettier": "^3.6.2"},
        ),
        FeatureDefinition(
            id=GIT,
            title="Initialize a git repository",
        ),
    )
}

SCRIPTS: dict[str, ScriptDefinition] = {
    script.id: script
    for script in (
        ScriptDefinition(
            id="dev",
            title="dev - watch TypeScript, Vite and Electron together",
            command=(
                'cross-env NODE_ENV=development concurrently "tsc -w" '
                f'"{VITE}" "{electron_command()}"'
            ),
            dev_dependencies={
                **TYPESCRIPT_TOOLCHAIN,
                "cross-env": "^7.0.3",
                "concurrently": "^8.2.2",
            },
        ),
        ScriptDefinition(
            id="build",
            title="build - compile main process and bundle renderer",
            command="tsc && vite build --config vite.config.js",
            dev_dependencies=dict(TYPESCRIPT_TOOLCHAIN),
        ),
        ScriptDefinition(
            id="start",
            title="start - serve renderer and launch Electron when ready",
            command=(
                f'concurrently "{VITE}" '
                f'"wait-on {DEV_SERVER_URL} && {electron_command()}"'
            ),
            dev_dependencies={
                "concurrently": "^8.2.2",
                "wait-on": "^7.0.1",
            },
        ),
        ScriptDefinition(
            id="dist",
            title="dist - package installers with electron-builder",
            command="npm run build && electron-builder",
            dev_dependencies={"electron-builder": "^26.0.0"},
        ),
        ScriptDefinition(
            id="lint",
            title="lint - run ESLint",
            command="eslint src --ext .ts,.tsx",
        ),
        ScriptDefinition(
            id="format",
            title="format - run Prettier",
            command="prettier --write .",
        ),
        ScriptDefinition(
            id="clean",
            title="clean - remove build output",
            command="rimraf dist release",
            dev_dependencies={"rimraf": "^6.0.1"},
        ),
        ScriptDefinition(
            id="reset",
            title="reset - remove build output and node_modules",
            command="rimraf dist release node_modules",
            dev_dependencies={"rimraf": "^6.0.1"},
        ),
    )
}

IMPLICATIONS: tuple[Implication, ...] = (
    Implication(
        trigger=FRAMELESS,
        implies=PRELOAD,
        message="Preload enabled automatically for frameless windows.",
    ),
    Implication(
        trigger=DARKMODE,
        implies=PRELOAD,
        message="Preload enabled automatically for dark mode.",
    ),
    Implication(
        trigger="lint",
        implies="eslint",
        kind="script",
        message="ESLint feature added because lint script selected.",
    ),
    Implication(
        trigger="format",
        implies="prettier",
        kind="script",
        message="Prettier feature added because format script selected.",
    ),
)
