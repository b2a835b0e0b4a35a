"""
electroforge.generator - Project Composition Pipeline
=====================================================

This module turns a set of ``Answers`` into a ready-to-run Electron project.
``ProjectComposer`` walks a fixed sequence of stages; each one either
succeeds, records a non-fatal warning, or aborts the whole run.

Pipeline
--------
    validating                 target must be absent or empty
    manifest_built             features resolved, package.json written
    base_copied                templates/base laid down
    feature_overlays_applied   preload stripped if unused, with-<feature> overlays
    content_patched            extra files, imports, required files, dist, tsconfig
    tokens_rendered            {{TOKEN}} placeholders substituted
    dependencies_installed     <package manager> install
    vcs_initialized            git init / add / commit
    done

Any stage may move to ``aborted``. Fatal failures remove the project
directory before the error is raised, so callers never see a half-built
tree. The one exception is a non-empty target directory: nothing has been
created yet, so it is left exactly as it was.

Failure Policy
--------------
Fatal (cleanup, then raise):
    ManifestWriteError, CopyError, RenderError, InstallError, VCSError

Non-fatal (recorded in ``ScaffoldResult.warnings``):
    preload stripping, extra file copies, import injection, tsconfig pruning

Usage Example
-------------
>>> from electroforge.generator import scaffold_project
>>> from electroforge.models import Answers, ScaffoldOptions
>>> answers = Answers(app_name="demo", features=["darkmode"], scripts=["dev"])
>>> result = scaffold_project(answers, ScaffoldOptions(skip_install=True))
>>> result.final_answers.features
['darkmode', 'preload']
"""

from __future__ import annotations

import shutil
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from rich.console import Console, RenderableType
from rich.markup import escape
from rich.panel import Panel

from electroforge.errors import (
    CommandError,
    CopyError,
    DirectoryError,
    InstallError,
    ManifestWriteError,
    PatchWarning,
    RenderError,
    ScaffoldError,
    VCSError,
)
from electroforge.fileops import copy_file, copy_tree, is_empty_dir
from electroforge.models import Answers, Manifest, ScaffoldOptions
from electroforge.patches import (
    inject_imports,
    patch_file,
    patch_json_file,
    prune_include,
    remove_effect_block,
    remove_file,
    remove_preload_wiring,
)
from electroforge.presets import (
    BASE_DEPENDENCIES,
    BASE_DEV_DEPENDENCIES,
    BASE_TEMPLATE,
    DARKMODE,
    DIST_TEMPLATE,
    ENTRY_POINT,
    FEATURES,
    FRAMELESS,
    GIT,
    OVERLAY_PREFIX,
    PRELOAD,
    SCRIPTS,
)
from electroforge.process import ProcessGateway
from electroforge.render import render_template_files
from electroforge.resolver import resolve_features


if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from electroforge.presets import FeatureDefinition, ScriptDefinition


# =============================================================================
# Module-Level Configuration
# =============================================================================

console = Console()

MANIFEST_FILE = "package.json"
TSCONFIG_FILE = "tsconfig.json"

# Paths inside the generated project
MAIN_FILE = Path("src") / "main.ts"
PRELOAD_FILE = Path("src") / "preload.ts"
APP_FILE = Path("src") / "App.tsx"
GLOBAL_TYPES_FILE = Path("src") / "global.d.ts"
GLOBAL_TYPES_INCLUDE = "src/global.d.ts"

DARKMODE_IMPORT = "\n".join([
    "try {",
    "  await import('./darkmode.js');",
    "} catch {",
    "  console.error('Missing dist/darkmode.js. Ensure allowJs is enabled in "
    "tsconfig.json and darkmode.js is placed under src.');",
    "  process.exit(1);",
    "}",
])


class Stage(str, Enum):
    """States of the composition pipeline, in the order they are reached."""

    VALIDATING = "validating"
    MANIFEST_BUILT = "manifest_built"
    BASE_COPIED = "base_copied"
    FEATURE_OVERLAYS_APPLIED = "feature_overlays_applied"
    CONTENT_PATCHED = "content_patched"
    TOKENS_RENDERED = "tokens_rendered"
    DEPENDENCIES_INSTALLED = "dependencies_installed"
    VCS_INITIALIZED = "vcs_initialized"
    DONE = "done"
    ABORTED = "aborted"


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class ScaffoldResult:
    """
    Outcome of a successful scaffold run.

    Attributes
    ----------
    output_directory : Path
        Absolute path of the generated project.

    final_answers : Answers
        The answers after feature resolution (implied features included).

    manifest : Manifest
        The package.json that was written.

    warnings : list[str]
        Non-fatal patch failures, in the order they happened.

    notices : list[str]
        Messages about features that were added automatically.
    """

    output_directory: Path
    final_answers: Answers
    manifest: Manifest
    warnings: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)


# =============================================================================
# Manifest and Tokens
# =============================================================================

def build_manifest(
    answers: Answers,
    features: Mapping[str, FeatureDefinition] = FEATURES,
    scripts: Mapping[str, ScriptDefinition] = SCRIPTS,
) -> Manifest:
    """
    Assemble the package.json for the resolved answers.

    Dependencies are merged in a fixed order: base packages, then the
    fragment of every selected feature that has one, then whatever each
    selected script needs. Later merges win on a version clash.

    Parameters
    ----------
    answers : Answers
        Resolved answers.

    features : Mapping[str, FeatureDefinition]
        Feature registry. Features not in it contribute nothing.

    scripts : Mapping[str, ScriptDefinition]
        Script registry. Scripts not in it are left out of the manifest.

    Returns
    -------
    Manifest
        The manifest model, not yet written to disk.
    """
    manifest = Manifest(
        name=answers.app_name,
        description=answers.description,
        author=answers.author,
        license=answers.license,
        main=ENTRY_POINT,
    )

    selected_scripts = [scripts[s] for s in answers.scripts if s in scripts]
    for script in selected_scripts:
        manifest.scripts[script.id] = script.command

    manifest.dependencies.update(BASE_DEPENDENCIES)
    manifest.dev_dependencies.update(BASE_DEV_DEPENDENCIES)

    for feature_id in answers.features:
        definition = features.get(feature_id)
        if definition is None or not definition.has_package_fragment:
            continue
        manifest.dependencies.update(definition.dependencies)
        manifest.dev_dependencies.update(definition.dev_dependencies)

    for script in selected_scripts:
        manifest.dev_dependencies.update(script.dev_dependencies)

    return manifest


def build_tokens(answers: Answers) -> dict[str, str]:
    """Placeholder values substituted into the generated sources."""
    return {
        "APP_NAME": answers.app_name,
        "WINDOW_TITLE": answers.title,
        "AUTHOR": answers.author,
        "LICENSE": answers.license,
        "DESCRIPTION": answers.description,
        "FRAMELESS": "true" if answers.has_feature(FRAMELESS) else "false",
        "DARKMODE_IMPORT": DARKMODE_IMPORT if answers.has_feature(DARKMODE) else "",
    }


# =============================================================================
# Composer
# =============================================================================

class ProjectComposer:
    """
    Runs the composition pipeline for one set of answers.

    A composer is single-use: create one per project. ``stage`` reflects the
    last state reached and ends at ``Stage.DONE`` or ``Stage.ABORTED``.

    Parameters
    ----------
    answers : Answers
        User choices. Mutated in place by feature resolution.

    options : ScaffoldOptions | None
        Run options; defaults create the project under the current directory.

    gateway : ProcessGateway | None
        Runs ``install`` and git. Replaceable for testing.

    features, scripts : Mapping
        Registries to compose from.
    """

    def __init__(
        self,
        answers: Answers,
        options: ScaffoldOptions | None = None,
        gateway: ProcessGateway | None = None,
        features: Mapping[str, FeatureDefinition] = FEATURES,
        scripts: Mapping[str, ScriptDefinition] = SCRIPTS,
    ) -> None:
        self.answers = answers
        self.options = options or ScaffoldOptions()
        self.gateway = gateway or ProcessGateway()
        self.features = features
        self.scripts = scripts
        self.output_dir = (self.options.output_root / answers.app_name).resolve()
        self.template_root = self.options.template_root
        self.stage = Stage.VALIDATING
        self.warnings: list[str] = []
        self.notices: list[str] = []

    # -------------------------------------------------------------------------
    # Console and Failure Helpers
    # -------------------------------------------------------------------------

    def _say(self, message: RenderableType) -> None:
        if self.options.verbose:
            console.print(message)

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        self._say(f"  [yellow]⚠[/] {escape(message)}")

    @contextmanager
    def _best_effort(self) -> Iterator[None]:
        """Record a ``PatchWarning`` raised in the block instead of failing."""
        try:
            yield
        except PatchWarning as w:
            self._warn(str(w))

    def cleanup(self) -> None:
        """
        Remove the project directory.

        Best-effort: a failure is reported as a warning so it never hides
        the error that triggered the cleanup.
        """
        try:
            shutil.rmtree(self.output_dir)
        except FileNotFoundError:
            pass
        except OSError as e:
            self._warn(f"Failed to clean up '{self.output_dir}': {e}")

    def _abort(
        self,
        error_cls: type[ScaffoldError],
        message: str,
        cause: BaseException,
    ) -> NoReturn:
        failed_after = self.stage
        self.stage = Stage.ABORTED
        self.cleanup()
        self._say(f"\n[bold red]Error:[/] {escape(message)}")
        self._say(f"[dim]Aborted after '{failed_after.value}'; project directory removed.[/]")
        raise error_cls(message) from cause

    def _path(self, relative: Path | str) -> Path:
        return self.output_dir / relative

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def validate_target(self) -> None:
        """
        Create the output directory, refusing to reuse a non-empty one.

        Raises
        ------
        DirectoryError
            If the directory cannot be created or already has content. The
            directory is not touched in either case.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            empty = is_empty_dir(self.output_dir)
        except OSError as e:
            raise DirectoryError(
                f"Failed to ensure project directory '{self.output_dir}': {e}"
            ) from e

        if not empty:
            raise DirectoryError(
                f"Target directory '{self.output_dir}' exists and is not empty."
            )

    def write_manifest(self) -> Manifest:
        self.notices = resolve_features(self.answers, registry=self.features)
        for notice in self.notices:
            self._say(f"  [yellow]{escape(notice)}[/]")

        manifest = build_manifest(self.answers, self.features, self.scripts)
        try:
            self._path(MANIFEST_FILE).write_text(manifest.to_json(), encoding="utf-8")
        except OSError as e:
            self._abort(ManifestWriteError, f"Failed to write {MANIFEST_FILE}: {e}", e)

        self.stage = Stage.MANIFEST_BUILT
        return manifest

    def copy_base(self) -> None:
        try:
            copy_tree(self.template_root / BASE_TEMPLATE, self.output_dir)
        except OSError as e:
            self._abort(CopyError, f"Failed copying base templates: {e}", e)
        self.stage = Stage.BASE_COPIED

    def strip_preload(self) -> None:
        """Remove preload wiring when neither preload nor frameless is used."""
        if self.answers.has_feature(PRELOAD) or self.answers.has_feature(FRAMELESS):
            return

        with self._best_effort():
            remove_file(self._path(PRELOAD_FILE))
        with self._best_effort():
            patch_file(self._path(MAIN_FILE), remove_preload_wiring)
        with self._best_effort():
            patch_file(self._path(APP_FILE), remove_effect_block)

    def apply_overlays(self) -> None:
        for feature_id in self.answers.features:
            if feature_id == GIT:
                continue
            overlay = self.template_root / f"{OVERLAY_PREFIX}{feature_id}"
            if not overlay.is_dir():
                continue
            try:
                copy_tree(overlay, self.output_dir)
            except OSError as e:
                self._abort(CopyError, f"Failed copying {overlay.name} templates: {e}", e)
            self._say(f"  Applied {overlay.name}")
        self.stage = Stage.FEATURE_OVERLAYS_APPLIED

    def _selected_definitions(self) -> list[FeatureDefinition]:
        return [self.features[f] for f in self.answers.features if f in self.features]

    def copy_extra_files(self) -> None:
        for definition in self._selected_definitions():
            for src, dest in definition.extra_files:
                try:
                    copy_file(self.template_root / src, self._path(dest))
                except OSError as e:
                    self._warn(f"Could not copy {src} for '{definition.id}': {e}")

    def inject_main_imports(self) -> None:
        modules = [
            module
            for definition in self._selected_definitions()
            for module in definition.main_imports
        ]
        if not modules:
            return
        with self._best_effort():
            patch_file(self._path(MAIN_FILE), lambda text: inject_imports(text, modules))

    def copy_required_files(self) -> None:
        for definition in self._selected_definitions():
            for src, dest in definition.required_files:
                target = self._path(dest)
                try:
                    copy_file(self.template_root / src, target)
                except OSError as e:
                    self._abort(
                        CopyError,
                        f"Failed copying {Path(src).name} to {target}: {e}",
                        e,
                    )

    def copy_dist_overlay(self) -> None:
        if not self.answers.has_script("dist"):
            return
        overlay = self.template_root / DIST_TEMPLATE
        if not overlay.is_dir():
            return
        try:
            copy_tree(overlay, self.output_dir)
        except OSError as e:
            self._abort(CopyError, f"Failed copying {DIST_TEMPLATE} templates: {e}", e)

    def prune_global_types(self) -> None:
        """Drop global.d.ts unless preload is used, and unlist it from tsconfig."""
        global_types = self._path(GLOBAL_TYPES_FILE)
        if not self.answers.has_feature(PRELOAD):
            with self._best_effort():
                remove_file(global_types)

        if not global_types.exists():
            with self._best_effort():
                patch_json_file(
                    self._path(TSCONFIG_FILE),
                    lambda config: prune_include(config, GLOBAL_TYPES_INCLUDE),
                )
        self.stage = Stage.CONTENT_PATCHED

    def render_tokens(self) -> None:
        try:
            render_template_files(
                self.output_dir,
                build_tokens(self.answers),
                exclude={MANIFEST_FILE},
            )
        except (OSError, ValueError) as e:
            self._abort(RenderError, f"Template token rendering failed: {e}", e)
        self.stage = Stage.TOKENS_RENDERED

    def install_dependencies(self) -> None:
        pm = self.answers.package_manager.value
        if self.options.skip_install:
            self._say("  [yellow]⚠[/] Skipping dependency installation")
        else:
            self._say(f"[bold]🔧 Installing dependencies with {pm}...[/]")
            try:
                self.gateway.install(pm, self.output_dir)
            except CommandError as e:
                self._abort(
                    InstallError,
                    f"{pm} install failed: {e.reason}. Project directory cleaned up.",
                    e,
                )
        self.stage = Stage.DEPENDENCIES_INSTALLED

    def init_vcs(self) -> None:
        if not self.answers.has_feature(GIT):
            return
        self._say("[bold]🔧 Initializing git repository...[/]")
        try:
            self.gateway.init_repository(self.output_dir)
        except CommandError as e:
            shutil.rmtree(self._path(".git"), ignore_errors=True)
            self._abort(
                VCSError,
                f"Git initialization failed: {e.reason}. Cleaned up project directory.",
                e,
            )
        self.stage = Stage.VCS_INITIALIZED

    # -------------------------------------------------------------------------
    # Driver
    # -------------------------------------------------------------------------

    def scaffold(self) -> ScaffoldResult:
        """
        Run every stage in order.

        Returns
        -------
        ScaffoldResult
            Output directory, resolved answers, manifest and warnings.

        Raises
        ------
        DirectoryError
            If the target exists and is not empty (nothing is removed).
        ScaffoldError
            Any other failure. The project directory no longer exists.
        """
        self._say("")
        self._say(
            Panel(
                f"[bold blue]Creating project:[/] [green]{self.answers.app_name}[/]\n"
                f"[dim]Package manager: {self.answers.package_manager.value} | "
                f"License: {self.answers.license}[/]",
                title="[bold]electroforge[/]",
                border_style="blue",
            )
        )

        self.validate_target()

        try:
            self._say("[bold]📝 Writing package.json...[/]")
            manifest = self.write_manifest()

            self._say("[bold]📁 Copying templates...[/]")
            self.copy_base()
            self.strip_preload()
            self.apply_overlays()

            self._say("[bold]🩹 Patching sources...[/]")
            self.copy_extra_files()
            self.inject_main_imports()
            self.copy_required_files()
            self.copy_dist_overlay()
            self.prune_global_types()

            self._say("[bold]🔤 Rendering tokens...[/]")
            self.render_tokens()

            self.install_dependencies()
            self.init_vcs()
        except ScaffoldError:
            raise
        except Exception as e:
            self._abort(ScaffoldError, f"Unexpected failure: {e}", e)

        self.stage = Stage.DONE
        self._say("")
        self._say(
            Panel(
                f"[bold green]✨ Project created successfully![/]\n\n"
                f"[dim]Location:[/] {self.output_dir}\n\n"
                f"[bold]Next steps:[/]\n"
                f"  cd {self.answers.app_name}\n"
                f"  {self.answers.package_manager.value} run dev",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

        return ScaffoldResult(
            output_directory=self.output_dir,
            final_answers=self.answers,
            manifest=manifest,
            warnings=list(self.warnings),
            notices=list(self.notices),
        )


def scaffold_project(
    answers: Answers,
    options: ScaffoldOptions | None = None,
    *,
    gateway: ProcessGateway | None = None,
) -> ScaffoldResult:
    """
    Generate a new project from ``answers``.

    This is the library entry point; see ``ProjectComposer`` for the stages.

    Parameters
    ----------
    answers : Answers
        User choices. Implied features are appended in place.

    options : ScaffoldOptions | None
        ``skip_install``, output root, template root and verbosity.

    gateway : ProcessGateway | None
        Process runner for install and git.

    Returns
    -------
    ScaffoldResult
        ``output_directory``, ``final_answers`` and ``manifest``.
    """
    return ProjectComposer(answers, options, gateway).scaffold()
