"""
electroforge.cli - Command Line Interface
=========================================

Typer application wrapping the generator. Every answer can come from three
places, in increasing priority:

    1. an answers file (``--config answers.toml``)
    2. command line flags
    3. the interactive wizard, for anything still missing

``--yes`` skips the wizard entirely and uses defaults for whatever is left.

Architecture
------------
    app (main entry point)
    ├── new       - Create a new Electron project
    ├── features  - List available features
    └── scripts   - List available scripts

Usage Examples
--------------
Interactive mode:
    $ electroforge new my-app

Non-interactive mode:
    $ electroforge new my-app -f darkmode -f git -s dev -s build --yes

From an answers file, without installing dependencies:
    $ SKIP_INSTALL=1 electroforge new --config answers.toml --yes
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from electroforge import __version__
from electroforge.errors import DirectoryError, ScaffoldError
from electroforge.generator import scaffold_project
from electroforge.models import (
    APP_NAME_PATTERN,
    Answers,
    PackageManager,
    ScaffoldOptions,
    load_answers_file,
)
from electroforge.presets import FEATURES, SCRIPTS
from electroforge.resolver import mandatory_features, resolve_features


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="electroforge",
    help="Scaffold Electron + React + TypeScript desktop applications.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]electroforge[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Electron app generator[/]",
            border_style="green",
        ))
        raise typer.Exit()


def _fail(message: str) -> typer.Exit:
    rprint(f"[red]Error:[/] {escape(message)}")
    return typer.Exit(1)


# =============================================================================
# Interactive Prompts
# =============================================================================

def _ask(question: questionary.Question):
    """Run a questionary prompt, aborting on Ctrl-C / Esc."""
    result = question.ask()
    if result is None:
        raise typer.Abort()
    return result


def prompt_app_name() -> str:
    return _ask(questionary.text(
        "App name (alphanumeric, dashes, underscores, no spaces):",
        validate=lambda v: bool(APP_NAME_PATTERN.match(v))
        or "Alphanumeric, dashes, underscores only, no spaces allowed.",
    ))


def prompt_metadata(values: dict) -> None:
    """Ask for any metadata field missing from ``values``, in place."""
    questions = [
        ("title", "Window title:", "MyApp"),
        ("description", "App description:", "A secure Electron app."),
        ("author", "Author:", ""),
        ("license", "License:", "MIT"),
    ]
    for key, message, default in questions:
        if key not in values:
            values[key] = _ask(questionary.text(message, default=default))


def prompt_features() -> list[str]:
    """
    Ask which optional features to include.

    Mandatory features are listed for information and always included.

    Returns
    -------
    list[str]
        Mandatory features followed by the selected optional ones.
    """
    mandatory = mandatory_features()
    if mandatory:
        listing = "\n".join(f"- {FEATURES[f].title}" for f in mandatory)
        console.print(Panel(f"Mandatory features:\n{listing}", border_style="cyan"))

    selected = _ask(questionary.checkbox(
        "Select optional features:",
        choices=[
            questionary.Choice(feature.title, value=feature.id)
            for feature in FEATURES.values()
            if not feature.mandatory
        ],
    ))
    return [*mandatory, *selected]


def prompt_package_manager() -> PackageManager:
    return _ask(questionary.select(
        "Choose your package manager:",
        choices=[questionary.Choice(pm.value, value=pm) for pm in PackageManager],
        default=PackageManager.NPM,
    ))


def prompt_scripts() -> list[str]:
    return _ask(questionary.checkbox(
        "Select dev scripts to include:",
        choices=[
            questionary.Choice(script.title, value=script.id)
            for script in SCRIPTS.values()
        ],
        validate=lambda picked: len(picked) > 0 or "Select at least one script.",
    ))


def render_summary(answers: Answers) -> None:
    """Print the configuration as a table before confirming."""
    table = Table(title="Project Summary", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", answers.app_name)
    table.add_row("Title", answers.title)
    table.add_row("Author", answers.author or "-")
    table.add_row("License", answers.license)
    table.add_row("Package Manager", answers.package_manager.value)
    table.add_row("Features", ", ".join(answers.features) or "none")
    table.add_row("Scripts", ", ".join(answers.scripts) or "none")

    console.print()
    console.print(table)
    console.print()


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]electroforge[/] - Electron app generator.

    [bold]Quick Start:[/]

        electroforge new my-app
    """


# =============================================================================
# New Command
# =============================================================================

@app.command()
def new(
    name: Annotated[
        str | None,
        typer.Argument(help="Name of the app to create"),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", help="Window title"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="App description"),
    ] = None,
    author: Annotated[
        str | None,
        typer.Option("--author", "-a", help="Author name"),
    ] = None,
    license_: Annotated[
        str | None,
        typer.Option("--license", "-l", help="License identifier"),
    ] = None,
    package_manager: Annotated[
        str | None,
        typer.Option("--package-manager", "-m", help="npm, yarn or pnpm"),
    ] = None,
    feature: Annotated[
        list[str] | None,
        typer.Option("--feature", "-f", help="Feature to include (repeatable)"),
    ] = None,
    script: Annotated[
        list[str] | None,
        typer.Option("--script", "-s", help="Script to include (repeatable)"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the app in (default: current directory)",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="TOML answers file"),
    ] = None,
    skip_install: Annotated[
        bool,
        typer.Option(
            "--skip-install",
            envvar="SKIP_INSTALL",
            help="Do not install dependencies after generation",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip all prompts, use defaults"),
    ] = False,
) -> None:
    """
    Create a new Electron project.

    [bold]Examples:[/]

        # Interactive wizard
        electroforge new my-app

        # Frameless window with dark mode, no prompts
        electroforge new my-app -f frameless -f darkmode -s dev --yes
    """
    values: dict = {}
    if config is not None:
        try:
            values = load_answers_file(config)
        except (OSError, ValueError) as e:
            raise _fail(f"Could not read answers file '{config}': {e}")

    overrides = {
        "app_name": name,
        "title": title,
        "description": description,
        "author": author,
        "license": license_,
        "features": feature,
        "scripts": script,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    if package_manager is not None:
        try:
            values["package_manager"] = PackageManager(package_manager.lower())
        except ValueError:
            valid = ", ".join(pm.value for pm in PackageManager)
            raise _fail(f"Invalid package manager '{package_manager}'. Valid: {valid}")

    should_prompt = not yes
    if should_prompt:
        if "app_name" not in values:
            values["app_name"] = prompt_app_name()
        prompt_metadata(values)
        if "features" not in values:
            values["features"] = prompt_features()
        if "package_manager" not in values:
            values["package_manager"] = prompt_package_manager()
        if "scripts" not in values:
            values["scripts"] = prompt_scripts()
    elif "app_name" not in values:
        raise _fail("An app name is required with --yes.")

    try:
        answers = Answers.model_validate(values)
    except ValidationError as e:
        raise _fail(str(e))

    for notice in resolve_features(answers):
        console.print(f"[yellow]{escape(notice)}[/]")

    if should_prompt:
        render_summary(answers)
        if not questionary.confirm("Proceed with project creation?", default=True).ask():
            rprint("[red]Project creation aborted.[/]")
            raise typer.Exit(1)

    options = ScaffoldOptions(
        skip_install=skip_install,
        output_root=output_dir or Path.cwd(),
        verbose=True,
    )

    try:
        scaffold_project(answers, options)
    except DirectoryError as e:
        raise _fail(str(e))
    except ScaffoldError:
        # Already reported by the composer
        raise typer.Exit(1)


# =============================================================================
# Registry Listings
# =============================================================================

@app.command()
def features() -> None:
    """List the features that can be added to a project."""
    table = Table(title="Features")
    table.add_column("Feature", style="cyan")
    table.add_column("Description")
    table.add_column("Packages", style="dim")

    for definition in FEATURES.values():
        packages = [*definition.dependencies, *definition.dev_dependencies]
        label = definition.title + (" [bold](mandatory)[/]" if definition.mandatory else "")
        table.add_row(definition.id, label, ", ".join(packages) or "-")

    console.print(table)


@app.command()
def scripts() -> None:
    """List the package.json scripts that can be added to a project."""
    table = Table(title="Scripts")
    table.add_column("Script", style="cyan")
    table.add_column("Command", overflow="fold")
    table.add_column("Dev dependencies", style="dim")

    for definition in SCRIPTS.values():
        table.add_row(
            definition.id,
            escape(definition.command),
            ", ".join(definition.dev_dependencies) or "-",
        )

    console.print(table)


if __name__ == "__main__":
    app()
