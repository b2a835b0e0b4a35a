"""
pytest configuration and shared fixtures for electroforge tests.

Fixtures
--------
output_root : Path
    Empty directory projects are generated into.

options : ScaffoldOptions
    Options that skip dependency installation and write into output_root.

make_answers : Callable[..., Answers]
    Factory for answers with test defaults.

gateway : FakeGateway
    Records install/git calls instead of running anything.

template_root : Path
    Writable copy of the bundled templates, for breaking things on purpose.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from electroforge.errors import CommandError
from electroforge.models import Answers, ScaffoldOptions
from electroforge.presets import DEFAULT_TEMPLATE_ROOT


class FakeGateway:
    """Stands in for ProcessGateway; optionally fails install or git."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.fail_install = False
        self.fail_git = False

    def install(self, package_manager: str, cwd: Path) -> None:
        self.calls.append(("install", package_manager, str(cwd)))
        if self.fail_install:
            raise CommandError([package_manager, "install"], 1, "ERESOLVE unable to resolve")

    def init_repository(self, cwd: Path) -> None:
        self.calls.append(("git", str(cwd)))
        if self.fail_git:
            (cwd / ".git").mkdir(exist_ok=True)
            raise CommandError(["git", "commit", "-m", "Initial commit"], 128, "no identity")


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    root = tmp_path / "projects"
    root.mkdir()
    return root


@pytest.fixture
def options(output_root: Path) -> ScaffoldOptions:
    return ScaffoldOptions(skip_install=True, output_root=output_root)


@pytest.fixture
def make_answers():
    """Build Answers with short test defaults."""

    def _make(**overrides) -> Answers:
        values = {
            "app_name": "test-app",
            "title": "Test",
            "description": "",
            "author": "",
            "license": "MIT",
        }
        values.update(overrides)
        return Answers(**values)

    return _make


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    shutil.copytree(DEFAULT_TEMPLATE_ROOT, root)
    return root


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring external tools such as git"
    )
