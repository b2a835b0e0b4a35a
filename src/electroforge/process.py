"""
electroforge.process - External Commands
========================================

Runs the package manager and git on behalf of the composer. Both are
treated as black boxes: a command either succeeds or raises
``CommandError`` describing how it failed.

No timeout is applied. A hung ``npm install`` hangs the generator, which is
acceptable for an interactive tool where the user can interrupt it.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

from electroforge.errors import CommandError


if TYPE_CHECKING:
    from pathlib import Path


INITIAL_COMMIT_MESSAGE = "Initial commit"


class ProcessGateway:
    """
    Thin wrapper around ``subprocess.run`` for the commands the generator needs.

    The composer receives an instance so tests can substitute a fake.
    """

    def run(self, command: list[str], cwd: Path, *, capture: bool = True) -> None:
        """
        Run ``command`` in ``cwd`` and raise if it fails.

        Parameters
        ----------
        command : list[str]
            Program and arguments.

        cwd : Path
            Working directory.

        capture : bool, default=True
            Capture output (used for the error message). When False the
            child inherits the parent's standard streams.

        Raises
        ------
        CommandError
            If the program is missing or exits non-zero.
        """
        try:
            subprocess.run(
                command,
                cwd=cwd,
                check=True,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as e:
            raise CommandError(command) from e
        except subprocess.CalledProcessError as e:
            raise CommandError(command, e.returncode, e.stderr or "") from e

    def install(self, package_manager: str, cwd: Path) -> None:
        """Run ``<package_manager> install`` with inherited stdio."""
        self.run([package_manager, "install"], cwd, capture=False)

    def init_repository(self, cwd: Path) -> None:
        """Create a git repository and commit everything in it."""
        self.run(["git", "init"], cwd)
        self.run(["git", "add", "."], cwd)
        self.run(["git", "commit", "-m", INITIAL_COMMIT_MESSAGE], cwd)
