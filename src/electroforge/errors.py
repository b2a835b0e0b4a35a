"""
electroforge.errors - Error Taxonomy
====================================

Every failure the generator can surface derives from ``ScaffoldError`` and
carries the name of the pipeline stage that failed. Fatal errors are raised
only after the half-built project directory has been removed.

Hierarchy
---------
    ScaffoldError
    ├── DirectoryError      (target exists and is not empty, no cleanup)
    ├── ManifestWriteError  (package.json could not be written)
    ├── CopyError           (template tree or required file copy failed)
    ├── RenderError         (token rendering failed)
    ├── InstallError        (package manager install failed)
    └── VCSError            (git init/add/commit failed)

    PatchWarning            (non-fatal content patch failure)
    CommandError            (external command failed, wrapped by the composer)
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """
    Base class for stage-labelled generation failures.

    Parameters
    ----------
    message : str
        Human-readable description of what went wrong.

    stage : str | None
        Pipeline stage label. Defaults to the subclass' ``default_stage``.
    """

    default_stage = "scaffold"

    def __init__(self, message: str, stage: str | None = None) -> None:
        self.stage = stage or self.default_stage
        super().__init__(f"[{self.stage}] {message}")


class DirectoryError(ScaffoldError):
    """Target directory exists and is not empty."""

    default_stage = "validating"


class ManifestWriteError(ScaffoldError):
    """package.json could not be written."""

    default_stage = "manifest"


class CopyError(ScaffoldError):
    """A template tree or a required file could not be copied."""

    default_stage = "copy"


class RenderError(ScaffoldError):
    """Token rendering failed somewhere in the output tree."""

    default_stage = "render"


class InstallError(ScaffoldError):
    """The package manager exited with an error."""

    default_stage = "install"


class VCSError(ScaffoldError):
    """Initializing the git repository failed."""

    default_stage = "vcs"


class PatchWarning(Exception):
    """
    A cosmetic content patch could not be applied.

    Raised by the helpers in ``electroforge.patches`` and caught by the
    composer, which records the message and keeps going.
    """


class CommandError(Exception):
    """
    An external command failed to start or exited non-zero.

    Attributes
    ----------
    command : list[str]
        The argv that was executed.

    returncode : int | None
        Exit status, or None if the command could not be started.

    stderr : str
        Captured standard error (empty when stdio was inherited).
    """

    def __init__(
        self,
        command: list[str],
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(self.reason)

    @property
    def reason(self) -> str:
        cmd = " ".join(self.command)
        if self.returncode is None:
            text = f"could not run '{cmd}'"
        else:
            text = f"'{cmd}' exited with status {self.returncode}"
        if self.stderr.strip():
            text += f": {self.stderr.strip()}"
        return text
