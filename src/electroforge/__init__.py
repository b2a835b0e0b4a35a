"""
electroforge - Electron App Generator
=====================================

A CLI tool that scaffolds Electron + React + TypeScript desktop applications
from a base template and a set of optional features.

Features
--------
- **Composable templates**: a base tree plus one overlay per feature
- **Implied features**: dark mode and frameless windows pull in the preload
  bridge, the lint and format scripts pull in ESLint and Prettier
- **Clean failure**: any fatal error removes the half-built project
- **Package manager choice**: npm, yarn or pnpm

Quick Start
-----------
```bash
# Interactive wizard
electroforge new my-app

# Non-interactive
electroforge new my-app -f darkmode -f git -s dev -s build --yes
```

Example
-------
>>> from electroforge import Answers, ScaffoldOptions, scaffold_project
>>> answers = Answers(app_name="my-app", scripts=["dev"])
>>> result = scaffold_project(answers, ScaffoldOptions(skip_install=True))
>>> result.manifest.scripts["dev"].startswith("cross-env NODE_ENV=development")
True

Architecture
------------
- ``cli``: Typer command line interface and questionary wizard
- ``generator``: the composition pipeline (``ProjectComposer``)
- ``resolver``: implied-feature closure
- ``presets``: feature and script registry
- ``patches``: targeted source edits
- ``render``: ``{{TOKEN}}`` substitution
- ``fileops``: template tree copying
- ``process``: package manager and git invocation
- ``models``: Pydantic models
- ``errors``: stage-labelled exceptions
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from electroforge.errors import ScaffoldError
from electroforge.generator import ScaffoldResult, scaffold_project
from electroforge.models import Answers, Manifest, PackageManager, ScaffoldOptions


__all__ = [
    "Answers",
    "Manifest",
    "PackageManager",
    "ScaffoldError",
    "ScaffoldOptions",
    "ScaffoldResult",
    "__version__",
    "scaffold_project",
]
