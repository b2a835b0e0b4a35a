"""
electroforge.models - Pydantic Models for Generator Input and Output
====================================================================

This module defines the data models that flow through the generator:

    Answers           what the user chose (wizard, flags or answers file)
    ├── PackageManager (enum)
    ├── features       ordered, de-duplicated feature identifiers
    └── scripts        ordered, de-duplicated script identifiers

    Manifest          the package.json written into the new project
    ScaffoldOptions   how the composer should run (output root, templates...)

Using Pydantic gives us validation of the project name and package manager up
front, so the composer never starts on input it cannot honour.

Usage Example
-------------
>>> from electroforge.models import Answers
>>> answers = Answers(app_name="my-app", features=["darkmode"], scripts=["dev"])
>>> answers.has_feature("darkmode")
True
>>> Answers.model_validate({"appName": "my-app", "packageManager": "pnpm"}).package_manager
<PackageManager.PNPM: 'pnpm'>
"""

from __future__ import annotations

import json
import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from electroforge.presets import DEFAULT_TEMPLATE_ROOT


try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found,no-redef]


APP_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")

# camelCase keys accepted in answers files
ANSWER_ALIASES = {
    "appName": "app_name",
    "packageManager": "package_manager",
    "autoPreload": "auto_preload",
}


# =============================================================================
# Enumerations
# =============================================================================

class PackageManager(str, Enum):
    """
    Package managers the generated project can be installed with.

    The value is also the executable name used for ``<pm> install``.
    """

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


# =============================================================================
# Answers
# =============================================================================

class Answers(BaseModel):
    """
    Configuration choices collected from the user.

    Answers are captured once per invocation. The feature resolver mutates
    ``features`` and ``auto_preload`` in place when it appends implied
    features, so the object handed back in the scaffold result reflects the
    final, resolved selection.

    Attributes
    ----------
    app_name : str
        Directory and package name. Letters, digits, dashes and underscores.

    title : str
        Window title of the generated application.

    description : str
        Manifest description.

    author : str
        Manifest author.

    license : str
        SPDX identifier written to the manifest.

    package_manager : PackageManager
        Tool used for ``install`` after generation.

    features : list[str]
        Feature identifiers. Unique; first-seen order is kept because overlay
        templates are applied in this order.

    scripts : list[str]
        Script identifiers to expose in the manifest.

    auto_preload : bool
        Set by the resolver when ``preload`` was added automatically.

    Examples
    --------
    >>> Answers(app_name="demo", features=["git", "git", "sso"]).features
    ['git', 'sso']
    """

    model_config = ConfigDict(populate_by_name=True)

    app_name: str = Field(
        alias="appName",
        description="Project name (directory and package name)",
        min_length=1,
        max_length=214,
    )
    title: str = Field(
        default="MyApp",
        description="Window title",
    )
    description: str = Field(
        default="A secure Electron app.",
        description="Short project description",
    )
    author: str = Field(
        default="",
        description="Author written to package.json",
    )
    license: str = Field(
        default="MIT",
        description="License identifier",
    )
    package_manager: PackageManager = Field(
        default=PackageManager.NPM,
        alias="packageManager",
        description="Package manager used to install dependencies",
    )
    features: list[str] = Field(
        default_factory=list,
        description="Selected feature identifiers",
    )
    scripts: list[str] = Field(
        default_factory=list,
        description="Selected script identifiers",
    )
    auto_preload: bool = Field(
        default=False,
        alias="autoPreload",
        description="True when preload was enabled by another feature",
    )

    @field_validator("app_name")
    @classmethod
    def validate_app_name(cls, v: str) -> str:
        """
        Reject names that cannot be used as a directory and package name.

        Raises
        ------
        ValueError
            If the name contains anything besides letters, digits, dashes
            and underscores.
        """
        v = v.strip()
        if not APP_NAME_PATTERN.match(v):
            msg = (
                f"Invalid app name '{v}'. Use letters, numbers, dashes and "
                "underscores only, no spaces."
            )
            raise ValueError(msg)
        return v

    @field_validator("features", "scripts")
    @classmethod
    def deduplicate(cls, v: list[str]) -> list[str]:
        """Strip identifiers and drop repeats, keeping first-seen order."""
        cleaned = (item.strip() for item in v)
        return list(dict.fromkeys(item for item in cleaned if item))

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    def has_script(self, script: str) -> bool:
        return script in self.scripts

    @classmethod
    def from_toml(cls, path: Path) -> Answers:
        """
        Load answers from a TOML file.

        Keys may use either the snake_case field names or the camelCase
        aliases (``appName``, ``packageManager``).

        Parameters
        ----------
        path : Path
            Path to the answers file.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist.
        ValidationError
            If the file has invalid values.
        """
        return cls.model_validate(load_answers_file(path))


# =============================================================================
# Manifest
# =============================================================================

class Manifest(BaseModel):
    """
    The package.json of the generated project.

    Field order matches the key order written to disk. ``module_type`` and
    ``dev_dependencies`` serialize under their package.json names.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str = "0.1.0"
    description: str = ""
    author: str = ""
    license: str = "MIT"
    module_type: str = Field(default="module", alias="type")
    main: str = "electron-main.mjs"
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(
        default_factory=dict,
        alias="devDependencies",
    )

    def to_json(self) -> str:
        """Serialize with two-space indentation and a trailing newline."""
        return json.dumps(self.model_dump(by_alias=True), indent=2) + "\n"


# =============================================================================
# Composer Options
# =============================================================================

class ScaffoldOptions(BaseModel):
    """
    Options controlling a single scaffold run.

    Attributes
    ----------
    skip_install : bool
        Do not run ``<package manager> install``.

    output_root : Path
        Parent directory; the project is created at ``output_root/app_name``.

    template_root : Path
        Directory holding ``base`` and the ``with-<feature>`` overlays.

    verbose : bool
        Print progress to the console.
    """

    skip_install: bool = False
    output_root: Path = Field(default_factory=Path.cwd)
    template_root: Path = DEFAULT_TEMPLATE_ROOT
    verbose: bool = False


# =============================================================================
# Answers Files
# =============================================================================

def load_answers_file(path: Path) -> dict:
    """
    Read an answers file into a plain dict keyed by field name.

    camelCase aliases are normalized to the snake_case field names so the
    result can be merged with command line overrides before validation.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    tomllib.TOMLDecodeError
        If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)

    return {ANSWER_ALIASES.get(key, key): value for key, value in data.items()}
