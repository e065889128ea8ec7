"""Core data models for the WebCore installer."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

FOLDER_NAME_PATTERN = r"^[a-z0-9-]+$"

# Package name of the placeholder module shipped by the template
PLACEHOLDER_PACKAGE = "dummy"


def is_valid_module_name(name: str) -> bool:
    """Check a Go module name looks like a repository path.

    Only a slash is required and spaces are rejected. Failing this check is a
    warning, the installer keeps the value.
    """
    return "/" in name and " " not in name


def folder_name_error(name: str) -> str | None:
    """Explain why a module folder name cannot be used, or None if it can.

    The placeholder folder is renamed into the new one, so its name is taken.
    """
    if not re.match(FOLDER_NAME_PATTERN, name):
        return "Folder name may only contain lowercase letters, numbers, and hyphens"
    if name == PLACEHOLDER_PACKAGE:
        return f"Folder name '{name}' is reserved for the template placeholder module"
    return None


def is_valid_folder_name(name: str) -> bool:
    """Check a module folder name can be used for a new mono-repo module."""
    return folder_name_error(name) is None


def default_module_mod_name(module_name: str, folder_name: str) -> str:
    """Derive the Go module name of a mono-repo member module."""
    return f"{module_name}-mod-{folder_name}"


class ProjectMode(str, Enum):
    """Project layout variants."""

    MONO_REPO = "mono-repo"
    SIMPLE = "simple"


class LibraryOption(BaseModel):
    """An optional library integration the generated project can load."""

    name: str = Field(..., description="Namespaced catalog key, e.g. database:postgres")
    description: str = Field(..., description="Human-readable label")
    package_path: str = Field(..., description="Go import path of the library")
    loader_name: str | None = Field(
        default=None,
        description="Explicit loader type name, derived from the key when omitted",
    )
    enabled: bool = Field(default=False, description="Selected by default")

    @property
    def loader(self) -> str:
        """Loader type constructed for this library in the manifest."""
        if self.loader_name:
            return self.loader_name
        suffix = self.name.split(":")[-1]
        return f"{suffix[:1].upper()}{suffix[1:]}Loader"


class Feature(BaseModel):
    """A module feature whose folders are kept only when selected."""

    name: str = Field(..., description="Feature key")
    description: str = Field(..., description="Human-readable label")
    enabled: bool = Field(default=True, description="Selected by default")
    folders: list[str] = Field(
        default_factory=list,
        description="Module-relative folders removed when the feature is not selected",
    )


class InstallConfig(BaseModel):
    """Answers collected for a single installation run."""

    project_dir: Path = Field(..., description="Directory the template is cloned into")
    module_name: str = Field(..., description="Go module name of the main application")
    selected_libraries: list[LibraryOption] = Field(default_factory=list)
    project_mode: ProjectMode = Field(default=ProjectMode.MONO_REPO)
    folder_name: str | None = Field(
        default=None,
        description="Module folder name (mono-repo only)",
    )
    module_mod_name: str | None = Field(
        default=None,
        description="Go module name of the module (mono-repo only)",
    )
    selected_features: list[Feature] = Field(default_factory=list)
    git_init: bool = Field(default=False)

    @field_validator("project_dir", mode="before")
    @classmethod
    def strip_trailing_separator(cls, v: str | Path) -> str | Path:
        """Drop a trailing slash or backslash from the project directory."""
        if isinstance(v, str) and len(v) > 1:
            return v.rstrip("/\\") or v
        return v

    @field_validator("folder_name")
    @classmethod
    def validate_folder_name(cls, v: str | None) -> str | None:
        """Validate the module folder name."""
        if v is not None:
            msg = folder_name_error(v)
            if msg:
                raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def check_mono_repo_fields(self) -> InstallConfig:
        """Require a folder name in mono-repo mode and derive the module name."""
        if self.project_mode == ProjectMode.MONO_REPO:
            if not self.folder_name:
                msg = "Mono-repo projects require a module folder name"
                raise ValueError(msg)
            if not self.module_mod_name:
                self.module_mod_name = default_module_mod_name(
                    self.module_name, self.folder_name,
                )
        return self

    @property
    def is_mono_repo(self) -> bool:
        return self.project_mode == ProjectMode.MONO_REPO

    @property
    def webcore_dir(self) -> Path:
        return self.project_dir / "webcore"

    @property
    def placeholder_dir(self) -> Path:
        return self.project_dir / "modules" / "dummy"

    @property
    def module_dir(self) -> Path:
        """Where the module code lives once the layout is applied."""
        if self.is_mono_repo:
            return self.project_dir / "modules" / str(self.folder_name)
        return self.webcore_dir / "app"

    @property
    def package_name(self) -> str:
        """Go package name of the module."""
        return str(self.folder_name) if self.is_mono_repo else "app"

    @property
    def module_import_path(self) -> str:
        """Go import path of the module."""
        if self.is_mono_repo:
            return str(self.module_mod_name)
        return f"{self.module_name}/app"

    def feature_names(self) -> set[str]:
        return {feature.name for feature in self.selected_features}


class Answers(BaseModel):
    """Pre-filled answers loaded from an answers file.

    Every field is optional, missing answers are asked interactively.
    """

    project_dir: str | None = Field(default=None)
    module_name: str | None = Field(default=None)
    libraries: list[str] | None = Field(
        default=None,
        description="Library catalog keys",
    )
    project_mode: ProjectMode | None = Field(default=None)
    folder_name: str | None = Field(default=None)
    module_mod_name: str | None = Field(default=None)
    features: list[str] | None = Field(
        default=None,
        description="Feature names",
    )
    git_init: bool | None = Field(default=None)

    @field_validator("folder_name")
    @classmethod
    def validate_folder_name(cls, v: str | None) -> str | None:
        """Validate the module folder name."""
        if v is not None:
            msg = folder_name_error(v)
            if msg:
                raise ValueError(msg)
        return v
