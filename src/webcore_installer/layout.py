"""Project layout strategies applied to the template's placeholder module."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .catalog import (
    MODULE_LOCK_FILES,
    PLACEHOLDER_MODULE_CALL,
    PLACEHOLDER_WORKSPACE_ENTRY,
    TEMPLATE_MOD_MODULE,
)
from .exceptions import RewriteError, TemplateError
from .features import prune_feature_folders
from .models import PLACEHOLDER_PACKAGE, InstallConfig
from .retarget import retarget_packages
from .rewriter import atomic_write_text, read_text, replace_in_file


@dataclass
class LayoutResult:
    """What a layout strategy did to the tree."""

    module_dir: Path
    retargeted: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)


def _require_placeholder(config: InstallConfig) -> Path:
    placeholder = config.placeholder_dir
    if not placeholder.is_dir():
        msg = f"Placeholder module not found: {placeholder}"
        raise TemplateError(msg, details={"path": str(placeholder)})
    return placeholder


def apply_mono_repo_layout(config: InstallConfig) -> LayoutResult:
    """Turn the placeholder module into ``modules/<folder name>``.

    Raises:
        TemplateError: If the placeholder module is missing
        RewriteError: If a file or folder cannot be rewritten
    """
    placeholder = _require_placeholder(config)
    module_dir = config.module_dir

    if module_dir.exists():
        msg = f"Module folder already exists: {module_dir}"
        raise RewriteError(msg, details={"path": str(module_dir)})
    try:
        placeholder.rename(module_dir)
    except OSError as e:
        msg = f"Failed to rename {placeholder} to {module_dir}: {e}"
        raise RewriteError(msg, details={"path": str(placeholder)}) from e

    replace_in_file(module_dir / "go.mod", TEMPLATE_MOD_MODULE, config.module_import_path)

    retargeted = retarget_packages(
        module_dir,
        PLACEHOLDER_PACKAGE,
        config.package_name,
        TEMPLATE_MOD_MODULE,
        config.module_import_path,
    )
    removed = prune_feature_folders(module_dir, config.feature_names())
    return LayoutResult(module_dir=module_dir, retargeted=retargeted, removed=removed)


def apply_simple_layout(config: InstallConfig) -> LayoutResult:
    """Move the placeholder module into ``webcore/app`` as package ``app``.

    The module's go.mod and go.sum stay behind, the code becomes part of
    the main module.

    Raises:
        TemplateError: If the placeholder module is missing
        RewriteError: If a file or folder cannot be moved or rewritten
    """
    placeholder = _require_placeholder(config)
    module_dir = config.module_dir

    try:
        module_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Failed to create app directory: {e}"
        raise RewriteError(msg, details={"path": str(module_dir)}) from e

    for entry in sorted(placeholder.iterdir()):
        if entry.name in MODULE_LOCK_FILES:
            continue
        target = module_dir / entry.name
        if target.exists():
            msg = f"Failed to move {entry.name}: {target} already exists"
            raise RewriteError(msg, details={"path": str(target)})
        try:
            shutil.move(str(entry), str(target))
        except OSError as e:
            msg = f"Failed to move {entry.name}: {e}"
            raise RewriteError(msg, details={"path": str(entry)}) from e

    retargeted = retarget_packages(
        module_dir,
        PLACEHOLDER_PACKAGE,
        config.package_name,
        TEMPLATE_MOD_MODULE,
        config.module_import_path,
    )
    removed = prune_feature_folders(module_dir, config.feature_names())
    return LayoutResult(module_dir=module_dir, retargeted=retargeted, removed=removed)


def apply_layout(config: InstallConfig) -> LayoutResult:
    """Apply the layout chosen in ``config``."""
    if config.is_mono_repo:
        return apply_mono_repo_layout(config)
    return apply_simple_layout(config)


def registration_lines(config: InstallConfig) -> tuple[str, str]:
    """Import line and constructor call registering the module."""
    package = config.package_name
    return (
        f'\t{package} "{config.module_import_path}"',
        f"\t{package}.NewModule(),",
    )


def update_packages_registration(packages_go: Path, config: InstallConfig) -> list[str]:
    """Point the module registration file at the new module.

    Rewrites the first line importing the placeholder module and the first
    line calling its constructor.

    Returns:
        Markers that were not found, empty when both lines were rewritten

    Raises:
        RewriteError: If the file cannot be read or written
    """
    import_line, call_line = registration_lines(config)
    lines = read_text(packages_go).split("\n")

    missing: list[str] = []
    for marker, replacement in (
        (TEMPLATE_MOD_MODULE, import_line),
        (PLACEHOLDER_MODULE_CALL, call_line),
    ):
        for i, line in enumerate(lines):
            if marker in line:
                lines[i] = replacement
                break
        else:
            missing.append(marker)

    if len(missing) < 2:
        atomic_write_text(packages_go, "\n".join(lines))
    return missing


def cleanup_placeholder(config: InstallConfig) -> bool:
    """Remove the placeholder module if it is still present.

    Raises:
        RewriteError: If the folder cannot be removed
    """
    placeholder = config.placeholder_dir
    if not placeholder.exists():
        return False
    try:
        shutil.rmtree(placeholder)
    except OSError as e:
        msg = f"Failed to remove placeholder module: {e}"
        raise RewriteError(msg, details={"path": str(placeholder)}) from e
    return True


def update_go_work(go_work: Path, config: InstallConfig) -> bool:
    """Replace the placeholder member of the Go workspace file.

    Returns:
        True if the placeholder entry was found and replaced

    Raises:
        RewriteError: If the file cannot be read or written
    """
    lines = read_text(go_work).split("\n")
    for i, line in enumerate(lines):
        if line.strip() == PLACEHOLDER_WORKSPACE_ENTRY:
            lines[i] = f"\t./modules/{config.folder_name}"
            atomic_write_text(go_work, "\n".join(lines))
            return True
    return False
