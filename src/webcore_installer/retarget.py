"""Package and import path retargeting across a Go module tree."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .exceptions import RewriteError
from .rewriter import atomic_write_text, read_text

SOURCE_SUFFIX = ".go"
MODULE_FILE_NAME = "module.go"


@dataclass
class StagedEdit:
    """A file rewrite computed in memory and not yet written."""

    path: Path
    original: str
    updated: str

    @property
    def changed(self) -> bool:
        return self.original != self.updated


def retarget_source(
    content: str,
    old_pkg: str,
    new_pkg: str,
    old_module: str,
    new_module: str,
    is_module_file: bool = False,
) -> str:
    """Rewrite one Go source file for a new package and import path.

    The package declaration only matches a whole ``package <old>`` line so a
    quoted import path containing the old name is never touched by it. The
    import path substitution is a plain substring replace and runs last.

    Args:
        content: Source text
        old_pkg: Current package name
        new_pkg: Package name to declare
        old_module: Import path prefix to replace, skipped when empty
        new_module: Replacement import path prefix
        is_module_file: Also rewrite the ``ModuleName`` constant

    Returns:
        Rewritten source text
    """
    content = re.sub(
        rf"^package {re.escape(old_pkg)}$",
        lambda _: f"package {new_pkg}",
        content,
        flags=re.MULTILINE,
    )

    if is_module_file:
        content = re.sub(
            rf'^[ \t]+ModuleName[ \t]*=[ \t]*"{re.escape(old_pkg)}"$',
            lambda _: f'\tModuleName    = "{new_pkg}"',
            content,
            flags=re.MULTILINE,
        )

    if old_module:
        content = content.replace(old_module, new_module)

    return content


def stage_retarget(
    root: Path,
    old_pkg: str,
    new_pkg: str,
    old_module: str,
    new_module: str,
) -> list[StagedEdit]:
    """Compute the rewrite of every Go file under ``root`` without writing.

    Raises:
        RewriteError: If a file cannot be read
    """
    edits: list[StagedEdit] = []
    for path in sorted(Path(root).rglob(f"*{SOURCE_SUFFIX}")):
        if not path.is_file():
            continue
        original = read_text(path)
        updated = retarget_source(
            original,
            old_pkg,
            new_pkg,
            old_module,
            new_module,
            is_module_file=path.name == MODULE_FILE_NAME,
        )
        edits.append(StagedEdit(path=path, original=original, updated=updated))
    return edits


def _restore(edits: list[StagedEdit]) -> tuple[int, dict[str, str]]:
    """Write back original content, newest first, without stopping on failures."""
    restored = 0
    unrestored: dict[str, str] = {}
    for edit in reversed(edits):
        try:
            atomic_write_text(edit.path, edit.original)
        except RewriteError as e:
            unrestored[str(edit.path)] = str(e)
        else:
            restored += 1
    return restored, unrestored


def commit_edits(edits: list[StagedEdit]) -> list[Path]:
    """Write staged edits, restoring written files if one of them fails.

    Returns:
        Paths that were rewritten

    Raises:
        RewriteError: If a write fails; files written before it are restored
            and any that could not be are listed under ``unrestored``
    """
    written: list[StagedEdit] = []
    for edit in edits:
        if not edit.changed:
            continue
        try:
            atomic_write_text(edit.path, edit.updated)
        except RewriteError as e:
            restored, unrestored = _restore(written)
            msg = f"Retargeting aborted at {edit.path}, {restored} file(s) restored"
            if unrestored:
                msg += f", {len(unrestored)} could not be restored"
            raise RewriteError(
                msg,
                details={
                    "path": str(edit.path),
                    "restored": restored,
                    "unrestored": unrestored,
                },
            ) from e
        written.append(edit)
    return [edit.path for edit in written]


def retarget_packages(
    root: Path,
    old_pkg: str,
    new_pkg: str,
    old_module: str,
    new_module: str,
) -> list[Path]:
    """Retarget every Go file under ``root`` to a new package and import path.

    All files are read and rewritten in memory before anything is written,
    so an unreadable file leaves the tree untouched.

    Args:
        root: Module directory to walk
        old_pkg: Placeholder package name
        new_pkg: Package name to declare
        old_module: Placeholder import path
        new_module: Import path of the new module

    Returns:
        Paths of the files that changed

    Raises:
        RewriteError: If any file cannot be read or written
    """
    root = Path(root)
    if not root.is_dir():
        msg = f"Module directory not found: {root}"
        raise RewriteError(msg, details={"path": str(root)})

    edits = stage_retarget(root, old_pkg, new_pkg, old_module, new_module)
    return commit_edits(edits)
