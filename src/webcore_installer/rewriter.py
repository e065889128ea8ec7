"""Whole-file rewrites applied to the cloned template."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .exceptions import RewriteError


def read_text(path: Path) -> str:
    """Read a template file without newline translation.

    Raises:
        RewriteError: If the file cannot be read
    """
    try:
        with Path(path).open(encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        msg = f"Failed to read {path}: {e}"
        raise RewriteError(msg, details={"path": str(path)}) from e


def atomic_write_text(path: Path, content: str) -> None:
    """Replace a file's content through a temporary file and rename.

    The permission bits of an existing target are carried over, a new file
    gets the default mode for the current umask.

    Raises:
        RewriteError: If the file cannot be written
    """
    path = Path(path)
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        mode = 0o666 & ~umask
    except OSError as e:
        msg = f"Failed to write {path}: {e}"
        raise RewriteError(msg, details={"path": str(path)}) from e

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp",
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        msg = f"Failed to write {path}: {e}"
        raise RewriteError(msg, details={"path": str(path)}) from e


def replace_in_file(path: Path, old: str, new: str) -> int:
    """Replace every occurrence of ``old`` with ``new`` in a file.

    Args:
        path: File to rewrite
        old: Literal text to look for
        new: Replacement text

    Returns:
        Number of occurrences replaced. The file is left untouched when
        there is nothing to replace.

    Raises:
        RewriteError: If the file cannot be read or written
    """
    content = read_text(path)
    count = content.count(old) if old else 0
    if count:
        atomic_write_text(path, content.replace(old, new))
    return count


def copy_file(src: Path, dst: Path) -> None:
    """Copy a template file's content to a working file.

    Raises:
        RewriteError: If the source cannot be read or the target written
    """
    atomic_write_text(dst, read_text(src))


def set_go_module(go_mod: Path, module_name: str) -> bool:
    """Set the ``module`` directive of a go.mod file.

    Returns:
        True if a module line was found and rewritten
    """
    lines = read_text(go_mod).split("\n")
    for i, line in enumerate(lines):
        if line.startswith("module "):
            lines[i] = f"module {module_name}"
            atomic_write_text(go_mod, "\n".join(lines))
            return True
    return False
