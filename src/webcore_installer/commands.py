"""External commands: git for the template, go for dependencies."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from .catalog import TEMPLATE_REPO_URL
from .exceptions import CommandError


def run_command(command: list[str], cwd: Path | None = None) -> int:
    """Run a command with inherited stdout and stderr.

    Returns:
        The exit status, 127 when the executable is not installed
    """
    try:
        completed = subprocess.run(command, cwd=cwd, check=False)
    except FileNotFoundError:
        return 127
    return completed.returncode


def is_template_present(project_dir: Path) -> bool:
    """Whether the template was already cloned into ``project_dir``."""
    return (Path(project_dir) / "webcore" / "go.mod").exists()


def clone_template(project_dir: Path, url: str = TEMPLATE_REPO_URL) -> bool:
    """Shallow-clone the template into ``project_dir``.

    The clone's ``.git`` directory is removed so the project starts without
    the template's history.

    Returns:
        False when the template is already present and the clone was skipped

    Raises:
        CommandError: If git clone fails
    """
    if is_template_present(project_dir):
        return False

    command = ["git", "clone", "--depth", "1", url, str(project_dir)]
    returncode = run_command(command)
    if returncode != 0:
        msg = f"git clone failed with exit status {returncode}"
        raise CommandError(msg, command=command, returncode=returncode)

    git_dir = Path(project_dir) / ".git"
    if git_dir.exists():
        shutil.rmtree(git_dir, ignore_errors=True)
    return True


def go_get(package_path: str, cwd: Path) -> bool:
    """Fetch one Go dependency. Failure is reported, never raised."""
    return run_command(["go", "get", package_path], cwd=cwd) == 0


def go_work_sync(cwd: Path) -> bool:
    """Sync the Go workspace. Failure is reported, never raised."""
    return run_command(["go", "work", "sync"], cwd=cwd) == 0


def git_init(cwd: Path) -> None:
    """Initialize a git repository in the project directory.

    Raises:
        CommandError: If git init fails
    """
    command = ["git", "init"]
    returncode = run_command(command, cwd=cwd)
    if returncode != 0:
        msg = f"git init failed with exit status {returncode}"
        raise CommandError(msg, command=command, returncode=returncode)
