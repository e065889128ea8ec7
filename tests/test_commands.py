"""Tests for external command wrappers."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from webcore_installer import commands
from webcore_installer.exceptions import CommandError


class TestRunCommand:
    """Test the subprocess wrapper."""

    def test_returns_exit_status(self) -> None:
        """Test the command's exit status is returned."""
        with patch("subprocess.run", return_value=MagicMock(returncode=3)) as run:
            assert commands.run_command(["go", "version"], cwd=Path("/tmp")) == 3
        run.assert_called_once_with(["go", "version"], cwd=Path("/tmp"), check=False)

    def test_missing_executable(self) -> None:
        """Test a missing executable is reported as exit status 127."""
        with patch("subprocess.run", side_effect=FileNotFoundError("go")):
            assert commands.run_command(["go", "version"]) == 127


class TestCloneTemplate:
    """Test downloading the template."""

    @pytest.fixture
    def project_dir(self) -> Path:
        """Create a path for a project that does not exist yet."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir) / "webcore"

    def test_skips_existing_template(self, template_project: Path) -> None:
        """Test an already cloned template is not cloned again."""
        with patch.object(commands, "run_command") as run_command:
            assert commands.clone_template(template_project) is False
        run_command.assert_not_called()

    def test_clone_removes_git_dir(self, project_dir: Path) -> None:
        """Test the template's history is dropped after cloning."""

        def fake_clone(command: list[str], cwd: Path | None = None) -> int:
            (project_dir / ".git").mkdir(parents=True)
            (project_dir / "webcore").mkdir()
            return 0

        with patch.object(commands, "run_command", side_effect=fake_clone) as run_command:
            assert commands.clone_template(project_dir) is True

        command = run_command.call_args.args[0]
        assert command == [
            "git", "clone", "--depth", "1", commands.TEMPLATE_REPO_URL, str(project_dir),
        ]
        assert not (project_dir / ".git").exists()
        assert (project_dir / "webcore").is_dir()

    def test_clone_failure_is_fatal(self, project_dir: Path) -> None:
        """Test a failed clone raises CommandError."""
        with patch.object(commands, "run_command", return_value=128):
            with pytest.raises(CommandError, match="git clone failed") as exc_info:
                commands.clone_template(project_dir)
        assert exc_info.value.returncode == 128
        assert exc_info.value.command[:2] == ["git", "clone"]


class TestGoCommands:
    """Test go and git commands run in the project."""

    def test_go_get_failure_returns_false(self) -> None:
        """Test go get failures are reported through the return value."""
        with patch.object(commands, "run_command", return_value=1) as run_command:
            assert commands.go_get("github.com/webcore-go/lib-redis", Path("/p/webcore")) is False
        run_command.assert_called_once_with(
            ["go", "get", "github.com/webcore-go/lib-redis"], cwd=Path("/p/webcore"),
        )

    def test_go_work_sync(self) -> None:
        """Test workspace sync runs in the project directory."""
        with patch.object(commands, "run_command", return_value=0) as run_command:
            assert commands.go_work_sync(Path("/p")) is True
        run_command.assert_called_once_with(["go", "work", "sync"], cwd=Path("/p"))

    def test_git_init_failure_is_fatal(self) -> None:
        """Test a failed git init raises CommandError."""
        with patch.object(commands, "run_command", return_value=127):
            with pytest.raises(CommandError, match="git init failed"):
                commands.git_init(Path("/p"))
