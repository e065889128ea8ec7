"""Installation orchestrator applying the collected answers to the template."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from . import commands
from .catalog import TEMPLATE_APP_MODULE
from .exceptions import InstallerError, TemplateError
from .layout import (
    apply_layout,
    cleanup_placeholder,
    update_go_work,
    update_packages_registration,
)
from .manifest import write_libraries_manifest
from .models import InstallConfig
from .rewriter import copy_file, replace_in_file, set_go_module
from .sections import comment_config_sections


@contextmanager
def _step(description: str) -> Iterator[None]:
    """Prefix errors raised inside a step with what the step was doing."""
    try:
        yield
    except InstallerError as e:
        e.args = (f"Failed to {description}: {e}", *e.args[1:])
        e.details = {**e.details, "step": description}
        raise


class Installer:
    """Applies an install configuration to a cloned template."""

    def __init__(self, config: InstallConfig, console: Console | None = None) -> None:
        """Initialize installer.

        Args:
            config: Answers collected for this run
            console: Console for progress output
        """
        self.config = config
        self.console = console or Console()

    def apply(self) -> None:
        """Run every configuration step in order.

        Raises:
            InstallerError: If a step fails; earlier steps are not undone
        """
        self.update_main_module()
        self.update_libraries()
        self.install_libraries()
        self.copy_config_files()
        self.apply_layout()
        self.update_packages()
        self.cleanup()
        self.update_workspace()
        if self.config.git_init:
            self.init_git()

    def update_main_module(self) -> None:
        """Point the main entry file and root go.mod at the user's module."""
        webcore = self.config.webcore_dir
        with _step("update webcore/main.go"):
            replace_in_file(webcore / "main.go", TEMPLATE_APP_MODULE, self.config.module_name)

        with _step("update webcore/go.mod"):
            if not set_go_module(webcore / "go.mod", self.config.module_name):
                msg = "No module directive found"
                raise TemplateError(msg, details={"path": str(webcore / "go.mod")})
        self.console.print(
            f"[green]✓[/green] Updated module name to: {self.config.module_name}",
        )

    def update_libraries(self) -> None:
        """Regenerate the library manifest for the selected libraries."""
        with _step("update libraries.go"):
            write_libraries_manifest(
                self.config.webcore_dir / "deps" / "libraries.go",
                self.config.selected_libraries,
            )
        self.console.print(
            "[green]✓[/green] Updated webcore/deps/libraries.go with selected libraries",
        )

    def install_libraries(self) -> list[str]:
        """Fetch each selected library, warning about the ones that fail.

        Returns:
            Package paths that failed to install
        """
        failed: list[str] = []
        with self.console.status("Installing selected libraries..."):
            for lib in self.config.selected_libraries:
                self.console.print(f"  Installing: {lib.package_path}")
                if not commands.go_get(lib.package_path, self.config.webcore_dir):
                    failed.append(lib.package_path)
                    self.console.print(
                        f"[yellow]Warning:[/yellow] Failed to install {lib.package_path}",
                    )
        self.console.print("[green]✓[/green] Libraries installed")
        return failed

    def copy_config_files(self) -> None:
        """Create working config files from the template examples."""
        project_dir = self.config.project_dir
        config_path = project_dir / "config.yaml"

        with _step("copy config.yaml"):
            copy_file(project_dir / "config.yaml.example", config_path)
        with _step("update config.yaml"):
            commented = comment_config_sections(config_path, self.config.selected_libraries)
        with _step("copy access.yaml"):
            copy_file(project_dir / "access.yaml.example", project_dir / "access.yaml")

        for section in commented:
            self.console.print(f"  [dim]Commented out {section} section in config.yaml[/dim]")
        self.console.print("[green]✓[/green] Example config files copied")

    def apply_layout(self) -> None:
        """Realize the chosen project layout from the placeholder module."""
        mode = self.config.project_mode.value
        with _step(f"apply {mode} mode"):
            result = apply_layout(self.config)

        for removed in result.removed:
            self.console.print(f"  [dim]Removed {removed.name} folder[/dim]")
        self.console.print(
            f"[green]✓[/green] {mode.capitalize()} mode applied, "
            f"{len(result.retargeted)} file(s) retargeted to package "
            f"{self.config.package_name}",
        )

    def update_packages(self) -> None:
        """Register the module in webcore/deps/packages.go."""
        with _step("update packages.go"):
            missing = update_packages_registration(
                self.config.webcore_dir / "deps" / "packages.go", self.config,
            )
        for marker in missing:
            self.console.print(
                f"[yellow]Warning:[/yellow] '{marker}' not found in "
                "webcore/deps/packages.go, register the module manually",
            )
        if not missing:
            self.console.print("[green]✓[/green] Updated webcore/deps/packages.go")

    def cleanup(self) -> None:
        """Remove what is left of the placeholder module."""
        with _step("cleanup dummy folder"):
            removed = cleanup_placeholder(self.config)
        if removed:
            self.console.print("[green]✓[/green] Removed modules/dummy folder")

    def update_workspace(self) -> None:
        """Replace the placeholder workspace member and sync (mono-repo only)."""
        if not self.config.is_mono_repo:
            return

        with _step("update go.work"):
            updated = update_go_work(self.config.project_dir / "go.work", self.config)
        if not updated:
            self.console.print(
                "[yellow]Warning:[/yellow] No ./modules/dummy line found in go.work, "
                "skipping update",
            )
            return
        self.console.print(
            f"[green]✓[/green] Replaced ./modules/dummy with ./modules/{self.config.folder_name}",
        )

        with self.console.status("Running go work sync..."):
            synced = commands.go_work_sync(self.config.project_dir)
        if synced:
            self.console.print("[green]✓[/green] go.work updated and synced")
        else:
            self.console.print("[yellow]Warning:[/yellow] go work sync completed with errors")

    def init_git(self) -> None:
        """Initialize a git repository in the project directory."""
        with self.console.status("Initializing git repository..."):
            commands.git_init(self.config.project_dir)
        self.console.print("[green]✓[/green] Git repository initialized")
