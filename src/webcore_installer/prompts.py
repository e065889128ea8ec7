"""Interactive question flow for the installer."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TypeVar

import typer
from rich.console import Console
from rich.table import Table

from .answers import resolve_features, resolve_libraries
from .catalog import (
    AVAILABLE_FEATURES,
    AVAILABLE_LIBRARIES,
    DEFAULT_FOLDER_NAME,
    DEFAULT_MODULE_NAME,
    DEFAULT_PROJECT_DIR,
)
from .models import (
    Answers,
    Feature,
    InstallConfig,
    LibraryOption,
    ProjectMode,
    default_module_mod_name,
    folder_name_error,
    is_valid_module_name,
)

T = TypeVar("T", LibraryOption, Feature)

PROJECT_MODE_LABELS = {
    ProjectMode.MONO_REPO: "Mono-repo (multiple modules)",
    ProjectMode.SIMPLE: "Simple (single module)",
}


def parse_selection(text: str, count: int, defaults: list[int]) -> list[int]:
    """Parse a multi-select answer into sorted 0-based option indexes.

    Empty input keeps ``defaults``, ``none`` selects nothing and ``all``
    selects every option. Otherwise numbers (1-based) are separated by
    commas or spaces.

    Raises:
        ValueError: If a number is not an option
    """
    answer = text.strip().lower()
    if not answer:
        return sorted(defaults)
    if answer == "none":
        return []
    if answer == "all":
        return list(range(count))

    indexes: set[int] = set()
    for token in re.split(r"[,\s]+", answer):
        if not token:
            continue
        if not token.isdigit() or not 1 <= int(token) <= count:
            msg = f"'{token}' is not an option number between 1 and {count}"
            raise ValueError(msg)
        indexes.add(int(token) - 1)
    return sorted(indexes)


class Prompter:
    """Asks the installer questions, preferring pre-filled answers."""

    def __init__(
        self,
        console: Console,
        answers: Answers | None = None,
        assume_defaults: bool = False,
    ) -> None:
        """Initialize prompter.

        Args:
            console: Console used for messages
            answers: Pre-filled answers that skip their questions
            assume_defaults: Take the default for every unanswered question
        """
        self.console = console
        self.answers = answers or Answers()
        self.assume_defaults = assume_defaults

    def _text(self, message: str, default: str) -> str:
        if self.assume_defaults:
            return default
        return typer.prompt(message, default=default)

    def _multi_select(self, message: str, options: list[T]) -> list[T]:
        defaults = [i for i, option in enumerate(options) if option.enabled]
        if self.assume_defaults:
            return [options[i] for i in defaults]

        table = Table(title=message)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Option", style="green")
        table.add_column("Default")
        for i, option in enumerate(options, start=1):
            table.add_row(str(i), option.description, "✓" if option.enabled else "")
        self.console.print(table)

        while True:
            text = typer.prompt(
                "Numbers separated by commas (Enter for defaults, 'none' for nothing)",
                default="",
                show_default=False,
            )
            try:
                indexes = parse_selection(text, len(options), defaults)
            except ValueError as e:
                self.console.print(f"[red]✗[/red] {e}")
                continue
            return [options[i] for i in indexes]

    def ask_project_dir(self) -> Path:
        """Ask for the directory the template is cloned into."""
        project_dir = self.answers.project_dir
        if project_dir is None:
            project_dir = self._text("Enter project directory", DEFAULT_PROJECT_DIR)
        project_dir = project_dir.rstrip("/\\") or project_dir
        self.console.print(f"[green]✓[/green] Project directory: {project_dir}")
        return Path(project_dir)

    def ask_module_name(self) -> str:
        """Ask for the Go module name of the application."""
        module_name = self.answers.module_name
        if module_name is None:
            module_name = self._text("Enter Go module name", DEFAULT_MODULE_NAME)
        if not is_valid_module_name(module_name):
            self.console.print(
                "[yellow]Warning:[/yellow] Module name format is not standard, "
                "but continuing anyway",
            )
        self.console.print(f"[green]✓[/green] Module name set to: {module_name}")
        return module_name

    def select_libraries(self) -> list[LibraryOption]:
        """Ask which libraries to include."""
        if self.answers.libraries is not None:
            selected = resolve_libraries(self.answers.libraries)
        else:
            selected = self._multi_select(
                "Select libraries to include in your project", AVAILABLE_LIBRARIES,
            )
        self.console.print(
            f"[green]✓[/green] Selected: {[lib.name for lib in selected]}",
        )
        return selected

    def select_project_mode(self) -> ProjectMode:
        """Ask for the project layout."""
        mode = self.answers.project_mode
        if mode is None and self.assume_defaults:
            mode = ProjectMode.MONO_REPO
        while mode is None:
            modes = list(PROJECT_MODE_LABELS)
            for i, candidate in enumerate(modes, start=1):
                self.console.print(f"  {i}. {PROJECT_MODE_LABELS[candidate]}")
            text = typer.prompt("Choose project type", default="1").strip()
            if text.isdigit() and 1 <= int(text) <= len(modes):
                mode = modes[int(text) - 1]
            elif text in {m.value for m in modes}:
                mode = ProjectMode(text)
            else:
                self.console.print(f"[red]✗[/red] Unknown project type: {text}")
        self.console.print(f"[green]✓[/green] Project type: {mode.value}")
        return mode

    def ask_folder_name(self) -> str:
        """Ask for the module folder name until a valid one is given."""
        if self.answers.folder_name is not None:
            folder_name = self.answers.folder_name
        else:
            while True:
                folder_name = self._text("Enter module folder name", DEFAULT_FOLDER_NAME)
                error = folder_name_error(folder_name)
                if error is None:
                    break
                self.console.print(f"[red]✗[/red] {error}")
        self.console.print(f"[green]✓[/green] Folder name: {folder_name}")
        return folder_name

    def ask_module_mod_name(self, module_name: str, folder_name: str) -> str:
        """Ask for the Go module name of the mono-repo module."""
        mod_name = self.answers.module_mod_name
        if mod_name is None:
            mod_name = self._text(
                "Enter Go module name for this module",
                default_module_mod_name(module_name, folder_name),
            )
        self.console.print(f"[green]✓[/green] Module name: {mod_name}")
        return mod_name

    def select_features(self) -> list[Feature]:
        """Ask which module features to keep."""
        if self.answers.features is not None:
            selected = resolve_features(self.answers.features)
        else:
            selected = self._multi_select(
                "Select features to include in your module", AVAILABLE_FEATURES,
            )
        self.console.print(
            f"[green]✓[/green] Selected: {[feature.name for feature in selected]}",
        )
        return selected

    def ask_git_init(self) -> bool:
        """Ask whether to initialize a git repository."""
        git_init = self.answers.git_init
        if git_init is None:
            git_init = False if self.assume_defaults else typer.confirm(
                "Initialize git repository?", default=False,
            )
        if git_init:
            self.console.print("[green]✓[/green] Git initialization enabled")
        else:
            self.console.print("[dim]Git initialization disabled[/dim]")
        return git_init

    def collect(self, project_dir: Path) -> InstallConfig:
        """Ask the remaining questions and build the install configuration."""
        module_name = self.ask_module_name()
        libraries = self.select_libraries()
        mode = self.select_project_mode()

        folder_name = mod_name = None
        if mode == ProjectMode.MONO_REPO:
            folder_name = self.ask_folder_name()
            mod_name = self.ask_module_mod_name(module_name, folder_name)

        features = self.select_features()
        git_init = self.ask_git_init()

        return InstallConfig(
            project_dir=project_dir,
            module_name=module_name,
            selected_libraries=libraries,
            project_mode=mode,
            folder_name=folder_name,
            module_mod_name=mod_name,
            selected_features=features,
            git_init=git_init,
        )
