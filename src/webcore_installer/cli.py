"""WebCore installer command-line interface."""

from __future__ import annotations

import re
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from . import commands
from .answers import load_answers
from .catalog import AVAILABLE_LIBRARIES, DEFAULT_PROJECT_DIR, TEMPLATE_ARTIFACTS
from .exceptions import InstallerError
from .installer import Installer
from .manifest import get_import_alias
from .models import Answers
from .prompts import Prompter

app = typer.Typer(
    name="webcore-install",
    help="WebCore Go Template Installer",
    add_completion=False,
)
console = Console()


def _get_version_string() -> str:
    """Get version string from package metadata or pyproject.toml."""
    try:
        return get_version("webcore-install")
    except PackageNotFoundError:
        pass

    # Try to read version from pyproject.toml for development installs
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        content = pyproject_path.read_text()
        match = re.search(r'version\s*=\s*["\']([^"\']+)["\']', content)
        if match:
            return f"{match.group(1)} (development)"

    return "unknown"


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"webcore-install version {_get_version_string()}")
        raise typer.Exit


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """WebCore Go Template Installer."""


@app.command()
def install(
    project_dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help=f"Project directory (asked when omitted, default {DEFAULT_PROJECT_DIR})",
    ),
    answers_path: Path | None = typer.Option(
        None,
        "--answers",
        "-a",
        help="YAML file with pre-filled answers",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Accept the default for every unanswered question",
    ),
    skip_download: bool = typer.Option(
        False,
        "--skip-download",
        help="Use a template already present in the project directory",
    ),
) -> None:
    """Create a new WebCore Go project from the template.

    Clones the template, asks for the module name, libraries, project
    layout and features, then rewrites the cloned tree accordingly.
    """
    console.print("[bold blue]WebCore Go Template Installer[/bold blue]")
    console.print("This installer will help you set up a new WebCore Go project\n")

    try:
        answers = load_answers(answers_path) if answers_path else Answers()
        if project_dir is not None:
            answers.project_dir = str(project_dir)

        prompter = Prompter(console, answers=answers, assume_defaults=yes)
        target = prompter.ask_project_dir()

        if skip_download:
            if not commands.is_template_present(target):
                console.print(
                    f"[red]Error:[/red] No template found in {target} "
                    "(expected webcore/go.mod)",
                )
                raise typer.Exit(1)
        else:
            _download_template(target)

        config = prompter.collect(target)
        Installer(config, console).apply()

    except InstallerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print("\n[green]✓ Installation completed successfully![/green]")
    console.print(
        f"You can now run your project with: cd {config.project_dir} && make run",
    )


def _download_template(project_dir: Path) -> None:
    """Clone the template unless it is already there."""
    if commands.is_template_present(project_dir):
        console.print(
            f"[yellow]Warning:[/yellow] Project already initialized in {project_dir} "
            "directory, skipping download",
        )
        return

    with console.status("Downloading template from GitHub..."):
        commands.clone_template(project_dir)
    console.print("[green]✓[/green] Template downloaded successfully")


@app.command()
def libraries() -> None:
    """List the libraries the installer can add to a project."""
    table = Table(title="Available Libraries")
    table.add_column("Key", style="cyan")
    table.add_column("Description")
    table.add_column("Package", style="green")
    table.add_column("Loader")
    table.add_column("Default")

    for lib in AVAILABLE_LIBRARIES:
        table.add_row(
            lib.name,
            lib.description,
            lib.package_path,
            f"{get_import_alias(lib.package_path)}.{lib.loader}",
            "✓" if lib.enabled else "",
        )

    console.print(table)


@app.command()
def check(
    project_dir: Path = typer.Option(
        Path(DEFAULT_PROJECT_DIR),
        "--dir",
        "-d",
        help="Project directory holding the cloned template",
    ),
) -> None:
    """Show whether a cloned template has the files the installer rewrites."""
    table = Table(title="WebCore Template Check")
    table.add_column("Path", style="cyan")
    table.add_column("Purpose")
    table.add_column("Status")

    missing = 0
    for relative, purpose in TEMPLATE_ARTIFACTS.items():
        exists = (project_dir / relative).exists()
        if not exists:
            missing += 1
        status = "[green]found[/green]" if exists else "[red]missing[/red]"
        table.add_row(relative, purpose, status)

    console.print(table)

    if missing:
        console.print(f"[red]✗[/red] {missing} template file(s) missing in {project_dir}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Template in {project_dir} is complete")


@app.command()
def version() -> None:
    """Show installer version information."""
    console.print(f"webcore-install version {_get_version_string()}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
