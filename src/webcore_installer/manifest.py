"""Generation of the template's library manifest (deps/libraries.go)."""

from __future__ import annotations

from pathlib import Path

from .catalog import CORE_IMPORT_PATH
from .models import LibraryOption
from .rewriter import atomic_write_text


def get_import_alias(package_path: str) -> str:
    """Import alias for a package path: last segment, ``lib-`` dropped."""
    last = package_path.split("/")[-1]
    return last.replace("lib-", "").replace("-", "_")


def collect_imports(libraries: list[LibraryOption]) -> list[tuple[str, str]]:
    """Unique ``(alias, package_path)`` pairs sorted by alias, then path."""
    imports = {lib.package_path: get_import_alias(lib.package_path) for lib in libraries}
    return sorted((alias, path) for path, alias in imports.items())


def render_libraries_manifest(libraries: list[LibraryOption]) -> str:
    """Render the Go source declaring the selected library loaders.

    Each package is imported once even when several selected keys share it.
    Map entries follow the selection order.
    """
    lines = [
        "package deps",
        "",
        "import (",
        f'\t"{CORE_IMPORT_PATH}"',
    ]
    lines.extend(f'\t{alias} "{path}"' for alias, path in collect_imports(libraries))
    lines.extend([
        ")",
        "",
        "var APP_LIBRARIES = map[string]core.LibraryLoader{",
    ])
    lines.extend(
        f'\t"{lib.name}": &{get_import_alias(lib.package_path)}.{lib.loader}{{}},'
        for lib in libraries
    )
    lines.extend([
        "",
        "\t// Add your library here",
        "}",
        "",
    ])
    return "\n".join(lines)


def write_libraries_manifest(path: Path, libraries: list[LibraryOption]) -> None:
    """Replace the manifest file with one for the selected libraries.

    Raises:
        RewriteError: If the file cannot be written
    """
    atomic_write_text(path, render_libraries_manifest(libraries))
