"""Comment toggling for sections of the example configuration files."""

from __future__ import annotations

from pathlib import Path

from .models import LibraryOption
from .rewriter import atomic_write_text, read_text

COMMENT_MARKER = "#"
COMMENT_PREFIX = "# "

REGION_BEGIN = "# >>> webcore:{name}"
REGION_END = "# <<< webcore:{name}"

# Line ranges of config.yaml.example for templates without region markers
LEGACY_CONFIG_SECTIONS: dict[str, tuple[int, int]] = {
    "database": (71, 92),
    "redis": (94, 104),
    "pubsub": (107, 114),
}


def comment_section(
    lines: list[str],
    start: int,
    end: int,
    should_comment: bool,
) -> list[str]:
    """Comment out a 1-indexed inclusive line range.

    Empty lines and lines already starting with ``#`` are left as they are,
    so commenting twice gives the same result. A range outside ``lines``
    returns them unchanged.

    Args:
        lines: File content split into lines
        start: First line of the range, 1-indexed
        end: Last line of the range, inclusive
        should_comment: When False the lines are returned unchanged

    Returns:
        A new list of lines
    """
    result = list(lines)
    if not should_comment:
        return result

    start_idx = start - 1
    end_idx = end - 1
    if start_idx < 0 or end_idx >= len(result) or start_idx > end_idx:
        return result

    for i in range(start_idx, end_idx + 1):
        trimmed = result[i].strip()
        if trimmed and not trimmed.startswith(COMMENT_MARKER):
            result[i] = COMMENT_PREFIX + result[i]
    return result


def find_marked_region(lines: list[str], name: str) -> tuple[int, int] | None:
    """Locate the lines between a region's begin and end markers.

    Args:
        lines: File content split into lines
        name: Region name, e.g. ``database``

    Returns:
        1-indexed inclusive ``(start, end)`` of the region body, or None when
        either marker is missing, out of order, or the body is empty
    """
    begin_marker = REGION_BEGIN.format(name=name)
    end_marker = REGION_END.format(name=name)

    begin = end = None
    for i, line in enumerate(lines):
        stripped = line.strip()
        if begin is None and stripped == begin_marker:
            begin = i
        elif begin is not None and stripped == end_marker:
            end = i
            break

    if begin is None or end is None or end - begin < 2:
        return None
    # Body runs from the line after the begin marker to the line before the end
    return begin + 2, end


def has_region_markers(lines: list[str]) -> bool:
    """Check whether any line opens a marker-delimited region."""
    prefix = REGION_BEGIN.format(name="")
    return any(line.strip().startswith(prefix) for line in lines)


def resolve_section(lines: list[str], name: str) -> tuple[int, int] | None:
    """Find a config section by markers, falling back to legacy line ranges.

    Legacy ranges only apply to files without any region marker. In a marked
    file a section without its own markers is not found.
    """
    if has_region_markers(lines):
        return find_marked_region(lines, name)
    return LEGACY_CONFIG_SECTIONS.get(name)


def config_sections_to_comment(libraries: list[LibraryOption]) -> dict[str, bool]:
    """Decide which config sections to comment out for a library selection."""
    names = {lib.name for lib in libraries}
    return {
        "database": not any(name.startswith("database:") for name in names),
        "redis": "redis" not in names,
        "pubsub": "pubsub" not in names,
    }


def comment_config_sections(
    config_path: Path,
    libraries: list[LibraryOption],
) -> list[str]:
    """Comment out config sections for libraries that were not selected.

    Args:
        config_path: Working copy of the application config
        libraries: Selected libraries

    Returns:
        Names of the sections that were commented out

    Raises:
        RewriteError: If the file cannot be read or written
    """
    lines = read_text(config_path).split("\n")
    commented: list[str] = []

    for name, should_comment in config_sections_to_comment(libraries).items():
        if not should_comment:
            continue
        section = resolve_section(lines, name)
        if section is None:
            continue
        updated = comment_section(lines, section[0], section[1], True)
        if updated != lines:
            commented.append(name)
        lines = updated

    atomic_write_text(config_path, "\n".join(lines))
    return commented
