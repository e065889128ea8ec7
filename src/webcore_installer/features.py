"""Removal of feature folders that were not selected."""

from __future__ import annotations

import shutil
from pathlib import Path

from .catalog import AVAILABLE_FEATURES
from .exceptions import RewriteError
from .models import Feature


def prune_feature_folders(
    module_root: Path,
    enabled: set[str],
    features: list[Feature] | None = None,
) -> list[Path]:
    """Delete the folders of every feature not in ``enabled``.

    Folders that do not exist are skipped.

    Args:
        module_root: Module directory holding the feature folders
        enabled: Names of the selected features
        features: Feature catalog, defaults to the built-in one

    Returns:
        Folders that were removed

    Raises:
        RewriteError: If a folder cannot be removed
    """
    if features is None:
        features = AVAILABLE_FEATURES

    removed: list[Path] = []
    for feature in features:
        if feature.name in enabled:
            continue
        for folder in feature.folders:
            folder_path = Path(module_root) / folder
            if not folder_path.is_dir():
                continue
            try:
                shutil.rmtree(folder_path)
            except OSError as e:
                msg = f"Failed to remove {folder} folder: {e}"
                raise RewriteError(
                    msg,
                    details={"path": str(folder_path), "feature": feature.name},
                ) from e
            removed.append(folder_path)
    return removed
