"""webcore-install: Interactive installer for WebCore Go projects."""

__version__ = "0.1.0"
__author__ = "WebCore Contributors"
__description__ = "Interactive installer for WebCore Go projects"

from .installer import Installer
from .models import Feature, InstallConfig, LibraryOption, ProjectMode

__all__ = [
    "Feature",
    "InstallConfig",
    "Installer",
    "LibraryOption",
    "ProjectMode",
]
