"""Custom exceptions for the WebCore installer."""

from typing import Any


class InstallerError(Exception):
    """Base exception for all installer errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}


class TemplateError(InstallerError):
    """Raised when the cloned template is missing or has an unexpected structure."""


class RewriteError(InstallerError):
    """Raised when a template file cannot be read, rewritten or moved."""


class ConfigurationError(InstallerError):
    """Raised when installer answers are invalid."""


class CommandError(InstallerError):
    """Raised when a required external command fails."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.command = command or []
        self.returncode = returncode
