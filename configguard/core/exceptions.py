"""Core exceptions for ConfigGuard."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from configguard.core.models import SecurityResult


class ConfigGuardError(Exception):
    """Base exception for all ConfigGuard errors."""

    def __init__(self, message: str, details: dict = None):
        """Initialize the exception."""
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ConfigGuardError):
    """Raised when configuration or pattern files are invalid."""

    pass


class CircularReferenceError(ConfigGuardError):
    """Raised when a configuration tree contains a reference cycle."""

    def __init__(self, path: str):
        """Initialize with the path at which the cycle was re-entered."""
        self.path = path
        super().__init__(
            f"Circular reference detected at '{path or '<root>'}'",
            details={"path": path},
        )


class SecretsDetectedError(ConfigGuardError):
    """Raised when a target would be written with likely secrets in it."""

    def __init__(self, target: str, result: "SecurityResult", path: Optional[str] = None):
        """Initialize with the blocked target and the scan result."""
        self.target = target
        self.result = result
        message = (
            f"Potential secrets detected in target '{target}' "
            f"({result.total_count} found). Add the output file to .gitignore "
            f"or mark the values with unsafe()."
        )
        super().__init__(message, details={"target": target, "path": path})


class NotInGitRepositoryError(ConfigGuardError):
    """Raised when the ignore check is used outside a git repository."""

    pass
