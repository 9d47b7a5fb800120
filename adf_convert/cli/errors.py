"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError, which itself is an AdfConvertError,
so callers can catch every application-level error in one place.
"""

from ..errors import AdfConvertError


class CLIError(AdfConvertError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigNotFoundError(CLIError):
    """Raised when an explicitly requested configuration file is missing."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found at {config_path}"
        )
        self.config_path = config_path
