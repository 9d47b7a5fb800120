"""Typed exception hierarchy for adf-convert.

This module defines the custom exceptions shared by the document parser,
the traversal engine, the stock formatters and the configuration layer.
All exceptions inherit from AdfConvertError for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Iterable, Optional


class AdfConvertError(Exception):
    """Base exception for all adf-convert errors.

    Use this to catch any application-level error from the converter.
    """
    pass


class InvalidDocumentError(AdfConvertError):
    """Raised when the input is not a well-formed, typed ADF node.

    Traversal never starts on a document that raises this error.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            full_message = f"Invalid ADF document at {path}: {message}"
        else:
            full_message = f"Invalid ADF document: {message}"
        super().__init__(full_message)
        self.path = path
        self.original_message = message


class UnknownFormatterError(AdfConvertError):
    """Raised when a formatter name is not registered."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        available = sorted(available)
        message = f"Unknown formatter '{name}'"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message)
        self.name = name
        self.available = available


class ConfigError(AdfConvertError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field


class FilesystemError(AdfConvertError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
