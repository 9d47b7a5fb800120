"""Data models for CLI operations.

This module defines the exit codes and the configuration model used by
the adf-convert command line. All models use dataclasses for clean,
type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Document converted
    - GENERAL_ERROR (1): General error (config issues, unreadable files)
    - INVALID_DOCUMENT (2): Input is not a well-formed ADF document
    - DIAGNOSTICS_REPORTED (3): --strict was given and a warning was reported

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_DOCUMENT = 2
    DIAGNOSTICS_REPORTED = 3


@dataclass
class MarkdownOptions:
    """Options for the markdown formatter.

    Attributes:
        bullet_marker: Marker used for bullet list items ("*", "-" or "+")
        escape_text: Escape Markdown special characters in text
    """
    bullet_marker: str = "*"
    escape_text: bool = True


@dataclass
class ConvertConfig:
    """Conversion settings loaded from .adf-convert/config.yaml.

    Command line flags take precedence over these values.

    Attributes:
        format: Name of the output formatter (markdown, text, html)
        strict: Exit with DIAGNOSTICS_REPORTED when a warning is reported
        markdown: Options for the markdown formatter

    Example:
        >>> config = ConvertConfig(format="html")
        >>> config = ConvertConfig()  # Markdown with default options
    """
    format: str = "markdown"
    strict: bool = False
    markdown: MarkdownOptions = field(default_factory=MarkdownOptions)

    def formatter_options(self) -> Dict[str, Any]:
        """Keyword options for get_formatter() matching the selected format."""
        if self.format == "markdown":
            return {
                "bullet_marker": self.markdown.bullet_marker,
                "escape_text": self.markdown.escape_text,
            }
        return {}
