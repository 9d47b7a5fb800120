"""YAML configuration loading and validation.

This module handles loading and saving converter configuration from YAML
files. A missing default configuration file is not an error: the
converter then runs with built-in defaults.
"""

import os
from typing import Any, Dict

import yaml

from ..errors import ConfigError, FilesystemError
from ..formatters import available_formatters
from ..formatters.markdown import BULLET_MARKERS
from .errors import ConfigNotFoundError
from .models import ConvertConfig, MarkdownOptions


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        format: markdown
        strict: false
        markdown:
          bullet_marker: "*"
          escape_text: true
    """

    DEFAULT_CONFIG_PATH = '.adf-convert/config.yaml'

    # Default values for optional fields
    DEFAULTS = {
        'format': 'markdown',
        'strict': False,
    }

    MARKDOWN_DEFAULTS = {
        'bullet_marker': '*',
        'escape_text': True,
    }

    @classmethod
    def load(cls, config_path: str) -> ConvertConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ConvertConfig object with parsed configuration

        Raises:
            ConfigNotFoundError: If the file does not exist
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        # Read file
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        # Parse YAML
        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def load_or_default(cls, config_path: str = DEFAULT_CONFIG_PATH) -> ConvertConfig:
        """Load configuration, falling back to defaults when the file is missing.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Parsed ConvertConfig, or a default ConvertConfig if no file exists
        """
        try:
            return cls.load(config_path)
        except ConfigNotFoundError:
            return ConvertConfig()

    @classmethod
    def save(cls, config_path: str, config: ConvertConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: ConvertConfig object to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict = {
            'format': config.format,
            'strict': config.strict,
            'markdown': {
                'bullet_marker': config.markdown.bullet_marker,
                'escape_text': config.markdown.escape_text,
            },
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        # Ensure directory exists
        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        # Write file
        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ConvertConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ConvertConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        output_format = config_dict.get('format', cls.DEFAULTS['format'])
        if not isinstance(output_format, str):
            raise ConfigError(
                f"Field 'format' must be a string, got {type(output_format).__name__}",
                'format'
            )
        if output_format not in available_formatters():
            raise ConfigError(
                f"Unknown format '{output_format}' (available: {', '.join(available_formatters())})",
                'format'
            )

        strict = config_dict.get('strict', cls.DEFAULTS['strict'])
        if not isinstance(strict, bool):
            raise ConfigError(
                f"Field 'strict' must be true or false, got {strict!r}",
                'strict'
            )

        markdown_raw = config_dict.get('markdown')
        if markdown_raw is None:
            markdown_raw = {}
        if not isinstance(markdown_raw, dict):
            raise ConfigError(
                "Field 'markdown' must be a dictionary",
                'markdown'
            )

        bullet_marker = str(markdown_raw.get('bullet_marker', cls.MARKDOWN_DEFAULTS['bullet_marker']))
        if bullet_marker not in BULLET_MARKERS:
            raise ConfigError(
                f"Bullet marker must be one of {', '.join(BULLET_MARKERS)}, got '{bullet_marker}'",
                'markdown.bullet_marker'
            )

        escape_text = markdown_raw.get('escape_text', cls.MARKDOWN_DEFAULTS['escape_text'])
        if not isinstance(escape_text, bool):
            raise ConfigError(
                f"Field 'escape_text' must be true or false, got {escape_text!r}",
                'markdown.escape_text'
            )

        return ConvertConfig(
            format=output_format,
            strict=strict,
            markdown=MarkdownOptions(
                bullet_marker=bullet_marker,
                escape_text=escape_text,
            ),
        )
