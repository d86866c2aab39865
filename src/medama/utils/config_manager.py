"""
Configuration management for the organizer.
Handles loading, validation, and merging of configurations from multiple sources.
"""

import os
import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional
import argparse
from copy import deepcopy

from dotenv import load_dotenv

from ..errors import ConfigurationError
from ..models import Strategy
from .report_generator import DEFAULT_PLAN_FILENAME, OUTPUT_FORMATS

logger = logging.getLogger(__name__)

ENV_PREFIX = "MEDAMA_"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")
SECTIONS = ("organization", "export", "logging")


class ConfigManager:
    """Manage configuration from environment variables, files, and command line."""

    def __init__(
        self,
        config_file: Optional[Path] = None,
        cli_args: Optional[argparse.Namespace] = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file
            cli_args: Optional command line arguments
        """
        self.config = self._load_default_config()

        if config_file:
            config_file = Path(config_file)
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
            self._load_from_file(config_file)

        # Override with environment variables
        self._load_from_env()

        # Override with command line arguments
        if cli_args:
            self._load_from_cli(cli_args)

        self._validate_config()

        logger.debug("Configuration loaded successfully")

    def _load_default_config(self) -> Dict[str, Any]:
        """Load default configuration."""
        return {
            "organization": {
                "strategy": Strategy.BY_TYPE.value,
                "recursive": True,
                "include_hidden": False,
            },
            "export": {
                "filename": DEFAULT_PLAN_FILENAME,
                "format": "text",
                "decorated": False,
                "encoding": "utf-8",
            },
            "logging": {
                "level": "WARNING",
                "file": None,
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        }

    def _load_from_file(self, config_file: Path):
        """Load configuration from file."""
        logger.info(f"Loading configuration from {config_file}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                if config_file.suffix == ".json":
                    file_config = json.load(f)
                elif config_file.suffix in (".yaml", ".yml"):
                    file_config = yaml.safe_load(f) or {}
                else:
                    raise ConfigurationError(
                        f"Unsupported config file format: {config_file}"
                    )
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error(f"Error loading config file: {e}")
            raise ConfigurationError(f"Could not read {config_file}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_file}")

        # Deep merge with default config
        self._deep_merge(self.config, file_config)

    def _load_from_env(self):
        """Load configuration from environment variables and a .env file."""
        load_dotenv()

        if "LOG_LEVEL" in os.environ:
            self._set_nested_config(
                self.config, ["logging", "level"], os.environ["LOG_LEVEL"].upper()
            )

        # MEDAMA_EXPORT__FILENAME -> export.filename
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                config_path = key[len(ENV_PREFIX) :].lower().split("__")
                self._set_nested_config(self.config, config_path, value)

    def _load_from_cli(self, cli_args: argparse.Namespace):
        """Load configuration from command line arguments."""
        cli_mappings = {
            "strategy": ["organization", "strategy"],
            "recursive": ["organization", "recursive"],
            "include_hidden": ["organization", "include_hidden"],
            "format": ["export", "format"],
            "decorated": ["export", "decorated"],
            "log_level": ["logging", "level"],
            "log_file": ["logging", "file"],
        }

        for arg_name, config_path in cli_mappings.items():
            value = getattr(cli_args, arg_name, None)
            if value is not None:
                self._set_nested_config(self.config, config_path, value)

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]):
        """Deep merge update dictionary into base dictionary."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested_config(
        self, config_dict: Dict[str, Any], path: List[str], value: Any
    ):
        """Set a value in a nested dictionary using a path.

        String values are converted to the type of the value they replace,
        so numeric-looking file names stay strings.

        Raises:
            ConfigurationError: If the path runs through a plain value, the
                value would replace a section, or it cannot be converted
        """
        key = ".".join(path)
        current = config_dict
        for part in path[:-1]:
            if part not in current:
                current[part] = {}
            elif not isinstance(current[part], dict):
                raise ConfigurationError(f"Cannot set {key}: {part} is not a section")
            current = current[part]

        existing = current.get(path[-1])
        if isinstance(existing, dict) and not isinstance(value, dict):
            raise ConfigurationError(
                f"Cannot replace configuration section {key} with {value!r}"
            )

        if isinstance(value, str):
            value = self._convert_value(key, value, existing)

        current[path[-1]] = value

    def _convert_value(self, key: str, value: str, existing: Any) -> Any:
        """Convert a string to the type of the existing setting."""
        try:
            if isinstance(existing, bool):
                lowered = value.strip().lower()
                if lowered in TRUE_VALUES:
                    return True
                if lowered in FALSE_VALUES:
                    return False
                raise ValueError(f"not a boolean: {value!r}")
            if isinstance(existing, int):
                return int(value)
            if isinstance(existing, float):
                return float(value)
            if isinstance(existing, list):
                converted = json.loads(value)
                if not isinstance(converted, list):
                    raise ValueError(f"not a list: {value!r}")
                return converted
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {key}: {e}") from e
        return value

    def _validate_config(self):
        """Validate configuration values."""
        errors = []

        for section in SECTIONS:
            if not isinstance(self.config.get(section), dict):
                errors.append(
                    f"{section} must be a section, not {self.config.get(section)!r}"
                )
        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}"
            )

        try:
            Strategy.from_value(self.config["organization"]["strategy"])
        except ValueError:
            errors.append(
                f"unknown organization strategy: {self.config['organization']['strategy']!r}"
            )

        if self.config["export"]["format"] not in OUTPUT_FORMATS:
            errors.append(f"export format must be one of {list(OUTPUT_FORMATS)}")

        filename = self.config["export"]["filename"]
        if not isinstance(filename, str):
            errors.append(f"export filename must be a string, not {filename!r}")
        elif not filename:
            errors.append("export filename must not be empty")

        if str(self.config["logging"]["level"]).upper() not in VALID_LOG_LEVELS:
            errors.append(f"logging level must be one of {VALID_LOG_LEVELS}")

        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}"
            )

    @property
    def strategy(self) -> Strategy:
        return Strategy.from_value(self.config["organization"]["strategy"])

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            path: Configuration path (e.g., 'export.filename')
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        parts = path.split(".")
        current = self.config

        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def save(self, filepath: Path, format: Optional[str] = None):
        """
        Save configuration to file.

        Args:
            filepath: Path to save configuration
            format: File format ('json' or 'yaml'), taken from the file
                suffix if omitted

        Raises:
            ValueError: If the format is not supported
            ConfigurationError: If the file cannot be written
        """
        filepath = Path(filepath)
        format = format or format_for_path(filepath)
        logger.info(f"Saving configuration to {filepath}")

        if format not in ("json", "yaml", "yml"):
            raise ValueError(f"Unsupported format: {format}")

        if format == "json":
            content = json.dumps(self.config, indent=2)
        else:
            content = yaml.safe_dump(self.config, default_flow_style=False)
        self._write(filepath, content)

    def create_template(self, filepath: Path, format: Optional[str] = None):
        """Create a configuration template file from the current settings."""
        filepath = Path(filepath)
        format = format or format_for_path(filepath)
        if format != "json":
            self.save(filepath, format)
            logger.info(f"Configuration template created at {filepath}")
            return

        template_config = deepcopy(self.config)

        # JSON doesn't support comments, so we'll add _comment fields
        template_config["_comment"] = "Medama configuration template"
        template_config["organization"]["_comment"] = (
            "strategy is one of: " + ", ".join(s.value for s in Strategy)
        )
        template_config["export"]["_comment"] = "Organization plan export settings"
        template_config["logging"]["_comment"] = "Logging configuration"

        self._write(filepath, json.dumps(template_config, indent=2))

        logger.info(f"Configuration template created at {filepath}")

    def _write(self, filepath: Path, content: str):
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing configuration to {filepath}: {e}")
            raise ConfigurationError(
                f"Could not write configuration to {filepath}: {e}"
            ) from e


def format_for_path(filepath: Path) -> str:
    """Configuration file format implied by a file suffix."""
    if Path(filepath).suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"
