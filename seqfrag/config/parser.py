#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeqFrag v0.1.0

Configuration parser: YAML config loading, merging and overrides.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

import copy
import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .schema import DEFAULT_CONFIG


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigParser:
    """
    Parse SeqFrag configuration files.

    Features:
    - Load YAML configuration files
    - Merge with default values
    - Environment variable substitution (${VAR} and ${VAR:-default})
    - CLI parameter overrides
    - Dotted notation access (e.g., config.get('fragmentation.insert_size'))
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration parser.

        Args:
            config_file: Path to YAML configuration file (optional)
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_file:
            self._load_user_config()

    def _load_user_config(self):
        """Load and merge user configuration file."""
        if not self.config_file.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_file}"
            )

        try:
            with open(self.config_file, 'r') as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {self.config_file}: {e}"
            )

        if user_config is None:
            return
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {self.config_file} must contain a mapping at top level"
            )

        # User values override defaults
        self._config = self._deep_merge(self._config, user_config)
        self._config = self._substitute_env_vars(self._config)

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries.

        Args:
            base: Base dictionary (defaults)
            override: Override dictionary (user values)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _substitute_env_vars(self, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports:
        - ${VAR}: Replace with environment variable VAR
        - ${VAR:-default}: Replace with VAR, or 'default' if not set
        """
        if isinstance(config, dict):
            return {k: self._substitute_env_vars(v) for k, v in config.items()}

        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]

        elif isinstance(config, str):
            pattern = r'\$\{([^}:]+)(?::-(.*?))?\}'

            def replace_var(match):
                var_name = match.group(1)
                default_value = match.group(2)
                return os.environ.get(var_name, default_value or '')

            return re.sub(pattern, replace_var, config)

        else:
            return config

    def merge_cli_overrides(self, overrides: Dict[str, Any]):
        """
        Merge command-line overrides into configuration.

        None values are skipped so that unset CLI options keep the
        file or default value.

        Args:
            overrides: Dictionary of override values
                      Keys can use dotted notation (e.g., 'regions.region_length')
        """
        for key, value in overrides.items():
            if value is None:
                continue

            keys = key.split('.')

            target = self._config
            for k in keys[:-1]:
                if k not in target:
                    target[k] = {}
                target = target[k]

            target[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Supports dotted notation for nested access.

        Args:
            key: Configuration key (e.g., 'fragmentation.mode')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_fragmentation_config(self) -> Dict[str, Any]:
        """Get fragmentation configuration section."""
        return self._config.get('fragmentation', {})

    def get_regions_config(self) -> Dict[str, Any]:
        """Get region splitting configuration section."""
        return self._config.get('regions', {})

    def get_output_config(self) -> Dict[str, Any]:
        """Get output configuration section."""
        return self._config.get('output', {})

    def to_dict(self) -> Dict[str, Any]:
        """
        Export configuration as dictionary.

        Returns:
            Complete configuration dictionary
        """
        return copy.deepcopy(self._config)

    def __repr__(self) -> str:
        return f"ConfigParser(config_file={self.config_file})"

# SeqFrag v0.1.0
# Any usage is subject to this software's license.
