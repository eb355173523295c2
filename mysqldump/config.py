"""
Configuration loading and validation for mysqldump.
"""

import os
import re
from typing import Any, Mapping, Optional

import yaml

from .models import DumpOptions


class ConfigLoader:
    """Loads and validates configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f)

        return self._resolve_env_vars(config or {})

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_connection_settings(self) -> dict[str, Any]:
        """Get database connection settings."""
        return self.config.get('connection') or {}

    def get_dump_settings(self) -> dict[str, Any]:
        """Get dump settings."""
        return self.config.get('dump') or {}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}

    def get_dump_options(self, overrides: Optional[Mapping[str, Any]] = None) -> DumpOptions:
        """
        Resolve DumpOptions with priority: overrides > dump > connection.

        Override values of None are treated as not given.
        """
        settings = {**self.get_connection_settings(), **self.get_dump_settings()}
        for key, value in (overrides or {}).items():
            if value is not None:
                settings[key] = value
        return DumpOptions.from_options(settings)
