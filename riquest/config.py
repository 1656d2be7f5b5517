"""
load the config from a yaml file and .env
"""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any
from dotenv import load_dotenv

load_dotenv()

DEFAULTS: Dict[str, Any] = {
    'request': {
        'timeout_ms': 3000,
        'default_headers': {
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        },
    },
    'logging': {
        'level': 'INFO',
        'json': True,
    },
}


class Config:
    """Configuration loader that reads from a yaml file and environment variables."""

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to a yaml file. If None, RIQUEST_CONFIG is used, then
                        riquest.yaml in the working directory. Only an explicitly
                        requested file has to exist.
        """
        explicit = config_path or os.getenv('RIQUEST_CONFIG')
        self.required = explicit is not None
        self.config_path = Path(explicit or 'riquest.yaml')
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load defaults, merge the yaml file over them, then apply env overrides."""
        config = copy.deepcopy(DEFAULTS)
        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            if self.required:
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            loaded = {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

        self._merge(config, loaded)
        return self._apply_env_overrides(config)

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'RIQUEST_TIMEOUT_MS': ('request', 'timeout_ms'),
            'RIQUEST_LOG_LEVEL': ('logging', 'level'),
            'RIQUEST_LOG_JSON': ('logging', 'json'),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config
                for key in config_path[:-1]:
                    if key not in current:
                        current[key] = {}
                    current = current[key]

                current[config_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value by walking nested keys.

        Args:
            *keys: Configuration keys (e.g., 'request', 'timeout_ms')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})

    @property
    def timeout_ms(self) -> float:
        return self.get('request', 'timeout_ms', default=3000)

    @property
    def default_headers(self) -> Dict[str, str]:
        return dict(self.get('request', 'default_headers', default={}))


# Global configuration instance
config = Config()
