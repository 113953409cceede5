"""Configuration management for traffic trend analysis"""

import yaml
from pathlib import Path
from typing import Any, Optional


PROJECT_ROOT = Path(__file__).parent.parent.parent


class ConfigLoader:
    """
    Load and manage project configuration from YAML files

    Supports nested configuration access using dot notation.
    Example: config.get('analysis.min_points', default=2)
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration loader

        Args:
            config_path: Path to YAML configuration file
                         (defaults to config/config.yaml)
        """
        self.config_path = Path(config_path or "config/config.yaml")

        if not self.config_path.exists() and not self.config_path.is_absolute():
            # Try relative to project root
            self.config_path = PROJECT_ROOT / self.config_path

        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from YAML file"""
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Please create config/config.yaml"
            )

        with open(self.config_path, 'r') as f:
            return yaml.safe_load(f) or {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation)

        Args:
            key: Configuration key (e.g., 'analysis.fit_quality.good')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config = ConfigLoader()
            >>> config.get('analysis.min_points')
            2
            >>> config.get('analysis.invalid_key', default='fallback')
            'fallback'
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def reload(self):
        """Reload configuration from file"""
        self.config = self._load_config()

    def __repr__(self) -> str:
        return f"ConfigLoader(config_path='{self.config_path}')"
