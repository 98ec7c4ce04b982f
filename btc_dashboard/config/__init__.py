"""
Bitcoin Dashboard - Configuration Management Module
"""
import os
import yaml
from pathlib import Path
from typing import Dict, Any
from dotenv import load_dotenv

from .settings import DashboardSettings, SourceSettings

# Load environment variables (override=True so .env wins over the inherited process environment)
load_dotenv(override=True)


class Config:
    """Configuration Management Class"""

    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Load configuration file"""
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

        if not config_path.exists():
            # If there is no config.yaml, use example
            example_path = Path(__file__).parent.parent.parent / "config.example.yaml"
            if example_path.exists():
                with open(example_path, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
        else:
            with open(config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

        self._override_from_env()

    def _override_from_env(self):
        """Override configuration from environment variables"""
        for section in ['refresh', 'http', 'logging', 'server', 'sources']:
            if section not in self._config or self._config[section] is None:
                self._config[section] = {}

        if os.getenv('REFRESH_INTERVAL_MS'):
            self._config['refresh']['interval_ms'] = int(os.getenv('REFRESH_INTERVAL_MS'))

        if os.getenv('HTTP_TIMEOUT'):
            self._config['http']['timeout'] = float(os.getenv('HTTP_TIMEOUT'))

        if os.getenv('LOG_LEVEL'):
            self._config['logging']['level'] = os.getenv('LOG_LEVEL').upper()

        if os.getenv('DASHBOARD_HOST'):
            self._config['server']['host'] = os.getenv('DASHBOARD_HOST')
        if os.getenv('DASHBOARD_PORT'):
            self._config['server']['port'] = int(os.getenv('DASHBOARD_PORT'))

    def get(self, key_path: str, default=None):
        """
        Get configuration value
        key_path: use dot-separated path, e.g., 'refresh.interval_ms'
        """
        keys = key_path.split('.')
        value = self._config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def settings(self) -> DashboardSettings:
        """Typed view of the loaded configuration"""
        return DashboardSettings.from_dict(self._config)

    @property
    def refresh(self):
        return self._config.get('refresh', {})

    @property
    def http(self):
        return self._config.get('http', {})

    @property
    def sources(self):
        return self._config.get('sources', {})

    @property
    def logging(self):
        return self._config.get('logging', {})

    @property
    def server(self):
        return self._config.get('server', {})


# Global configuration instance
config = Config()

__all__ = ["Config", "config", "DashboardSettings", "SourceSettings"]
