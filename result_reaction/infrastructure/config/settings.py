"""Application settings and configuration

Values come from an optional ``appsettings.json`` in the working directory,
overridden by environment variables of the same name.
"""

import os
import logging
from typing import Any, Dict, Optional
import json

from result_reaction.infrastructure.data.config import (
    ConfigurationError,
    ReactionConfig,
)

APPSETTINGS_FILE = "appsettings.json"


class Settings:
    """Manages application settings and configuration"""

    def __init__(self, base_path: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.base_path = base_path or os.getcwd()
        self._config: Optional[ReactionConfig] = None
        self._values: Dict[str, Any] = {}

        # Set default log level for httpx and httpcore to reduce debug noise
        logging.getLogger("httpx").setLevel(logging.INFO)
        logging.getLogger("httpcore").setLevel(logging.INFO)

    def load_config(self) -> ReactionConfig:
        """Load configuration from appsettings.json and the environment"""
        self._values = {}
        self._load_file()
        self._load_env_vars()

        defaults = ReactionConfig()
        self._config = ReactionConfig(
            pubsub_name=self._get_str("PubsubName", defaults.pubsub_name),
            query_config_path=self._get_str(
                "QueryConfigPath", defaults.query_config_path
            ),
            query_container_id=self._get_str(
                "QueryContainer", defaults.query_container_id
            ),
            view_service_url=self._get_str(
                "ViewServiceUrl", defaults.view_service_url
            ),
            request_timeout=self._get_float(
                "RequestTimeout", defaults.request_timeout
            ),
            host=self._get_str("Host", defaults.host),
            dapr_port=self._get_int("DaprPort", defaults.dapr_port),
            app_port=self._get_int("AppPort", defaults.app_port),
            log_level=self._get_str("LogLevel", defaults.log_level).upper(),
        )
        self.logger.info(
            f"Loaded configuration (container={self._config.query_container_id}, "
            f"pubsub={self._config.pubsub_name}, ports={self._config.ports})"
        )
        return self._config

    def get_config(self) -> ReactionConfig:
        """Get current configuration"""
        if not self._config:
            return self.load_config()
        return self._config

    def _load_file(self):
        """Load values from appsettings.json if it exists"""
        path = os.path.join(self.base_path, APPSETTINGS_FILE)
        if not os.path.exists(path):
            return

        try:
            with open(path) as f:
                values = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Error reading {path}: {str(e)}")

        if not isinstance(values, dict):
            raise ConfigurationError(f"{path} must contain a JSON object")
        self._values.update(values)

    def _load_env_vars(self):
        """Override file values with environment variables"""
        self._values.update(os.environ)

    def _get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get string value"""
        value = self._values.get(key)
        if value is None or value == "":
            return default
        return str(value)

    def _get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Get integer value"""
        value = self._get_str(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            self.logger.warning(f"Ignoring non-integer {key}={value!r}")
            return default

    def _get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Get float value"""
        value = self._get_str(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            self.logger.warning(f"Ignoring non-numeric {key}={value!r}")
            return default
