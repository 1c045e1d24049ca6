from dataclasses import dataclass
from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(Exception):
    """Base class for configuration related errors"""
    pass


@dataclass(frozen=True)
class ReactionConfig:
    """Process-wide configuration, read once at startup."""

    pubsub_name: str = "rg-pubsub"
    query_config_path: str = "/etc/queries"
    query_container_id: str = "default"
    view_service_url: str = "http://{container_id}-view-svc"
    request_timeout: Optional[float] = 30.0
    host: str = "0.0.0.0"
    dapr_port: int = 80
    app_port: int = 8080
    log_level: str = "INFO"

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Validate configuration values"""
        if not self.query_container_id:
            raise ConfigurationError("QueryContainer must not be empty")

        try:
            self.view_service_url.format(container_id=self.query_container_id)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid ViewServiceUrl template {self.view_service_url!r}: {str(e)}"
            )

        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigurationError("RequestTimeout must be positive")

        for name, port in (("DaprPort", self.dapr_port), ("AppPort", self.app_port)):
            if not (0 < port < 65536):
                raise ConfigurationError(f"{name} must be between 1 and 65535")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Unsupported LogLevel: {self.log_level}. "
                f"Supported levels are: {', '.join(VALID_LOG_LEVELS)}"
            )

    @property
    def ports(self) -> Tuple[int, ...]:
        """Distinct ports to serve on, sidecar port first."""
        if self.dapr_port == self.app_port:
            return (self.app_port,)
        return (self.dapr_port, self.app_port)
