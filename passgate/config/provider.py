"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class AuthSettings:
    """Process-wide authentication settings."""
    debug: bool = False


@dataclass(frozen=True)
class LoggingSettings:
    """Logging configuration."""
    level: str = "INFO"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_auth_settings(self) -> AuthSettings:
        """Get authentication settings."""
        ...

    def get_logging_settings(self) -> LoggingSettings:
        """Get logging settings."""
        ...

    def get_login_config_path(self) -> Optional[str]:
        """Get the path of the login configuration file, if set."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_auth_settings(self) -> AuthSettings:
        """Get authentication settings from environment variables."""
        return AuthSettings(
            debug=os.getenv("PASSGATE_DEBUG", "false").lower() == "true"
        )

    def get_logging_settings(self) -> LoggingSettings:
        """Get logging settings from environment variables."""
        return LoggingSettings(
            level=os.getenv("PASSGATE_LOG_LEVEL", "INFO").upper()
        )

    def get_login_config_path(self) -> Optional[str]:
        """Get the login configuration path from environment variables."""
        return os.getenv("PASSGATE_LOGIN_CONFIG") or None
