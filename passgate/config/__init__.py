"""Process-level configuration for passgate."""

from .provider import AuthSettings, ConfigProvider, EnvConfigProvider, LoggingSettings

__all__ = ["AuthSettings", "ConfigProvider", "EnvConfigProvider", "LoggingSettings"]
