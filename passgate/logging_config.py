"""
Custom logging configuration that keeps passwords out of the logs
"""

import logging
import logging.config
import re
from typing import Dict, Any

_SECRET_PATTERN = re.compile(r"(?i)\b(password|passwd|pwd|secret)(\s*[=:]\s*)(\S+)")


class SecretRedactionFilter(logging.Filter):
    """Filter that masks password-like values in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the record message with secrets masked. Never drops a record."""
        message = record.getMessage()
        redacted = _SECRET_PATTERN.sub(r"\1\2***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with secret redaction."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "secret_redaction_filter": {
                "()": SecretRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["secret_redaction_filter"]
            }
        },
        "loggers": {
            "passgate": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """Apply the logging configuration. Debug forces the DEBUG level."""
    logging.config.dictConfig(get_logging_config("DEBUG" if debug else level.upper()))
