"""
Config Module - Black Box Interface

Purpose: Login configuration (which modules run for an application, with
which control flags and options)
Interface: load_login_configuration(), LoginConfiguration.entries_for()
Hidden: File lookup order, YAML parsing, validation

Example file:

    version: 1
    applications:
      default:
        - module: password
          flag: required
          options:
            allowEmptyPassword: "false"
            ignoreLoginDomain: "true"
"""

import logging
import os
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, conint, field_validator

from ..auth.context import ControlFlag

logger = logging.getLogger(__name__)


class LoginModuleEntry(BaseModel):
    module: str
    flag: ControlFlag = ControlFlag.REQUIRED
    options: Dict[str, str] = Field(default_factory=dict)

    @field_validator("flag", mode="before")
    @classmethod
    def lower_flag(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("options", mode="before")
    @classmethod
    def stringify_options(cls, v):
        # YAML turns true/false into booleans; options are strings
        if v is None:
            return {}
        return {str(k): str(val) for k, val in v.items()}


class LoginConfiguration(BaseModel):
    version: conint(ge=1) = 1
    applications: Dict[str, List[LoginModuleEntry]] = Field(default_factory=dict)

    def entries_for(self, application: str) -> List[LoginModuleEntry]:
        """
        Get the chain configured for an application.

        Raises:
            KeyError: If the application is not configured
        """
        try:
            return self.applications[application]
        except KeyError:
            raise KeyError(f"No login configuration for application: {application}") from None


def _load_file(path: str) -> LoginConfiguration:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return LoginConfiguration(**data)


def _candidate_paths(filename: str) -> List[Optional[str]]:
    """Return candidate file paths to search for the login configuration."""
    return [
        os.getenv("PASSGATE_LOGIN_CONFIG"),
        # Project-relative default
        os.path.join(os.getcwd(), "config", filename),
        # Image default
        f"/etc/passgate/{filename}",
    ]


def load_login_configuration(
    path: Optional[str] = None,
    default_filename: str = "login.yaml"
) -> LoginConfiguration:
    """
    Load the login configuration.

    An explicit path must exist. Without one, the first existing candidate
    is used; if none exists an empty configuration is returned.
    """
    if path is not None:
        return _load_file(path)

    for candidate in _candidate_paths(default_filename):
        if candidate and os.path.isfile(candidate):
            logger.info(f"Loading login configuration from {candidate}")
            return _load_file(candidate)

    logger.warning("No login configuration file found; using empty configuration")
    return LoginConfiguration()


__all__ = ["LoginConfiguration", "LoginModuleEntry", "load_login_configuration"]
