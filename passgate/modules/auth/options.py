"""
Login module options.

Options arrive as a loose string mapping from the login configuration. Only
the string "true" (any case) switches a flag on; anything else, including a
missing or malformed value, leaves the default.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginModuleOptions(BaseModel):
    """Options recognised by the password login module."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    allow_empty_password: bool = Field(
        default=False, alias="allowEmptyPassword", description="Allow logins with an empty password"
    )
    ignore_login_domain: bool = Field(
        default=False,
        alias="ignoreLoginDomain",
        description="Match users on login name alone, ignoring stored login domains",
    )
    debug: bool = Field(default=False, description="Verbose logging for this module")

    @field_validator("allow_empty_password", "ignore_login_domain", "debug", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        """Case-insensitive "true" check."""
        return v is not None and str(v).lower() == "true"

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "LoginModuleOptions":
        return cls.model_validate(dict(options or {}))
