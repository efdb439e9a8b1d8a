"""
Authentication Module - Black Box Interface

Purpose: Verify user name / domain / password credentials and attach the
user's principals to a subject
Interface: PasswordLoginModule (initialize, login, commit, abort, logout),
LoginContext, LoginModuleFactory
Hidden: Credential gathering, secret lookup, verification, principal lookup

Secret lookup, principal lookup, connection access and password verification
are injected, so any store or verification backend can be plugged in
without touching the login state machine.
"""

from .callbacks import (
    CallbackHandler,
    CapabilityMismatch,
    CredentialsCallbackHandler,
    LoginDomainCallback,
    LoginNameCallback,
    LoginToken,
    PasswordCallback,
    login_tokens,
    required_tokens,
)
from .connection import ContextConnection
from .context import ChainEntry, ControlFlag, LoginContext
from .errors import (
    CommitFailure,
    FailedLogin,
    IdentityNotFound,
    LoginError,
    MissingCredential,
    NotFoundError,
    StoreUnavailable,
)
from .factory import LoginModuleFactory
from .interfaces import Principal, SecretRecord
from .password import PasswordLoginModule
from .subject import Subject
from .verification import AlwaysAllowVerifier, CallableVerifier

__all__ = [
    "AlwaysAllowVerifier",
    "CallableVerifier",
    "CallbackHandler",
    "CapabilityMismatch",
    "ChainEntry",
    "CommitFailure",
    "ContextConnection",
    "ControlFlag",
    "CredentialsCallbackHandler",
    "FailedLogin",
    "IdentityNotFound",
    "LoginContext",
    "LoginDomainCallback",
    "LoginError",
    "LoginModuleFactory",
    "LoginNameCallback",
    "LoginToken",
    "MissingCredential",
    "NotFoundError",
    "PasswordCallback",
    "PasswordLoginModule",
    "Principal",
    "SecretRecord",
    "StoreUnavailable",
    "Subject",
    "login_tokens",
    "required_tokens",
]
