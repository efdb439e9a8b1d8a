"""
Login Service Facade following Black Box Design principles.

This module provides:
- A clean interface for running configured login chains
- Standardized authentication results
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Hashable, Optional

from ..config import LoginConfiguration
from .callbacks import CallbackHandler
from .context import LoginContext
from .errors import LoginError
from .factory import LoginModuleFactory
from .subject import Subject

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """Standardized authentication result."""
    ok: bool
    application: str
    subject: Optional[Subject] = None
    principals: FrozenSet[Hashable] = field(default_factory=frozenset)
    error: Optional[str] = None
    context: Optional[LoginContext] = None


class LoginService:
    """
    Runs the login chain configured for an application.

    Failures come back as AuthResult with ok=False rather than exceptions,
    except for an unknown application, which is a configuration error.
    """

    def __init__(self, factory: LoginModuleFactory, configuration: LoginConfiguration):
        """
        Initialize with a module factory and the login configuration.

        Args:
            factory: Builds login modules and contexts
            configuration: Chains per application
        """
        self._factory = factory
        self._configuration = configuration

    def authenticate(
        self,
        application: str,
        callback_handler: CallbackHandler,
        subject: Optional[Subject] = None
    ) -> AuthResult:
        """
        Authenticate through the application's chain.

        Args:
            application: Application name in the login configuration
            callback_handler: Credential source for this attempt
            subject: Subject to populate (a new one if omitted)

        Returns:
            AuthResult; keep its context to log out later

        Raises:
            KeyError: If the application is not configured
        """
        entries = self._configuration.entries_for(application)
        context = self._factory.build_context(entries, callback_handler, subject)

        try:
            authenticated = context.login()
        except LoginError as e:
            logger.info(f"Login to {application} failed: {e}")
            return AuthResult(
                ok=False,
                application=application,
                error=str(e) or type(e).__name__,
            )

        return AuthResult(
            ok=True,
            application=application,
            subject=authenticated,
            principals=authenticated.principals,
            context=context,
        )

    def logout(self, result: AuthResult) -> None:
        """Tear down a session produced by authenticate()."""
        if result.context is not None:
            result.context.logout()
