"""
Login Module Factory following Black Box Design principles.

This factory:
- Holds the collaborators shared by every login attempt
- Creates a fresh login module per attempt
- Wires configured chains into a LoginContext
"""

import logging
from typing import TYPE_CHECKING, Callable, Dict, Iterable, Optional

from ...config.provider import AuthSettings, ConfigProvider
from .callbacks import CallbackHandler
from .context import ChainEntry, LoginContext
from .interfaces import (
    ConnectionProvider,
    PrincipalResolver,
    SecretResolver,
    VerificationStrategy,
)
from .password import PasswordLoginModule
from .subject import Subject

if TYPE_CHECKING:
    from ..config import LoginModuleEntry

logger = logging.getLogger(__name__)


class LoginModuleFactory:
    """
    Composition root for login modules.

    Modules are registered by name. Each builder receives the factory and
    returns a new, uninitialized module.
    """

    def __init__(
        self,
        secret_resolver: SecretResolver,
        principal_resolver: PrincipalResolver,
        connection_provider: ConnectionProvider,
        verifier: Optional[VerificationStrategy] = None,
        settings: Optional[AuthSettings] = None
    ):
        self.secret_resolver = secret_resolver
        self.principal_resolver = principal_resolver
        self.connection_provider = connection_provider
        self.verifier = verifier
        self.settings = settings or AuthSettings()
        self._builders: Dict[str, Callable[["LoginModuleFactory"], object]] = {
            "password": LoginModuleFactory._build_password_module,
        }

    @classmethod
    def from_config(
        cls,
        config_provider: ConfigProvider,
        secret_resolver: SecretResolver,
        principal_resolver: PrincipalResolver,
        connection_provider: ConnectionProvider,
        verifier: Optional[VerificationStrategy] = None
    ) -> "LoginModuleFactory":
        """Build a factory whose ambient settings come from a config provider."""
        return cls(
            secret_resolver=secret_resolver,
            principal_resolver=principal_resolver,
            connection_provider=connection_provider,
            verifier=verifier,
            settings=config_provider.get_auth_settings(),
        )

    def _build_password_module(self) -> PasswordLoginModule:
        return PasswordLoginModule(
            secret_resolver=self.secret_resolver,
            principal_resolver=self.principal_resolver,
            connection_provider=self.connection_provider,
            verifier=self.verifier,
            settings=self.settings,
        )

    def register(self, name: str, builder: Callable[["LoginModuleFactory"], object]) -> None:
        """Register an additional module type."""
        self._builders[name] = builder

    def create(self, name: str):
        """
        Create a fresh module instance.

        Raises:
            KeyError: If no module is registered under the name
        """
        try:
            builder = self._builders[name]
        except KeyError:
            raise KeyError(f"Unknown login module: {name}") from None
        return builder(self)

    def build_context(
        self,
        entries: Iterable["LoginModuleEntry"],
        callback_handler: CallbackHandler,
        subject: Optional[Subject] = None
    ) -> LoginContext:
        """
        Build a login context for one attempt.

        Args:
            entries: Configured chain entries
            callback_handler: Credential source for this attempt
            subject: Subject to populate (a new one if omitted)

        Returns:
            LoginContext ready for login()
        """
        entries = list(entries)
        chain = [
            ChainEntry(module=self.create(e.module), flag=e.flag, options=dict(e.options))
            for e in entries
        ]
        logger.debug(f"Built login chain: {[e.module for e in entries]}")
        return LoginContext(chain, callback_handler, subject)
