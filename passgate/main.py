"""
Passgate composition root.

Reads process configuration, applies logging and wires the login service.
Callers supply the identity store collaborators; everything else has a
default.
"""

import logging
from typing import Optional

from .config.provider import ConfigProvider, EnvConfigProvider
from .logging_config import configure_logging
from .modules.auth.connection import ContextConnection
from .modules.auth.factory import LoginModuleFactory
from .modules.auth.interfaces import (
    ConnectionProvider,
    PrincipalResolver,
    SecretResolver,
    VerificationStrategy,
)
from .modules.auth.service import LoginService
from .modules.config import load_login_configuration

logger = logging.getLogger(__name__)


def create_login_service(
    secret_resolver: SecretResolver,
    principal_resolver: PrincipalResolver,
    connection_provider: Optional[ConnectionProvider] = None,
    verifier: Optional[VerificationStrategy] = None,
    config_provider: Optional[ConfigProvider] = None,
    setup_logging: bool = True
) -> LoginService:
    """
    Build a LoginService from process configuration.

    Args:
        secret_resolver: Identity store secret lookup
        principal_resolver: Identity store principal lookup
        connection_provider: Connection source (defaults to ContextConnection)
        verifier: Password verification strategy
        config_provider: Configuration source (defaults to environment)
        setup_logging: Apply the passgate logging configuration

    Returns:
        LoginService ready to authenticate
    """
    config_provider = config_provider or EnvConfigProvider()
    auth_settings = config_provider.get_auth_settings()

    if setup_logging:
        configure_logging(
            config_provider.get_logging_settings().level,
            debug=auth_settings.debug,
        )

    configuration = load_login_configuration(config_provider.get_login_config_path())
    logger.info(f"Login configuration loaded for applications: {sorted(configuration.applications)}")

    factory = LoginModuleFactory.from_config(
        config_provider,
        secret_resolver=secret_resolver,
        principal_resolver=principal_resolver,
        connection_provider=connection_provider or ContextConnection(),
        verifier=verifier,
    )
    return LoginService(factory, configuration)
