"""
Password verification strategies.

The login module delegates the actual password check to a
VerificationStrategy. Plug a directory bind, a hash comparison or any other
backend in here without touching the login state machine.
"""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AlwaysAllowVerifier:
    """
    Reference strategy that accepts every password.

    Placeholder only. Deployments are expected to inject a real strategy.
    """

    def verify(self, login_name: str, login_domain: Optional[str], password: str) -> bool:
        logger.debug("Accepting password for %r without verification", login_name)
        return True


class CallableVerifier:
    """Adapt a plain function to the VerificationStrategy protocol."""

    def __init__(self, func: Callable[[str, Optional[str], str], bool]):
        self._func = func

    def verify(self, login_name: str, login_domain: Optional[str], password: str) -> bool:
        return bool(self._func(login_name, login_domain, password))
