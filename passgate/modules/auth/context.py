"""
Login context - drives a chain of login modules.

Each entry pairs a module with a control flag that decides how its outcome
counts toward the overall result. Modules whose login() returns False have
abstained and do not count either way.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .callbacks import CallbackHandler, required_tokens
from .errors import FailedLogin, LoginError
from .subject import Subject

logger = logging.getLogger(__name__)


class ControlFlag(str, Enum):
    """How a module's outcome counts toward the chain result."""

    REQUIRED = "required"
    REQUISITE = "requisite"
    SUFFICIENT = "sufficient"
    OPTIONAL = "optional"


@dataclass
class ChainEntry:
    """A login module and its control flag."""
    module: Any
    flag: ControlFlag = ControlFlag.REQUIRED
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class _Outcome:
    entry: ChainEntry
    invoked: bool = False
    succeeded: bool = False
    error: Optional[LoginError] = None


class LoginContext:
    """
    Runs one authentication attempt across a chain of login modules.

    Modules must be fresh instances; the context initializes them with the
    shared subject, callback handler and their entry options.
    """

    def __init__(
        self,
        entries: Sequence[ChainEntry],
        callback_handler: CallbackHandler,
        subject: Optional[Subject] = None
    ):
        self.entries = list(entries)
        self.callback_handler = callback_handler
        self.subject = subject if subject is not None else Subject()
        self.shared_state: Dict[str, Any] = {}
        self._outcomes: List[_Outcome] = []
        self._authenticated = False

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    def _applies(self, module: Any) -> bool:
        """Check the module's declared tokens against what the handler supports."""
        supported = getattr(self.callback_handler, "supported_tokens", None)
        if supported is None:
            return True
        return required_tokens(module) <= frozenset(supported)

    def _run_logins(self) -> bool:
        required_failed = False
        any_succeeded = False

        for entry in self.entries:
            outcome = _Outcome(entry)
            self._outcomes.append(outcome)

            if not self._applies(entry.module):
                logger.debug(f"Skipping {type(entry.module).__name__}: credentials not available")
                continue

            entry.module.initialize(
                self.subject, self.callback_handler, self.shared_state, entry.options
            )
            outcome.invoked = True

            try:
                if not entry.module.login():
                    continue  # abstained
                outcome.succeeded = True
            except LoginError as e:
                logger.debug(f"{type(entry.module).__name__} login failed: {e}")
                outcome.error = e
            except Exception as e:
                logger.error(f"{type(entry.module).__name__} login raised", exc_info=True)
                outcome.error = LoginError(str(e))
                outcome.error.__cause__ = e

            mandatory = entry.flag in (ControlFlag.REQUIRED, ControlFlag.REQUISITE)
            if outcome.succeeded:
                any_succeeded = True
                if entry.flag == ControlFlag.SUFFICIENT and not required_failed:
                    return True
            elif mandatory:
                required_failed = True
                if entry.flag == ControlFlag.REQUISITE:
                    return False

        return any_succeeded and not required_failed

    def _first_error(self) -> LoginError:
        for o in self._outcomes:
            if o.error is not None:
                return o.error
        if not any(o.succeeded for o in self._outcomes):
            return FailedLogin("Login failure: all modules ignored")
        return FailedLogin("Authentication failed")

    def _abort_all(self) -> None:
        for o in self._outcomes:
            if o.invoked:
                try:
                    o.entry.module.abort()
                except Exception:
                    logger.error(f"Abort failed for {type(o.entry.module).__name__}", exc_info=True)

    def login(self) -> Subject:
        """
        Authenticate through the chain.

        Returns:
            The subject carrying the committed principals

        Raises:
            LoginError: If the chain did not authenticate the user
        """
        if self._outcomes:
            raise LoginError("LoginContext can only be used for one attempt")

        if not self._run_logins():
            self._abort_all()
            raise self._first_error()

        committed = False
        for o in self._outcomes:
            if not o.invoked:
                continue
            try:
                done = o.entry.module.commit()
            except LoginError as e:
                o.error = e
                self._abort_all()
                raise
            except Exception as e:
                logger.error(f"{type(o.entry.module).__name__} commit raised", exc_info=True)
                o.error = LoginError(str(e))
                self._abort_all()
                raise o.error from e
            committed = committed or done
            if not done and o.succeeded and o.entry.flag in (
                ControlFlag.REQUIRED, ControlFlag.REQUISITE
            ):
                self._abort_all()
                raise FailedLogin("Authentication failed")

        if not committed:
            self._abort_all()
            raise FailedLogin("Authentication failed")

        self._authenticated = True
        logger.info(f"Login succeeded with {len(self.subject)} principal(s)")
        return self.subject

    def logout(self) -> None:
        """Log out every module that took part in the attempt."""
        for o in self._outcomes:
            if o.invoked:
                o.entry.module.logout()
        self._authenticated = False
