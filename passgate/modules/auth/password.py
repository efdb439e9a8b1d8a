"""
Password login module.

Authenticates a user whose credentials live in the identity store, using
login name, login domain and password. Takes part in a login chain through
the four-stage lifecycle: login, then commit or abort, then logout.

One instance serves exactly one authentication attempt and is not safe for
concurrent use.
"""

import logging
from typing import Any, Dict, FrozenSet, Hashable, Mapping, Optional

from ...config.provider import AuthSettings
from .callbacks import (
    CallbackHandler,
    CapabilityMismatch,
    LoginDomainCallback,
    LoginNameCallback,
    LoginToken,
    PasswordCallback,
    login_tokens,
)
from .errors import (
    CommitFailure,
    IdentityNotFound,
    LoginError,
    MissingCredential,
    NotFoundError,
    StoreUnavailable,
)
from .interfaces import (
    ConnectionProvider,
    PrincipalResolver,
    SecretResolver,
    VerificationStrategy,
)
from .options import LoginModuleOptions
from .subject import Subject
from .verification import AlwaysAllowVerifier

logger = logging.getLogger(__name__)


def _quoted(value: Optional[str]) -> str:
    return f"'{value}'" if value is not None else "null"


@login_tokens(LoginToken.USER_NAME, LoginToken.DOMAIN_NAME, LoginToken.PASSWORD)
class PasswordLoginModule:
    """
    Login module for user name, login domain and password credentials.

    Collaborators are injected at construction; the per-attempt subject,
    callback handler and options are supplied through initialize().
    """

    def __init__(
        self,
        secret_resolver: SecretResolver,
        principal_resolver: PrincipalResolver,
        connection_provider: ConnectionProvider,
        verifier: Optional[VerificationStrategy] = None,
        settings: Optional[AuthSettings] = None,
    ):
        """
        Initialize password login module.

        Args:
            secret_resolver: Maps (login name, domain) to a secret record
            principal_resolver: Maps a user id to the subject's principals
            connection_provider: Supplies the identity store connection
            verifier: Password verification strategy (defaults to AlwaysAllowVerifier)
            settings: Ambient authentication settings
        """
        self._secret_resolver = secret_resolver
        self._principal_resolver = principal_resolver
        self._connection_provider = connection_provider
        self._verifier = verifier if verifier is not None else AlwaysAllowVerifier()
        self._settings = settings or AuthSettings()

        self._subject: Optional[Subject] = None
        self._callback_handler: Optional[CallbackHandler] = None
        self._shared_state: Dict[str, Any] = {}
        self._options = LoginModuleOptions()
        self._debug = False

        self._login_name: Optional[str] = None
        self._login_domain: Optional[str] = None
        self._user_id: Optional[str] = None
        self._login_succeeded = False
        self._commit_succeeded = False

    def initialize(
        self,
        subject: Subject,
        callback_handler: CallbackHandler,
        shared_state: Optional[Dict[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Bind the module to one authentication attempt.

        Args:
            subject: Subject that receives principals on commit
            callback_handler: Source of the credentials
            shared_state: State shared with the other modules of the chain
            options: Module options (allowEmptyPassword, ignoreLoginDomain, debug)
        """
        self._subject = subject
        self._callback_handler = callback_handler
        self._shared_state = shared_state if shared_state is not None else {}
        self._options = LoginModuleOptions.from_mapping(options)
        self._debug = (
            self._options.debug
            or self._settings.debug
            or logger.isEnabledFor(logging.DEBUG)
        )

    @property
    def options(self) -> LoginModuleOptions:
        return self._options

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def login_name(self) -> Optional[str]:
        return self._login_name

    @property
    def login_domain(self) -> Optional[str]:
        return self._login_domain

    @property
    def login_succeeded(self) -> bool:
        return self._login_succeeded

    @property
    def commit_succeeded(self) -> bool:
        return self._commit_succeeded

    def login(self) -> bool:
        """
        Gather and verify the credentials.

        Returns:
            True if the stage ran to completion (see login_succeeded for
            the outcome), False if the module does not apply to the request

        Raises:
            MissingCredential: If the login name or password is absent
            StoreUnavailable: If there is no identity store connection
            IdentityNotFound: If the secret resolver has no such user
            LoginError: On any other failure
        """
        if self._commit_succeeded:
            # withdraw principals of the previous attempt
            self.logout()

        self._login_succeeded = False
        self._commit_succeeded = False
        self._user_id = None

        try:
            login_name_cb = LoginNameCallback()
            login_domain_cb = LoginDomainCallback()
            password_cb = PasswordCallback()

            result = self._callback_handler.handle([login_name_cb, login_domain_cb, password_cb])
            if isinstance(result, CapabilityMismatch):
                if self._debug:
                    logger.info(f"Unsupported callback ({result.reason}). Ignoring the login module.")
                return False

            self._login_name = login_name_cb.value
            self._login_domain = login_domain_cb.value
            password = password_cb.value

            if self._debug:
                logger.info(
                    f"Try to login user = {_quoted(self._login_name)}, "
                    f"domain = {_quoted(self._login_domain)}."
                )

            if self._login_name is None:
                raise MissingCredential("No login name specified.")

            if password is None:
                raise MissingCredential("No password specified.")

            connection = self._connection_provider.get_connection()
            if connection is None:
                raise StoreUnavailable("No database connection available.")

            secret = self._secret_resolver.resolve(
                connection,
                self._login_name,
                self._login_domain,
                self._options.ignore_login_domain,
            )

            # the user id identifies the user in the commit step
            self._user_id = secret.user_id

            if self._options.allow_empty_password or len(password) > 0:
                self._login_succeeded = bool(
                    self._verifier.verify(self._login_name, self._login_domain, password)
                )
            else:
                logger.warning("Login with empty passwords is denied.")
                self._login_succeeded = False

        except LoginError:
            raise
        except NotFoundError as e:
            if self._debug:
                logger.error("Login failed.", exc_info=True)
            raise IdentityNotFound(str(e)) from e
        except Exception as e:
            logger.error("Login failed.", exc_info=True)
            raise LoginError(str(e)) from e

        return True

    def commit(self) -> bool:
        """
        Attach the user's principals to the subject.

        Returns:
            True if principals were attached, False if login did not succeed

        Raises:
            CommitFailure: If the principals could not be resolved
        """
        if not self._login_succeeded:
            self._commit_succeeded = False
            return False

        if self._commit_succeeded:
            logger.debug(f"Commit already done for user {_quoted(self._login_name)}")
            return True

        try:
            connection = self._connection_provider.get_connection()
            if connection is None:
                raise StoreUnavailable("No database connection available.")

            principals: FrozenSet[Hashable] = frozenset(
                self._principal_resolver.resolve(connection, self._user_id)
            )
            self._subject.add_principals(self, principals)
        except Exception as e:
            logger.error("Commit login failed.", exc_info=True)
            raise CommitFailure(str(e)) from e

        self._commit_succeeded = True

        if self._debug:
            logger.info(
                f"Committed {len(principals)} principal(s) for user {_quoted(self._login_name)}."
            )

        return True

    def abort(self) -> bool:
        """
        Unwind a login attempt after the chain failed.

        Returns:
            True if this module's login had succeeded and was cleaned up
        """
        if self._login_succeeded:
            self.logout()
            return True

        return False

    def logout(self) -> bool:
        """
        Remove this module's principals and reset the outcome flags.

        Returns:
            Always True
        """
        if self._subject is not None:
            try:
                removed = self._subject.remove_principals(self)
                if self._debug and removed:
                    logger.info(f"Removed {len(removed)} principal(s) from subject.")
            except Exception:
                logger.error("Failed to remove principals on logout.", exc_info=True)

        self._login_succeeded = False
        self._commit_succeeded = False

        return True
