"""
Login error taxonomy.

Every error raised out of a login module derives from LoginError so a chain
controller can catch one type. Abstention and policy denial are not errors:
the first is a return value, the second a state transition.
"""


class LoginError(Exception):
    """Base class for all login failures."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class FailedLogin(LoginError):
    """Authentication failed for the presented credentials."""


class MissingCredential(FailedLogin):
    """A required credential (login name or password) was not supplied."""


class StoreUnavailable(LoginError):
    """No connection to the identity store could be obtained."""


class IdentityNotFound(LoginError):
    """The secret resolver has no record for the login name."""


class CommitFailure(LoginError):
    """Principals could not be resolved or attached during commit."""


class NotFoundError(LookupError):
    """Raised by secret resolvers when no record matches."""
