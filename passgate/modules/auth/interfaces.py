"""Login module collaborator interfaces following Black Box Design principles."""
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, Optional, Protocol


@dataclass(frozen=True)
class SecretRecord:
    """Identity store entry for a login name. Only user_id is consumed."""
    user_id: str
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Principal:
    """A named attribute of an authenticated subject (user, group, role)."""
    kind: str
    name: str

    def __str__(self) -> str:
        return f"{self.kind}:{self.name}"


class ConnectionProvider(Protocol):
    """Protocol for obtaining the identity store connection of the current request."""

    def get_connection(self) -> Optional[Any]:
        """
        Get the connection bound to the current request.

        Returns:
            Connection object, or None if none is available
        """
        ...


class SecretResolver(Protocol):
    """Protocol for looking up a secret record by login name - allows swappable stores."""

    def resolve(
        self,
        connection: Any,
        login_name: str,
        login_domain: Optional[str],
        ignore_domain: bool
    ) -> SecretRecord:
        """
        Resolve the secret record of a user.

        Args:
            connection: Identity store connection
            login_name: User's login name
            login_domain: User's login domain (optional)
            ignore_domain: Match on login name alone

        Returns:
            SecretRecord of the user

        Raises:
            NotFoundError: If no user matches
        """
        ...


class PrincipalResolver(Protocol):
    """Protocol for expanding a user id into the principals of its subject."""

    def resolve(self, connection: Any, user_id: str) -> Iterable[Hashable]:
        """
        Get the principals of a user.

        Args:
            connection: Identity store connection
            user_id: Stable user identifier from the secret record

        Returns:
            Principal values to attach to the subject
        """
        ...


class VerificationStrategy(Protocol):
    """Protocol for password verification - the extension point for real backends."""

    def verify(self, login_name: str, login_domain: Optional[str], password: str) -> bool:
        """
        Verify a password.

        Returns:
            True if the credentials are valid
        """
        ...
