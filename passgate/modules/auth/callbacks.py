"""
Credential callbacks.

A login module never talks to the user directly. It hands a batch of empty
callback slots to a CallbackHandler and reads the values back. A handler that
cannot fill a requested slot returns CapabilityMismatch instead of raising, so
"this module does not apply" stays distinct from "this module failed".
"""

from dataclasses import dataclass
from enum import Enum
from typing import (
    Callable,
    FrozenSet,
    Iterable,
    Optional,
    Protocol,
    Sequence,
    Type,
    TypeVar,
    Union,
)


class LoginToken(str, Enum):
    """Kinds of credentials a login module can require."""

    USER_NAME = "user_name"
    DOMAIN_NAME = "domain_name"
    PASSWORD = "password"


@dataclass
class Callback:
    """A single credential slot filled by a callback handler."""

    value: Optional[str] = None

    token = None  # type: Optional[LoginToken]


@dataclass
class LoginNameCallback(Callback):
    token = LoginToken.USER_NAME


@dataclass
class LoginDomainCallback(Callback):
    token = LoginToken.DOMAIN_NAME


@dataclass
class PasswordCallback(Callback):
    token = LoginToken.PASSWORD

    def __repr__(self) -> str:
        # never render the password
        return f"PasswordCallback(value={'<set>' if self.value is not None else None})"


@dataclass(frozen=True)
class CapabilityMismatch:
    """Returned by a handler that cannot satisfy the requested callbacks."""

    reason: str
    unsupported: FrozenSet[LoginToken] = frozenset()


CallbackResult = Union[Sequence[Callback], CapabilityMismatch]


class CallbackHandler(Protocol):
    """Protocol for credential sources."""

    def handle(self, callbacks: Sequence[Callback]) -> CallbackResult:
        """
        Fill the given callbacks in place.

        Args:
            callbacks: Empty credential slots

        Returns:
            The filled callbacks, or CapabilityMismatch if any slot kind
            is not supported by this handler
        """
        ...


class CredentialsCallbackHandler:
    """
    Callback handler backed by fixed credential values.

    Only the token kinds passed at construction are supported. Leaving a
    value as None models a credential the caller did not supply at all.
    """

    def __init__(
        self,
        login_name: Optional[str] = None,
        login_domain: Optional[str] = None,
        password: Optional[str] = None,
        supported_tokens: Optional[Iterable[LoginToken]] = None,
    ):
        self._values = {
            LoginToken.USER_NAME: login_name,
            LoginToken.DOMAIN_NAME: login_domain,
            LoginToken.PASSWORD: password,
        }
        if supported_tokens is None:
            supported_tokens = list(LoginToken)
        self.supported_tokens: FrozenSet[LoginToken] = frozenset(supported_tokens)

    def handle(self, callbacks: Sequence[Callback]) -> CallbackResult:
        rejected = [cb for cb in callbacks if cb.token not in self.supported_tokens]
        if rejected:
            names = ", ".join(sorted(
                cb.token.value if cb.token is not None else type(cb).__name__ for cb in rejected
            ))
            unsupported = frozenset(cb.token for cb in rejected if cb.token is not None)
            return CapabilityMismatch(f"Unsupported callback: {names}", unsupported)

        for cb in callbacks:
            cb.value = self._values[cb.token]
        return callbacks


T = TypeVar("T")


def login_tokens(*tokens: LoginToken) -> Callable[[Type[T]], Type[T]]:
    """Class decorator declaring which credentials a login module requires."""

    def decorate(cls: Type[T]) -> Type[T]:
        cls.LOGIN_TOKENS = frozenset(tokens)
        return cls

    return decorate


def required_tokens(module) -> FrozenSet[LoginToken]:
    """Return the credential kinds a module (class or instance) declares."""
    return getattr(module, "LOGIN_TOKENS", frozenset())
