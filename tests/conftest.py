"""
Shared pytest fixtures for passgate tests.

This module provides common fixtures including:
- InMemoryIdentityStore: secret and principal lookup over canned users
- Collaborator mocks for the password login module
- Module builders that run initialize() with given credentials and options
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set
from unittest.mock import MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from passgate.config.provider import AuthSettings
from passgate.modules.auth.callbacks import CredentialsCallbackHandler
from passgate.modules.auth.errors import NotFoundError
from passgate.modules.auth.interfaces import Principal, SecretRecord
from passgate.modules.auth.password import PasswordLoginModule
from passgate.modules.auth.subject import Subject


# =============================================================================
# Identity Store Double
# =============================================================================

@dataclass
class StoredUser:
    """A user row in the in-memory identity store."""
    user_id: str
    login_name: str
    login_domain: Optional[str] = None
    principals: Set[Principal] = field(default_factory=set)


class InMemoryIdentityStore:
    """
    Secret and principal resolver over a list of users.

    Lookups are recorded so tests can check which connection was used.

    Usage:
        def test_something(identity_store):
            identity_store.add_user("u-2", "bob", "corp", {Principal("group", "ops")})
    """

    def __init__(self):
        self.users: List[StoredUser] = []
        self.secret_lookups: List[tuple] = []
        self.principal_lookups: List[tuple] = []

    def add_user(
        self,
        user_id: str,
        login_name: str,
        login_domain: Optional[str] = None,
        principals: Iterable[Principal] = ()
    ) -> StoredUser:
        user = StoredUser(user_id, login_name, login_domain, set(principals))
        self.users.append(user)
        return user

    # SecretResolver
    def resolve(self, connection, login_name, login_domain, ignore_domain) -> SecretRecord:
        self.secret_lookups.append((connection, login_name, login_domain, ignore_domain))
        for user in self.users:
            if user.login_name != login_name:
                continue
            if ignore_domain or (user.login_domain or "") == (login_domain or ""):
                return SecretRecord(user_id=user.user_id)
        raise NotFoundError(f"User not found: {login_name}")

    def principals_for(self, connection, user_id) -> Set[Principal]:
        self.principal_lookups.append((connection, user_id))
        for user in self.users:
            if user.user_id == user_id:
                return set(user.principals)
        raise NotFoundError(f"No user with id {user_id}")


class StorePrincipalResolver:
    """PrincipalResolver view over an InMemoryIdentityStore."""

    def __init__(self, store: InMemoryIdentityStore):
        self.store = store

    def resolve(self, connection, user_id):
        return self.store.principals_for(connection, user_id)


ALICE_PRINCIPALS = {
    Principal("user", "u-1"),
    Principal("group", "staff"),
    Principal("role", "editor"),
}


@pytest.fixture
def identity_store():
    """Identity store with alice (no domain) and carol (domain corp)."""
    store = InMemoryIdentityStore()
    store.add_user("u-1", "alice", None, ALICE_PRINCIPALS)
    store.add_user("u-3", "carol", "corp", {Principal("user", "u-3")})
    return store


# =============================================================================
# Collaborator Mocks
# =============================================================================

@pytest.fixture
def connection():
    """Opaque identity store connection."""
    return MagicMock(name="connection")


@pytest.fixture
def connection_provider(connection):
    provider = MagicMock()
    provider.get_connection.return_value = connection
    return provider


@pytest.fixture
def principal_resolver(identity_store):
    return StorePrincipalResolver(identity_store)


@pytest.fixture
def verifier():
    """Verification strategy double that accepts by default."""
    strategy = MagicMock()
    strategy.verify.return_value = True
    return strategy


@pytest.fixture
def subject():
    return Subject()


@pytest.fixture
def make_module(identity_store, principal_resolver, connection_provider, verifier, subject):
    """
    Build an initialized PasswordLoginModule.

    Usage:
        module = make_module("alice", None, "secret", options={"debug": "true"})
    """

    def _make(
        login_name: Optional[str] = "alice",
        login_domain: Optional[str] = None,
        password: Optional[str] = "secret",
        options: Optional[Dict[str, str]] = None,
        handler=None,
        settings: Optional[AuthSettings] = None,
        target: Optional[Subject] = None
    ) -> PasswordLoginModule:
        module = PasswordLoginModule(
            secret_resolver=identity_store,
            principal_resolver=principal_resolver,
            connection_provider=connection_provider,
            verifier=verifier,
            settings=settings,
        )
        if handler is None:
            handler = CredentialsCallbackHandler(login_name, login_domain, password)
        module.initialize(target if target is not None else subject, handler, {}, options or {})
        return module

    return _make
