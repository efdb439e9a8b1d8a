"""
Tests for credential callbacks and the context connection.
"""

from passgate.modules.auth.callbacks import (
    Callback,
    CapabilityMismatch,
    CredentialsCallbackHandler,
    LoginDomainCallback,
    LoginNameCallback,
    LoginToken,
    PasswordCallback,
    login_tokens,
    required_tokens,
)
from passgate.modules.auth.connection import ContextConnection


def test_handler_fills_slots():
    """Test that the credentials handler fills every requested slot."""
    callbacks = [LoginNameCallback(), LoginDomainCallback(), PasswordCallback()]

    result = CredentialsCallbackHandler("alice", "corp", "pw").handle(callbacks)

    assert result is callbacks
    assert [cb.value for cb in callbacks] == ["alice", "corp", "pw"]


def test_handler_keeps_absent_and_empty_distinct():
    """Test that None (absent) and "" (empty) survive the round trip."""
    name, password = LoginNameCallback(), PasswordCallback()

    CredentialsCallbackHandler(None, None, "").handle([name, password])

    assert name.value is None
    assert password.value == ""


def test_handler_reports_capability_mismatch():
    """Test that unsupported slot kinds produce CapabilityMismatch."""
    handler = CredentialsCallbackHandler(
        "alice", "corp", "pw", supported_tokens=[LoginToken.USER_NAME, LoginToken.PASSWORD]
    )
    callbacks = [LoginNameCallback(), LoginDomainCallback(), PasswordCallback()]

    result = handler.handle(callbacks)

    assert isinstance(result, CapabilityMismatch)
    assert result.unsupported == {LoginToken.DOMAIN_NAME}
    assert "domain_name" in result.reason
    assert callbacks[0].value is None


def test_handler_rejects_untyped_callback():
    """Test that a slot without a credential kind is reported, not looked up."""
    handler = CredentialsCallbackHandler("alice", None, "pw")

    result = handler.handle([LoginNameCallback(), Callback()])

    assert isinstance(result, CapabilityMismatch)
    assert result.unsupported == frozenset()
    assert "Callback" in result.reason


def test_password_callback_repr_hides_value():
    assert "hunter2" not in repr(PasswordCallback("hunter2"))


def test_login_tokens_decorator():
    @login_tokens(LoginToken.USER_NAME)
    class NameOnlyModule:
        pass

    assert required_tokens(NameOnlyModule) == {LoginToken.USER_NAME}
    assert required_tokens(NameOnlyModule()) == {LoginToken.USER_NAME}
    assert required_tokens(object()) == frozenset()


def test_context_connection_binding():
    """Test that the connection is visible only inside the bound block."""
    provider = ContextConnection()
    conn = object()

    assert provider.get_connection() is None
    with ContextConnection.bind(conn):
        assert provider.get_connection() is conn
        with ContextConnection.bind("inner"):
            assert provider.get_connection() == "inner"
        assert provider.get_connection() is conn
    assert provider.get_connection() is None
