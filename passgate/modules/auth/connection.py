"""
Per-request identity store connection.

The connection is owned by whoever serves the request. Login modules only
read it; binding, closing and pooling happen outside.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

_current_connection: ContextVar[Optional[Any]] = ContextVar(
    "passgate_connection", default=None
)


class ContextConnection:
    """ConnectionProvider that reads the connection bound to the current context."""

    def get_connection(self) -> Optional[Any]:
        return _current_connection.get()

    @staticmethod
    @contextmanager
    def bind(connection: Any) -> Iterator[Any]:
        """
        Bind a connection for the duration of a block.

        Example:
            >>> with ContextConnection.bind(conn):
            ...     login_context.login()
        """
        token = _current_connection.set(connection)
        try:
            yield connection
        finally:
            _current_connection.reset(token)
