"""Connection handle state."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import asyncssh

DEFAULT_CONNECT_TIMEOUT = 10


@dataclass
class ConnectionHandle:
    """Connect timeout plus the transport, once established.

    Holds no logic. The transport is read and written only on the
    owning event loop, see HandleRunner.
    """

    timeout: int = DEFAULT_CONNECT_TIMEOUT
    connection: "asyncssh.SSHClientConnection | None" = None

    @property
    def is_connected(self) -> bool:
        """Check if a transport is held and still open."""
        conn = self.connection
        if conn is None:
            return False
        return not conn.is_closed()
