"""Protocol definitions for sshexec.

Structural interfaces for the parts of asyncssh the executors rely on,
so tests and alternative transports can stand in for real connections.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StreamReader(Protocol):
    """Readable side of a remote process stream."""

    async def read(self, n: int = -1) -> str:
        """Read up to n characters, returning '' at EOF."""
        ...


@runtime_checkable
class SSHProcess(Protocol):
    """One remote command running over an SSH channel.

    Matches asyncssh.SSHClientProcess.
    """

    stdout: Any
    stderr: Any
    exit_status: int | None
    exit_signal: tuple[str, bool, str, str] | None

    def close(self) -> None:
        """Close the channel, interrupting the remote command."""
        ...

    def kill(self) -> None:
        """Send KILL to the remote command."""
        ...

    async def wait_closed(self) -> None:
        """Wait for the channel to finish closing."""
        ...


@runtime_checkable
class SSHTransport(Protocol):
    """Established SSH connection.

    Matches asyncssh.SSHClientConnection.
    """

    async def create_process(self, *args: Any, **kwargs: Any) -> SSHProcess:
        """Open a channel and start a remote command."""
        ...

    def is_closed(self) -> bool:
        """Check if the connection is closed."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...

    async def wait_closed(self) -> None:
        """Wait for the connection to finish closing."""
        ...


__all__ = [
    "SSHProcess",
    "SSHTransport",
    "StreamReader",
]
