"""Exceptions raised inside sshexec.

Bridges convert these to error text; callers see them only through
ExecResult.check().
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sshexec.models import ExecResult

NOT_CONNECTED = "not connected"


class SSHExecError(Exception):
    """Base class for sshexec errors."""


class NotConnectedError(SSHExecError):
    """exec or close issued on a handle without a transport."""

    def __init__(self) -> None:
        super().__init__(NOT_CONNECTED)


class ConnectionError(SSHExecError):
    """Failed to establish SSH connection."""

    def __init__(self, address: str, original_error: BaseException):
        """Initialize connection error.

        Args:
            address: host:port that was dialed
            original_error: Original exception that caused the failure
        """
        self.address = address
        self.original_error = original_error
        super().__init__(f"Cannot connect to {address}: {describe(original_error)}")


class CommandError(SSHExecError):
    """Remote command failed, timed out, or never started."""

    def __init__(self, result: "ExecResult"):
        self.result = result
        super().__init__(result.error)


def describe(exc: BaseException) -> str:
    """Render an exception as error text.

    Timeouts and some asyncssh errors stringify to an empty message,
    so fall back to the exception type name.
    """
    return str(exc) or type(exc).__name__
