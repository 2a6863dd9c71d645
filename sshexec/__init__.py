"""Embeddable SSH remote command execution client."""

from sshexec.bridges import AsyncSSHClient, SSHClient
from sshexec.config import (
    AcceptAnyHostKey,
    KnownHostsPolicy,
    Settings,
    TrustPolicy,
)
from sshexec.models import ExecResult
from sshexec.services.errors import (
    CommandError,
    ConnectionError,
    NotConnectedError,
    SSHExecError,
)

__version__ = "0.1.0"


def create(settings: Settings | None = None) -> SSHClient:
    """Create a blocking client with no connection and the default timeout."""
    return SSHClient(settings=settings)


def create_async(settings: Settings | None = None) -> AsyncSSHClient:
    """Create an asyncio client with no connection and the default timeout."""
    return AsyncSSHClient(settings=settings)


__all__ = [
    "AcceptAnyHostKey",
    "AsyncSSHClient",
    "CommandError",
    "ConnectionError",
    "ExecResult",
    "KnownHostsPolicy",
    "NotConnectedError",
    "SSHClient",
    "SSHExecError",
    "Settings",
    "TrustPolicy",
    "create",
    "create_async",
]
