"""Calling-convention adapters over a connection handle."""

from sshexec.bridges.aio import AsyncSSHClient
from sshexec.bridges.sync import SSHClient

__all__ = ["AsyncSSHClient", "SSHClient"]
