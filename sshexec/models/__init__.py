"""Data models for sshexec."""

from sshexec.models.command import ExecResult
from sshexec.models.handle import ConnectionHandle
from sshexec.models.ssh import SSHTarget

__all__ = [
    "ConnectionHandle",
    "ExecResult",
    "SSHTarget",
]
