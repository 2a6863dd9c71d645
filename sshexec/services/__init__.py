"""Services for sshexec."""

from sshexec.services.connection import close_connection, open_connection
from sshexec.services.errors import (
    CommandError,
    ConnectionError,
    NotConnectedError,
    SSHExecError,
)
from sshexec.services.executors import SessionGuard, exit_error, run_command
from sshexec.services.runner import HandleRunner
from sshexec.services.worker import HandleWorker

__all__ = [
    "CommandError",
    "ConnectionError",
    "HandleRunner",
    "HandleWorker",
    "NotConnectedError",
    "SSHExecError",
    "SessionGuard",
    "close_connection",
    "exit_error",
    "open_connection",
    "run_command",
]
