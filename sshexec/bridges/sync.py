"""Blocking client.

Each call returns only once the operation, including any deadline race,
has fully resolved.
"""

import logging
from types import TracebackType
from typing import TYPE_CHECKING, TypeVar

from sshexec.models import ExecResult, SSHTarget
from sshexec.services.runner import HandleRunner

if TYPE_CHECKING:
    import concurrent.futures

    from sshexec.config import Settings, TrustPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SSHClient:
    """Synchronous SSH command client.

    Example:
        with SSHClient() as ssh:
            error = ssh.connect("10.0.0.5", 22, "deploy", "secret")
            result = ssh.exec("uptime", timeout=5)
    """

    def __init__(
        self,
        settings: "Settings | None" = None,
        trust: "TrustPolicy | None" = None,
        runner: HandleRunner | None = None,
    ) -> None:
        self.runner = runner or HandleRunner(settings=settings, trust=trust)

    @property
    def timeout(self) -> int:
        return self.runner.handle.timeout

    @property
    def connected(self) -> bool:
        """Snapshot of whether a transport is held and open.

        Read from the calling thread without waiting for queued work, so a
        connect or close still in flight on the worker is not reflected.
        """
        return self.runner.handle.is_connected

    def _wait(self, future: "concurrent.futures.Future[T]") -> T:
        return future.result()

    def _check_thread(self) -> None:
        if self.runner.worker.in_worker_thread():
            raise RuntimeError("SSHClient cannot block on its own worker loop")

    def set_timeout(self, seconds: int) -> None:
        """Set the connect timeout in seconds for future connect calls."""
        self.runner.set_timeout(seconds)

    def connect(self, host: str, port: int, username: str, password: str) -> str | None:
        """Connect with password authentication.

        Returns:
            None on success, otherwise an error description
        """
        self._check_thread()
        target = SSHTarget(host=host, port=port, username=username, password=password)
        return self._wait(self.runner.submit_connect(target))

    def exec(self, command: str, timeout: int = 0) -> ExecResult:
        """Run command and collect its output.

        Args:
            command: Command line to run remotely
            timeout: Deadline in whole seconds, zero or negative for none

        Returns:
            ExecResult with stdout, stderr and error if anything failed
        """
        self._check_thread()
        return self._wait(self.runner.submit_exec(command, timeout))

    def close(self) -> None:
        """Close the transport. No-op when not connected."""
        self._check_thread()
        self._wait(self.runner.submit_close())

    def shutdown(self) -> None:
        """Close the transport and stop the worker loop."""
        self._check_thread()
        self.runner.shutdown()

    def __enter__(self) -> "SSHClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
