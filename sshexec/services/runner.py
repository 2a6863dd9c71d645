"""Single owner of a connection handle.

Every read and write of the handle's transport happens on the worker
loop under one lock, whichever bridge issued the call. Failures are
turned into error text here; nothing below the bridges raises to the
caller for transport problems.
"""

import asyncio
import concurrent.futures
import logging
from typing import TYPE_CHECKING

from sshexec.config import Settings, trust_policy_from_settings
from sshexec.models import ConnectionHandle, ExecResult
from sshexec.services.connection import close_connection, open_connection
from sshexec.services.errors import ConnectionError, NotConnectedError
from sshexec.services.executors import run_command
from sshexec.services.worker import HandleWorker

if TYPE_CHECKING:
    from sshexec.config import TrustPolicy
    from sshexec.models import SSHTarget

logger = logging.getLogger(__name__)


class HandleRunner:
    """Runs connect, exec and close for one handle on its worker loop."""

    def __init__(
        self,
        settings: Settings | None = None,
        trust: "TrustPolicy | None" = None,
        worker: HandleWorker | None = None,
    ) -> None:
        """Initialize runner with a fresh, unconnected handle.

        Args:
            settings: Timeouts and host key settings (defaults if omitted)
            trust: Host key trust policy, overrides settings.known_hosts
            worker: Loop thread to own the handle, started if omitted
        """
        settings = settings or Settings()
        self.handle = ConnectionHandle(timeout=settings.connect_timeout)
        self.trust = trust or trust_policy_from_settings(settings)
        self.close_grace = settings.close_grace_ms / 1000
        self.worker = worker or HandleWorker()
        self._lock = asyncio.Lock()

    def set_timeout(self, seconds: int) -> None:
        """Set the connect timeout used by future connect calls.

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError(f"timeout must be >= 0, got {seconds}")
        self.handle.timeout = int(seconds)

    def submit_connect(self, target: "SSHTarget") -> "concurrent.futures.Future[str | None]":
        return self.worker.submit(self._connect(target, self.handle.timeout))

    def submit_exec(
        self, command: str, timeout: int = 0
    ) -> "concurrent.futures.Future[ExecResult]":
        return self.worker.submit(self._exec(command, timeout))

    def submit_close(self) -> "concurrent.futures.Future[None]":
        return self.worker.submit(self._close())

    async def _connect(self, target: "SSHTarget", timeout: int) -> str | None:
        async with self._lock:
            try:
                await open_connection(self.handle, target, self.trust, timeout)
            except ConnectionError as e:
                return str(e)
        return None

    async def _exec(self, command: str, timeout: int) -> ExecResult:
        async with self._lock:
            conn = self.handle.connection
        if conn is None:
            error = NotConnectedError()
            logger.debug("exec %r rejected: %s", command, error)
            return ExecResult(stdout="", stderr="", error=str(error))
        return await run_command(conn, command, timeout, close_grace=self.close_grace)

    async def _close(self) -> None:
        async with self._lock:
            await close_connection(self.handle)

    def shutdown(self) -> None:
        """Close the transport and stop the worker. Idempotent."""
        if not self.worker.is_running:
            return
        self.submit_close().result()
        self.worker.stop()
