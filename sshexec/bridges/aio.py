"""Non-blocking client for asyncio callers.

Work runs on the handle's own worker loop. The awaiting coroutine is
suspended until the worker's future completes and then resumed with the
same results the blocking client returns.
"""

import asyncio
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


class AsyncSSHClient:
    """Asynchronous SSH command client.

    Cancelling an awaiting caller does not cancel the worker; the
    operation still runs to completion on the worker loop.

    Example:
        async with AsyncSSHClient() as ssh:
            error = await ssh.connect("10.0.0.5", 22, "deploy", "secret")
            result = await ssh.exec("uptime", timeout=5)
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

    async def _resume(self, future: "concurrent.futures.Future[T]") -> T:
        return await asyncio.shield(asyncio.wrap_future(future))

    def set_timeout(self, seconds: int) -> None:
        """Set the connect timeout in seconds for future connect calls."""
        self.runner.set_timeout(seconds)

    async def connect(
        self, host: str, port: int, username: str, password: str
    ) -> str | None:
        """Connect with password authentication.

        Returns:
            None on success, otherwise an error description
        """
        target = SSHTarget(host=host, port=port, username=username, password=password)
        return await self._resume(self.runner.submit_connect(target))

    async def exec(self, command: str, timeout: int = 0) -> ExecResult:
        """Run command and collect its output.

        Args:
            command: Command line to run remotely
            timeout: Deadline in whole seconds, zero or negative for none

        Returns:
            ExecResult with stdout, stderr and error if anything failed
        """
        return await self._resume(self.runner.submit_exec(command, timeout))

    async def close(self) -> None:
        """Close the transport. No-op when not connected."""
        await self._resume(self.runner.submit_close())

    async def shutdown(self) -> None:
        """Close the transport and stop the worker loop."""
        if not self.runner.worker.is_running:
            return
        await self.close()
        await asyncio.to_thread(self.runner.worker.stop)

    async def __aenter__(self) -> "AsyncSSHClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.shutdown()
