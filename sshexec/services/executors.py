"""Remote command execution with an optional hard deadline.

One session (asyncssh process channel) is opened per call. Output is
drained into buffers as it arrives so that a session force-closed at the
deadline still returns everything produced up to that point.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

import asyncssh

from sshexec.models import ExecResult
from sshexec.services.errors import describe

if TYPE_CHECKING:
    from sshexec.protocols import SSHProcess, SSHTransport, StreamReader

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536
DEFAULT_CLOSE_GRACE = 0.5


class SessionGuard:
    """Closes a process channel at most once."""

    def __init__(self, process: "SSHProcess") -> None:
        self.process = process
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.process.close()

    def kill(self) -> None:
        """Signal the remote command to die, then close the channel.

        Servers that ignore signals still see the channel close.
        """
        if not self._closed:
            try:
                self.process.kill()
            except (asyncssh.Error, OSError) as e:
                logger.debug("Could not signal remote command: %s", describe(e))
        self.close()

    async def wait_closed(self, grace: float) -> None:
        """Wait for the channel to finish closing, bounded by grace seconds."""
        try:
            await asyncio.wait_for(self.process.wait_closed(), timeout=grace)
        except asyncio.TimeoutError:
            logger.warning("Session did not finish closing within %.1fs", grace)


async def _drain(reader: "StreamReader", chunks: list[str]) -> None:
    """Read a stream to EOF, appending each chunk as it arrives."""
    while True:
        data = await reader.read(CHUNK_SIZE)
        if not data:
            return
        chunks.append(data)


async def _communicate(
    process: "SSHProcess",
    stdout: list[str],
    stderr: list[str],
) -> None:
    """Drain both streams, then wait for the channel to close.

    If either stream fails or this wait is cancelled, the other
    reader is cancelled before the error propagates.
    """
    readers = [
        asyncio.ensure_future(_drain(process.stdout, stdout)),
        asyncio.ensure_future(_drain(process.stderr, stderr)),
    ]
    try:
        await asyncio.gather(*readers)
    except BaseException:
        for reader in readers:
            reader.cancel()
        await asyncio.gather(*readers, return_exceptions=True)
        raise
    await process.wait_closed()


def exit_error(process: "SSHProcess") -> str | None:
    """Describe how a finished process exited.

    Returns:
        None for exit status 0, otherwise an error description
    """
    if process.exit_signal:
        return f"Process killed by signal {process.exit_signal[0]}"
    status = process.exit_status
    if status is None:
        return "remote command exited without exit status or exit signal"
    if status != 0:
        return f"Process exited with status {status}"
    return None


async def _settle(task: "asyncio.Future[None]", grace: float) -> None:
    """Give a force-closed session's pending wait time to resolve."""
    done, _ = await asyncio.wait({task}, timeout=grace)
    if not done:
        logger.debug("Pending wait still running after %.1fs, cancelling", grace)
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
    elif not task.cancelled() and task.exception() is not None:
        logger.debug("Pending wait ended with %s", describe(task.exception()))


async def run_command(
    conn: "SSHTransport",
    command: str,
    timeout: int = 0,
    close_grace: float = DEFAULT_CLOSE_GRACE,
) -> ExecResult:
    """Execute command over an established connection.

    Args:
        conn: SSH connection to open the session on
        command: Command line to run remotely
        timeout: Deadline in whole seconds; zero or negative waits forever
        close_grace: Seconds a force-closed session may take to settle

    Returns:
        ExecResult with stdout, stderr, and error set on any failure
    """
    try:
        process = await conn.create_process(
            command,
            stdin=asyncssh.DEVNULL,
            encoding="utf-8",
            errors="replace",
        )
    except (asyncssh.Error, OSError) as e:
        logger.warning("Failed to open session: %s", describe(e))
        return ExecResult(stdout="", stderr="", error=describe(e))

    logger.debug("Session opened for command %r (timeout=%ds)", command, timeout)
    session = SessionGuard(process)
    stdout: list[str] = []
    stderr: list[str] = []
    waiter = asyncio.ensure_future(_communicate(process, stdout, stderr))
    error: str | None = None
    settled = False

    try:
        if timeout > 0:
            done, _ = await asyncio.wait({waiter}, timeout=timeout)
            if not done:
                logger.warning(
                    "Command exceeded %ds deadline, terminating session", timeout
                )
                session.kill()
                await _settle(waiter, close_grace)
                settled = True
                error = f"command timed out after {timeout}s"
        else:
            await waiter

        if error is None:
            waiter.result()
            error = exit_error(process)
    except (asyncssh.Error, OSError) as e:
        error = describe(e)
    finally:
        if not waiter.done():
            waiter.cancel()
            await asyncio.gather(waiter, return_exceptions=True)
        session.close()

    # A session cut off at the deadline has already used its grace.
    if not settled:
        await session.wait_closed(close_grace)
    logger.debug("Session closed for command %r", command)

    return ExecResult(
        stdout="".join(stdout),
        stderr="".join(stderr),
        error=error,
        exit_status=process.exit_status,
    )
