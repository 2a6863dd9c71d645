"""Shared fixtures: in-memory stand-ins for asyncssh connections."""

import asyncio
from collections.abc import Iterator
from typing import Any
from unittest.mock import AsyncMock, patch

import asyncssh
import pytest

from sshexec.config import AcceptAnyHostKey, Settings
from sshexec.services.runner import HandleRunner


class FakeReader:
    """Stream that yields scripted chunks, then EOF or a hang until close."""

    def __init__(
        self,
        process: "FakeProcess",
        chunks: list[str],
        hang: bool = False,
        error: Exception | None = None,
    ) -> None:
        self._process = process
        self._chunks = list(chunks)
        self._hang = hang
        self._error = error

    async def read(self, n: int = -1) -> str:
        if self._chunks:
            await asyncio.sleep(0)
            return self._chunks.pop(0)
        if self._error is not None:
            raise self._error
        if self._hang:
            await self._process.closed.wait()
        return ""


class FakeProcess:
    """Scripted remote process.

    A hanging process produces its chunks and then blocks until closed,
    like `sleep` after printing something. A stubborn one ignores the
    channel close and only ends when killed, like sshd keeping the
    channel open while the command runs.
    """

    def __init__(
        self,
        stdout: list[str] | None = None,
        stderr: list[str] | None = None,
        exit_status: int | None = 0,
        exit_signal: tuple[str, bool, str, str] | None = None,
        hang: bool = False,
        stubborn: bool = False,
        read_error: Exception | None = None,
    ) -> None:
        self.closed = asyncio.Event()
        self.close_calls = 0
        self.signals: list[str] = []
        self.stdout = FakeReader(self, stdout or [], hang=hang or stubborn, error=read_error)
        self.stderr = FakeReader(self, stderr or [], hang=hang or stubborn)
        self.exit_status: int | None = None
        self.exit_signal: tuple[str, bool, str, str] | None = None
        self._final_status = exit_status
        self._final_signal = exit_signal
        self._hang = hang or stubborn
        self._stubborn = stubborn

    def close(self) -> None:
        self.close_calls += 1
        if not self._stubborn:
            self.closed.set()

    def kill(self) -> None:
        self.signals.append("KILL")
        self.closed.set()

    async def wait_closed(self) -> None:
        if self._hang:
            await self.closed.wait()
            return
        self.exit_status = self._final_status
        self.exit_signal = self._final_signal


SCRIPTS: dict[str, dict[str, Any]] = {
    "echo hi": {"stdout": ["hi\n"]},
    "sleep 5": {"stdout": ["partial\n"], "hang": True},
    "tail -f log": {"stdout": ["line 1\n"], "stubborn": True},
    "false": {"exit_status": 1},
    "mixed": {"stdout": ["out1\n", "out2\n"], "stderr": ["warn\n"]},
    "fail loudly": {"stdout": ["some\n"], "stderr": ["boom\n"], "exit_status": 2},
    "killed": {"exit_status": -1, "exit_signal": ("KILL", False, "", "")},
    "vanish": {"exit_status": None},
    "drop": {
        "stdout": ["before drop\n"],
        "read_error": asyncssh.ConnectionLost("Connection lost"),
    },
}


class FakeConnection:
    """Stand-in for asyncssh.SSHClientConnection."""

    def __init__(
        self,
        scripts: dict[str, dict[str, Any]] | None = None,
        open_error: Exception | None = None,
    ) -> None:
        self.scripts = SCRIPTS if scripts is None else scripts
        self.open_error = open_error
        self.processes: list[FakeProcess] = []
        self.create_calls: list[tuple[str, dict[str, Any]]] = []
        self.close_calls = 0
        self._closed = False

    async def create_process(self, command: str, **kwargs: Any) -> FakeProcess:
        self.create_calls.append((command, kwargs))
        if self._closed:
            raise asyncssh.ChannelOpenError(
                asyncssh.OPEN_CONNECT_FAILED, "SSH connection closed"
            )
        if self.open_error is not None:
            raise self.open_error
        script = self.scripts.get(
            command,
            {"stderr": [f"sh: 1: {command}: not found\n"], "exit_status": 127},
        )
        process = FakeProcess(**script)
        self.processes.append(process)
        return process

    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self.close_calls += 1
        self._closed = True

    async def wait_closed(self) -> None:
        return None


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without SSHEXEC_* overrides."""
    for key in (
        "SSHEXEC_CONNECT_TIMEOUT",
        "SSHEXEC_COMMAND_TIMEOUT",
        "SSHEXEC_CLOSE_GRACE_MS",
        "SSHEXEC_KNOWN_HOSTS",
        "SSHEXEC_LOG_LEVEL",
        "SSHEXEC_LOG_COLORS",
        "SSHEXEC_PASSWORD",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_connection() -> FakeConnection:
    """Fake transport with the standard command scripts."""
    return FakeConnection()


@pytest.fixture
def mock_connect(fake_connection: FakeConnection) -> Iterator[AsyncMock]:
    """Patch asyncssh.connect to hand out fake_connection."""
    with patch("asyncssh.connect", new_callable=AsyncMock) as mock:
        mock.return_value = fake_connection
        yield mock


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def runner(settings: Settings) -> Iterator[HandleRunner]:
    """Runner with its own worker loop, shut down after the test."""
    runner = HandleRunner(settings=settings, trust=AcceptAnyHostKey())
    yield runner
    runner.shutdown()
