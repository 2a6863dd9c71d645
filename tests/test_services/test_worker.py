"""Tests for the handle's worker loop thread."""

import asyncio
import threading

import pytest

from sshexec.services.worker import HandleWorker


def test_submit_runs_on_worker_thread() -> None:
    """Submitted coroutines run on the worker's own thread."""
    worker = HandleWorker(name="test-worker")

    async def where() -> str:
        return threading.current_thread().name

    try:
        assert worker.submit(where()).result(timeout=5) == "test-worker"
        assert worker.is_running
    finally:
        worker.stop()


def test_submit_propagates_exceptions() -> None:
    """Exceptions surface through the returned future."""
    worker = HandleWorker()

    async def boom() -> None:
        raise ValueError("boom")

    try:
        with pytest.raises(ValueError, match="boom"):
            worker.submit(boom()).result(timeout=5)
    finally:
        worker.stop()


def test_stop_is_idempotent_and_rejects_new_work() -> None:
    """A stopped worker refuses submissions."""
    worker = HandleWorker()
    worker.stop()
    worker.stop()

    async def noop() -> None:
        return None

    assert not worker.is_running
    with pytest.raises(RuntimeError, match="stopped"):
        worker.submit(noop())


def test_stop_cancels_pending_tasks() -> None:
    """Work still pending at stop is cancelled."""
    worker = HandleWorker()

    async def forever() -> None:
        await asyncio.Event().wait()

    future = worker.submit(forever())
    worker.stop(timeout=5)

    assert future.cancelled()


def test_in_worker_thread() -> None:
    """in_worker_thread is only true on the loop thread."""
    worker = HandleWorker()

    async def check() -> bool:
        return worker.in_worker_thread()

    try:
        assert not worker.in_worker_thread()
        assert worker.submit(check()).result(timeout=5)
    finally:
        worker.stop()
