"""Event loop thread that owns a connection handle.

asyncssh connections are bound to the loop they were opened on, so each
handle gets one long-lived loop in a daemon thread. Both bridges submit
coroutines here and wait on the returned future.
"""

import asyncio
import concurrent.futures
import itertools
import logging
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_worker_ids = itertools.count(1)


class HandleWorker:
    """Background event loop running in its own thread."""

    def __init__(self, name: str | None = None) -> None:
        """Start the loop thread.

        Args:
            name: Thread name, generated if omitted
        """
        self.name = name or f"sshexec-worker-{next(_worker_ids)}"
        self._loop = asyncio.new_event_loop()
        self._stopped = False
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug("Started %s", self.name)

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            pending = asyncio.all_tasks(self._loop)
            for task in pending:
                task.cancel()
            if pending:
                self._loop.run_until_complete(
                    asyncio.gather(*pending, return_exceptions=True)
                )
            self._loop.run_until_complete(self._loop.shutdown_asyncgens())
            self._loop.close()
            logger.debug("Stopped %s", self.name)

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def is_running(self) -> bool:
        return not self._stopped and self._thread.is_alive()

    def in_worker_thread(self) -> bool:
        """Check if the caller is running on this worker's thread."""
        return threading.current_thread() is self._thread

    def submit(self, coro: Coroutine[Any, Any, T]) -> "concurrent.futures.Future[T]":
        """Schedule coro on the worker loop.

        Raises:
            RuntimeError: If the worker has been stopped
        """
        with self._lock:
            if self._stopped:
                coro.close()
                raise RuntimeError(f"{self.name} is stopped")
            return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def stop(self, timeout: float | None = None) -> None:
        """Stop the loop and join the thread. Idempotent."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
        self._loop.call_soon_threadsafe(self._loop.stop)
        if not self.in_worker_thread():
            self._thread.join(timeout)
