"""Best-effort outbound queue for request side effects.

Handlers submit side effects (emails, activity records) and return without
waiting for them. An asyncio worker started with the application consumes the
queue and runs each job in a worker thread. Failures are logged and kept in a
bounded history; they are never retried and never propagate to the handler.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Deque

from anyio import to_thread

logger = logging.getLogger(__name__)


@dataclass
class SideEffect:
    """A named call scheduled after the primary mutation committed."""

    name: str
    func: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SideEffectOutcome:
    """Result of running a :class:`SideEffect`."""

    name: str
    succeeded: bool
    error: str | None = None
    finished_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SideEffectQueue:
    """Queue side effects and run them on an independent worker.

    Without a started worker (maintenance scripts, unit tests) ``submit`` runs
    the job inline, with the same error isolation.
    """

    def __init__(self, *, history_size: int = 100) -> None:
        self._queue: asyncio.Queue[SideEffect] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task[None] | None = None
        self._history: Deque[SideEffectOutcome] = deque(maxlen=history_size)
        self._lock = threading.Lock()
        self._succeeded = 0
        self._failed = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the worker on the running event loop."""

        if self.running:
            logger.warning("Side effect worker already running")
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._task = asyncio.create_task(self._worker_loop())
        logger.info("Side effect worker started")

    async def stop(self) -> None:
        """Drain pending side effects and stop the worker."""

        if self._task is None:
            return
        if self._queue is not None:
            await self._queue.join()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._queue = None
        self._loop = None
        logger.info("Side effect worker stopped")

    async def join(self) -> None:
        """Wait until every submitted side effect has finished."""

        if self._queue is not None:
            await self._queue.join()

    def submit(self, name: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Schedule ``func(*args, **kwargs)`` without waiting for it.

        Safe to call from the event loop or from a threadpool worker.
        """

        effect = SideEffect(name=name, func=func, args=args, kwargs=kwargs)
        loop = self._loop
        queue = self._queue
        if loop is None or queue is None or loop.is_closed() or not self.running:
            self._execute(effect)
            return

        try:
            current = asyncio.get_running_loop()
        except RuntimeError:
            current = None

        if current is loop:
            queue.put_nowait(effect)
        else:
            loop.call_soon_threadsafe(queue.put_nowait, effect)

    def history(self) -> list[SideEffectOutcome]:
        """Return the most recent outcomes, oldest first."""

        with self._lock:
            return list(self._history)

    def get_status(self) -> dict[str, Any]:
        with self._lock:
            return {
                "running": self.running,
                "pending": self._queue.qsize() if self._queue is not None else 0,
                "succeeded": self._succeeded,
                "failed": self._failed,
            }

    async def _worker_loop(self) -> None:
        assert self._queue is not None
        queue = self._queue
        while True:
            effect = await queue.get()
            try:
                await to_thread.run_sync(self._execute, effect)
            except Exception:  # pragma: no cover - _execute already isolates errors
                logger.exception("Side effect worker failed to run '%s'", effect.name)
            finally:
                queue.task_done()

    def _execute(self, effect: SideEffect) -> SideEffectOutcome:
        try:
            result = effect.func(*effect.args, **effect.kwargs)
        except Exception as exc:
            logger.exception("Side effect '%s' failed", effect.name)
            outcome = SideEffectOutcome(
                name=effect.name,
                succeeded=False,
                error=str(exc) or exc.__class__.__name__,
            )
        else:
            if result is False:
                logger.warning("Side effect '%s' reported failure", effect.name)
                outcome = SideEffectOutcome(
                    name=effect.name, succeeded=False, error="returned False"
                )
            else:
                outcome = SideEffectOutcome(name=effect.name, succeeded=True)

        with self._lock:
            self._history.append(outcome)
            if outcome.succeeded:
                self._succeeded += 1
            else:
                self._failed += 1
        return outcome


__all__ = ["SideEffect", "SideEffectOutcome", "SideEffectQueue"]
