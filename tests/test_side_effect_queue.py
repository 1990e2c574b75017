"""Tests for the best-effort side effect queue."""

from __future__ import annotations

import asyncio
import threading

from portal.infrastructure.side_effects import SideEffectQueue


def test_inline_execution_without_worker() -> None:
    queue = SideEffectQueue()
    calls: list[tuple] = []

    queue.submit("record", lambda *args: calls.append(args), 1, 2)

    assert calls == [(1, 2)]
    [outcome] = queue.history()
    assert outcome.name == "record"
    assert outcome.succeeded is True


def test_failures_are_isolated_and_recorded(caplog) -> None:
    queue = SideEffectQueue()

    def _boom() -> None:
        raise RuntimeError("smtp down")

    with caplog.at_level("ERROR"):
        queue.submit("email.project_created", _boom)
    queue.submit("activity.project_created", lambda: False)
    queue.submit("activity.project_completed", lambda: True)

    outcomes = queue.history()
    assert [outcome.succeeded for outcome in outcomes] == [False, False, True]
    assert outcomes[0].error == "smtp down"
    assert outcomes[1].error == "returned False"
    assert "email.project_created" in caplog.text
    assert queue.get_status() == {
        "running": False,
        "pending": 0,
        "succeeded": 1,
        "failed": 2,
    }


def test_history_is_bounded() -> None:
    queue = SideEffectQueue(history_size=3)

    for index in range(5):
        queue.submit(f"job-{index}", lambda: None)

    assert [outcome.name for outcome in queue.history()] == ["job-2", "job-3", "job-4"]


def test_worker_runs_jobs_off_the_submitting_thread() -> None:
    async def scenario() -> tuple[list[str], list[int]]:
        queue = SideEffectQueue()
        await queue.start()
        assert queue.running

        thread_ids: list[int] = []
        names: list[str] = []

        def _job(name: str) -> None:
            thread_ids.append(threading.get_ident())
            names.append(name)

        queue.submit("first", _job, "first")
        queue.submit("second", _job, "second")
        await queue.join()
        await queue.stop()
        assert not queue.running
        return names, thread_ids

    main_thread = threading.get_ident()
    names, thread_ids = asyncio.run(scenario())

    assert names == ["first", "second"]
    assert main_thread not in thread_ids


def test_submit_from_another_thread_reaches_the_worker() -> None:
    async def scenario() -> list[str]:
        queue = SideEffectQueue()
        await queue.start()
        done: list[str] = []

        def _handler() -> None:
            queue.submit("from-thread", done.append, "ok")

        await asyncio.to_thread(_handler)
        await asyncio.sleep(0)
        await queue.join()
        await queue.stop()
        return done

    assert asyncio.run(scenario()) == ["ok"]


def test_stop_drains_pending_jobs() -> None:
    async def scenario() -> list[int]:
        queue = SideEffectQueue()
        await queue.start()
        done: list[int] = []
        for index in range(3):
            queue.submit(f"job-{index}", done.append, index)
        await queue.stop()
        return done

    assert asyncio.run(scenario()) == [0, 1, 2]
