"""
Unit tests for DeferredTaskWorker

Dispatch by handler name, ack on success, backoff retry on failure,
and dropping of tasks nobody handles.
"""

from typing import Any, Dict, List

import pytest

from src.platform.deferred_task.deferred_task_worker import DeferredTaskWorker
from test.in_memory_adapters import InMemoryDeferredTaskQueue


def _worker(queue: InMemoryDeferredTaskQueue, handlers: Dict[str, Any]) -> DeferredTaskWorker:
    return DeferredTaskWorker(
        queue=queue,
        handlers=handlers,
        poll_interval_seconds=0,
        batch_size=10,
        retry_base_seconds=5,
        retry_max_seconds=60,
    )


@pytest.mark.asyncio
async def test_successful_task_is_acked(task_queue: InMemoryDeferredTaskQueue) -> None:
    received: List[Dict[str, Any]] = []

    async def handler(payload: Dict[str, Any]) -> None:
        received.append(payload)

    await task_queue.schedule_after(delay_seconds=0, handler='greet', payload={'name': 'ada'})

    assert await _worker(task_queue, {'greet': handler}).run_once() == 1
    assert received == [{'name': 'ada'}]
    assert task_queue.tasks == {}


@pytest.mark.asyncio
async def test_task_is_not_run_before_due(task_queue: InMemoryDeferredTaskQueue) -> None:
    received: List[Dict[str, Any]] = []

    async def handler(payload: Dict[str, Any]) -> None:
        received.append(payload)

    await task_queue.schedule_after(delay_seconds=30, handler='later', payload={'n': 1})
    worker = _worker(task_queue, {'later': handler})

    assert await worker.run_once() == 0
    task_queue.now += 30
    assert await worker.run_once() == 1
    assert received == [{'n': 1}]


@pytest.mark.asyncio
async def test_failed_task_is_retried_with_backoff(task_queue: InMemoryDeferredTaskQueue) -> None:
    calls = 0

    async def flaky(payload: Dict[str, Any]) -> None:
        nonlocal calls
        calls += 1
        if calls < 3:
            raise ConnectionError('database down')

    task_id = await task_queue.schedule_after(delay_seconds=0, handler='flaky', payload={})
    worker = _worker(task_queue, {'flaky': flaky})

    await worker.run_once()
    assert task_queue.tasks[task_id].due_at == task_queue.now + 5

    task_queue.now += 5
    await worker.run_once()
    assert task_queue.tasks[task_id].due_at == task_queue.now + 10
    assert task_queue.tasks[task_id].attempts == 2

    task_queue.now += 10
    await worker.run_once()
    assert calls == 3
    assert task_queue.tasks == {}


def test_backoff_is_capped(task_queue: InMemoryDeferredTaskQueue) -> None:
    worker = _worker(task_queue, {})

    assert [worker.backoff_seconds(attempts=n) for n in (1, 2, 3, 4, 5, 10)] == [
        5,
        10,
        20,
        40,
        60,
        60,
    ]


@pytest.mark.asyncio
async def test_unknown_handler_is_dropped(task_queue: InMemoryDeferredTaskQueue) -> None:
    await task_queue.schedule_after(delay_seconds=0, handler='retired_handler', payload={})

    assert await _worker(task_queue, {}).run_once() == 1
    assert task_queue.tasks == {}


@pytest.mark.asyncio
async def test_handler_rescheduling_its_own_task_survives_ack(
    task_queue: InMemoryDeferredTaskQueue,
) -> None:
    async def recurring(payload: Dict[str, Any]) -> None:
        await task_queue.schedule_after(
            delay_seconds=100, handler='recurring', payload={}, task_id='tick', replace=True
        )

    await task_queue.schedule_after(delay_seconds=0, handler='recurring', payload={}, task_id='tick')

    await _worker(task_queue, {'recurring': recurring}).run_once()

    assert task_queue.tasks['tick'].due_at == task_queue.now + 100
    assert task_queue.tasks['tick'].attempts == 0
