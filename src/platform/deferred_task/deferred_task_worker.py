"""
Deferred Task Worker

Polls the queue, dispatches leased tasks by handler name, acknowledges on
success and retries with exponential backoff on failure. Delivery is
at-least-once, so every handler must be idempotent.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import anyio
from opentelemetry import trace
from redis.exceptions import RedisError

from src.platform.config.core_setting import settings
from src.platform.deferred_task.deferred_task import DeferredTask
from src.platform.deferred_task.i_deferred_task_queue import IDeferredTaskQueue
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.observability.tracing import extract_trace_context


DeferredTaskHandler = Callable[[dict[str, Any]], Awaitable[None]]


class DeferredTaskWorker:
    def __init__(
        self,
        *,
        queue: IDeferredTaskQueue,
        handlers: Mapping[str, DeferredTaskHandler],
        poll_interval_seconds: float | None = None,
        batch_size: int | None = None,
        retry_base_seconds: float | None = None,
        retry_max_seconds: float | None = None,
    ) -> None:
        self.queue = queue
        self.handlers = dict(handlers)
        self.poll_interval_seconds = (
            poll_interval_seconds
            if poll_interval_seconds is not None
            else settings.DEFERRED_TASK_POLL_INTERVAL_SECONDS
        )
        self.batch_size = batch_size or settings.DEFERRED_TASK_BATCH_SIZE
        self.retry_base_seconds = retry_base_seconds or settings.DEFERRED_TASK_RETRY_BASE_SECONDS
        self.retry_max_seconds = retry_max_seconds or settings.DEFERRED_TASK_RETRY_MAX_SECONDS
        self.tracer = trace.get_tracer(__name__)

    def backoff_seconds(self, *, attempts: int) -> float:
        return min(self.retry_base_seconds * 2 ** max(attempts - 1, 0), self.retry_max_seconds)

    async def run(self) -> None:
        """Poll forever. Cancel the surrounding task group to stop."""
        Logger.base.info(
            f'👷 [DEFERRED] Worker started: handlers={sorted(self.handlers)}, '
            f'poll={self.poll_interval_seconds}s'
        )
        while True:
            try:
                processed = await self.run_once()
            except RedisError as e:
                Logger.base.error(f'❌ [DEFERRED] Queue unavailable: {e}')
                processed = 0
            if processed < self.batch_size:
                await anyio.sleep(self.poll_interval_seconds)

    async def run_once(self) -> int:
        """Claim and process one batch of due tasks. Returns the batch size."""
        tasks = await self.queue.claim_due(limit=self.batch_size)
        for task in tasks:
            await self._dispatch(task)
        return len(tasks)

    async def _dispatch(self, task: DeferredTask) -> None:
        handler = self.handlers.get(task.handler)
        if handler is None:
            Logger.base.error(
                f'🗑️ [DEFERRED] No handler {task.handler!r} for task {task.task_id}, dropping'
            )
            await self.queue.ack(task=task)
            metrics.record_deferred_task(handler=task.handler or 'unknown', result='dropped')
            return

        with self.tracer.start_as_current_span(
            f'deferred_task.{task.handler}',
            context=extract_trace_context(headers=task.trace_headers),
            attributes={'task.id': task.task_id, 'task.attempts': task.attempts},
        ) as span:
            try:
                await handler(task.payload)
            except Exception as e:
                delay = self.backoff_seconds(attempts=task.attempts)
                span.record_exception(e)
                Logger.base.exception(
                    f'❌ [DEFERRED] {task.handler} ({task.task_id}) failed on attempt '
                    f'{task.attempts}, retrying in {delay}s: {e}'
                )
                await self.queue.retry(task=task, delay_seconds=delay)
                metrics.record_deferred_task(handler=task.handler, result='retry')
                return

        await self.queue.ack(task=task)
        metrics.record_deferred_task(handler=task.handler, result='success')
        Logger.base.info(f'✅ [DEFERRED] {task.handler} ({task.task_id}) done')
