"""
Kvrocks Deferred Task Queue

Layout (all keys carry the configured prefix):
- deferred_task:schedule  ZSET  task_id -> due time (epoch ms)
- deferred_task:payload   HASH  task_id -> JSON {handler, payload, trace}
- deferred_task:attempts  HASH  task_id -> delivery count

Claiming moves a task's score to a lease deadline, so a worker that dies
mid-task leaves it to be picked up again once the lease runs out.
"""

import time
from typing import Any

from opentelemetry import trace
import orjson
import uuid_utils

from src.platform.config.core_setting import settings
from src.platform.deferred_task.deferred_task import DeferredTask
from src.platform.deferred_task.i_deferred_task_queue import IDeferredTaskQueue
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.observability.tracing import inject_trace_context
from src.platform.state.kvrocks_client import kvrocks_client, make_key
from src.platform.state.lua_script_executor import lua_script_executor


def _now_ms() -> int:
    return int(time.time() * 1000)


class KvrocksDeferredTaskQueue(IDeferredTaskQueue):
    def __init__(self, *, visibility_timeout_seconds: int | None = None) -> None:
        self.visibility_timeout_ms = 1000 * (
            visibility_timeout_seconds or settings.DEFERRED_TASK_VISIBILITY_TIMEOUT_SECONDS
        )
        self.tracer = trace.get_tracer(__name__)

    @staticmethod
    def _keys() -> list[str]:
        return [
            make_key('deferred_task:schedule'),
            make_key('deferred_task:payload'),
            make_key('deferred_task:attempts'),
        ]

    @Logger.io
    async def schedule_after(
        self,
        *,
        delay_seconds: float,
        handler: str,
        payload: dict[str, Any],
        task_id: str | None = None,
        replace: bool = False,
    ) -> str:
        task_id = task_id or str(uuid_utils.uuid7())
        due_ms = _now_ms() + int(max(delay_seconds, 0) * 1000)
        body = orjson.dumps(
            {'handler': handler, 'payload': payload, 'trace': inject_trace_context()}
        ).decode()

        with self.tracer.start_as_current_span(
            'deferred_task.schedule',
            attributes={'task.id': task_id, 'task.handler': handler},
        ):
            stored = await lua_script_executor.run(
                'schedule_task',
                client=kvrocks_client.get_client(),
                keys=self._keys(),
                args=[task_id, due_ms, body, 'replace' if replace else 'earliest'],
            )

        if int(stored):
            metrics.deferred_tasks_scheduled.labels(handler=handler).inc()
            Logger.base.info(f'⏰ [DEFERRED] Scheduled {handler} ({task_id}) in {delay_seconds}s')
        else:
            Logger.base.info(f'⏰ [DEFERRED] {task_id} already due earlier, kept existing')
        return task_id

    async def claim_due(self, *, limit: int) -> list[DeferredTask]:
        now_ms = _now_ms()
        lease_until_ms = now_ms + self.visibility_timeout_ms
        raw = await lua_script_executor.run(
            'claim_due_tasks',
            client=kvrocks_client.get_client(),
            keys=self._keys(),
            args=[now_ms, limit, lease_until_ms],
        )

        tasks: list[DeferredTask] = []
        for i in range(0, len(raw or []), 3):
            task_id, body, attempts = raw[i], raw[i + 1], int(raw[i + 2])
            if not body:
                # Orphaned schedule entry: handler '' is dropped by the worker
                tasks.append(DeferredTask(task_id, '', {}, attempts, lease_until_ms))
                continue
            data = orjson.loads(body)
            tasks.append(
                DeferredTask(
                    task_id=task_id,
                    handler=data['handler'],
                    payload=data.get('payload') or {},
                    attempts=attempts,
                    lease_until_ms=lease_until_ms,
                    trace_headers=data.get('trace') or {},
                )
            )
        return tasks

    async def ack(self, *, task: DeferredTask) -> bool:
        removed = await lua_script_executor.run(
            'ack_task',
            client=kvrocks_client.get_client(),
            keys=self._keys(),
            args=[task.task_id, task.lease_until_ms],
        )
        return bool(int(removed))

    async def retry(self, *, task: DeferredTask, delay_seconds: float) -> bool:
        moved = await lua_script_executor.run(
            'retry_task',
            client=kvrocks_client.get_client(),
            keys=self._keys()[:1],
            args=[task.task_id, task.lease_until_ms, _now_ms() + int(delay_seconds * 1000)],
        )
        return bool(int(moved))
