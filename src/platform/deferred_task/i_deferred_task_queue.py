from abc import ABC, abstractmethod
from typing import Any

from src.platform.deferred_task.deferred_task import DeferredTask


class IDeferredTaskQueue(ABC):
    """Durable delayed-task primitive: at-least-once delivery after a delay."""

    @abstractmethod
    async def schedule_after(
        self,
        *,
        delay_seconds: float,
        handler: str,
        payload: dict[str, Any],
        task_id: str | None = None,
        replace: bool = False,
    ) -> str:
        """
        Enqueue `handler(payload)` to run once `delay_seconds` have elapsed.

        Scheduling an existing task_id keeps the earlier due time unless
        `replace` is set, which overwrites due time and payload.

        Returns:
            The task id
        """

    @abstractmethod
    async def claim_due(self, *, limit: int) -> list[DeferredTask]:
        """Lease up to `limit` due tasks to the caller."""

    @abstractmethod
    async def ack(self, *, task: DeferredTask) -> bool:
        """Remove a finished task. False when it was rescheduled meanwhile."""

    @abstractmethod
    async def retry(self, *, task: DeferredTask, delay_seconds: float) -> bool:
        """Make a failed task due again after `delay_seconds`."""
