"""Handler name -> coroutine registry consumed by the deferred task worker."""

from src.platform.deferred_task.deferred_task import DeferredTaskHandlerName
from src.platform.deferred_task.deferred_task_worker import DeferredTaskHandler
from src.service.booking.driving_adapter.task_handler.booking_task_handler import (
    release_unpaid_booking,
)
from src.service.notification.driving_adapter.task_handler.notification_task_handler import (
    notify_show_added,
    send_booking_confirmation,
    send_show_reminders,
)


def build_deferred_task_handlers() -> dict[str, DeferredTaskHandler]:
    return {
        DeferredTaskHandlerName.RELEASE_UNPAID_BOOKING: release_unpaid_booking,
        DeferredTaskHandlerName.NOTIFY_SHOW_ADDED: notify_show_added,
        DeferredTaskHandlerName.SEND_BOOKING_CONFIRMATION: send_booking_confirmation,
        DeferredTaskHandlerName.SEND_SHOW_REMINDERS: send_show_reminders,
    }
