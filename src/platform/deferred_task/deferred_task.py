from enum import StrEnum
from typing import Any

import attrs


class DeferredTaskHandlerName(StrEnum):
    RELEASE_UNPAID_BOOKING = 'release_unpaid_booking'
    NOTIFY_SHOW_ADDED = 'notify_show_added'
    SEND_BOOKING_CONFIRMATION = 'send_booking_confirmation'
    SEND_SHOW_REMINDERS = 'send_show_reminders'


@attrs.define(frozen=True)
class DeferredTask:
    """A task leased to one worker until `lease_until_ms`."""

    task_id: str
    handler: str
    payload: dict[str, Any]
    attempts: int
    lease_until_ms: int
    trace_headers: dict[str, str] = attrs.field(factory=dict)
