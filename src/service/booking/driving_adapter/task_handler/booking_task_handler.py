"""Deferred task handlers owned by the booking ledger."""

from typing import Any, Dict

from uuid_utils import UUID

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger


@Logger.io
async def release_unpaid_booking(payload: Dict[str, Any]) -> None:
    try:
        booking_id = UUID(str(payload['booking_id']))
    except (KeyError, ValueError):
        # Redelivery cannot fix a malformed payload
        Logger.base.error(f'❌ [RELEASE] Dropping task with invalid payload: {payload}')
        return

    use_case = container.expire_unpaid_booking_use_case()
    await use_case.expire_if_unpaid(booking_id=booking_id)
