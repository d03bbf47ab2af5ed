"""Deferred task handlers that send emails."""

from typing import Any, Dict

from uuid_utils import UUID

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger


@Logger.io
async def notify_show_added(payload: Dict[str, Any]) -> None:
    movie_title = payload.get('movie_title')
    if not movie_title:
        Logger.base.error(f'❌ [NOTIFY] Dropping task without movie_title: {payload}')
        return
    await container.notify_show_added_use_case().notify(movie_title=movie_title)


@Logger.io
async def send_booking_confirmation(payload: Dict[str, Any]) -> None:
    try:
        booking_id = UUID(str(payload['booking_id']))
    except (KeyError, ValueError):
        Logger.base.error(f'❌ [CONFIRM] Dropping task with invalid payload: {payload}')
        return
    await container.send_booking_confirmation_use_case().send(booking_id=booking_id)


@Logger.io
async def send_show_reminders(payload: Dict[str, Any]) -> None:
    await container.send_show_reminders_use_case().send_reminders()
