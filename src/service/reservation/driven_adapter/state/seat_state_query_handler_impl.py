from typing import Dict

from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client
from src.service.reservation.app.interface import ISeatStateQueryHandler
from src.service.reservation.driven_adapter.state.key_str_generator import (
    make_occupied_seats_key,
)


class SeatStateQueryHandlerImpl(ISeatStateQueryHandler):
    @Logger.io
    async def get_occupied_seats(self, *, show_id: UUID) -> Dict[str, str]:
        client = kvrocks_client.get_client()
        return dict(await client.hgetall(make_occupied_seats_key(show_id=show_id)))
