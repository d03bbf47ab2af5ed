"""
Seat State Command Handler Implementation

Every mutation is a single Lua script, so concurrent claims from any number
of API instances are serialized by Kvrocks itself.
"""

import time
from typing import List, Optional

from opentelemetry import trace
from uuid_utils import UUID

from src.platform.exception.exceptions import SeatsUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.kvrocks_client import kvrocks_client
from src.platform.state.lua_script_executor import lua_script_executor
from src.service.reservation.app.interface import ISeatStateCommandHandler
from src.service.reservation.domain.seat_selection_domain import normalize_seat_labels
from src.service.reservation.driven_adapter.state.key_str_generator import (
    make_occupied_seats_key,
)


class SeatStateCommandHandlerImpl(ISeatStateCommandHandler):
    def __init__(self) -> None:
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def claim_seats(self, *, show_id: UUID, seat_labels: List[str], holder_id: str) -> None:
        labels = normalize_seat_labels(seat_labels)

        with self.tracer.start_as_current_span(
            'seat_state.claim_seats',
            attributes={'show.id': str(show_id), 'seat.count': len(labels)},
        ) as span:
            start = time.perf_counter()
            result = await lua_script_executor.run(
                'claim_seats',
                client=kvrocks_client.get_client(),
                keys=[make_occupied_seats_key(show_id=show_id)],
                args=[holder_id, *labels],
            )
            claimed = int(result[0]) == 1
            metrics.record_seat_claim(
                result='claimed' if claimed else 'conflict',
                duration=time.perf_counter() - start,
            )

            if not claimed:
                taken = [str(seat) for seat in result[1:]]
                span.set_attribute('seat.conflicts', ','.join(taken))
                raise SeatsUnavailableError(seats=taken)

            Logger.base.info(f'💺 [CLAIM] show={show_id} holder={holder_id} seats={labels}')

    @Logger.io
    async def release_seats(
        self, *, show_id: UUID, seat_labels: List[str], holder_id: Optional[str] = None
    ) -> int:
        if not seat_labels:
            return 0

        with self.tracer.start_as_current_span(
            'seat_state.release_seats',
            attributes={'show.id': str(show_id), 'seat.count': len(seat_labels)},
        ):
            released = await lua_script_executor.run(
                'release_seats',
                client=kvrocks_client.get_client(),
                keys=[make_occupied_seats_key(show_id=show_id)],
                args=[holder_id or '', *seat_labels],
            )

        Logger.base.info(f'🔓 [RELEASE] show={show_id} released {released}/{len(seat_labels)}')
        return int(released)

    async def confirm_seats(self, *, show_id: UUID, seat_labels: List[str]) -> None:
        return None
