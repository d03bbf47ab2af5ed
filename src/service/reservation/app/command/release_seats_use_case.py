from typing import List, Optional

from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IShowQueryRepo
from src.service.reservation.app.interface import ISeatStateCommandHandler


class ReleaseSeatsUseCase:
    """
    Release seats of an existing show.

    Kvrocks cannot tell an unknown show from one with no held seats, so the
    show is looked up first. Idempotent: releasing free seats returns 0.
    """

    def __init__(
        self,
        *,
        show_query_repo: IShowQueryRepo,
        seat_state_command_handler: ISeatStateCommandHandler,
    ) -> None:
        self.show_query_repo = show_query_repo
        self.seat_state_command_handler = seat_state_command_handler

    @Logger.io
    async def release_seats(
        self, *, show_id: UUID, seat_labels: List[str], holder_id: Optional[str] = None
    ) -> int:
        if not await self.show_query_repo.get_by_id(show_id=show_id):
            raise NotFoundError('Show not found')
        return await self.seat_state_command_handler.release_seats(
            show_id=show_id, seat_labels=seat_labels, holder_id=holder_id
        )
