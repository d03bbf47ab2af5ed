from typing import Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IShowQueryRepo
from src.service.reservation.app.interface import ISeatStateQueryHandler


class GetSeatMapUseCase:
    def __init__(
        self, *, show_query_repo: IShowQueryRepo, seat_state_query_handler: ISeatStateQueryHandler
    ) -> None:
        self.show_query_repo = show_query_repo
        self.seat_state_query_handler = seat_state_query_handler

    @classmethod
    @inject
    def depends(
        cls,
        show_query_repo: IShowQueryRepo = Depends(Provide[Container.show_query_repo]),
        seat_state_query_handler: ISeatStateQueryHandler = Depends(
            Provide[Container.seat_state_query_handler]
        ),
    ) -> Self:
        return cls(show_query_repo=show_query_repo, seat_state_query_handler=seat_state_query_handler)

    @Logger.io
    async def get_seat_map(self, *, show_id: UUID) -> Dict[str, str]:
        """Occupied seat labels of the show mapped to their holder ids"""
        if not await self.show_query_repo.get_by_id(show_id=show_id):
            raise NotFoundError('Show not found')
        return await self.seat_state_query_handler.get_occupied_seats(show_id=show_id)
