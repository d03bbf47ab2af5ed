from typing import Any, Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface import IBookingQueryRepo
from src.service.booking.app.query.booking_view import expand_bookings
from src.service.catalog.app.interface import IMovieRepo, IShowQueryRepo


class ListUserBookingsUseCase:
    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        show_query_repo: IShowQueryRepo,
        movie_repo: IMovieRepo,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.show_query_repo = show_query_repo
        self.movie_repo = movie_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        show_query_repo: IShowQueryRepo = Depends(Provide[Container.show_query_repo]),
        movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            show_query_repo=show_query_repo,
            movie_repo=movie_repo,
        )

    @Logger.io
    async def list_user_bookings(self, *, user_id: str) -> List[Dict[str, Any]]:
        """Caller's bookings, newest first, each with its show and movie"""
        bookings = await self.booking_query_repo.list_by_user(user_id=user_id)
        return await expand_bookings(
            bookings, show_query_repo=self.show_query_repo, movie_repo=self.movie_repo
        )
