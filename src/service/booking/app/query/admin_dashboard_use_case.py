from datetime import datetime, timezone
from typing import Any, Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface import IBookingQueryRepo
from src.service.booking.app.query.booking_view import expand_bookings
from src.service.catalog.app.interface import IMovieRepo, IShowQueryRepo
from src.service.shared_kernel.app.interface import IUserQueryRepo


class AdminDashboardUseCase:
    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        show_query_repo: IShowQueryRepo,
        movie_repo: IMovieRepo,
        user_query_repo: IUserQueryRepo,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.show_query_repo = show_query_repo
        self.movie_repo = movie_repo
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        show_query_repo: IShowQueryRepo = Depends(Provide[Container.show_query_repo]),
        movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            show_query_repo=show_query_repo,
            movie_repo=movie_repo,
            user_query_repo=user_query_repo,
        )

    @Logger.io
    async def list_all_shows(self) -> List[Dict[str, Any]]:
        """Every upcoming show, ascending, with its movie"""
        shows = await self.show_query_repo.list_upcoming(now=datetime.now(timezone.utc))
        movies = {
            m.id: m
            for m in await self.movie_repo.get_by_ids(
                movie_ids=list({s.movie_id for s in shows})
            )
        }
        return [
            {**show.to_dict(), 'movie': movies[show.movie_id].to_dict()}
            for show in shows
            if show.movie_id in movies
        ]

    @Logger.io
    async def list_all_bookings(self) -> List[Dict[str, Any]]:
        bookings = await self.booking_query_repo.list_all()
        return await expand_bookings(
            bookings,
            show_query_repo=self.show_query_repo,
            movie_repo=self.movie_repo,
            user_query_repo=self.user_query_repo,
        )

    @Logger.io
    async def get_dashboard(self) -> Dict[str, Any]:
        total_bookings, total_revenue = await self.booking_query_repo.paid_summary()
        return {
            'total_bookings': total_bookings,
            'total_revenue': total_revenue,
            'active_shows': await self.list_all_shows(),
            'total_user': await self.user_query_repo.count(),
        }
