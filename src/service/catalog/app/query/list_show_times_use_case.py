from datetime import datetime, timezone
from typing import Any, Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IMovieRepo, IShowQueryRepo
from src.service.catalog.domain.show_schedule_domain import group_show_times


class ListShowTimesUseCase:
    def __init__(self, *, show_query_repo: IShowQueryRepo, movie_repo: IMovieRepo) -> None:
        self.show_query_repo = show_query_repo
        self.movie_repo = movie_repo

    @classmethod
    @inject
    def depends(
        cls,
        show_query_repo: IShowQueryRepo = Depends(Provide[Container.show_query_repo]),
        movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo]),
    ) -> Self:
        return cls(show_query_repo=show_query_repo, movie_repo=movie_repo)

    @Logger.io
    async def list_show_times(self, *, movie_id: str) -> Dict[str, Any]:
        movie = await self.movie_repo.get_by_id(movie_id=movie_id)
        if not movie:
            raise NotFoundError('Movie not found')

        shows = await self.show_query_repo.list_upcoming(
            now=datetime.now(timezone.utc), movie_id=movie_id
        )
        return {'movie': movie.to_dict(), 'date_time': group_show_times(shows)}
