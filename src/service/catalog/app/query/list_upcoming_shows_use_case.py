from datetime import datetime, timezone
from typing import Any, Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IMovieRepo, IShowQueryRepo
from src.service.catalog.domain.show_schedule_domain import first_show_per_movie


class ListUpcomingShowsUseCase:
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
    async def list_upcoming_shows(self) -> List[Dict[str, Any]]:
        """First upcoming show of each movie, ascending, each with its movie embedded"""
        shows = first_show_per_movie(
            await self.show_query_repo.list_upcoming(now=datetime.now(timezone.utc))
        )
        movies = {
            m.id: m
            for m in await self.movie_repo.get_by_ids(movie_ids=[s.movie_id for s in shows])
        }
        return [
            {**show.to_dict(), 'movie': movies[show.movie_id].to_dict()}
            for show in shows
            if show.movie_id in movies
        ]
