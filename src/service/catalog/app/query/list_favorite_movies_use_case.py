from typing import Any, Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IFavoriteMovieRepo, IMovieRepo


class ListFavoriteMoviesUseCase:
    def __init__(self, *, favorite_movie_repo: IFavoriteMovieRepo, movie_repo: IMovieRepo) -> None:
        self.favorite_movie_repo = favorite_movie_repo
        self.movie_repo = movie_repo

    @classmethod
    @inject
    def depends(
        cls,
        favorite_movie_repo: IFavoriteMovieRepo = Depends(Provide[Container.favorite_movie_repo]),
        movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo]),
    ) -> Self:
        return cls(favorite_movie_repo=favorite_movie_repo, movie_repo=movie_repo)

    @Logger.io
    async def list_favorites(self, *, user_id: str) -> List[Dict[str, Any]]:
        movie_ids = await self.favorite_movie_repo.list_movie_ids(user_id=user_id)
        movies = {m.id: m for m in await self.movie_repo.get_by_ids(movie_ids=movie_ids)}
        # Favorites of movies never imported into the catalog are skipped
        return [movies[movie_id].to_dict() for movie_id in movie_ids if movie_id in movies]
