from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IFavoriteMovieRepo


class ToggleFavoriteMovieUseCase:
    def __init__(self, *, favorite_movie_repo: IFavoriteMovieRepo) -> None:
        self.favorite_movie_repo = favorite_movie_repo

    @classmethod
    @inject
    def depends(
        cls,
        favorite_movie_repo: IFavoriteMovieRepo = Depends(Provide[Container.favorite_movie_repo]),
    ) -> Self:
        return cls(favorite_movie_repo=favorite_movie_repo)

    @Logger.io
    async def toggle(self, *, user_id: str, movie_id: str) -> bool:
        """Returns True when the movie is now a favorite"""
        if not movie_id:
            raise ValidationError('movie_id is required')
        return await self.favorite_movie_repo.toggle(user_id=user_id, movie_id=movie_id)
