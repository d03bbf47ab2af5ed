from typing import Any, Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IMovieMetadataProvider


class ListNowPlayingSourceUseCase:
    def __init__(self, *, movie_metadata_provider: IMovieMetadataProvider) -> None:
        self.movie_metadata_provider = movie_metadata_provider

    @classmethod
    @inject
    def depends(
        cls,
        movie_metadata_provider: IMovieMetadataProvider = Depends(
            Provide[Container.movie_metadata_provider]
        ),
    ) -> Self:
        return cls(movie_metadata_provider=movie_metadata_provider)

    @Logger.io(truncate_content=True)
    async def list_now_playing(self) -> List[Dict[str, Any]]:
        return await self.movie_metadata_provider.list_now_playing()
