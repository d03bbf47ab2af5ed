from abc import ABC, abstractmethod
from typing import Any, Dict, List

from src.service.catalog.domain.entity.movie_entity import Movie


class IMovieMetadataProvider(ABC):
    """Movie metadata source (TMDB). Failures surface as ServiceUnavailableError."""

    @abstractmethod
    async def list_now_playing(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def get_movie(self, *, movie_id: str) -> Movie:
        """Details plus credits. NotFoundError if the provider has no such movie."""

    @abstractmethod
    async def aclose(self) -> None:
        pass
