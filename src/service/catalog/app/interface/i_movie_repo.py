from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.catalog.domain.entity.movie_entity import Movie


class IMovieRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, movie_id: str) -> Optional[Movie]:
        pass

    @abstractmethod
    async def get_by_ids(self, *, movie_ids: List[str]) -> List[Movie]:
        pass

    @abstractmethod
    async def save(self, *, movie: Movie) -> Movie:
        pass
