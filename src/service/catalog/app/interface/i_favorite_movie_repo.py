from abc import ABC, abstractmethod
from typing import List


class IFavoriteMovieRepo(ABC):
    @abstractmethod
    async def toggle(self, *, user_id: str, movie_id: str) -> bool:
        """Add the favorite if absent, remove it otherwise. Returns the new state."""

    @abstractmethod
    async def list_movie_ids(self, *, user_id: str) -> List[str]:
        pass
