from abc import ABC, abstractmethod
from typing import List

from src.service.catalog.domain.entity.show_entity import Show


class IShowCommandRepo(ABC):
    @abstractmethod
    async def create_many(self, *, shows: List[Show]) -> List[Show]:
        """Insert shows; slots that already exist for the movie are skipped."""
