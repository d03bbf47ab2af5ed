from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from uuid_utils import UUID

from src.service.catalog.domain.entity.show_entity import Show


class IShowQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, show_id: UUID) -> Optional[Show]:
        pass

    @abstractmethod
    async def get_by_ids(self, *, show_ids: List[UUID]) -> List[Show]:
        pass

    @abstractmethod
    async def list_upcoming(self, *, now: datetime, movie_id: Optional[str] = None) -> List[Show]:
        """Shows starting at or after `now`, ascending"""

    @abstractmethod
    async def list_starting_between(self, *, start: datetime, end: datetime) -> List[Show]:
        """Shows with start in (start, end], ascending"""
