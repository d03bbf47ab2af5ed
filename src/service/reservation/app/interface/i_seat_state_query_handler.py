from abc import ABC, abstractmethod
from typing import Dict

from uuid_utils import UUID


class ISeatStateQueryHandler(ABC):
    """Seat State Query Handler Interface (CQRS Query)"""

    @abstractmethod
    async def get_occupied_seats(self, *, show_id: UUID) -> Dict[str, str]:
        """Snapshot of seat label -> holder id"""
