from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from uuid_utils import UUID

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: str) -> List[Booking]:
        """Newest first"""

    @abstractmethod
    async def list_all(self) -> List[Booking]:
        """Newest first"""

    @abstractmethod
    async def list_paid_by_show_ids(self, *, show_ids: List[UUID]) -> List[Booking]:
        pass

    @abstractmethod
    async def paid_summary(self) -> Tuple[int, int]:
        """(paid booking count, revenue of paid bookings)"""
