from abc import ABC, abstractmethod
from datetime import datetime

from uuid_utils import UUID

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def mark_paid(self, *, booking_id: UUID, paid_at: datetime) -> bool:
        """Flip is_paid false -> true. False when already paid or missing."""

    @abstractmethod
    async def delete_if_unpaid(self, *, booking_id: UUID) -> bool:
        """Delete only while is_paid is false. False when paid or missing."""

    @abstractmethod
    async def delete(self, *, booking_id: UUID) -> bool:
        pass
