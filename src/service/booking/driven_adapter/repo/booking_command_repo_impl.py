"""
Booking Command Repository Implementation

The conditional UPDATE/DELETE statements are what keep payment and expiry
from both winning: whichever statement lands first flips or removes the row,
the other one affects zero rows.
"""

from datetime import datetime
from typing import AsyncContextManager, Callable

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.database.uuid_binding import to_pg_uuid
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface import IBookingCommandRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.booking_mapper import booking_model_to_entity


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self.session_factory() as session:
            booking_model = BookingModel(
                id=to_pg_uuid(booking.id),
                user_id=booking.user_id,
                show_id=to_pg_uuid(booking.show_id),
                booked_seats=list(booking.booked_seats),
                amount=booking.amount,
                is_paid=booking.is_paid,
                created_at=booking.created_at,
            )
            session.add(booking_model)
            await session.commit()
            await session.refresh(booking_model)
            return booking_model_to_entity(booking_model)

    @Logger.io
    async def mark_paid(self, *, booking_id: UUID, paid_at: datetime) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                update(BookingModel)
                .where(BookingModel.id == to_pg_uuid(booking_id), BookingModel.is_paid.is_(False))
                .values(is_paid=True, paid_at=paid_at)
            )
            await session.commit()
            return result.rowcount > 0

    @Logger.io
    async def delete_if_unpaid(self, *, booking_id: UUID) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(BookingModel).where(
                    BookingModel.id == to_pg_uuid(booking_id), BookingModel.is_paid.is_(False)
                )
            )
            await session.commit()
            return result.rowcount > 0

    @Logger.io
    async def delete(self, *, booking_id: UUID) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(BookingModel).where(BookingModel.id == to_pg_uuid(booking_id))
            )
            await session.commit()
            return result.rowcount > 0
