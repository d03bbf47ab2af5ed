from typing import AsyncContextManager, Callable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.database.uuid_binding import to_pg_uuid
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface import IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.booking_mapper import booking_model_to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == to_pg_uuid(booking_id))
            )
            booking_model = result.scalar_one_or_none()
            return booking_model_to_entity(booking_model) if booking_model else None

    @Logger.io
    async def list_by_user(self, *, user_id: str) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            )
            return [booking_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            )
            return [booking_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_paid_by_show_ids(self, *, show_ids: List[UUID]) -> List[Booking]:
        if not show_ids:
            return []
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).where(
                    BookingModel.show_id.in_([to_pg_uuid(i) for i in show_ids]),
                    BookingModel.is_paid.is_(True),
                )
            )
            return [booking_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def paid_summary(self) -> Tuple[int, int]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(func.count(), func.coalesce(func.sum(BookingModel.amount), 0)).where(
                    BookingModel.is_paid.is_(True)
                )
            )
            count, revenue = result.one()
            return int(count), int(revenue)
