from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from redis.exceptions import RedisError
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.deferred_task.deferred_task import DeferredTaskHandlerName
from src.platform.deferred_task.i_deferred_task_queue import IDeferredTaskQueue
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.app.interface import IBookingCommandRepo, IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.reservation.app.interface import ISeatStateCommandHandler


class MarkBookingPaidUseCase:
    """
    Payment confirmation. Idempotent: paying a paid booking returns it unchanged
    and schedules nothing new.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        booking_query_repo: IBookingQueryRepo,
        seat_state_command_handler: ISeatStateCommandHandler,
        deferred_task_queue: IDeferredTaskQueue,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.booking_query_repo = booking_query_repo
        self.seat_state_command_handler = seat_state_command_handler
        self.deferred_task_queue = deferred_task_queue
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        seat_state_command_handler: ISeatStateCommandHandler = Depends(
            Provide[Container.seat_state_command_handler]
        ),
        deferred_task_queue: IDeferredTaskQueue = Depends(Provide[Container.deferred_task_queue]),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            booking_query_repo=booking_query_repo,
            seat_state_command_handler=seat_state_command_handler,
            deferred_task_queue=deferred_task_queue,
        )

    @Logger.io
    async def pay_booking(self, *, booking_id: UUID, user_id: str) -> Booking:
        """Mock payment by the booking's owner"""
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if booking.user_id != user_id:
            raise ForbiddenError('Only the booking owner can pay for it')
        return await self.mark_paid(booking_id=booking_id)

    @Logger.io
    async def mark_paid(self, *, booking_id: UUID) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.mark_paid', attributes={'booking.id': str(booking_id)}
        ):
            booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')
            if booking.is_paid:
                return booking

            paid_at = datetime.now(timezone.utc)
            if not await self.booking_command_repo.mark_paid(booking_id=booking_id, paid_at=paid_at):
                # Lost a race: paid concurrently, or expired and deleted
                current = await self.booking_query_repo.get_by_id(booking_id=booking_id)
                if not current:
                    raise NotFoundError('Booking not found')
                return current

            booking = booking.mark_paid(paid_at=paid_at)
            await self.seat_state_command_handler.confirm_seats(
                show_id=booking.show_id, seat_labels=booking.booked_seats
            )
            metrics.bookings_paid.inc()
            Logger.base.info(f'💳 [PAY] Booking {booking.id} paid ({booking.amount})')

            try:
                await self.deferred_task_queue.schedule_after(
                    delay_seconds=0,
                    handler=DeferredTaskHandlerName.SEND_BOOKING_CONFIRMATION,
                    payload={'booking_id': str(booking.id)},
                    task_id=f'send_booking_confirmation:{booking.id}',
                )
            except RedisError as e:
                # Payment is already recorded; only the email is lost
                Logger.base.error(f'📧 [PAY] Confirmation email not scheduled for {booking.id}: {e}')

            return booking
