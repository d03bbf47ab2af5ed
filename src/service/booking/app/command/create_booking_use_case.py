from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.deferred_task.deferred_task import DeferredTaskHandlerName
from src.platform.deferred_task.i_deferred_task_queue import IDeferredTaskQueue
from src.platform.exception.exceptions import (
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.app.interface import IBookingCommandRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.catalog.app.interface import IShowQueryRepo
from src.service.reservation.app.interface import ISeatStateCommandHandler


class CreateBookingUseCase:
    """
    Create booking use case - claim, persist, arm the timeout

    Flow:
    1. Load the show (NotFound) and reject shows that already started
    2. Generate the UUID7 booking id; it is also the seat holder id
    3. Claim every seat atomically in Kvrocks (SeatsUnavailable on any conflict)
    4. Persist the pending booking; on failure give the seats back
    5. Schedule release_unpaid_booking after the hold window; on failure undo 3 and 4

    The booking is only returned once its release is durably scheduled, so a
    pending booking can never hold seats forever.
    """

    def __init__(
        self,
        *,
        show_query_repo: IShowQueryRepo,
        seat_state_command_handler: ISeatStateCommandHandler,
        booking_command_repo: IBookingCommandRepo,
        deferred_task_queue: IDeferredTaskQueue,
        hold_seconds: Optional[int] = None,
    ) -> None:
        self.show_query_repo = show_query_repo
        self.seat_state_command_handler = seat_state_command_handler
        self.booking_command_repo = booking_command_repo
        self.deferred_task_queue = deferred_task_queue
        self.hold_seconds = hold_seconds if hold_seconds is not None else settings.BOOKING_HOLD_SECONDS
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        show_query_repo: IShowQueryRepo = Depends(Provide[Container.show_query_repo]),
        seat_state_command_handler: ISeatStateCommandHandler = Depends(
            Provide[Container.seat_state_command_handler]
        ),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        deferred_task_queue: IDeferredTaskQueue = Depends(Provide[Container.deferred_task_queue]),
    ) -> Self:
        return cls(
            show_query_repo=show_query_repo,
            seat_state_command_handler=seat_state_command_handler,
            booking_command_repo=booking_command_repo,
            deferred_task_queue=deferred_task_queue,
        )

    @Logger.io
    async def create_booking(self, *, user_id: str, show_id: UUID, seat_labels: List[str]) -> Booking:
        booking_id = uuid_utils.uuid7()

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'booking.id': str(booking_id), 'show.id': str(show_id)},
        ):
            show = await self.show_query_repo.get_by_id(show_id=show_id)
            if not show:
                raise NotFoundError('Show not found')
            if show.has_started(now=datetime.now(timezone.utc)):
                raise ValidationError('Show has already started')

            booking = Booking.create(
                id=booking_id,
                user_id=user_id,
                show_id=show.id,
                seat_labels=seat_labels,
                show_price=show.show_price,
            )

            # Step 3: all-or-nothing claim, holder = booking id
            await self.seat_state_command_handler.claim_seats(
                show_id=show.id, seat_labels=booking.booked_seats, holder_id=str(booking.id)
            )

            # Step 4: persist, or hand the seats back
            try:
                booking = await self.booking_command_repo.create(booking=booking)
            except Exception:
                await self._roll_back(booking=booking, persisted=False)
                raise

            # Step 5: durable release timer
            try:
                await self.deferred_task_queue.schedule_after(
                    delay_seconds=self.hold_seconds,
                    handler=DeferredTaskHandlerName.RELEASE_UNPAID_BOOKING,
                    payload={'booking_id': str(booking.id)},
                    task_id=booking.release_task_id,
                )
            except Exception as e:
                Logger.base.error(
                    f'❌ [CREATE-BOOKING] Could not schedule release for {booking.id}, rolling back'
                )
                await self._roll_back(booking=booking, persisted=True)
                raise ServiceUnavailableError('Booking could not be scheduled, please retry') from e

            metrics.bookings_created.inc()
            Logger.base.info(
                f'🎟️ [CREATE-BOOKING] {booking.id} user={user_id} seats={booking.booked_seats} '
                f'amount={booking.amount}'
            )
            return booking

    async def _roll_back(self, *, booking: Booking, persisted: bool) -> None:
        """
        Seats first, then the row. Each step runs even if the other fails; a
        failed step is logged and the caller re-raises its original error.
        """
        try:
            released = await self.seat_state_command_handler.release_seats(
                show_id=booking.show_id,
                seat_labels=booking.booked_seats,
                holder_id=str(booking.id),
            )
            metrics.record_seat_release(reason='rollback', count=released)
        except Exception as e:
            Logger.base.error(
                f'🚨 [CREATE-BOOKING] Rollback could not release seats of {booking.id}: {e}'
            )
        finally:
            if persisted:
                try:
                    await self.booking_command_repo.delete(booking_id=booking.id)
                except Exception as e:
                    Logger.base.error(
                        f'🚨 [CREATE-BOOKING] Rollback could not delete booking {booking.id}: {e}'
                    )
