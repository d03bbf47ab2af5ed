from opentelemetry import trace
from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError, SeatsUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.app.interface import IBookingCommandRepo, IBookingQueryRepo
from src.service.reservation.app.command.release_seats_use_case import ReleaseSeatsUseCase
from src.service.reservation.app.interface import ISeatStateCommandHandler


class ExpireUnpaidBookingUseCase:
    """
    Release handler behind the hold window. Runs under at-least-once delivery,
    so every step is safe to repeat:

    1. Missing or paid booking: nothing to do
    2. Release the seats still held by this booking (holder check)
    3. Delete the booking, only while it is still unpaid

    Seats go before the row: a crash in between leaves an unpaid booking
    without seats, which the redelivered task deletes.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        booking_query_repo: IBookingQueryRepo,
        release_seats_use_case: ReleaseSeatsUseCase,
        seat_state_command_handler: ISeatStateCommandHandler,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.booking_query_repo = booking_query_repo
        self.release_seats_use_case = release_seats_use_case
        self.seat_state_command_handler = seat_state_command_handler
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def expire_if_unpaid(self, *, booking_id: UUID) -> bool:
        """Returns True when the booking was expired by this call"""
        with self.tracer.start_as_current_span(
            'use_case.expire_if_unpaid', attributes={'booking.id': str(booking_id)}
        ):
            booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
            if not booking:
                Logger.base.info(f'⏭️ [EXPIRE] Booking {booking_id} already gone')
                return False
            if booking.is_paid:
                Logger.base.info(f'⏭️ [EXPIRE] Booking {booking_id} is paid, keeping seats')
                return False

            holder_id = str(booking.id)
            try:
                released = await self.release_seats_use_case.release_seats(
                    show_id=booking.show_id, seat_labels=booking.booked_seats, holder_id=holder_id
                )
            except NotFoundError:
                # No show, no seat map to clean; the booking row still goes
                Logger.base.warning(
                    f'⚠️ [EXPIRE] Show {booking.show_id} of booking {booking_id} is gone'
                )
                released = 0

            if not await self.booking_command_repo.delete_if_unpaid(booking_id=booking.id):
                current = await self.booking_query_repo.get_by_id(booking_id=booking.id)
                if not current or not current.is_paid:
                    return False
                # Payment landed between the read and the delete: hold the seats again
                Logger.base.warning(
                    f'⚠️ [EXPIRE] Booking {booking_id} was paid during expiry, re-claiming seats'
                )
                await self._reclaim(
                    show_id=booking.show_id, seats=booking.booked_seats, holder_id=holder_id
                )
                return False

            metrics.bookings_expired.inc()
            metrics.record_seat_release(reason='expired', count=released)
            Logger.base.info(f'⌛ [EXPIRE] Booking {booking_id} expired, released {released} seats')
            return True

    async def _reclaim(self, *, show_id: UUID, seats: list[str], holder_id: str) -> None:
        try:
            await self.seat_state_command_handler.claim_seats(
                show_id=show_id, seat_labels=seats, holder_id=holder_id
            )
        except SeatsUnavailableError as e:
            Logger.base.error(
                f'🚨 [EXPIRE] Paid booking {holder_id} lost seats {e.seats} to another claim'
            )
