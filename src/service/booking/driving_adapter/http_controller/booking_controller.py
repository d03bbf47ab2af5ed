from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.booking.app.command.mark_booking_paid_use_case import MarkBookingPaidUseCase
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
    SeatMapResponse,
)
from src.service.catalog.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.shared_kernel.domain.entity.user_entity import AuthenticatedUser
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/create', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('show.id', str(request.show_id))
        span.set_attribute('user.id', current_user.id)
        span.set_attribute('seat.count', len(request.selected_seats))

        booking = await use_case.create_booking(
            user_id=current_user.id,
            show_id=request.show_id,
            seat_labels=request.selected_seats,
        )
        span.set_attribute('booking.id', str(booking.id))
        return BookingResponse(**booking.to_dict())


@router.get('/seats/{show_id}')
@Logger.io
async def get_occupied_seats(
    show_id: UtilsUUID7,
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> SeatMapResponse:
    return SeatMapResponse(occupied_seats=await use_case.get_seat_map(show_id=show_id))


@router.post('/{booking_id}/pay')
@Logger.io
async def pay_booking(
    booking_id: UtilsUUID7,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: MarkBookingPaidUseCase = Depends(MarkBookingPaidUseCase.depends),
) -> BookingResponse:
    """Mock payment: the caller's own booking is marked paid right away"""
    booking = await use_case.pay_booking(booking_id=booking_id, user_id=current_user.id)
    return BookingResponse(**booking.to_dict())
