from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.query.list_user_bookings_use_case import ListUserBookingsUseCase
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingListResponse,
)
from src.service.shared_kernel.domain.entity.user_entity import AuthenticatedUser
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)


router = APIRouter()


@router.get('/bookings')
@Logger.io
async def list_my_bookings(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListUserBookingsUseCase = Depends(ListUserBookingsUseCase.depends),
) -> BookingListResponse:
    return BookingListResponse(bookings=await use_case.list_user_bookings(user_id=current_user.id))
