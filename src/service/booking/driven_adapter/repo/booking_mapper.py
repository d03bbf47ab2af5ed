from uuid_utils import UUID

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.driven_adapter.model.booking_model import BookingModel


def booking_model_to_entity(booking_model: BookingModel) -> Booking:
    return Booking(
        id=UUID(str(booking_model.id)),
        user_id=booking_model.user_id,
        show_id=UUID(str(booking_model.show_id)),
        booked_seats=list(booking_model.booked_seats or []),
        amount=booking_model.amount,
        is_paid=booking_model.is_paid,
        created_at=booking_model.created_at,
        paid_at=booking_model.paid_at,
    )
