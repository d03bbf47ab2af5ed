from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import ValidationError
from src.service.reservation.domain.seat_selection_domain import normalize_seat_labels


@attrs.define
class Booking:
    id: UUID
    user_id: str
    show_id: UUID
    booked_seats: List[str]
    amount: int
    is_paid: bool = False
    created_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        id: UUID,
        user_id: str,
        show_id: UUID,
        seat_labels: List[str],
        show_price: int,
    ) -> 'Booking':
        if not user_id:
            raise ValidationError('user_id is required')
        seats = normalize_seat_labels(seat_labels)

        return cls(
            id=id,
            user_id=user_id,
            show_id=show_id,
            booked_seats=seats,
            amount=show_price * len(seats),
            created_at=datetime.now(timezone.utc),
        )

    def mark_paid(self, *, paid_at: datetime) -> 'Booking':
        if self.is_paid:
            return self
        return attrs.evolve(self, is_paid=True, paid_at=paid_at)

    @property
    def release_task_id(self) -> str:
        return f'release_unpaid_booking:{self.id}'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'user_id': self.user_id,
            'show_id': str(self.show_id),
            'booked_seats': list(self.booked_seats),
            'amount': self.amount,
            'is_paid': self.is_paid,
            'created_at': self.created_at,
            'paid_at': self.paid_at,
        }
