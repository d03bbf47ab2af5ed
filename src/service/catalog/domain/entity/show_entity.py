from datetime import datetime, timezone
from typing import Any, Dict, Optional

import attrs
import uuid_utils
from uuid_utils import UUID

from src.platform.exception.exceptions import ValidationError


@attrs.define
class Show:
    id: UUID
    movie_id: str
    show_date_time: datetime  # UTC
    show_price: int
    created_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, movie_id: str, show_date_time: datetime, show_price: int) -> 'Show':
        if not movie_id:
            raise ValidationError('movie_id is required')
        if show_price <= 0:
            raise ValidationError('show_price must be a positive integer')
        if show_date_time.tzinfo is None:
            raise ValidationError('show_date_time must be timezone-aware')

        return cls(
            id=uuid_utils.uuid7(),
            movie_id=movie_id,
            show_date_time=show_date_time.astimezone(timezone.utc),
            show_price=show_price,
            created_at=datetime.now(timezone.utc),
        )

    def has_started(self, *, now: datetime) -> bool:
        return self.show_date_time <= now

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'movie_id': self.movie_id,
            'show_date_time': self.show_date_time,
            'show_price': self.show_price,
        }
