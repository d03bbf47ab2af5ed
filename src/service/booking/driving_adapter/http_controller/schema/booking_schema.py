from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.platform.types import UtilsUUID7


class BookingCreateRequest(BaseModel):
    show_id: UtilsUUID7
    selected_seats: List[str]

    class Config:
        json_schema_extra = {
            'example': {
                'show_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'selected_seats': ['A1', 'A2'],
            }
        }


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'success': True,
                'id': '01936d90-1a2b-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 'user_2abc',
                'show_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'booked_seats': ['A1', 'A2'],
                'amount': 400,
                'is_paid': False,
                'created_at': '2030-07-01T10:30:00Z',
                'paid_at': None,
            }
        },
    }

    success: bool = True
    id: UtilsUUID7
    user_id: str
    show_id: UtilsUUID7
    booked_seats: List[str]
    amount: int
    is_paid: bool
    created_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None


class SeatMapResponse(BaseModel):
    success: bool = True
    occupied_seats: Dict[str, str]


class BookingListResponse(BaseModel):
    success: bool = True
    bookings: List[Dict[str, Any]]
