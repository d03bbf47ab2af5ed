from typing import Any, Dict, List

from pydantic import BaseModel


class IsAdminResponse(BaseModel):
    success: bool = True
    is_admin: bool


class DashboardData(BaseModel):
    total_bookings: int
    total_revenue: int
    active_shows: List[Dict[str, Any]]
    total_user: int


class DashboardResponse(BaseModel):
    success: bool = True
    dashboard_data: DashboardData


class AdminShowListResponse(BaseModel):
    success: bool = True
    shows: List[Dict[str, Any]]


class AdminBookingListResponse(BaseModel):
    success: bool = True
    bookings: List[Dict[str, Any]]
