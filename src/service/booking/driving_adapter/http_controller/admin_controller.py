from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.query.admin_dashboard_use_case import AdminDashboardUseCase
from src.service.booking.driving_adapter.http_controller.schema.admin_schema import (
    AdminBookingListResponse,
    AdminShowListResponse,
    DashboardData,
    DashboardResponse,
    IsAdminResponse,
)
from src.service.shared_kernel.domain.entity.user_entity import AuthenticatedUser
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)


router = APIRouter()


@router.get('/is-admin')
async def is_admin(current_user: AuthenticatedUser = Depends(require_admin)) -> IsAdminResponse:
    return IsAdminResponse(is_admin=True)


@router.get('/dashboard')
@Logger.io
async def get_dashboard(
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: AdminDashboardUseCase = Depends(AdminDashboardUseCase.depends),
) -> DashboardResponse:
    return DashboardResponse(dashboard_data=DashboardData(**await use_case.get_dashboard()))


@router.get('/all-shows')
@Logger.io
async def list_all_shows(
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: AdminDashboardUseCase = Depends(AdminDashboardUseCase.depends),
) -> AdminShowListResponse:
    return AdminShowListResponse(shows=await use_case.list_all_shows())


@router.get('/all-bookings')
@Logger.io
async def list_all_bookings(
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: AdminDashboardUseCase = Depends(AdminDashboardUseCase.depends),
) -> AdminBookingListResponse:
    return AdminBookingListResponse(bookings=await use_case.list_all_bookings())
