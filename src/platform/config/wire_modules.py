"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.booking.app.command import create_booking_use_case, mark_booking_paid_use_case
from src.service.booking.app.query import admin_dashboard_use_case, list_user_bookings_use_case
from src.service.catalog.app.command import create_show_use_case, toggle_favorite_movie_use_case
from src.service.catalog.app.query import (
    get_seat_map_use_case,
    list_favorite_movies_use_case,
    list_now_playing_source_use_case,
    list_show_times_use_case,
    list_upcoming_shows_use_case,
)
from src.service.shared_kernel.app.command import sync_identity_user_use_case
from src.service.shared_kernel.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    mark_booking_paid_use_case,
    list_user_bookings_use_case,
    admin_dashboard_use_case,
    create_show_use_case,
    toggle_favorite_movie_use_case,
    get_seat_map_use_case,
    list_favorite_movies_use_case,
    list_now_playing_source_use_case,
    list_show_times_use_case,
    list_upcoming_shows_use_case,
    sync_identity_user_use_case,
    role_auth,
]
