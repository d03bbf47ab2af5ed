"""
Key String Generator

Kvrocks keys owned by the reservation engine.
"""

from uuid_utils import UUID

from src.platform.state.kvrocks_client import make_key


def make_occupied_seats_key(*, show_id: UUID | str) -> str:
    """Hash of seat label -> holder id for one show"""
    return make_key(f'show:{show_id}:occupied_seats')
