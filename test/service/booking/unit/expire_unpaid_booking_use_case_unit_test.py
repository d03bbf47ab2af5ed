from unittest.mock import AsyncMock

import pytest
import uuid_utils

from src.service.booking.app.command.expire_unpaid_booking_use_case import (
    ExpireUnpaidBookingUseCase,
)
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.catalog.domain.entity.show_entity import Show
from src.service.reservation.app.command.release_seats_use_case import ReleaseSeatsUseCase
from test.in_memory_adapters import InMemoryBookingRepo, InMemorySeatState, InMemoryShowRepo


@pytest.fixture
async def held_booking(
    booking_repo: InMemoryBookingRepo, seat_state: InMemorySeatState, upcoming_show: Show
) -> Booking:
    booking = Booking.create(
        id=uuid_utils.uuid7(),
        user_id='u1',
        show_id=upcoming_show.id,
        seat_labels=['A1', 'A2'],
        show_price=upcoming_show.show_price,
    )
    await seat_state.claim_seats(
        show_id=upcoming_show.id, seat_labels=booking.booked_seats, holder_id=str(booking.id)
    )
    return await booking_repo.create(booking=booking)


@pytest.fixture
def release_seats(
    show_repo: InMemoryShowRepo, seat_state: InMemorySeatState
) -> ReleaseSeatsUseCase:
    return ReleaseSeatsUseCase(show_query_repo=show_repo, seat_state_command_handler=seat_state)


@pytest.fixture
def use_case(
    booking_repo: InMemoryBookingRepo,
    seat_state: InMemorySeatState,
    release_seats: ReleaseSeatsUseCase,
) -> ExpireUnpaidBookingUseCase:
    return ExpireUnpaidBookingUseCase(
        booking_command_repo=booking_repo,
        booking_query_repo=booking_repo,
        release_seats_use_case=release_seats,
        seat_state_command_handler=seat_state,
    )


@pytest.mark.asyncio
async def test_unpaid_booking_is_deleted_and_seats_freed(
    use_case: ExpireUnpaidBookingUseCase,
    held_booking: Booking,
    booking_repo: InMemoryBookingRepo,
    seat_state: InMemorySeatState,
) -> None:
    assert await use_case.expire_if_unpaid(booking_id=held_booking.id) is True

    assert await booking_repo.get_by_id(booking_id=held_booking.id) is None
    assert await seat_state.get_occupied_seats(show_id=held_booking.show_id) == {}


@pytest.mark.asyncio
async def test_redelivery_after_expiry_is_a_noop(
    use_case: ExpireUnpaidBookingUseCase, held_booking: Booking
) -> None:
    await use_case.expire_if_unpaid(booking_id=held_booking.id)

    assert await use_case.expire_if_unpaid(booking_id=held_booking.id) is False


@pytest.mark.asyncio
async def test_paid_booking_keeps_its_seats(
    use_case: ExpireUnpaidBookingUseCase,
    held_booking: Booking,
    booking_repo: InMemoryBookingRepo,
    seat_state: InMemorySeatState,
) -> None:
    await booking_repo.mark_paid(booking_id=held_booking.id, paid_at=held_booking.created_at)

    assert await use_case.expire_if_unpaid(booking_id=held_booking.id) is False
    assert len(await seat_state.get_occupied_seats(show_id=held_booking.show_id)) == 2


@pytest.mark.asyncio
async def test_release_only_touches_seats_still_held_by_the_booking(
    use_case: ExpireUnpaidBookingUseCase,
    held_booking: Booking,
    seat_state: InMemorySeatState,
) -> None:
    # A2 was freed and re-claimed by another booking
    await seat_state.release_seats(show_id=held_booking.show_id, seat_labels=['A2'])
    await seat_state.claim_seats(show_id=held_booking.show_id, seat_labels=['A2'], holder_id='other')

    await use_case.expire_if_unpaid(booking_id=held_booking.id)

    assert await seat_state.get_occupied_seats(show_id=held_booking.show_id) == {'A2': 'other'}


@pytest.mark.asyncio
async def test_payment_landing_mid_expiry_reclaims_seats(
    booking_repo: InMemoryBookingRepo,
    seat_state: InMemorySeatState,
    held_booking: Booking,
    release_seats: ReleaseSeatsUseCase,
) -> None:
    command_repo = AsyncMock()

    async def pay_before_delete(*, booking_id) -> bool:
        await booking_repo.mark_paid(booking_id=booking_id, paid_at=held_booking.created_at)
        return False

    command_repo.delete_if_unpaid = AsyncMock(side_effect=pay_before_delete)
    use_case = ExpireUnpaidBookingUseCase(
        booking_command_repo=command_repo,
        booking_query_repo=booking_repo,
        release_seats_use_case=release_seats,
        seat_state_command_handler=seat_state,
    )

    assert await use_case.expire_if_unpaid(booking_id=held_booking.id) is False
    assert await seat_state.get_occupied_seats(show_id=held_booking.show_id) == {
        'A1': str(held_booking.id),
        'A2': str(held_booking.id),
    }


@pytest.mark.asyncio
async def test_booking_of_a_removed_show_is_still_deleted(
    use_case: ExpireUnpaidBookingUseCase,
    held_booking: Booking,
    booking_repo: InMemoryBookingRepo,
    show_repo: InMemoryShowRepo,
) -> None:
    show_repo.shows.clear()

    assert await use_case.expire_if_unpaid(booking_id=held_booking.id) is True
    assert await booking_repo.get_by_id(booking_id=held_booking.id) is None
