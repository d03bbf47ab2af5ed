from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
import uuid_utils

from src.platform.deferred_task.deferred_task import DeferredTaskHandlerName
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.booking.app.command.mark_booking_paid_use_case import MarkBookingPaidUseCase
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.catalog.domain.entity.show_entity import Show
from test.in_memory_adapters import (
    InMemoryBookingRepo,
    InMemoryDeferredTaskQueue,
    InMemorySeatState,
)


@pytest.fixture
async def pending_booking(booking_repo: InMemoryBookingRepo, upcoming_show: Show) -> Booking:
    booking = Booking.create(
        id=uuid_utils.uuid7(),
        user_id='u1',
        show_id=upcoming_show.id,
        seat_labels=['A1', 'A2'],
        show_price=upcoming_show.show_price,
    )
    return await booking_repo.create(booking=booking)


@pytest.fixture
def use_case(
    booking_repo: InMemoryBookingRepo,
    seat_state: InMemorySeatState,
    task_queue: InMemoryDeferredTaskQueue,
) -> MarkBookingPaidUseCase:
    return MarkBookingPaidUseCase(
        booking_command_repo=booking_repo,
        booking_query_repo=booking_repo,
        seat_state_command_handler=seat_state,
        deferred_task_queue=task_queue,
    )


@pytest.mark.asyncio
async def test_first_payment_marks_paid_and_schedules_confirmation(
    use_case: MarkBookingPaidUseCase,
    pending_booking: Booking,
    task_queue: InMemoryDeferredTaskQueue,
) -> None:
    booking = await use_case.mark_paid(booking_id=pending_booking.id)

    assert booking.is_paid is True
    assert booking.paid_at is not None
    task = task_queue.tasks[f'send_booking_confirmation:{booking.id}']
    assert task.handler == DeferredTaskHandlerName.SEND_BOOKING_CONFIRMATION
    assert task.payload == {'booking_id': str(booking.id)}


@pytest.mark.asyncio
async def test_paying_twice_is_a_noop(
    use_case: MarkBookingPaidUseCase,
    pending_booking: Booking,
    task_queue: InMemoryDeferredTaskQueue,
) -> None:
    first = await use_case.mark_paid(booking_id=pending_booking.id)
    task_queue.tasks.clear()

    second = await use_case.mark_paid(booking_id=pending_booking.id)

    assert second.paid_at == first.paid_at
    assert task_queue.tasks == {}


@pytest.mark.asyncio
async def test_missing_booking_is_not_found(use_case: MarkBookingPaidUseCase) -> None:
    with pytest.raises(NotFoundError):
        await use_case.mark_paid(booking_id=uuid_utils.uuid7())


@pytest.mark.asyncio
async def test_only_owner_can_pay(
    use_case: MarkBookingPaidUseCase, pending_booking: Booking
) -> None:
    with pytest.raises(ForbiddenError):
        await use_case.pay_booking(booking_id=pending_booking.id, user_id='someone-else')


@pytest.mark.asyncio
async def test_booking_expired_during_payment_is_not_found(
    booking_repo: InMemoryBookingRepo,
    seat_state: InMemorySeatState,
    task_queue: InMemoryDeferredTaskQueue,
    pending_booking: Booking,
) -> None:
    command_repo = AsyncMock()
    # The row vanished between the read and the conditional update
    async def expire_then_fail(*, booking_id, paid_at) -> bool:
        await booking_repo.delete(booking_id=booking_id)
        return False

    command_repo.mark_paid = AsyncMock(side_effect=expire_then_fail)
    use_case = MarkBookingPaidUseCase(
        booking_command_repo=command_repo,
        booking_query_repo=booking_repo,
        seat_state_command_handler=seat_state,
        deferred_task_queue=task_queue,
    )

    with pytest.raises(NotFoundError):
        await use_case.mark_paid(booking_id=pending_booking.id)


@pytest.mark.asyncio
async def test_confirmation_schedule_failure_keeps_payment(
    use_case: MarkBookingPaidUseCase,
    pending_booking: Booking,
    booking_repo: InMemoryBookingRepo,
    task_queue: InMemoryDeferredTaskQueue,
) -> None:
    task_queue.fail_next_schedule = RedisConnectionError('kvrocks down')

    booking = await use_case.mark_paid(booking_id=pending_booking.id)

    assert booking.is_paid is True
    stored = await booking_repo.get_by_id(booking_id=pending_booking.id)
    assert stored is not None and stored.is_paid is True
