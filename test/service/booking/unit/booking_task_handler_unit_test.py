from unittest.mock import AsyncMock

from dependency_injector import providers
import pytest
import uuid_utils

from src.platform.config.di import container
from src.service.booking.driving_adapter.task_handler.booking_task_handler import (
    release_unpaid_booking,
)


@pytest.fixture
def expire_use_case():
    use_case = AsyncMock()
    with container.expire_unpaid_booking_use_case.override(providers.Object(use_case)):
        yield use_case


@pytest.mark.asyncio
async def test_payload_booking_id_is_parsed_and_expired(expire_use_case: AsyncMock) -> None:
    booking_id = uuid_utils.uuid7()

    await release_unpaid_booking({'booking_id': str(booking_id)})

    expire_use_case.expire_if_unpaid.assert_awaited_once_with(booking_id=booking_id)


@pytest.mark.asyncio
async def test_malformed_payload_is_dropped(expire_use_case: AsyncMock) -> None:
    await release_unpaid_booking({'booking_id': 'not-a-uuid'})
    await release_unpaid_booking({})

    expire_use_case.expire_if_unpaid.assert_not_awaited()
