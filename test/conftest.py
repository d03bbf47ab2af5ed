"""
Test Configuration and Fixtures

This module provides:
- Environment isolation (Kvrocks key prefix, test database name)
- In-memory adapters for behavioural tests of the use cases
- A FastAPI TestClient whose DI providers point at those adapters
- A Kvrocks fixture for integration tests (skipped when Kvrocks is unreachable)

Unit and API tests need no running services; only tests requesting the
`kvrocks` fixture talk to a real server.
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and key prefixes are read at import time
# =============================================================================
import os


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'popcorn_booking_test_db'
        os.environ['KVROCKS_KEY_PREFIX'] = 'test_'
    else:
        os.environ['POSTGRES_DB'] = f'popcorn_booking_test_db_{worker_id}'
        os.environ['KVROCKS_KEY_PREFIX'] = f'test_{worker_id}_'
    os.environ.setdefault('DEFERRED_TASK_WORKER_ENABLED', 'false')


_early_setup_test_environment()

from collections.abc import AsyncIterator, Iterator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from redis.asyncio import Redis as AsyncRedis  # noqa: E402
from redis.exceptions import RedisError  # noqa: E402

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.state.kvrocks_client import kvrocks_client  # noqa: E402
from src.platform.state.lua_script_executor import lua_script_executor  # noqa: E402
from src.service.catalog.domain.entity.movie_entity import Movie  # noqa: E402
from src.service.catalog.domain.entity.show_entity import Show  # noqa: E402
from src.service.shared_kernel.domain.entity.user_entity import UserEntity  # noqa: E402
from test.in_memory_adapters import (  # noqa: E402
    InMemoryBookingRepo,
    InMemoryDeferredTaskQueue,
    InMemoryFavoriteMovieRepo,
    InMemoryMovieRepo,
    InMemorySeatState,
    InMemoryShowRepo,
    InMemoryUserRepo,
    RecordingEmailSender,
)
from test.test_constants import (  # noqa: E402
    BUYER_EMAIL,
    BUYER_ID,
    BUYER_NAME,
    MOVIE_ID,
    MOVIE_TITLE,
    SHOW_PRICE,
)


# =============================================================================
# Domain fixtures
# =============================================================================
@pytest.fixture
def movie() -> Movie:
    return Movie(
        id=MOVIE_ID,
        title=MOVIE_TITLE,
        overview='A group of friends relive the same night.',
        genres=[{'id': 27, 'name': 'Horror'}],
        runtime=103,
    )


@pytest.fixture
def upcoming_show(movie: Movie) -> Show:
    return Show.create(
        movie_id=movie.id,
        show_date_time=(datetime.now(timezone.utc) + timedelta(days=1)).replace(
            second=0, microsecond=0
        ),
        show_price=SHOW_PRICE,
    )


@pytest.fixture
def buyer() -> UserEntity:
    return UserEntity(id=BUYER_ID, name=BUYER_NAME, email=BUYER_EMAIL)


# =============================================================================
# In-memory adapters
# =============================================================================
@pytest.fixture
def seat_state() -> InMemorySeatState:
    return InMemorySeatState()


@pytest.fixture
def booking_repo() -> InMemoryBookingRepo:
    return InMemoryBookingRepo()


@pytest.fixture
def show_repo(upcoming_show: Show) -> InMemoryShowRepo:
    return InMemoryShowRepo([upcoming_show])


@pytest.fixture
def movie_repo(movie: Movie) -> InMemoryMovieRepo:
    return InMemoryMovieRepo([movie])


@pytest.fixture
def user_repo(buyer: UserEntity) -> InMemoryUserRepo:
    return InMemoryUserRepo([buyer])


@pytest.fixture
def favorite_repo() -> InMemoryFavoriteMovieRepo:
    return InMemoryFavoriteMovieRepo()


@pytest.fixture
def task_queue() -> InMemoryDeferredTaskQueue:
    return InMemoryDeferredTaskQueue()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


# =============================================================================
# HTTP client (no lifespan: no database, Kvrocks or worker)
# =============================================================================
@asynccontextmanager
async def _noop_lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield


@pytest.fixture
def client(
    seat_state: InMemorySeatState,
    booking_repo: InMemoryBookingRepo,
    show_repo: InMemoryShowRepo,
    movie_repo: InMemoryMovieRepo,
    user_repo: InMemoryUserRepo,
    favorite_repo: InMemoryFavoriteMovieRepo,
    task_queue: InMemoryDeferredTaskQueue,
) -> Iterator[TestClient]:
    overrides = {
        container.seat_state_command_handler: seat_state,
        container.seat_state_query_handler: seat_state,
        container.booking_command_repo: booking_repo,
        container.booking_query_repo: booking_repo,
        container.show_command_repo: show_repo,
        container.show_query_repo: show_repo,
        container.movie_repo: movie_repo,
        container.user_command_repo: user_repo,
        container.user_query_repo: user_repo,
        container.favorite_movie_repo: favorite_repo,
        container.deferred_task_queue: task_queue,
    }
    for provider, fake in overrides.items():
        provider.override(providers.Object(fake))
    container.wire(modules=WIRE_MODULES)

    app = create_app(lifespan=_noop_lifespan, title_suffix=' (Test)')
    with TestClient(app) as test_client:
        yield test_client

    container.unwire()
    for provider in overrides:
        provider.reset_override()


# =============================================================================
# Kvrocks (integration)
# =============================================================================
@pytest.fixture
async def kvrocks() -> AsyncIterator[AsyncRedis]:
    """Connected client with scripts loaded; prefixed keys are wiped afterwards."""
    try:
        client = await kvrocks_client.initialize()
    except (RedisError, OSError) as e:
        pytest.skip(f'Kvrocks not reachable at {settings.KVROCKS_HOST}:{settings.KVROCKS_PORT}: {e}')

    await lua_script_executor.initialize(client=client)
    try:
        yield client
    finally:
        keys = [key async for key in client.scan_iter(match=f'{settings.KVROCKS_KEY_PREFIX}*')]
        if keys:
            await client.delete(*keys)
        await kvrocks_client.disconnect()
