#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Users - an admin and a buyer, as the identity webhook would
2. Create Movie - stored locally, so no TMDB key is needed
3. Create Shows - evening shows for the next few days

Notes:
- Occupied seats live in Kvrocks and start empty, nothing to seed there
- Tokens for these users come from the identity provider (or any HS256
  token signed with IDENTITY_JWT_SECRET for local runs)
"""

from datetime import datetime, time, timedelta, timezone

import anyio

from src.platform.config.di import container
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.service.catalog.domain.entity.movie_entity import Movie
from src.service.catalog.domain.entity.show_entity import Show
from src.service.shared_kernel.domain.entity.user_entity import UserEntity


SHOW_DAYS = 3
SHOW_TIMES = [time(18, 30), time(21, 0)]
SHOW_PRICE = 200

TEST_USERS = [
    UserEntity(id='user_seed_admin', name='Seed Admin', email='admin@popcorn.test'),
    UserEntity(id='user_seed_buyer', name='Seed Buyer', email='buyer@popcorn.test'),
]

DEMO_MOVIE = Movie(
    id='1232546',
    title='Until Dawn',
    overview='One year after her sister disappeared, Clover and her friends head into '
    'the remote valley where she vanished.',
    genres=[{'id': 27, 'name': 'Horror'}, {'id': 9648, 'name': 'Mystery'}],
    release_date='2025-04-23',
    original_language='en',
    vote_average=6.4,
    runtime=103,
)


async def create_users() -> None:
    print(f'👥 Creating {len(TEST_USERS)} users...')
    user_repo = container.user_command_repo()
    for user in TEST_USERS:
        await user_repo.upsert(user=user)
        print(f'   ✅ {user.id} <{user.email}>')
    print(f'   💡 Add {TEST_USERS[0].id} to ADMIN_USER_IDS for admin access')


async def create_movie_and_shows() -> None:
    print(f'🎬 Creating movie "{DEMO_MOVIE.title}"...')
    await container.movie_repo().save(movie=DEMO_MOVIE)

    today = datetime.now(timezone.utc).date()
    shows = [
        Show.create(
            movie_id=DEMO_MOVIE.id,
            show_date_time=datetime.combine(today + timedelta(days=day), slot, tzinfo=timezone.utc),
            show_price=SHOW_PRICE,
        )
        for day in range(1, SHOW_DAYS + 1)
        for slot in SHOW_TIMES
    ]
    created = await container.show_command_repo().create_many(shows=shows)
    print(f'   ✅ {len(created)} new shows ({len(shows) - len(created)} already existed)')


async def main() -> None:
    print('🌱 Seeding demo data...')
    print('=' * 50)
    try:
        await create_db_and_tables()
        await create_users()
        await create_movie_and_shows()
    finally:
        await dispose_engine()
    print('=' * 50)
    print('✅ Seed completed!')


if __name__ == '__main__':
    anyio.run(main)
