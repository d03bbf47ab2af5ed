#!/usr/bin/env python3
"""
Database Reset Script
Reset PostgreSQL tables and Kvrocks state

Features:
1. Drop & Recreate Tables - wipe every table and create the current schema
2. Clear Kvrocks - delete seat maps and deferred tasks (prefixed keys only
   when KVROCKS_KEY_PREFIX is set, otherwise FLUSHDB)

Notes:
- This script only resets structure, it does not seed data
- To seed demo data, run `python script/seed_data.py`
"""

import anyio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    drop_all_tables,
)
from src.platform.state.kvrocks_client import kvrocks_client


async def recreate_tables() -> None:
    print(f'Database URL: {settings.DATABASE_URL_ASYNC}')
    print('🗑️ Dropping tables...')
    await drop_all_tables()
    print('🏗️ Creating tables...')
    await create_db_and_tables()
    print('   ✅ Tables recreated')


async def clear_kvrocks() -> None:
    print('🗑️  Clearing Kvrocks...')
    client = await kvrocks_client.initialize()
    try:
        prefix = settings.KVROCKS_KEY_PREFIX
        if not prefix:
            await client.flushdb()
            print('   ✅ Kvrocks flushed')
            return

        keys = [key async for key in client.scan_iter(match=f'{prefix}*')]
        if keys:
            await client.delete(*keys)
        print(f"   ✅ Deleted {len(keys)} keys with prefix '{prefix}'")
    finally:
        await kvrocks_client.disconnect()


async def main() -> None:
    print('🔄 Starting database reset...')
    print('=' * 50)

    try:
        await recreate_tables()
        print()
        await clear_kvrocks()
        print()
    finally:
        await dispose_engine()

    print('=' * 50)
    print('✅ Database reset completed!')
    print('💡 To seed demo data, run: python script/seed_data.py')


if __name__ == '__main__':
    anyio.run(main)
