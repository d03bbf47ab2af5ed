"""
Production FastAPI Application

API, Kvrocks-backed seat state and the deferred task worker in one process.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.deferred_task_handlers import build_deferred_task_handlers
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.deferred_task.deferred_task_worker import DeferredTaskWorker
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.kvrocks_client import kvrocks_client
from src.platform.state.lua_script_executor import lua_script_executor


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Popcorn] Starting up...')

    tracing = TracingConfig(service_name='popcorn-booking')
    tracing.setup()
    Logger.base.info('📊 [Popcorn] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Popcorn] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    await create_db_and_tables()
    Logger.base.info('🗄️  [Popcorn] Database tables ready + instrumented')

    tracing.instrument_redis()
    client = await kvrocks_client.initialize()
    await lua_script_executor.initialize(client=client)
    Logger.base.info('🔥 [Popcorn] Kvrocks connected, Lua scripts loaded')

    await container.send_show_reminders_use_case().ensure_scheduled()
    Logger.base.info('⏰ [Popcorn] Show reminder job armed')

    async with anyio.create_task_group() as tg:
        if settings.DEFERRED_TASK_WORKER_ENABLED:
            worker = DeferredTaskWorker(
                queue=container.deferred_task_queue(),
                handlers=build_deferred_task_handlers(),
            )
            tg.start_soon(worker.run)
            Logger.base.info('👷 [Popcorn] Deferred task worker started')

        Logger.base.info('✅ [Popcorn] Ready to serve requests')
        yield

        Logger.base.info('🛑 [Popcorn] Shutting down...')
        tg.cancel_scope.cancel()

    await container.movie_metadata_provider().aclose()
    await dispose_engine()
    Logger.base.info('🗄️  [Popcorn] Database engine disposed')

    await kvrocks_client.disconnect()
    Logger.base.info('📡 [Popcorn] Kvrocks disconnected')

    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Popcorn] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
