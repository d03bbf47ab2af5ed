"""
Standalone Deferred Task Worker Entry Point

Runs the same worker the API process starts, for deployments that keep the
API workers free of background jobs (set DEFERRED_TASK_WORKER_ENABLED=false there).

Usage:
    PYTHONPATH=$PWD uv run python src/platform/deferred_task/start_deferred_task_worker.py
"""

import anyio

from src.platform.config.deferred_task_handlers import build_deferred_task_handlers
from src.platform.config.di import container
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.deferred_task.deferred_task_worker import DeferredTaskWorker
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.kvrocks_client import kvrocks_client
from src.platform.state.lua_script_executor import lua_script_executor


async def run_worker() -> None:
    tracing = TracingConfig(service_name='popcorn-deferred-worker')
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=get_engine())
    tracing.instrument_redis()

    client = await kvrocks_client.initialize()
    await lua_script_executor.initialize(client=client)
    Logger.base.info('📡 [Standalone Worker] Kvrocks initialized')

    worker = DeferredTaskWorker(
        queue=container.deferred_task_queue(),
        handlers=build_deferred_task_handlers(),
    )
    try:
        await worker.run()
    finally:
        with anyio.CancelScope(shield=True):
            await dispose_engine()
            await kvrocks_client.disconnect()
            tracing.shutdown()
            Logger.base.info('👋 [Standalone Worker] Shutdown complete')


def main() -> None:
    Logger.base.info('🚀 [Standalone Worker] Starting...')
    try:
        anyio.run(run_worker)
    except KeyboardInterrupt:
        Logger.base.info('🛑 [Standalone Worker] Interrupted')


if __name__ == '__main__':
    main()
