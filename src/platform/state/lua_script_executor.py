"""
Lua Scripts for Redis/Kvrocks

Every multi-key read-modify-write on Kvrocks goes through one of these
scripts so it runs as a single atomic step on the server.
Uses redis-py's built-in register_script().
"""

from pathlib import Path
from typing import Any, Iterable

from redis.asyncio import Redis
from redis.exceptions import NoScriptError

from src.platform.constant.path import DEFERRED_TASK_LUA_SCRIPT_DIR, SEAT_LUA_SCRIPT_DIR
from src.platform.logging.loguru_io import Logger


class LuaScripts:
    """Loads every *.lua file of the given directories and runs them by name."""

    def __init__(self, *, script_dirs: Iterable[Path]) -> None:
        self._script_dirs = list(script_dirs)
        self._sources: dict[str, str] = {}
        self._scripts: dict[str, Any] = {}
        self._initialized: bool = False

    async def initialize(self, *, client: Redis) -> None:
        """Load Lua scripts (idempotent)"""
        if self._initialized:
            return

        for script_dir in self._script_dirs:
            if not script_dir.exists():
                Logger.base.warning(f'⚠️ [LUA] Script directory not found: {script_dir}')
                continue
            for path in sorted(script_dir.glob('*.lua')):
                self._sources[path.stem] = path.read_text()
                self._scripts[path.stem] = client.register_script(self._sources[path.stem])

        Logger.base.info(f'🔥 [LUA] Registered scripts: {sorted(self._scripts)}')
        self._initialized = True

    async def run(self, name: str, *, client: Redis, keys: list[str], args: list[Any]) -> Any:
        """Execute a registered script with auto re-registration on NoScriptError"""
        if name not in self._scripts:
            raise RuntimeError(f'Lua script not initialized: {name}')

        try:
            return await self._scripts[name](keys=keys, args=args, client=client)
        except NoScriptError:
            Logger.base.warning(f'⚠️ [LUA] {name} not found on server, re-registering...')
            self._scripts[name] = client.register_script(self._sources[name])
            return await self._scripts[name](keys=keys, args=args, client=client)


lua_script_executor = LuaScripts(script_dirs=[SEAT_LUA_SCRIPT_DIR, DEFERRED_TASK_LUA_SCRIPT_DIR])
