from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Lua scripts executed atomically inside Kvrocks
SEAT_LUA_SCRIPT_DIR = BASE_DIR / 'src' / 'service' / 'reservation' / 'driven_adapter' / 'state' / 'lua_scripts'
DEFERRED_TASK_LUA_SCRIPT_DIR = BASE_DIR / 'src' / 'platform' / 'deferred_task' / 'lua_scripts'
