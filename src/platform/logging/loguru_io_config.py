from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


# Use test log directory if in test environment
LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

SENSITIVE_KEYWORDS = {
    'password',
    'token',
    'authorization',
    'card_number',
    'secret',
}

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _parse_http_status_level(message: str) -> str | None:
    """
    Map a uvicorn access log line to a log level by its status code.

    Format: '127.0.0.1:51234 - "GET /api/show/all HTTP/1.1" 200'
    """
    if ' HTTP/' not in message or '"' not in message:
        return None

    try:
        status_code = int(message.rsplit('"', 1)[1].split()[0])
    except (ValueError, IndexError):
        return None

    if status_code >= 500:
        return 'CRITICAL'
    if status_code >= 400:
        return 'ERROR'
    if status_code >= 300:
        return 'WARNING'
    if status_code >= 200:
        return 'SUCCESS'
    return 'INFO'


def _default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    """Route stdlib logging (uvicorn, sqlalchemy, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()

        if record.levelno <= logging.DEBUG and 'Using selector:' in message:
            return

        level = _parse_http_status_level(message) if record.name == 'uvicorn.access' else None
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        intercept_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


# Log format for LoguruIO decorated functions
io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


loguru_logger.remove()  # Remove default handler to use custom format
custom_logger: 'LoguruLogger' = loguru_logger.bind(**_default_extra())
intercept_logger: 'LoguruLogger' = loguru_logger.bind(**_default_extra())

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# File output only in DEBUG mode; production ships stdout to the log collector
if settings.DEBUG:
    now_utc = datetime.now(timezone.utc)
    log_filename = (
        f'test_{now_utc.strftime("%Y-%m-%d_%H")}.log'
        if os.environ.get('TEST_LOG_DIR')
        else f'{now_utc.strftime("%Y-%m-%d_%H")}.log'
    )
    custom_logger.add(
        f'{LOG_DIR}/{log_filename}',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
