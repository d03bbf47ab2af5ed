"""
Service context for log lines.

Identifies which process wrote a log line when several API instances and
deferred-task workers share one log sink.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'popcorn-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    instance = os.getenv('HOSTNAME') or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance}'
