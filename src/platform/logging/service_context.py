"""
Service context extraction for logging.

Identifies which box-office terminal produced a log line.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'box-office')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Counter terminals are identified by hostname, fall back to PID
    terminal = os.getenv('TERMINAL_ID', '')
    if not terminal:
        try:
            terminal = socket.gethostname().split('.')[0][:12]
        except OSError:
            terminal = str(os.getpid())

    return f'{service_name}@{deploy_env}:{terminal}'
