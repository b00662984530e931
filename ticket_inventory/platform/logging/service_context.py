"""
Service context for log lines.

Identifies which service instance wrote a log line so that logs shipped
from several replicas can be told apart.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticket-inventory')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostnames are unique per replica; fall back to the pid locally
    instance = os.getenv('HOSTNAME') or socket.gethostname() or ''
    if deploy_env == 'local_dev' or not instance:
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance[:12]}'
