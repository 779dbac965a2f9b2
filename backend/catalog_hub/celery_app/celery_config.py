"""
Celery configuration — broker, task routes, retry policy.

Runs long category syncs off the request path.

Note: On Windows, Celery's prefork pool doesn't work properly.
Use --pool=solo or --pool=threads on Windows.

Running a worker:
    celery -A catalog_hub.celery_app worker --pool=solo -Q catalog_sync,default -l info -n sync@%h

Keep catalog_sync at concurrency 1 per 4over account: every sync already
paces its own calls, and parallel workers would stack on the same limit.
Version: 1.0.0
"""
import logging
import platform

from celery import Celery
from kombu import Queue

from catalog_hub.core.config import settings

logger = logging.getLogger(__name__)

IS_WINDOWS = platform.system() == "Windows"

celery_app = Celery(
    "catalog_hub",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "catalog_hub.celery_app.tasks.sync_catalog",
    ],
)

celery_app.conf.update(
    # Serialization
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,

    task_queues=(
        Queue("catalog_sync"),
        Queue("default"),
    ),
    task_routes={
        "tasks.sync_catalog.*": {"queue": "catalog_sync"},
    },

    # Result expiration
    result_expires=3600,  # 1 hour

    # Retry settings
    task_default_retry_delay=30,
    task_max_retries=3,

    # Worker pool configuration for Windows compatibility
    worker_pool="solo" if IS_WINDOWS else "prefork",

    # Visibility timeout
    broker_transport_options={"visibility_timeout": 3600},

    # Custom log format
    worker_log_format="[%(asctime)s: %(levelname)s/%(processName)s] %(message)s",
    worker_task_log_format="[%(asctime)s: %(levelname)s/%(processName)s] [%(task_name)s] %(message)s",
)
