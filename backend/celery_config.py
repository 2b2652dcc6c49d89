"""
Celery configuration for distributed task queue.

This module configures the Celery application with:
- Redis broker and result backend
- Task routing to queues
- Worker configuration
- Logfire instrumentation for observability
"""
import sys
from pathlib import Path

import logfire
from celery import Celery
from celery.signals import worker_process_init

from config import settings
from utils.logging import configure_logfire

# Add project root to Python path for module imports
# This ensures Celery workers can resolve imports
project_root = Path(__file__).parent.absolute()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Initialize Celery application
celery_app = Celery(
    "hackarena",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "tasks.settlement_tasks",
        "tasks.odds_tasks",
    ],
)

# Celery configuration
celery_app.conf.update(
    # Serialization
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],

    # Timezone
    timezone="UTC",
    enable_utc=True,

    # Task results
    result_expires=3600,
    result_extended=True,

    # Task routing
    task_routes={
        "tasks.resolve_bets": {"queue": "settlements"},
        "tasks.calculate_odds": {"queue": "odds"},
    },

    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,

    # Task execution
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Retries are handled per task
    task_autoretry_for=(),

    # Monitoring
    worker_send_task_events=True,
    task_send_sent_event=True,
)


@worker_process_init.connect
def init_worker_process(**kwargs) -> None:
    """
    Initialize each worker process with proper configuration.

    This runs once per worker process (not per task).
    """
    project_root = Path(__file__).parent.absolute()
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    configure_logfire(
        token=settings.logfire_token,
        service_name="hackarena-celery-worker",
        environment=settings.environment,
        log_level=settings.log_level,
    )

    logfire.info(
        "Celery worker initialized",
        project_root=str(project_root),
        logfire_enabled=bool(settings.logfire_token),
    )


@celery_app.task(name="health_check")
def health_check() -> dict:
    """
    Health check task for monitoring worker status.

    Returns:
        dict: Health status information
    """
    return {
        "status": "healthy",
        "service": "celery-worker"
    }
