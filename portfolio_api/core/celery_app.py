from celery import Celery
from portfolio_api.core.config import settings

celery_app = Celery(
    "portfolio_api",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["portfolio_api.tasks.email_tasks"],
)

# Celery Configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    task_track_started=True,

    task_time_limit=120,        # Hard limit (2 min)
    task_soft_time_limit=90,

    worker_prefetch_multiplier=4,
    worker_max_tasks_per_child=1000,

    task_acks_late=True,
    task_reject_on_worker_lost=True,

    result_expires=3600,  # 1 hour
)

celery_app.conf.task_routes = {
    "portfolio_api.tasks.email_tasks.*": {"queue": "emails"},
}
