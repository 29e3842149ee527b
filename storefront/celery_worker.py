# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    ORDER_EVENTS_POLL_SECONDS,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "storefront.tasks.order_events",
)

# Konfiguracja beat schedule
celery_app.conf.beat_schedule = {
    "consume-order-events": {
        "task": "storefront.tasks.order_events.consume_order_events_task",
        "schedule": ORDER_EVENTS_POLL_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
