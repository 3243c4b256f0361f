# doccart/celery_worker.py
from celery import Celery

from doccart.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "doccart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "doccart.tasks.expire",
    "doccart.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "expire-cart-sessions-every-ten-minutes": {
        "task": "doccart.tasks.expire.expire_cart_sessions_task",
        "schedule": 600.0,
    },
}

celery_app.conf.timezone = "UTC"

#lokalnie / w testach taski wykonywane od razu, bez brokera
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.task_store_eager_result = False
