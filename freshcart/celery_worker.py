# freshcart/celery_worker.py
from celery import Celery

from freshcart.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CELERY_TASK_ALWAYS_EAGER

celery_app = Celery(
    "freshcart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAZNE: explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "freshcart.services.notification_service",
)

# dev / testy - task wykonuje sie od razu w procesie
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER

celery_app.conf.timezone = "UTC"
