"""
Celery application for VetConnect.

Every background task sends SMS, so tasks are routed to a dedicated ``sms``
queue and run one at a time per worker process:

    celery -A core worker -Q sms -l info
"""
import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

app = Celery('core')

# CELERY_* keys in Django settings
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

app.conf.update(
    task_default_queue='sms',
    task_routes={
        'core.tasks.send_sms_async': {'queue': 'sms'},
        'appointments.tasks.notify_appointment_event': {'queue': 'sms'},
    },
    result_expires=3600,

    # A provider call times out after SMS_REQUEST_TIMEOUT; retries are scheduled, not slept
    task_time_limit=120,
    task_soft_time_limit=90,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,

    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],

    timezone='Africa/Kigali',
    enable_utc=True,
)
