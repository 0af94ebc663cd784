"""
Settings for the pytest suite.

SQLite in memory, simulated SMS, no throttling between sends, and Celery
tasks executed inline.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production')
os.environ.setdefault('DEBUG', 'True')

from .settings import *  # noqa: E402,F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

SMS_ENABLED = False
SMS_PROVIDER = 'console'
SMS_BULK_THROTTLE_SECONDS = 0

APPOINTMENT_SMS_NOTIFICATIONS = False

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING['root']['level'] = 'WARNING'  # noqa: F405
