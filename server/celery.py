"""Celery application used to hand jobs to external workers.

The API never runs tasks itself; it only publishes task messages,
e.g. thumbnail generation after an image upload.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'server.settings')

app = Celery('server')

# All celery settings are prefixed with CELERY_ in django settings
app.config_from_object('django.conf:settings', namespace='CELERY')
