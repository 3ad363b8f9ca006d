"""Celery settings for the external thumbnail generation worker."""

from server.settings.components import config
from server.settings.components.caches import REDIS_URL

CELERY_BROKER_URL = config('CELERY_BROKER_URL', default=REDIS_URL)

# Fail fast when the broker is down, dispatch is best-effort
CELERY_BROKER_CONNECTION_TIMEOUT = config(
    'CELERY_BROKER_CONNECTION_TIMEOUT',
    cast=float,
    default=2.0,
)
CELERY_TASK_PUBLISH_RETRY_POLICY = {
    'max_retries': 1,
    'interval_start': 0,
    'interval_step': 0.5,
    'interval_max': 1,
}

THUMBNAIL_QUEUE = config('THUMBNAIL_QUEUE', default='thumbnails')
