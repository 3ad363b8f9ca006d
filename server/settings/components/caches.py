"""Cache configuration.

The ``sessions`` alias is the key-value store holding API session tokens.
"""

from server.settings.components import config

REDIS_URL = config('REDIS_URL', default='redis://localhost:6379/0')

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'sessions': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': REDIS_URL,
        'KEY_PREFIX': 'files_manager',
        'TIMEOUT': None,
    },
}

# Cache alias used by the API session store
SESSION_CACHE_ALIAS = 'sessions'
