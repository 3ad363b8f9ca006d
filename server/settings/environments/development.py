"""Overriding settings for local development."""

from server.settings.components import config

SECRET_KEY = config(
    'DJANGO_SECRET_KEY',
    default='development-only-secret-key-do-not-use-in-production',
)

DEBUG = True

ALLOWED_HOSTS = [
    'localhost',
    '0.0.0.0',  # noqa: S104
    '127.0.0.1',
    '[::1]',
]
