"""JSON API server settings."""

from server.settings.components import config

# API server host and port
API_HOST = config('API_HOST', default='0.0.0.0')  # noqa: S104
API_PORT = config('PORT', cast=int, default=5000)

# Session tokens live for 24 hours by default
SESSION_TTL = config('SESSION_TTL', cast=int, default=24 * 60 * 60)

# Maximum number of files returned by one listing page
FILES_PAGE_SIZE = config('FILES_PAGE_SIZE', cast=int, default=20)
