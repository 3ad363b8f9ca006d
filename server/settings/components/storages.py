"""Storage configuration for uploaded file content.

File content lives on the local filesystem under ``FOLDER_PATH``,
one file per stored object named with an opaque generated identifier.
"""

from typing import Any, Final

from server.settings.components import config

FOLDER_PATH = config('FOLDER_PATH', default='/tmp/files_manager')  # noqa: S108

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.files.infrastructure.storage.FileStorage',
        'OPTIONS': {
            'location': FOLDER_PATH,
            'file_permissions_mode': 0o640,
        },
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
