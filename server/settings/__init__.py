"""Django settings for the files manager server.

Settings are split into ``components`` (shared by every environment) and
``environments`` (overrides selected with the ``DJANGO_ENV`` variable).
An optional ``environments/local.py`` may hold developer overrides.
"""

from os import environ

from split_settings.tools import include, optional

# Managing environment via DJANGO_ENV variable:
environ.setdefault('DJANGO_ENV', 'development')
_ENV = environ['DJANGO_ENV']

_base_settings = (
    'components/common.py',
    'components/logging.py',
    'components/caches.py',
    'components/storages.py',
    'components/celery.py',
    'components/api.py',
    # Select the right env:
    'environments/{0}.py'.format(_ENV),
    # Optionally override some settings:
    optional('environments/local.py'),
)

# Include settings:
include(*_base_settings)
