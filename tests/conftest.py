"""Shared fixtures for the whole test suite."""

import base64

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import caches

from server.apps.core.services import Services, get_services
from server.celery import app as celery_app

User = get_user_model()

_PASSWORD = 'testpass123'


@pytest.fixture(autouse=True)
def api_settings(settings, tmp_path):
    """Run every test against in-memory stores and a temporary disk root.

    Returns:
        Directory holding stored file content.
    """
    folder_path = tmp_path / 'files_manager'
    settings.CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'default-tests',
        },
        'sessions': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'sessions-tests',
            'TIMEOUT': None,
        },
    }
    settings.FOLDER_PATH = str(folder_path)
    settings.STORAGES = {
        'default': {
            'BACKEND': 'server.apps.files.infrastructure.storage.FileStorage',
            'OPTIONS': {'location': str(folder_path)},
        },
        'staticfiles': {
            'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
        },
    }
    settings.PASSWORD_HASHERS = [
        'django.contrib.auth.hashers.MD5PasswordHasher',
    ]
    caches['sessions'].clear()
    return folder_path


@pytest.fixture(autouse=True)
def sent_tasks(monkeypatch):
    """Record Celery tasks instead of publishing them to a broker.

    Returns:
        List of recorded task calls.
    """
    calls: list[dict[str, object]] = []

    def send_task(name, args=None, kwargs=None, **options):  # noqa: WPS430
        calls.append({'name': name, 'kwargs': kwargs, **options})

    monkeypatch.setattr(celery_app, 'send_task', send_task)
    return calls


@pytest.fixture
def services(api_settings) -> Services:
    """Services wired from the test settings.

    Returns:
        Wired API services.
    """
    return get_services()


@pytest.fixture
def password() -> str:
    """Password shared by test users."""
    return _PASSWORD


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='bob@dylan.com',
        email='bob@dylan.com',
        password=_PASSWORD,
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='joan@baez.com',
        email='joan@baez.com',
        password=_PASSWORD,
    )


@pytest.fixture
def token(services, user) -> str:
    """Session token of the test user."""
    return services.session_store.issue(user.pk)


@pytest.fixture
def other_token(services, other_user) -> str:
    """Session token of the second test user."""
    return services.session_store.issue(other_user.pk)


@pytest.fixture
def basic_auth():
    """Builder of HTTP Basic ``Authorization`` header values.

    Returns:
        Function of email and password returning the header value.
    """
    def build(email: str, password: str) -> str:  # noqa: WPS430
        credentials = f'{email}:{password}'.encode()
        return 'Basic {0}'.format(base64.b64encode(credentials).decode())
    return build
