"""Shared fixtures for files app tests."""

import base64

import pytest

from server.apps.files.logic.file_operations import FileHierarchy, PublicFile


def encode(content: bytes) -> str:
    """Base64 encode content the way API clients send it."""
    return base64.b64encode(content).decode()


@pytest.fixture
def hierarchy(services) -> FileHierarchy:
    """File hierarchy wired from the test settings."""
    return services.file_hierarchy


@pytest.fixture
def make_folder(hierarchy, user):
    """Builder of folders owned by the test user by default.

    Returns:
        Function creating a folder and returning its projection.
    """
    def build(name='Images', owner=None, parent_id=None, is_public=False):  # noqa: WPS430
        return hierarchy.create(
            owner or user,
            name=name,
            file_type='folder',
            parent_id=parent_id,
            is_public=is_public,
        )
    return build


@pytest.fixture
def text_file(hierarchy, user) -> PublicFile:
    """Private text file at the root of the test user."""
    return hierarchy.create(
        user,
        name='hello.txt',
        file_type='file',
        data=encode(b'Hello Webstack!\n'),
    )
