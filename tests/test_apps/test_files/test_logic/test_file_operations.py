"""Tests for file node operations."""

from pathlib import Path

import pytest
from django.db import DatabaseError

from server.apps.authentication.request import AuthenticatedRequest
from server.apps.core.exceptions import (
    BadRequestError,
    NotFoundError,
    ValidationError,
)
from server.apps.core.services import get_services
from server.apps.files.infrastructure.jobs import THUMBNAIL_TASK
from server.apps.files.logic.parents import ROOT, NodeId
from server.apps.files.models import FileNode
from server.celery import app as celery_app
from tests.test_apps.test_files.conftest import encode


def _as(user=None) -> AuthenticatedRequest:
    return AuthenticatedRequest(http=None, user=user)  # type: ignore[arg-type]


@pytest.mark.django_db
class TestCreate:
    """Tests for node creation."""

    def test_create_folder(self, hierarchy, user, api_settings):
        """Test folders are stored without content."""
        folder = hierarchy.create(user, name='Images', file_type='folder')

        assert folder.owner_id == user.pk
        assert folder.name == 'Images'
        assert folder.type == 'folder'
        assert folder.is_public is False
        assert folder.parent == ROOT
        assert FileNode.objects.get(pk=folder.id).local_path == ''
        assert not api_settings.exists()

    def test_create_file(self, hierarchy, user, api_settings):
        """Test file content is decoded to a fresh path on disk."""
        created = hierarchy.create(
            user,
            name='hello.txt',
            file_type='file',
            data=encode(b'Hello Webstack!\n'),
            is_public=True,
        )

        node = FileNode.objects.get(pk=created.id)
        assert created.is_public is True
        assert Path(node.local_path).parent == api_settings
        assert Path(node.local_path).read_bytes() == b'Hello Webstack!\n'

    def test_create_in_folder(self, hierarchy, user, make_folder):
        """Test nodes can be nested under a folder."""
        folder = make_folder()

        created = hierarchy.create(
            user,
            name='logo.png',
            file_type='image',
            parent_id=str(folder.id),
            data=encode(b'png'),
        )

        assert created.parent == NodeId(folder.id)

    @pytest.mark.parametrize('parent_id', [0, '0', None, ''])
    def test_create_at_root(self, hierarchy, user, parent_id):
        """Test every spelling of the root creates a top-level node."""
        created = hierarchy.create(
            user,
            name='Docs',
            file_type='folder',
            parent_id=parent_id,
        )

        assert created.parent == ROOT

    def test_create_image_requests_thumbnails(self, hierarchy, user, sent_tasks):
        """Test images are handed to the thumbnail worker."""
        image = hierarchy.create(
            user,
            name='logo.png',
            file_type='image',
            data=encode(b'png'),
        )

        assert len(sent_tasks) == 1
        assert sent_tasks[0]['name'] == THUMBNAIL_TASK
        assert sent_tasks[0]['kwargs'] == {
            'userId': str(user.pk),
            'fileId': str(image.id),
        }

    def test_create_file_requests_nothing(self, text_file, make_folder, sent_tasks):
        """Test plain files and folders never enqueue jobs."""
        make_folder()

        assert sent_tasks == []

    def test_create_image_with_broker_down(
        self,
        hierarchy,
        user,
        monkeypatch,
    ):
        """Test an unreachable broker does not fail the upload."""
        def send_task(*args, **kwargs):  # noqa: WPS430
            raise ConnectionError('Broker unreachable')

        monkeypatch.setattr(celery_app, 'send_task', send_task)

        image = hierarchy.create(
            user,
            name='logo.png',
            file_type='image',
            data=encode(b'png'),
        )

        assert FileNode.objects.filter(pk=image.id).exists()

    @pytest.mark.parametrize(('fields', 'message'), [
        ({'name': None, 'file_type': 'folder'}, 'Missing name'),
        ({'name': '', 'file_type': 'folder'}, 'Missing name'),
        ({'name': 'x', 'file_type': None}, 'Missing type'),
        ({'name': 'x', 'file_type': 'video'}, 'Missing type'),
        ({'name': 'x', 'file_type': 'file'}, 'Missing data'),
        ({'name': 'x', 'file_type': 'image', 'data': ''}, 'Missing data'),
        ({'name': 'x', 'file_type': 'file', 'data': 'abc'}, 'Invalid data'),
        (
            {'name': 'x', 'file_type': 'folder', 'is_public': 'yes'},
            'Invalid isPublic',
        ),
    ])
    def test_create_invalid(self, hierarchy, user, fields, message):
        """Test validation of the request fields."""
        with pytest.raises(ValidationError, match=message):
            hierarchy.create(user, **fields)

        assert FileNode.objects.count() == 0

    @pytest.mark.parametrize('file_type', ['folder', 'file', 'image'])
    def test_create_missing_parent(self, hierarchy, user, file_type, api_settings):
        """Test an unknown parent is rejected for every type."""
        with pytest.raises(ValidationError, match='Parent not found'):
            hierarchy.create(
                user,
                name='x',
                file_type=file_type,
                parent_id='12345',
                data=encode(b'content'),
            )

        assert FileNode.objects.count() == 0
        assert not api_settings.exists()

    @pytest.mark.parametrize('parent_id', ['abc', -1, True])
    def test_create_malformed_parent(self, hierarchy, user, parent_id):
        """Test malformed parent ids never match a folder."""
        with pytest.raises(ValidationError, match='Parent not found'):
            hierarchy.create(
                user,
                name='x',
                file_type='folder',
                parent_id=parent_id,
            )

    def test_create_long_name(self, hierarchy, user):
        """Test names are not limited in length."""
        name = 'a' * 300 + '.txt'

        created = hierarchy.create(
            user,
            name=name,
            file_type='file',
            data=encode(b'hi'),
        )

        assert FileNode.objects.get(pk=created.id).name == name

    def test_create_parent_not_folder(self, hierarchy, user, text_file):
        """Test only folders can contain nodes."""
        with pytest.raises(ValidationError, match='Parent is not a folder'):
            hierarchy.create(
                user,
                name='x',
                file_type='folder',
                parent_id=text_file.id,
            )

    def test_create_metadata_failure_keeps_content(
        self,
        hierarchy,
        user,
        monkeypatch,
        api_settings,
        caplog,
    ):
        """Test a failed metadata write propagates and leaves content."""
        def save(*args, **kwargs):  # noqa: WPS430
            raise DatabaseError('database is gone')

        monkeypatch.setattr(FileNode, 'save', save)

        with pytest.raises(DatabaseError):
            hierarchy.create(
                user,
                name='hello.txt',
                file_type='file',
                data=encode(b'hello'),
            )

        assert len(list(api_settings.iterdir())) == 1
        assert 'orphaned content' in caplog.text


@pytest.mark.django_db
class TestGet:
    """Tests for node lookup."""

    def test_get_by_id(self, hierarchy, text_file, other_user):
        """Test lookup ignores ownership."""
        node = hierarchy.get_by_id(str(text_file.id))

        assert node is not None
        assert node.name == 'hello.txt'

    @pytest.mark.parametrize('file_id', ['99999', 'abc', '', '-1', None])
    def test_get_by_id_missing(self, hierarchy, file_id):
        """Test unknown and malformed ids."""
        assert hierarchy.get_by_id(file_id) is None

    def test_get_owned(self, hierarchy, text_file, user, other_user):
        """Test owned lookup only matches the owner."""
        assert hierarchy.get_owned(text_file.id, user.pk) is not None
        assert hierarchy.get_owned(text_file.id, other_user.pk) is None

    def test_get_folder(self, hierarchy, make_folder, user):
        """Test folders are found without any content path."""
        folder = make_folder()

        node = hierarchy.get_owned(folder.id, user.pk)

        assert node is not None
        assert node.is_folder
        assert node.local_path == ''


@pytest.mark.django_db
class TestListChildren:
    """Tests for paginated listings."""

    def test_pagination(self, hierarchy, make_folder, user):
        """Test pages of twenty in creation order."""
        created = [make_folder(name=f'folder-{index}') for index in range(25)]

        first = hierarchy.list_children(user.pk)
        second = hierarchy.list_children(user.pk, page='1')
        third = hierarchy.list_children(user.pk, page=2)

        assert [item.id for item in first] == [item.id for item in created[:20]]
        assert [item.id for item in second] == [item.id for item in created[20:]]
        assert third == []

    def test_root_excludes_nested(self, hierarchy, make_folder, user):
        """Test the root lists top-level nodes only."""
        folder = make_folder()
        nested = make_folder(name='nested', parent_id=folder.id)

        assert hierarchy.list_children(user.pk) == [folder]
        assert hierarchy.list_children(user.pk, parent_id=str(folder.id)) == [
            nested,
        ]

    def test_only_own_nodes(self, hierarchy, make_folder, user, other_user):
        """Test listings never include nodes of other users."""
        make_folder(owner=other_user, is_public=True)
        own = make_folder()

        assert hierarchy.list_children(user.pk) == [own]

    def test_folder_of_other_user(self, hierarchy, make_folder, user, other_user):
        """Test listing another user's folder shows none of its nodes."""
        folder = make_folder(owner=other_user)
        make_folder(name='nested', owner=other_user, parent_id=folder.id)

        assert hierarchy.list_children(user.pk, parent_id=folder.id) == []

    @pytest.mark.parametrize('parent_id', ['abc', '-1', '99999'])
    def test_unknown_parent(self, hierarchy, make_folder, user, parent_id):
        """Test malformed or unknown parents list nothing."""
        make_folder()

        assert hierarchy.list_children(user.pk, parent_id=parent_id) == []

    @pytest.mark.parametrize('page', ['abc', '-1', -1, None])
    def test_invalid_page(self, hierarchy, make_folder, user, page):
        """Test invalid pages fall back to the first one."""
        folder = make_folder()

        assert hierarchy.list_children(user.pk, page=page) == [folder]

    @pytest.mark.parametrize('page', ['99999999999999999999', 2 ** 63])
    def test_page_out_of_range(self, hierarchy, make_folder, user, page):
        """Test pages past any storable offset list nothing."""
        make_folder()

        assert hierarchy.list_children(user.pk, page=page) == []

    def test_page_size_setting(self, settings, make_folder, user):
        """Test the page size comes from settings."""
        for index in range(3):
            make_folder(name=f'folder-{index}')
        settings.FILES_PAGE_SIZE = 2

        page = get_services().file_hierarchy.list_children(user.pk)

        assert len(page) == 2


@pytest.mark.django_db
class TestSetVisibility:
    """Tests for publishing and unpublishing."""

    def test_publish_and_unpublish(self, hierarchy, text_file, user):
        """Test visibility toggles and is persisted."""
        published = hierarchy.set_visibility(text_file.id, user.pk, True)

        assert published.is_public is True
        assert FileNode.objects.get(pk=text_file.id).is_public is True

        unpublished = hierarchy.set_visibility(text_file.id, user.pk, False)

        assert unpublished.is_public is False
        assert FileNode.objects.get(pk=text_file.id).is_public is False

    def test_idempotent(self, hierarchy, text_file, user):
        """Test publishing twice is harmless."""
        hierarchy.set_visibility(text_file.id, user.pk, True)

        assert hierarchy.set_visibility(text_file.id, user.pk, True).is_public

    def test_non_owner(self, hierarchy, text_file, other_user):
        """Test other users cannot change visibility."""
        with pytest.raises(NotFoundError):
            hierarchy.set_visibility(text_file.id, other_user.pk, True)

        assert FileNode.objects.get(pk=text_file.id).is_public is False

    @pytest.mark.parametrize('file_id', ['99999', 'abc'])
    def test_missing(self, hierarchy, user, file_id):
        """Test unknown and malformed ids."""
        with pytest.raises(NotFoundError):
            hierarchy.set_visibility(file_id, user.pk, True)


@pytest.mark.django_db
class TestGetContent:
    """Tests for the content authorization rules."""

    def test_owner_reads_private(self, hierarchy, text_file, user):
        """Test owners read their private files."""
        content = hierarchy.get_content(text_file.id, _as(user))

        assert content.data == b'Hello Webstack!\n'
        assert content.content_type == 'text/plain; charset=utf-8'

    @pytest.mark.parametrize('caller', ['anonymous', 'other_user'])
    def test_private_hidden(self, hierarchy, text_file, caller, request):
        """Test private files look missing to everyone else."""
        user = None if caller == 'anonymous' else request.getfixturevalue(caller)

        with pytest.raises(NotFoundError):
            hierarchy.get_content(text_file.id, _as(user))

    @pytest.mark.parametrize('caller', ['anonymous', 'other_user'])
    def test_public_readable(self, hierarchy, text_file, user, caller, request):
        """Test public files are readable by anyone."""
        hierarchy.set_visibility(text_file.id, user.pk, True)
        reader = None if caller == 'anonymous' else request.getfixturevalue(caller)

        content = hierarchy.get_content(text_file.id, _as(reader))

        assert content.data == b'Hello Webstack!\n'

    def test_folder(self, hierarchy, make_folder, user):
        """Test folders have no content."""
        folder = make_folder()

        with pytest.raises(BadRequestError, match="A folder doesn't have content"):
            hierarchy.get_content(folder.id, _as(user))

    def test_private_folder_hidden(self, hierarchy, make_folder):
        """Test visibility is checked before the folder rule."""
        folder = make_folder()

        with pytest.raises(NotFoundError):
            hierarchy.get_content(folder.id, _as())

    def test_missing_node(self, hierarchy, user):
        """Test unknown ids."""
        with pytest.raises(NotFoundError):
            hierarchy.get_content('99999', _as(user))

    def test_missing_on_disk(self, hierarchy, text_file, user):
        """Test content removed from disk reads as missing."""
        Path(FileNode.objects.get(pk=text_file.id).local_path).unlink()

        with pytest.raises(NotFoundError):
            hierarchy.get_content(text_file.id, _as(user))

    def test_size_variant(self, hierarchy, user):
        """Test thumbnails are read next to the original."""
        image = hierarchy.create(
            user,
            name='logo.png',
            file_type='image',
            data=encode(b'original'),
        )
        local_path = FileNode.objects.get(pk=image.id).local_path
        Path(f'{local_path}_100').write_bytes(b'thumbnail')

        content = hierarchy.get_content(image.id, _as(user), size='100')

        assert content.data == b'thumbnail'
        assert content.content_type == 'image/png'

    @pytest.mark.parametrize('size', ['250', 'abc', '-1', '0'])
    def test_missing_size_variant(self, hierarchy, text_file, user, size):
        """Test sizes without a variant on disk."""
        with pytest.raises(NotFoundError):
            hierarchy.get_content(text_file.id, _as(user), size=size)


@pytest.mark.django_db
def test_count(hierarchy, text_file, make_folder):
    """Test counting nodes of all users."""
    make_folder()

    assert hierarchy.count() == 2
