"""Tests for the Flask application."""

from datetime import datetime

import pytest

from hugo_editor.config import EditorConfig
from hugo_editor.core.models import PublishResult, StorageError
from hugo_editor.core.service import EditorService
from hugo_editor.core.store import PostStore
from hugo_editor.web import create_app

FIXED_NOW = datetime(2030, 11, 5, 8, 15, 42)


def post_text(title, date="2024-03-01", body="Body."):
    return f'---\ntitle: "{title}"\ndate: {date}\n---\n\n{body}\n'


@pytest.fixture
def config(tmp_path):
    return EditorConfig(site_dir=tmp_path, hugo_port=1414, autosave_delay=1.5)


@pytest.fixture
def service(config):
    config.posts_dir.mkdir(parents=True)
    return EditorService(PostStore(config.posts_dir, clock=lambda: FIXED_NOW))


@pytest.fixture
def client(service, config):
    app = create_app(service, config)
    app.config['TESTING'] = True
    return app.test_client()


class TestPages:
    """Tests for the HTML pages."""

    def test_index_lists_posts(self, client, service):
        service.save("", post_text("First Post"))

        response = client.get('/')

        assert response.status_code == 200
        assert b"First Post" in response.data
        assert b"/edit/2024_03_first-post.md" in response.data

    def test_index_error(self, client, service, monkeypatch):
        def broken():
            raise StorageError("walk failed")

        monkeypatch.setattr(service, "list_posts", broken)

        assert client.get('/').status_code == 500

    def test_edit_page(self, client, service):
        service.save("", post_text("First Post", body="Hello <world>"))

        response = client.get('/edit/2024_03_first-post.md')

        assert response.status_code == 200
        assert b"Edit - First Post" in response.data
        assert b"Hello &lt;world&gt;" in response.data
        assert b"http://localhost:1414/2024_03_first-post" in response.data
        assert b"1500" in response.data

    def test_edit_missing_post(self, client):
        assert client.get('/edit/nope.md').status_code == 404

    def test_edit_without_path(self, client):
        assert client.get('/edit/').status_code == 400

    def test_new_page(self, client):
        response = client.get('/new')

        assert response.status_code == 200
        assert b'title: &#34;New Post&#34;' in response.data
        assert b'name="path" value=""' in response.data


class TestApi:
    """Tests for the JSON endpoints."""

    def test_list_posts(self, client, service):
        service.save("", post_text("First Post"))

        response = client.get('/api/posts')

        assert response.get_json() == [
            {'path': "2024_03_first-post.md", 'title': "First Post", 'date': "2024-03-01"},
        ]

    def test_save_new(self, client, config):
        response = client.post('/save', data={'path': '', 'content': post_text("First Post")})

        assert response.status_code == 200
        assert response.get_json() == {'success': True, 'path': "2024_03_first-post.md"}
        assert (config.posts_dir / "2024_03_first-post.md").exists()

    def test_save_multipart(self, client):
        response = client.post(
            '/save',
            data={'path': '', 'content': post_text("Multipart")},
            content_type='multipart/form-data',
        )

        assert response.get_json()['path'] == "2024_03_multipart.md"

    def test_save_rename(self, client, config):
        client.post('/save', data={'path': '', 'content': post_text("First Post")})

        response = client.post('/save', data={'path': "2024_03_first-post.md", 'content': post_text("Renamed Post")})

        assert response.get_json() == {'success': True, 'path': "2024_03_renamed-post.md"}
        assert not (config.posts_dir / "2024_03_first-post.md").exists()

    def test_save_missing_content(self, client):
        response = client.post('/save', data={'path': ''})

        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_save_conflict(self, client):
        client.post('/save', data={'path': '', 'content': post_text("First Post")})
        client.post('/save', data={'path': '', 'content': post_text("Second Post")})

        response = client.post('/save', data={'path': "2024_03_second-post.md", 'content': post_text("First Post")})

        assert response.status_code == 409
        assert response.get_json()['kind'] == "conflict"

    def test_save_requires_post(self, client):
        assert client.get('/save').status_code == 405

    def test_publish_success(self, client, service, monkeypatch):
        monkeypatch.setattr(service, "publish", lambda: PublishResult(committed=True, pushed=True, built=True))

        response = client.post('/publish')

        assert response.status_code == 200
        assert response.get_json()['success'] is True

    def test_publish_failure(self, client, service, monkeypatch):
        monkeypatch.setattr(service, "publish", lambda: PublishResult(success=False, error="git push failed"))

        response = client.post('/publish')

        assert response.status_code == 500
        assert response.get_json()['error'] == "git push failed"


class TestEncoding:
    """Tests for listing posts that are not valid UTF-8."""

    def test_api_lists_latin1_post(self, client, config):
        (config.posts_dir / "latin1.md").write_bytes(b"---\ntitle: Caf\xe9\ndate: 2024-01-01\n---\n")

        response = client.get('/api/posts')

        assert response.status_code == 200
        assert response.get_json()[0]['path'] == "latin1.md"
