"""Flask application serving the editor UI and its JSON endpoints."""

import logging

from flask import Flask, abort, jsonify, render_template, request

from hugo_editor.config import EditorConfig
from hugo_editor.core.models import (
    ConflictError,
    NotFoundError,
    SaveResult,
    StorageError,
    ValidationError,
)
from hugo_editor.core.service import EditorService

logger = logging.getLogger(__name__)

SAVE_ERROR_STATUS = {
    ValidationError.kind: 400,
    ConflictError.kind: 409,
}


def create_app(service: EditorService, config: EditorConfig) -> Flask:
    """Build the editor application.

    Args:
        service: Shared editor service used by every request
        config: Startup configuration (preview URL, autosave delay)

    Returns:
        The Flask app
    """
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024

    def render_editor(post, title):
        preview_url = ""
        if not post.is_new:
            preview_url = f"{config.preview_base_url}/{post.preview_slug}"
        return render_template(
            'editor.html',
            title=title,
            post=post,
            preview_url=preview_url,
            autosave_ms=int(config.autosave_delay * 1000),
        )

    @app.get('/')
    def index():
        try:
            posts = service.list_posts()
        except StorageError as e:
            logger.error("Error finding posts: %s", e)
            abort(500, f"Error finding posts: {e}")
        return render_template('index.html', title="Home", posts=posts)

    @app.get('/api/posts')
    def list_posts():
        try:
            posts = service.list_posts()
        except StorageError as e:
            logger.error("Error finding posts: %s", e)
            return jsonify({'success': False, 'error': str(e)}), 500
        return jsonify([
            {'path': p.path, 'title': p.title, 'date': p.date}
            for p in posts
        ])

    @app.get('/edit/')
    def edit_missing():
        abort(400, "No post specified")

    @app.get('/edit/<path:path>')
    def edit(path):
        try:
            post = service.get_post(path)
        except NotFoundError:
            abort(404, f"Post not found: {path}")
        except StorageError as e:
            logger.error("Error getting post %s: %s", path, e)
            abort(500, f"Error getting post: {e}")
        return render_editor(post, f"Edit - {post.title}")

    @app.get('/new')
    def new():
        return render_editor(service.new_post(), "New Post")

    @app.post('/save')
    def save():
        path = request.form.get('path', '')
        content = request.form.get('content', '')
        if not content:
            result = SaveResult(success=False, error="Missing required fields", error_kind=ValidationError.kind)
            return jsonify(result.to_dict()), 400

        result = service.save(path, content)
        if result.success:
            return jsonify(result.to_dict())
        return jsonify(result.to_dict()), SAVE_ERROR_STATUS.get(result.error_kind, 500)

    @app.post('/publish')
    def publish():
        result = service.publish()
        return jsonify(result.to_dict()), 200 if result.success else 500

    return app
