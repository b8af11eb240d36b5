"""
Hugo Editor - A browser-based editor for Hugo blog posts

Lists, edits, saves and publishes the markdown posts of a Hugo site:
- Filenames derived from front matter title and date
- Automatic renames when a post's title or date changes
- Git commit and push on publish
- Hugo preview server management
"""

from hugo_editor.core.models import (
    ConfigError,
    ConflictError,
    EditorError,
    ExternalToolError,
    FrontMatter,
    NotFoundError,
    Post,
    PublishResult,
    SaveResult,
    StorageError,
    ValidationError,
)
from hugo_editor.core.frontmatter import parse_front_matter
from hugo_editor.core.naming import derive_filename, slugify
from hugo_editor.core.store import PostStore
from hugo_editor.core.service import EditorService

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConflictError",
    "EditorError",
    "ExternalToolError",
    "FrontMatter",
    "NotFoundError",
    "Post",
    "PublishResult",
    "SaveResult",
    "StorageError",
    "ValidationError",
    "parse_front_matter",
    "derive_filename",
    "slugify",
    "PostStore",
    "EditorService",
]
