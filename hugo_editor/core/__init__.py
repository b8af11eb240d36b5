"""Core components for Hugo Editor."""

from hugo_editor.core.models import FrontMatter, Post, PublishResult, SaveResult
from hugo_editor.core.frontmatter import default_post_content, parse_front_matter
from hugo_editor.core.naming import DerivedName, derive_filename, parse_date, slugify
from hugo_editor.core.store import PostStore
from hugo_editor.core.service import EditorService, create_service_from_config

__all__ = [
    "FrontMatter",
    "Post",
    "PublishResult",
    "SaveResult",
    "default_post_content",
    "parse_front_matter",
    "DerivedName",
    "derive_filename",
    "parse_date",
    "slugify",
    "PostStore",
    "EditorService",
    "create_service_from_config",
]
