"""Post store: reading, listing and saving markdown posts."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from hugo_editor.core.frontmatter import parse_front_matter
from hugo_editor.core.models import (
    ConflictError,
    NotFoundError,
    Post,
    StorageError,
    ValidationError,
)
from hugo_editor.core.naming import DerivedName, derive_filename, timestamp_suffix

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

MARKDOWN_SUFFIX = '.md'
LISTING_DATE_FORMAT = '%Y-%m-%d'


class PostStore:
    """Reads and writes the flat directory of markdown posts.

    The store does no locking of its own. Callers that save concurrently
    must serialize ``save_post`` themselves (see EditorService).
    """

    def __init__(self, posts_dir: Path, clock: Optional[Clock] = None):
        """Initialize PostStore.

        Args:
            posts_dir: Directory holding the posts
            clock: Returns the current time; used for date fallbacks and
                   collision suffixes (default: datetime.now)
        """
        self.posts_dir = Path(posts_dir)
        self.clock = clock or datetime.now

    def list_posts(self) -> List[Post]:
        """List every markdown post, newest first.

        Returns:
            Posts without content, sorted by date descending

        Raises:
            StorageError: If the directory walk or any read fails
        """
        if not self.posts_dir.exists():
            logger.warning("Posts directory not found: %s", self.posts_dir)
            return []

        posts = []

        def on_error(exc: OSError) -> None:
            raise StorageError(f"Failed to list posts: {exc}") from exc

        for root, _dirs, files in os.walk(self.posts_dir, onerror=on_error):
            for name in files:
                if not name.lower().endswith(MARKDOWN_SUFFIX):
                    continue
                file_path = Path(root) / name
                post = self._load(file_path, include_content=False)
                posts.append(post)

        posts.sort(key=lambda p: p.date, reverse=True)
        return posts

    def get_post(self, path: str) -> Post:
        """Read one post, including its content.

        Args:
            path: Filename relative to the posts directory

        Returns:
            The post

        Raises:
            NotFoundError: If no such post exists
            StorageError: If the file cannot be read
        """
        resolved = self._resolve(path)
        if resolved is None or not resolved.is_file():
            raise NotFoundError(f"Post not found: {path}")
        return self._load(self.posts_dir / path, include_content=True)

    def save_post(self, path: str, content: str) -> str:
        """Save a post, renaming it if its title or date changed.

        The filename is re-derived from the front matter on every save. A new
        post (empty ``path``) whose name is taken gets a timestamp suffix. An
        existing post whose derived name belongs to another file is refused.

        Args:
            path: Current filename, or empty for a new post
            content: Full document text

        Returns:
            The filename the content was written to

        Raises:
            ValidationError: If content is empty or path is not a plain filename
            ConflictError: If the renamed target already exists
            StorageError: If a rename or write fails
        """
        if not content:
            raise ValidationError("Content must not be empty")
        if path:
            self._check_filename(path)

        now = self.clock()
        front_matter = parse_front_matter(content)
        derived = derive_filename(front_matter.title, front_matter.date, now)
        new_filename = derived.filename

        if not path:
            path = self._unique_filename(derived, now)
        elif path != new_filename:
            path = self._rename(path, new_filename)

        self._write(path, content)
        return path

    def _unique_filename(self, derived: DerivedName, now: datetime) -> str:
        """First free name for a new post: plain, timestamped, then counted."""
        if not (self.posts_dir / derived.filename).exists():
            return derived.filename

        stamp = timestamp_suffix(now)
        candidate = derived.with_suffix(stamp)
        counter = 2
        while (self.posts_dir / candidate.filename).exists():
            candidate = derived.with_suffix(f"{stamp}-{counter}")
            counter += 1
        logger.info("Filename %s taken, using %s", derived.filename, candidate.filename)
        return candidate.filename

    def _rename(self, old: str, new: str) -> str:
        """Move a post to its newly derived filename.

        Returns:
            The filename the post now lives under
        """
        old_path = self.posts_dir / old
        new_path = self.posts_dir / new

        if not old_path.exists():
            logger.info("%s does not exist, saving as %s", old, new)
            if new_path.exists():
                raise ConflictError(f"Duplicated path name {new}, can't save {old}")
            return new

        if new_path.exists():
            # Case-only renames on case-insensitive filesystems hit the same file
            if not os.path.samefile(old_path, new_path):
                raise ConflictError(f"Duplicated path name {new}, can't save {old}")

        try:
            new_path.parent.mkdir(parents=True, exist_ok=True)
            os.rename(old_path, new_path)
        except OSError as e:
            raise StorageError(f"Failed to rename {old} to {new}: {e}") from e

        logger.info("Renamed %s to %s", old, new)
        return new

    def _write(self, path: str, content: str) -> None:
        file_path = self.posts_dir / path
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def _load(self, file_path: Path, include_content: bool) -> Post:
        """Read a post file and apply the title/date fallbacks.

        Args:
            file_path: Absolute path of the markdown file
            include_content: Whether to keep the text on the Post

        Returns:
            Post with title and date filled in
        """
        try:
            content = file_path.read_text(encoding='utf-8', errors='replace')
            mtime = file_path.stat().st_mtime
        except OSError as e:
            raise StorageError(f"Failed to read {file_path.name}: {e}") from e

        front_matter = parse_front_matter(content)
        title = front_matter.title or file_path.stem
        date = front_matter.date or datetime.fromtimestamp(mtime).strftime(LISTING_DATE_FORMAT)

        return Post(
            path=file_path.relative_to(self.posts_dir).as_posix(),
            title=title,
            date=date,
            content=content if include_content else "",
        )

    def _resolve(self, path: str) -> Optional[Path]:
        """Map a relative path onto the posts directory.

        Returns:
            The absolute path, or None if it points outside the directory
        """
        if not path:
            return None
        base = self.posts_dir.resolve()
        candidate = (base / path).resolve()
        if candidate == base or base not in candidate.parents:
            return None
        return candidate

    @staticmethod
    def _check_filename(path: str) -> None:
        if path in ('.', '..') or '/' in path or '\\' in path or os.sep in path:
            raise ValidationError(f"Invalid post path: {path}")
