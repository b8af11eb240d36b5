"""Data models and errors for Hugo Editor."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


class EditorError(Exception):
    """Base class for errors raised by the editor core."""
    kind = "editor"


class ValidationError(EditorError):
    """Input to a save was rejected before anything touched the disk."""
    kind = "validation"


class NotFoundError(EditorError):
    """The requested post does not exist."""
    kind = "not_found"


class ConflictError(EditorError):
    """A rename would overwrite a different, existing post."""
    kind = "conflict"


class StorageError(EditorError):
    """A filesystem operation failed. The original OSError is the __cause__."""
    kind = "storage"


class ExternalToolError(EditorError):
    """An external command (git, hugo) failed to launch or exited non-zero."""
    kind = "external_tool"

    def __init__(self, message: str, command: str = "", returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class ConfigError(EditorError):
    """The editor configuration is invalid."""
    kind = "config"


@dataclass
class FrontMatter:
    """The fields the editor reads from a post's front matter block."""
    title: Optional[str] = None
    date: Optional[str] = None


@dataclass
class Post:
    """A markdown post in the posts directory.

    ``path`` is a filename relative to the posts directory, empty while the
    post has never been saved. ``title`` and ``date`` are derived from
    ``content`` and only cached here for listing.
    """
    path: str
    title: str
    date: str
    content: str = ""
    is_new: bool = False

    @property
    def preview_slug(self) -> str:
        """Path of the post on the preview server."""
        if self.path.lower().endswith('.md'):
            return self.path[:-3]
        return self.path


@dataclass
class SaveResult:
    """Outcome of a save, as reported to the browser."""
    success: bool
    path: str = ""
    error: str = ""
    error_kind: str = ""

    @classmethod
    def failed(cls, error: EditorError) -> "SaveResult":
        return cls(success=False, error=str(error), error_kind=error.kind)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {'success': True, 'path': self.path}
        return {'success': False, 'error': self.error, 'kind': self.error_kind}


@dataclass
class PublishResult:
    """Outcome of a publish run.

    The flags record which stages actually completed so the caller can tell
    a failed push from a failed build.
    """
    success: bool = True
    error: str = ""
    committed: bool = False
    pushed: bool = False
    built: bool = False

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'success': self.success,
            'committed': self.committed,
            'pushed': self.pushed,
            'built': self.built,
        }
        if not self.success:
            result['error'] = self.error
        return result
