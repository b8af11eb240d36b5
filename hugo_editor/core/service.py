"""Editor service: the object request handlers talk to."""

import logging
import threading
from typing import TYPE_CHECKING, List, Optional

from hugo_editor.core.frontmatter import NEW_POST_TITLE, default_post_content
from hugo_editor.core.models import EditorError, Post, PublishResult, SaveResult
from hugo_editor.core.store import PostStore
from hugo_editor.tools.git import GitRepository
from hugo_editor.tools.site import SiteBuilder

if TYPE_CHECKING:
    from hugo_editor.config import EditorConfig

logger = logging.getLogger(__name__)


class EditorService:
    """Owns the post store, the save lock and the external tools.

    One instance is created at startup and shared by every request. Saves
    are serialized by a single lock; reads are not, so a listing taken during
    a save may see the post under its old or its new name.
    """

    def __init__(
        self,
        store: PostStore,
        git: Optional[GitRepository] = None,
        site: Optional[SiteBuilder] = None,
        publish_command: str = "",
    ):
        """Initialize EditorService.

        Args:
            store: Post store for the blog directory
            git: Repository to commit and push on publish (None disables git)
            site: Site builder owning the preview server (None disables it)
            publish_command: Build command run on publish (empty skips the build)
        """
        self.store = store
        self.git = git
        self.site = site
        self.publish_command = publish_command
        self._save_lock = threading.Lock()

    def start(self) -> None:
        if self.site is not None:
            self.site.start()

    def shutdown(self) -> None:
        if self.site is not None:
            self.site.stop()

    def list_posts(self) -> List[Post]:
        return self.store.list_posts()

    def get_post(self, path: str) -> Post:
        return self.store.get_post(path)

    def new_post(self) -> Post:
        """An unsaved post pre-filled with draft front matter."""
        now = self.store.clock()
        return Post(
            path="",
            title=NEW_POST_TITLE,
            date=now.strftime('%Y-%m-%d'),
            content=default_post_content(now),
            is_new=True,
        )

    def save(self, path: str, content: str) -> SaveResult:
        """Save a post under the process-wide lock.

        Args:
            path: Current filename, empty for a new post
            content: Full document text

        Returns:
            SaveResult with the final path, or the error that stopped the save
        """
        with self._save_lock:
            try:
                saved_path = self.store.save_post(path, content)
            except EditorError as e:
                logger.warning("Failed to save %s: %s", path or "new post", e)
                return SaveResult.failed(e)

        logger.info("Saved %s", saved_path)
        return SaveResult(success=True, path=saved_path)

    def publish(self) -> PublishResult:
        """Commit and push pending changes, then build the site.

        Every stage is attempted even when git fails, but a git error is
        still what the result reports.

        Returns:
            PublishResult describing which stages completed
        """
        result = PublishResult()
        git_error = self._commit_and_push(result)

        build_error = None
        if self.publish_command and self.site is not None:
            try:
                self.site.rebuild(self.publish_command)
                result.built = True
            except EditorError as e:
                logger.error("Publish command failed: %s", e)
                build_error = e

        error = git_error or build_error
        if error is not None:
            result.success = False
            result.error = str(error)
        return result

    def _commit_and_push(self, result: PublishResult) -> Optional[EditorError]:
        if self.git is None:
            return None

        try:
            if not self.git.has_changes():
                logger.info("No git changes detected, skipping commit")
                return None
            logger.info("Git changes detected, creating commit...")
            self.git.commit()
            result.committed = True
            logger.info("Pushing changes to remote...")
            self.git.push()
            result.pushed = True
        except EditorError as e:
            logger.warning("Git step failed: %s", e)
            return e
        return None


def create_service_from_config(config: "EditorConfig") -> EditorService:
    """Wire an EditorService from startup configuration."""
    return EditorService(
        store=PostStore(config.posts_dir),
        git=GitRepository(config.site_dir, remote=config.git_remote),
        site=SiteBuilder(
            config.site_dir,
            server_command=config.hugo_command,
            stop_timeout=config.stop_timeout,
        ),
        publish_command=config.publish_command,
    )
