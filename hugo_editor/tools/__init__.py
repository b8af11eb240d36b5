"""Adapters for the external tools the editor drives."""

from hugo_editor.tools.git import GitRepository
from hugo_editor.tools.site import SiteBuilder

__all__ = ["GitRepository", "SiteBuilder"]
