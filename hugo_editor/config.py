"""Editor configuration.

Values come from defaults, then an optional YAML file, then command line
flags, each layer overriding the previous one.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hugo_editor.core.models import ConfigError

logger = logging.getLogger(__name__)

# site_dir is coerced to a Path on construction, so it is not listed
FIELD_TYPES = {
    'posts_subdir': str,
    'hugo_command': str,
    'publish_command': str,
    'host': str,
    'port': int,
    'hugo_port': int,
    'autosave_delay': (int, float),
    'stop_timeout': (int, float),
    'git_remote': str,
    'start_preview': bool,
}


def _type_names(expected) -> str:
    if isinstance(expected, tuple):
        return ' or '.join(t.__name__ for t in expected)
    return expected.__name__


@dataclass
class EditorConfig:
    """Startup parameters for the editor."""
    site_dir: Path
    posts_subdir: str = "content/blog"
    hugo_command: str = "hugo server -D"
    publish_command: str = "hugo"
    host: str = "127.0.0.1"
    port: int = 8080
    hugo_port: int = 1313
    autosave_delay: float = 2.0
    stop_timeout: float = 10.0
    git_remote: str = "origin"
    start_preview: bool = True

    def __post_init__(self):
        self.site_dir = Path(self.site_dir).expanduser()

    @property
    def posts_dir(self) -> Path:
        return self.site_dir / self.posts_subdir

    @property
    def preview_base_url(self) -> str:
        return f"http://localhost:{self.hugo_port}"

    def validate(self) -> None:
        """Check the configuration can be used to start the editor.

        Raises:
            ConfigError: If the site directory is missing or a value is invalid
        """
        for f in fields(self):
            value = getattr(self, f.name)
            expected = FIELD_TYPES.get(f.name)
            # bool is an int subclass; a port of `true` is still a mistake
            if expected is not None and (not isinstance(value, expected) or
                                         (expected is not bool and isinstance(value, bool))):
                raise ConfigError(f"{f.name} must be of type {_type_names(expected)}, got {value!r}")
        if not self.site_dir.is_dir():
            raise ConfigError(f"Hugo site directory does not exist: {self.site_dir}")
        if Path(self.posts_subdir).is_absolute() or '..' in Path(self.posts_subdir).parts:
            raise ConfigError(f"posts_subdir must be inside the site: {self.posts_subdir}")
        for name in ('port', 'hugo_port'):
            value = getattr(self, name)
            if not 0 < value < 65536:
                raise ConfigError(f"{name} out of range: {value}")
        if self.autosave_delay < 0:
            raise ConfigError(f"autosave_delay must not be negative: {self.autosave_delay}")


def _check_keys(values: Dict[str, Any]) -> None:
    known = {f.name for f in fields(EditorConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")


def load_config(config_path: Optional[Path] = None, **overrides: Any) -> EditorConfig:
    """Build an EditorConfig from a YAML file and explicit overrides.

    Args:
        config_path: YAML file with a mapping of EditorConfig fields
        **overrides: Values taking precedence over the file (None is ignored)

    Returns:
        The merged configuration (not yet validated)

    Raises:
        ConfigError: If the file cannot be read or contains unknown keys
    """
    data: Dict[str, Any] = {}
    if config_path is not None:
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Failed to read config {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        _check_keys(loaded)
        data.update(loaded)
        logger.debug("Loaded configuration from %s", config_path)

    data.update({k: v for k, v in overrides.items() if v is not None})
    _check_keys(data)
    if 'site_dir' not in data:
        raise ConfigError("Hugo site directory must be specified with --site")
    return EditorConfig(**data)
