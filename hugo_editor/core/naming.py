"""Filename derivation for posts.

A post's filename is ``{year}_{month}_{slug}.md``. Year and month come from
the front matter date, the slug from the title.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple

from hugo_editor.core.frontmatter import strip_quotes

# Tried in order, first match wins.
DATE_FORMATS = (
    '%Y-%m-%dT%H:%M:%S%z',
    '%Y-%m-%dT%H:%M:%S.%f%z',
    '%Y-%m-%d',
    '%Y-%m-%d %H:%M:%S',
)

TIMESTAMP_FORMAT = '%Y%m%d-%H%M%S'

DEFAULT_TITLE = "new-post"

# ASCII-only classes: non-latin letters are dropped from slugs.
_INVALID_SLUG_CHARS = re.compile(r'[^\w\s-]', re.ASCII)
_WHITESPACE_RUN = re.compile(r'\s+', re.ASCII)


@dataclass(frozen=True)
class DerivedName:
    """The pieces a post filename is built from."""
    year: str
    month: str
    slug: str

    @property
    def filename(self) -> str:
        return f"{self.year}_{self.month}_{self.slug}.md"

    def with_suffix(self, suffix: str) -> "DerivedName":
        """Return a copy whose slug has ``-suffix`` appended."""
        return replace(self, slug=f"{self.slug}-{suffix}")


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a front matter date.

    Accepts RFC 3339 timestamps, plain ``YYYY-MM-DD`` dates and
    ``YYYY-MM-DD HH:MM:SS`` timestamps. Surrounding quotes are ignored.

    Args:
        value: Date string from front matter, may be None

    Returns:
        The parsed datetime (offset-aware for RFC 3339 input), or None
    """
    if not value:
        return None
    value = strip_quotes(value)
    if not value:
        return None

    # strptime's %z does not take the lowercase 'z' RFC 3339 allows
    if value.endswith('z'):
        value = value[:-1] + 'Z'

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def resolve_year_month(value: Optional[str], now: datetime) -> Tuple[str, str]:
    """Year and month for a filename, falling back to ``now``.

    Args:
        value: Date string from front matter
        now: Current time, used when the date is missing or unparseable

    Returns:
        Tuple of (four-digit year, two-digit month)
    """
    when = parse_date(value) or now
    return when.strftime('%Y'), when.strftime('%m')


def slugify(title: str) -> str:
    """Turn a title into a filename-safe slug.

    Lower-cases, drops anything other than letters, digits, underscores,
    whitespace and hyphens, then replaces each whitespace run with a hyphen.

    Args:
        title: Human readable title

    Returns:
        The slug, e.g. ``hello-world-foo`` for ``"Hello, World!  Foo"``
    """
    slug = _INVALID_SLUG_CHARS.sub('', title.lower())
    return _WHITESPACE_RUN.sub('-', slug)


def derive_filename(title: Optional[str], date: Optional[str], now: datetime) -> DerivedName:
    """Compute the canonical name for a post.

    Args:
        title: Title from front matter; defaults to ``new-post``
        date: Date from front matter, may be empty or unparseable
        now: Current time, used for the date fallback

    Returns:
        DerivedName with year, month and slug
    """
    year, month = resolve_year_month(date, now)
    return DerivedName(year=year, month=month, slug=slugify(title or DEFAULT_TITLE))


def timestamp_suffix(now: datetime) -> str:
    """Suffix used to make a new post's filename unique."""
    return now.strftime(TIMESTAMP_FORMAT)
