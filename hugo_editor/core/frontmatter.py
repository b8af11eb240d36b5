"""Front matter parsing for Hugo posts.

Only the ``title`` and ``date`` keys matter to the editor, so the block is
scanned line by line instead of being handed to a YAML parser: posts with
front matter that YAML would reject still get listed and renamed.
"""

from datetime import datetime
from typing import Optional

from hugo_editor.core.models import FrontMatter

FRONT_MATTER_DELIMITER = "---"
QUOTE_CHARS = "\"'"

NEW_POST_TITLE = "New Post"


def strip_quotes(value: str) -> str:
    """Strip one layer of surrounding quotes from a trimmed value.

    Args:
        value: Raw field value

    Returns:
        The value without leading/trailing whitespace and quotes
    """
    value = value.strip()
    if value.startswith(tuple(QUOTE_CHARS)):
        value = value[1:]
    if value.endswith(tuple(QUOTE_CHARS)):
        value = value[:-1]
    return value.strip()


def _field_value(line: str, key: str) -> Optional[str]:
    prefix = f"{key}:"
    if not line.startswith(prefix):
        return None
    value = strip_quotes(line[len(prefix):])
    return value or None


def parse_front_matter(text: str) -> FrontMatter:
    """Extract the title and date from a document's front matter block.

    The first ``---`` line opens the block and the second closes it. An
    unterminated block still yields the fields seen before the end of the
    document. Empty values count as absent.

    Args:
        text: Full document text

    Returns:
        FrontMatter with the fields found (None when missing)
    """
    result = FrontMatter()
    inside = False

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line == FRONT_MATTER_DELIMITER:
            if inside:
                break
            inside = True
            continue
        if not inside:
            continue

        title = _field_value(line, 'title')
        if title is not None:
            result.title = title
            continue

        date = _field_value(line, 'date')
        if date is not None:
            result.date = date

    return result


def default_post_content(now: datetime) -> str:
    """Content shown when a new editing session starts.

    Args:
        now: Current time, used for the ``date`` field

    Returns:
        A draft post with front matter and placeholder body
    """
    if now.tzinfo is None:
        now = now.astimezone()
    return (
        f"{FRONT_MATTER_DELIMITER}\n"
        f'title: "{NEW_POST_TITLE}"\n'
        f"date: {now.isoformat(timespec='seconds')}\n"
        "draft: true\n"
        f"{FRONT_MATTER_DELIMITER}\n"
        "\n"
        "Write your content here...\n"
    )
