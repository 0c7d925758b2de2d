"""
Turn rendered comment threads into CommentRecord rows.
"""

from dataclasses import dataclass, fields, asdict
from typing import Dict, Iterable, List, Optional

AUTHOR_SELECTOR = "#author-text"
CONTENT_SELECTOR = "#content-text"
PUBLISHED_TIME_SELECTOR = "yt-formatted-string.published-time-text a"
LIKES_SELECTOR = "#vote-count-middle"

MISSING_TIME = "N/A"
NO_LIKES = "0"


@dataclass(frozen=True)
class CommentRecord:
    username: str
    comment: str
    published_time: str = MISSING_TIME
    likes: str = NO_LIKES

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


FIELD_NAMES = tuple(f.name for f in fields(CommentRecord))


def extract_record(item) -> Optional[CommentRecord]:
    """Read one thread. None when the author or the comment body is missing."""
    author = item.text_of(AUTHOR_SELECTOR)
    content = item.text_of(CONTENT_SELECTOR)
    if author is None or content is None:
        return None

    published = item.text_of(PUBLISHED_TIME_SELECTOR)
    likes = item.text_of(LIKES_SELECTOR)

    return CommentRecord(
        username=author.strip(),
        comment=content.strip(),
        published_time=published.strip() if published is not None else MISSING_TIME,
        # the single-like state renders an empty counter
        likes=(likes.strip() or NO_LIKES) if likes is not None else NO_LIKES,
    )


def extract_records(items: Iterable) -> List[CommentRecord]:
    out: List[CommentRecord] = []
    for item in items:
        record = extract_record(item)
        if record is not None:
            out.append(record)
    return out
