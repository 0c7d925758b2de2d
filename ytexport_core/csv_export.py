"""
CSV payload for extracted comments.

Quoting is done by hand rather than with the csv module: only values holding a
comma, a double quote or a newline get quoted, and rows are joined with a bare
"\\n", so the output is byte-for-byte predictable.
"""

import os
import re
from typing import Callable, NamedTuple, Optional, Sequence

from ytexport_core.extractor import CommentRecord, FIELD_NAMES

CSV_MIME_TYPE = "text/csv;charset=utf-8;"
BOM = "\ufeff"
FILENAME_PREFIX = "youtube_comments_"
SLUG_MAX_LEN = 50

_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


class CsvPayload(NamedTuple):
    data: bytes
    filename: str
    mime_type: str = CSV_MIME_TYPE


def escape_cell(value) -> str:
    text = "" if value is None else str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def build_csv(records: Sequence[CommentRecord]) -> str:
    rows = [",".join(FIELD_NAMES)]
    for record in records:
        rows.append(",".join(escape_cell(getattr(record, name, None)) for name in FIELD_NAMES))
    return "\n".join(rows)


def _underscores(match) -> str:
    # one per UTF-16 code unit, so characters outside the BMP take two
    return "__" if ord(match.group()) > 0xFFFF else "_"


def slugify_title(title: str) -> str:
    return _UNSAFE.sub(_underscores, title or "").lower()[:SLUG_MAX_LEN]


def suggested_filename(title: str) -> str:
    return f"{FILENAME_PREFIX}{slugify_title(title)}.csv"


def serialize(
    records: Sequence[CommentRecord],
    title: str,
    log_callback: Optional[Callable[[str], None]] = None,
) -> Optional[CsvPayload]:
    """UTF-8 (with BOM) CSV bytes and a file name, or None for no records."""
    if not records:
        (log_callback or print)("No data to export to CSV.")
        return None
    data = (BOM + build_csv(records)).encode("utf-8")
    return CsvPayload(data, suggested_filename(title))


def save_payload(payload: CsvPayload, directory: str) -> str:
    """Write the payload into directory and return the full path."""
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, payload.filename)
    with open(path, "wb") as f:
        f.write(payload.data)
    return path
