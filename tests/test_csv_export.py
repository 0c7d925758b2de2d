import io
import os

import pandas as pd

from ytexport_core.csv_export import (
    CSV_MIME_TYPE,
    build_csv,
    escape_cell,
    save_payload,
    serialize,
    slugify_title,
    suggested_filename,
)
from ytexport_core.extractor import CommentRecord, FIELD_NAMES


def _parse(data: bytes) -> pd.DataFrame:
    return pd.read_csv(io.BytesIO(data), encoding="utf-8-sig", dtype=str, keep_default_na=False)


def test_escape_only_when_needed():
    assert escape_cell("plain text") == "plain text"
    assert escape_cell("a,b") == '"a,b"'
    assert escape_cell('say "hi"') == '"say ""hi"""'
    assert escape_cell("line1\nline2") == '"line1\nline2"'
    assert escape_cell(None) == ""
    assert escape_cell(42) == "42"


def test_header_and_rows():
    text = build_csv([CommentRecord("@a", "hi", "1 day ago", "3"), CommentRecord("@b", "yo")])
    assert text == "username,comment,published_time,likes\n@a,hi,1 day ago,3\n@b,yo,N/A,0"


def test_serialize_empty_is_a_noop(log):
    assert serialize([], "Title", log_callback=log.append) is None
    assert log == ["No data to export to CSV."]


def test_payload_has_bom_and_round_trips():
    records = [
        CommentRecord("@a", 'He said "wow", then left', "3 days ago", "1.2K"),
        CommentRecord("@b", "first line\nsecond line", "N/A", "0"),
        CommentRecord("@c", "émoji 🎉 ok", "1 hour ago (edited)", "7"),
    ]
    payload = serialize(records, "Video")

    assert payload.data.startswith(b"\xef\xbb\xbf")
    df = _parse(payload.data)
    assert list(df.columns) == list(FIELD_NAMES)
    assert len(df) == len(records)
    assert [tuple(row) for row in df.itertuples(index=False)] == [
        (r.username, r.comment, r.published_time, r.likes) for r in records
    ]


def test_filename_from_title():
    assert slugify_title("Never Gonna Give You Up - YouTube") == "never_gonna_give_you_up___youtube"
    assert suggested_filename("Ünïcode: title!") == "youtube_comments__n_code__title_.csv"
    long_title = "A" * 80
    assert slugify_title(long_title) == "a" * 50
    assert suggested_filename("") == "youtube_comments_.csv"


def test_mime_type():
    assert CSV_MIME_TYPE == "text/csv;charset=utf-8;"


def test_save_payload_writes_bytes(tmp_path):
    payload = serialize([CommentRecord("@a", "hi")], "My Video")
    path = save_payload(payload, str(tmp_path / "out"))
    assert os.path.basename(path) == "youtube_comments_my_video.csv"
    with open(path, "rb") as f:
        assert f.read() == payload.data


def test_astral_characters_take_two_underscores():
    assert suggested_filename("A\U0001F389B") == "youtube_comments_a__b.csv"
    assert slugify_title("Best 🔥 moments") == "best____moments"


def test_emoji_counts_twice_toward_the_length_cut():
    # 49 letters + emoji -> the cut lands between its two underscores
    assert slugify_title("x" * 49 + "\U0001F600" + "tail") == "x" * 49 + "_"
    assert slugify_title("x" * 48 + "\U0001F600" + "tail") == "x" * 48 + "__"


def test_payload_carries_mime_type():
    assert serialize([CommentRecord("@a", "hi")], "t").mime_type == CSV_MIME_TYPE
