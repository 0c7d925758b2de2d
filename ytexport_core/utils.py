import os
import json
import pandas as pd

from ytexport_core.config import EXPORT_DIR
from ytexport_core.csv_export import build_csv, BOM
from ytexport_core.extractor import CommentRecord, FIELD_NAMES


def _as_rows(records):
    rows = []
    for r in records:
        row = r.as_dict() if hasattr(r, "as_dict") else dict(r)
        rows.append({name: row.get(name, "") for name in FIELD_NAMES})
    return rows


def records_to_frame(records) -> pd.DataFrame:
    """
    Records (CommentRecord or plain dicts) as a DataFrame with the fixed
    column order. Everything stays text, so "1.2K" likes survive untouched.
    """
    return pd.DataFrame(_as_rows(records), columns=list(FIELD_NAMES), dtype=str)


def export_data(records, filename: str = None):
    """
    Export extracted comments to CSV, Excel or JSON.

    - CSV goes through the same writer as the automatic export (BOM, minimal quoting)
    - If no filename, exports to output/youtube_comments.xlsx
    - Relative names are placed under the output folder
    """
    if not filename:
        filename = os.path.join(EXPORT_DIR, "youtube_comments.xlsx")
    else:
        if not os.path.isabs(filename):
            filename = os.path.join(EXPORT_DIR, filename)
        base, ext = os.path.splitext(filename)
        if not ext:
            filename = f"{filename}.xlsx"

    os.makedirs(os.path.dirname(filename), exist_ok=True)
    ext = filename.lower().split('.')[-1]

    rows = _as_rows(records)
    df = records_to_frame(rows)

    if ext == "csv":
        with open(filename, "w", encoding="utf-8", newline="") as f:
            f.write(BOM + build_csv([CommentRecord(**r) for r in rows]))
    elif ext == "json":
        with open(filename, "w", encoding="utf8") as f:
            json.dump(rows, f, indent=2, ensure_ascii=False)
    else:
        df.to_excel(filename, index=False)
    print(f"Exported data to {filename}")
    return df

