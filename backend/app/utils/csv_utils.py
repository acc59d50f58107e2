import csv
import re
from datetime import datetime
from typing import List, Sequence

import pandas as pd

# Matches one quote character at either end of a field
_EDGE_QUOTES = re.compile(r'^"|"$')


def format_csv_rows(rows: Sequence[Sequence[str]]) -> str:
    """
    Encode rows as fully-quoted CSV text.

    Every field is wrapped in double quotes and internal quotes are doubled.
    Each row ends with a single newline.
    """
    df = pd.DataFrame([list(row) for row in rows], dtype=object)
    return df.to_csv(
        header=False,
        index=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )


def parse_record_line(line: str) -> List[str]:
    """
    Split one stored line back into fields.

    This is a plain comma split: a quoted field that itself contains a comma
    is split in two. Surrounding quotes are stripped and doubled quotes
    collapse to one.
    """
    return [_EDGE_QUOTES.sub("", field).replace('""', '"') for field in line.split(",")]


def format_locale_timestamp(value: datetime) -> str:
    """Render a timestamp as `M/D/YYYY, h:mm:ss AM` in server local time."""
    if value.tzinfo is not None:
        value = value.astimezone()
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value.month}/{value.day}/{value.year}, {hour}:{value:%M:%S} {meridiem}"
