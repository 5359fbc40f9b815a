"""CSV export and import of the QSO log."""

import csv
import io
import logging
import re
import uuid
from typing import Dict, Iterable, List, Optional

from common.constants import CSV_COLUMNS
from common.types import QsoRecord
from replica.datetimes import now_ms, ts_from_dt

logger = logging.getLogger(__name__)

_NEEDS_QUOTES = re.compile(r'[",\n\r]')


def csv_escape(value) -> str:
    """Quote a cell when it contains a comma, quote or line break."""
    s = "" if value is None else str(value)
    if _NEEDS_QUOTES.search(s):
        return '"' + s.replace('"', '""') + '"'
    return s


def export_csv(records: Iterable[QsoRecord]) -> str:
    """
    Render records as CSV, header first, oldest QSO first.

    Columns follow CSV_COLUMNS; lines are joined with ``\\n``.
    """
    rows = sorted(records, key=lambda q: q.sort_ts)
    lines = [",".join(CSV_COLUMNS)]
    for qso in rows:
        obj = qso.to_dict()
        lines.append(",".join(csv_escape(obj.get(col)) for col in CSV_COLUMNS))
    return "\n".join(lines)


def parse_csv(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into one dict per data row, keyed by the header row.

    Blank lines are skipped; short rows are padded with empty cells.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    reader = csv.reader(io.StringIO(normalized))

    header: Optional[List[str]] = None
    rows: List[Dict[str, str]] = []

    for cols in reader:
        if not any(c.strip() for c in cols):
            continue
        if header is None:
            header = [h.strip() for h in cols]
            continue
        rows.append({name: (cols[i] if i < len(cols) else "") for i, name in enumerate(header)})

    return rows


def row_to_record(row: Dict[str, str]) -> Optional[QsoRecord]:
    """
    Normalize one imported row.

    Returns None when callsign or dt is empty after trimming.
    """
    def cell(name: str) -> str:
        return (row.get(name) or "").strip()

    callsign = cell("callsign").upper()
    dt = cell("dt")
    if not callsign or not dt:
        return None

    ts = _explicit_ts(cell("ts")) or ts_from_dt(dt) or now_ms()

    return QsoRecord(
        id=cell("id") or str(uuid.uuid4()),
        callsign=callsign,
        dt=dt,
        band=cell("band"),
        freq=cell("freq"),
        mode=cell("mode").upper(),
        setup=cell("setup"),
        my_grid=cell("myGrid").upper(),
        their_grid=cell("theirGrid").upper(),
        rst_sent=cell("rstS"),
        rst_received=cell("rstR"),
        notes=cell("notes"),
        ts=ts,
    )


def _explicit_ts(value: str) -> Optional[int]:
    if not value:
        return None
    try:
        ts = int(float(value))
    except (ValueError, OverflowError):
        return None
    return ts or None


def import_rows(text: str) -> List[QsoRecord]:
    """Parse CSV text into records, skipping incomplete rows."""
    rows = parse_csv(text)
    records = [r for r in (row_to_record(row) for row in rows) if r is not None]
    skipped = len(rows) - len(records)
    if skipped:
        logger.info(f"Skipped {skipped} CSV row(s) without callsign or dt")
    return records
