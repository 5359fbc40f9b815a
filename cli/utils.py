"""Utility functions for CLI output."""

from replica.datetimes import format_display_dt
from replica.frequency import format_freq_display


def format_qso_line(qso: dict, pending_delete_id: str | None = None) -> str:
    """
    Render one QSO (wire dict) as a single listing line.

    Example:
        "DL1ABC  2024-01-01 12:00 • 20m • 14.074 MHz • FT8 • RST -10/-12 • JO62  [id]"
    """
    band = (qso.get("band") or "").strip()
    freq = format_freq_display(qso.get("freq"))
    band_freq = " • ".join(p for p in (band, freq) if p) or "-"

    parts = [
        format_display_dt(qso.get("dt")),
        band_freq,
        qso.get("mode") or "-",
        f"RST {qso.get('rstS') or '-'}/{qso.get('rstR') or '-'}",
    ]

    grids = " • ".join(g for g in (qso.get("myGrid"), qso.get("theirGrid")) if g)
    if grids:
        parts.append(grids)
    if qso.get("setup"):
        parts.append(f"Setup: {qso['setup']}")

    line = f"{qso.get('callsign', '')}  " + " • ".join(parts)
    if qso.get("notes"):
        line += f"\n    {qso['notes']}"

    marker = "  (delete pending)" if qso.get("id") == pending_delete_id else ""
    return f"{line}\n    [{qso.get('id')}]{marker}"
