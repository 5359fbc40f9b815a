"""Frequency normalization for display."""

import re
from typing import Optional

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_freq_mhz(freq) -> Optional[float]:
    """
    Interpret free text as a frequency in MHz.

    Bare numbers are MHz; ``hz``, ``khz``, ``mhz`` and ``ghz`` suffixes
    (any case) convert. Text with other letters, such as a band label
    like ``20m``, is not a frequency and yields None.
    """
    if freq is None:
        return None
    s = str(freq).strip().lower()
    if not s:
        return None
    if re.search(r"[a-z]", s) and "hz" not in s:
        return None

    m = _LEADING_NUMBER.match(s.replace(",", ".", 1))
    if not m:
        return None
    num = float(m.group(0))

    if "ghz" in s:
        return num * 1000
    if "khz" in s:
        return num / 1000
    if "mhz" in s:
        return num
    if "hz" in s:
        return num / 1e6
    return num


def format_mhz_value(mhz: float) -> str:
    return re.sub(r"\.?0+$", "", f"{mhz:.6f}")


def format_freq_display(freq) -> str:
    """``"14.074"`` -> ``"14.074 MHz"``; non-frequencies come back trimmed."""
    if not freq:
        return ""
    mhz = parse_freq_mhz(freq)
    if mhz is None:
        return str(freq).strip()
    return f"{format_mhz_value(mhz)} MHz"
