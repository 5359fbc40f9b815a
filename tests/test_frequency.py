"""Tests for frequency display normalization."""

import pytest

from replica.frequency import format_freq_display, format_mhz_value, parse_freq_mhz


@pytest.mark.parametrize('text,expected', [
    ('14.074', 14.074),
    ('7074 kHz', 7.074),
    ('14074000hz', 14.074),
    ('10.368GHz', 10368.0),
    ('144.300 MHz', 144.3),
    ('3,573', 3.573),
])
def test_parse_units(text, expected):
    assert parse_freq_mhz(text) == pytest.approx(expected)


def test_band_label_is_not_frequency():
    assert parse_freq_mhz('20m') is None


def test_empty_is_none():
    assert parse_freq_mhz('') is None
    assert parse_freq_mhz(None) is None


def test_format_strips_trailing_zeros():
    assert format_mhz_value(14.0) == '14'
    assert format_mhz_value(7.0740) == '7.074'


def test_display():
    assert format_freq_display('14.074') == '14.074 MHz'
    assert format_freq_display('7074 khz') == '7.074 MHz'
    assert format_freq_display(' 20m ') == '20m'
    assert format_freq_display('') == ''
