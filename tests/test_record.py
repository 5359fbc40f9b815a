"""Tests for QsoRecord and the duplicate fingerprint."""

from common.types import QsoRecord, fingerprint, is_duplicate_of


class TestFingerprint:
    """Tests for fingerprint()."""

    def test_case_insensitive(self, make_qso):
        lower = make_qso('a', callsign='w1aw', my_grid='jo62', their_grid='fn31')
        upper = make_qso('b', callsign='W1AW', my_grid='JO62', their_grid='FN31')
        assert fingerprint(lower) == fingerprint(upper)

    def test_field_order_and_delimiter(self, make_qso):
        qso = make_qso()
        assert fingerprint(qso) == 'W1AW|2024-01-01T00:00|20M|14.074|FT8|JO62|FN31'

    def test_empty_without_callsign_or_dt(self, make_qso):
        assert fingerprint(make_qso(callsign='')) == ''
        assert fingerprint(make_qso(dt='')) == ''

    def test_ignores_non_key_fields(self, make_qso):
        a = make_qso('a', notes='first', rst_sent='599', ts=1)
        b = make_qso('b', notes='second', rst_sent='579', ts=2)
        assert fingerprint(a) == fingerprint(b)

    def test_differs_on_band(self, make_qso):
        assert fingerprint(make_qso(band='20m')) != fingerprint(make_qso(band='40m'))


class TestDuplicateCheck:
    """Tests for is_duplicate_of()."""

    def test_same_id(self, make_qso):
        assert is_duplicate_of(make_qso('x', callsign='K1ABC'), [make_qso('x')])

    def test_same_fingerprint(self, make_qso):
        assert is_duplicate_of(make_qso('b'), [make_qso('a')])

    def test_empty_fingerprints_never_match(self, make_qso):
        assert not is_duplicate_of(make_qso('b', callsign=''), [make_qso('a', callsign='')])

    def test_no_existing_records(self, make_qso):
        assert not is_duplicate_of(make_qso(), [])


class TestWireShape:
    """Tests for the camelCase dict form."""

    def test_to_dict_uses_wire_keys(self, make_qso):
        obj = make_qso().to_dict()
        assert obj['myGrid'] == 'JO62'
        assert obj['theirGrid'] == 'FN31'
        assert obj['rstS'] == '-10'
        assert obj['rstR'] == '-12'
        assert 'my_grid' not in obj

    def test_from_dict_fills_missing_fields(self):
        qso = QsoRecord.from_dict({'id': 'abc', 'callsign': 'W1AW', 'notes': None})
        assert qso.id == 'abc'
        assert qso.notes == ''
        assert qso.band == ''
        assert qso.ts is None

    def test_from_dict_rejects_missing_id(self):
        assert QsoRecord.from_dict({'callsign': 'W1AW'}) is None
        assert QsoRecord.from_dict({'id': ''}) is None
        assert QsoRecord.from_dict('not a dict') is None

    def test_from_dict_coerces_ts(self):
        assert QsoRecord.from_dict({'id': 'a', 'ts': '1700000000000'}).ts == 1700000000000
        assert QsoRecord.from_dict({'id': 'a', 'ts': 'soon'}).ts is None
        assert QsoRecord.from_dict({'id': 'a', 'ts': True}).ts is None

    def test_missing_ts_sorts_as_zero(self):
        assert QsoRecord(id='a').sort_ts == 0
