"""Tests for mutation messages and the update envelope."""

import json

from common.protocol import (
    AddQso,
    BulkAdd,
    DeleteQso,
    EditQso,
    Update,
    decode_mutation,
    payload_size,
)


def test_add_payload_shape(make_qso):
    payload = AddQso(make_qso()).to_payload()
    assert payload['type'] == 'add_qso'
    assert payload['qso']['callsign'] == 'W1AW'


def test_decode_each_variant(make_qso):
    qso = make_qso()
    assert decode_mutation(AddQso(qso).to_payload()) == AddQso(qso)
    assert decode_mutation(EditQso(qso).to_payload()) == EditQso(qso)
    assert decode_mutation(BulkAdd((qso,)).to_payload()) == BulkAdd((qso,))
    assert decode_mutation(DeleteQso('q1').to_payload()) == DeleteQso('q1')


def test_unknown_type_is_none():
    assert decode_mutation({'type': 'rename_qso', 'id': 'x'}) is None


def test_malformed_payloads_are_none():
    assert decode_mutation(None) is None
    assert decode_mutation({'type': 'add_qso'}) is None
    assert decode_mutation({'type': 'add_qso', 'qso': {'callsign': 'W1AW'}}) is None
    assert decode_mutation({'type': 'bulk_add', 'qsos': 'nope'}) is None
    assert decode_mutation({'type': 'delete_qso'}) is None


def test_bulk_add_drops_malformed_entries(make_qso):
    payload = {'type': 'bulk_add', 'qsos': [make_qso().to_dict(), {'callsign': 'NOID'}, 42]}
    mutation = decode_mutation(payload)
    assert isinstance(mutation, BulkAdd)
    assert [q.id for q in mutation.qsos] == ['q1']


def test_update_envelope_json(make_qso):
    update = Update.for_mutation(DeleteQso('q1'), info='Deleted QSO')
    update.serial = 7
    update.sender = 'replica-a'

    restored = Update.from_json(update.to_json())

    assert restored.serial == 7
    assert restored.sender == 'replica-a'
    assert restored.info == 'Deleted QSO'
    assert restored.mutation == DeleteQso('q1')


def test_update_from_dict_ignores_bad_serial():
    assert Update.from_dict({'payload': {}, 'serial': 'x'}).serial is None
    assert Update.from_dict({'payload': {}, 'serial': True}).serial is None
    assert Update.from_dict('garbage').payload is None


def test_payload_size_matches_compact_json():
    payload = {'type': 'delete_qso', 'id': 'é'}
    expected = len(json.dumps({'payload': payload}, ensure_ascii=False, separators=(',', ':')).encode('utf-8'))
    assert payload_size(payload) == expected
