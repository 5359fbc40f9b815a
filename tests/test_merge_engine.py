"""Tests for the merge engine."""

from common.protocol import AddQso, BulkAdd, DeleteQso, EditQso
from replica.merge import apply_mutation


class TestAdd:
    """Insert-if-not-duplicate semantics."""

    def test_add_inserts(self, store, make_qso):
        assert apply_mutation(AddQso(make_qso()), store) is True
        assert 'q1' in store

    def test_three_identical_adds_keep_first(self, store, make_qso):
        results = [
            apply_mutation(AddQso(make_qso(qso_id, notes=qso_id)), store)
            for qso_id in ('id1', 'id2', 'id3')
        ]

        assert results == [True, False, False]
        assert list(store.records) == ['id1']
        assert store.get('id1').notes == 'id1'

    def test_duplicate_id_rejected(self, store, make_qso):
        apply_mutation(AddQso(make_qso('x')), store)
        assert apply_mutation(AddQso(make_qso('x', callsign='K1ABC')), store) is False
        assert store.get('x').callsign == 'W1AW'

    def test_case_only_difference_is_duplicate(self, store, make_qso):
        apply_mutation(AddQso(make_qso('a')), store)
        assert apply_mutation(AddQso(make_qso('b', callsign='w1aw')), store) is False


class TestEdit:
    """Upsert semantics."""

    def test_edit_replaces_wholesale(self, store, make_qso):
        apply_mutation(AddQso(make_qso(notes='old', setup='dipole')), store)
        assert apply_mutation(EditQso(make_qso(notes='new')), store) is True

        qso = store.get('q1')
        assert qso.notes == 'new'
        assert qso.setup == ''

    def test_edit_unknown_id_inserts(self, store, make_qso):
        assert apply_mutation(EditQso(make_qso('fresh')), store) is True
        assert 'fresh' in store

    def test_edit_unknown_id_skips_fingerprint_check(self, store, make_qso):
        apply_mutation(AddQso(make_qso('a')), store)

        assert apply_mutation(EditQso(make_qso('b', notes='edited')), store) is True

        assert sorted(store.records) == ['a', 'b']
        assert store.get('b').notes == 'edited'

    def test_edit_after_delete_resurrects(self, store, make_qso):
        qso = make_qso('1', callsign='W1AW', dt='2024-01-01T00:00')

        apply_mutation(AddQso(qso), store)
        apply_mutation(DeleteQso('1'), store)
        apply_mutation(EditQso(qso.with_changes(notes='x')), store)

        assert store.get('1').notes == 'x'


class TestBulkAdd:
    """Per-element insert semantics in order."""

    def test_dedups_within_batch(self, store, make_qso):
        batch = (make_qso('a'), make_qso('b'), make_qso('c', callsign='K1ABC'))
        assert apply_mutation(BulkAdd(batch), store) is True
        assert sorted(store.records) == ['a', 'c']

    def test_all_duplicates_is_no_change(self, store, make_qso):
        apply_mutation(AddQso(make_qso('a')), store)
        assert apply_mutation(BulkAdd((make_qso('b'),)), store) is False


class TestDelete:
    """Idempotent delete."""

    def test_delete_is_idempotent(self, store, make_qso):
        apply_mutation(AddQso(make_qso()), store)
        assert apply_mutation(DeleteQso('q1'), store) is True
        assert apply_mutation(DeleteQso('q1'), store) is False
        assert len(store) == 0

    def test_delete_missing_is_noop(self, store):
        assert apply_mutation(DeleteQso('nothing'), store) is False


class TestOrdering:
    """Display ordering after changes."""

    def test_sorted_descending_by_ts(self, store, make_qso):
        apply_mutation(AddQso(make_qso('old', callsign='A1A', ts=100)), store)
        apply_mutation(AddQso(make_qso('new', callsign='B1B', ts=300)), store)
        apply_mutation(AddQso(make_qso('mid', callsign='C1C', ts=200)), store)

        assert [q.id for q in store.ordered] == ['new', 'mid', 'old']

    def test_missing_ts_sorts_last(self, store, make_qso):
        apply_mutation(AddQso(make_qso('none', callsign='A1A', ts=None)), store)
        apply_mutation(AddQso(make_qso('some', callsign='B1B', ts=5)), store)

        assert [q.id for q in store.ordered] == ['some', 'none']

    def test_unknown_mutation_is_noop(self, store):
        assert apply_mutation(None, store) is False
        assert apply_mutation(object(), store) is False
