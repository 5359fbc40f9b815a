"""
Merge engine: applies mutation messages to the local record set.

No I/O happens here. Every function reports whether the record set changed
so callers know when to re-render or persist.

Edits carry no existence check and no causal metadata: the last edit
applied at a replica wins, and an edit arriving after a delete of the same
id re-inserts the record. Replicas that see a delete and an edit for one id
in different orders therefore end in different states. This matches the
shared log's behaviour and is intentionally not reconciled here.
"""

import logging
from typing import Optional

from common.protocol import AddQso, BulkAdd, DeleteQso, EditQso, Mutation
from common.types import QsoRecord, is_duplicate_of
from replica.store import ReplicaStore

logger = logging.getLogger(__name__)


def insert_qso(store: ReplicaStore, qso: Optional[QsoRecord]) -> bool:
    """Insert unless the id or fingerprint is already present."""
    if qso is None:
        return False
    if is_duplicate_of(qso, store.records.values()):
        logger.debug(f"Rejected duplicate QSO {qso.id} ({qso.callsign})")
        return False
    store.records[qso.id] = qso
    return True


def upsert_qso(store: ReplicaStore, qso: Optional[QsoRecord]) -> bool:
    """
    Replace the record with this id wholesale, or insert it if absent.

    No duplicate check either way: an edit for an unknown id is inserted
    even when its fingerprint matches another record.
    """
    if qso is None:
        return False
    store.records[qso.id] = qso
    return True


def remove_qso(store: ReplicaStore, qso_id: str) -> bool:
    """Remove by id; an absent id is a no-op."""
    return store.records.pop(qso_id, None) is not None


def apply_mutation(mutation: Optional[Mutation], store: ReplicaStore) -> bool:
    """
    Apply one mutation to the store.

    Returns:
        True if the record set changed (the display ordering has then been
        recomputed), False otherwise.
    """
    changed = False

    if isinstance(mutation, AddQso):
        changed = insert_qso(store, mutation.qso)
    elif isinstance(mutation, EditQso):
        changed = upsert_qso(store, mutation.qso)
    elif isinstance(mutation, BulkAdd):
        for qso in mutation.qsos:
            if insert_qso(store, qso):
                changed = True
    elif isinstance(mutation, DeleteQso):
        changed = remove_qso(store, mutation.qso_id)
    elif mutation is not None:
        logger.warning(f"Unknown mutation type: {type(mutation).__name__}")

    if changed:
        store.resort()

    return changed
