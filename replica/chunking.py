"""Splits a batch of new records into bulk_add updates that fit the transport."""

import logging
from typing import List, Sequence

from common.protocol import BULK_ADD, payload_size, record_size
from common.types import QsoRecord

logger = logging.getLogger(__name__)

# {"payload":{"type":"bulk_add","qsos":[]}}
_EMPTY_BULK_ADD_SIZE = payload_size({"type": BULK_ADD, "qsos": []})


def bulk_add_size(qsos: Sequence[QsoRecord]) -> int:
    """Serialized size in bytes of a bulk_add update carrying ``qsos``."""
    return payload_size({"type": BULK_ADD, "qsos": [q.to_dict() for q in qsos]})


def chunk_for_bulk_add(qsos: Sequence[QsoRecord], max_size: int) -> List[List[QsoRecord]]:
    """
    Greedily pack records, in order, into chunks of at most ``max_size`` bytes.

    A record that does not fit alongside the current chunk starts the next
    one. A single record larger than ``max_size`` is still emitted on its
    own. Concatenating the chunks gives back the input order.

    The running size is tracked incrementally; it equals ``bulk_add_size``
    of the current chunk.
    """
    chunks: List[List[QsoRecord]] = []
    current: List[QsoRecord] = []
    current_size = _EMPTY_BULK_ADD_SIZE

    for qso in qsos:
        size = record_size(qso)
        added = size + (1 if current else 0)  # separating comma
        current.append(qso)
        current_size += added

        if current_size > max_size and len(current) > 1:
            current.pop()
            chunks.append(current)
            current = [qso]
            current_size = _EMPTY_BULK_ADD_SIZE + size

    if current:
        chunks.append(current)

    oversized = [c for c in chunks if len(c) == 1 and bulk_add_size(c) > max_size]
    if oversized:
        logger.warning(
            f"{len(oversized)} record(s) exceed the update size limit of {max_size} bytes "
            "and will be sent alone"
        )

    logger.debug(f"Split {len(qsos)} record(s) into {len(chunks)} bulk_add chunk(s)")
    return chunks
