"""
Replica service: the add/edit/delete/import entry points.

With a transport, every local action becomes an update handed to the
transport and nothing is applied locally; the delivery of that update (to
this replica as well) is what changes state. Without a transport, actions
go straight through the merge engine and the snapshot is rewritten.
"""

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from common.constants import DELETE_CONFIRM_SECONDS, EXPORT_FILENAME, MAX_UPDATE_SIZE_BYTES
from common.protocol import AddQso, BulkAdd, DeleteQso, EditQso, Mutation, Update
from common.types import QsoRecord
from replica.chunking import chunk_for_bulk_add
from replica.datetimes import now_ms, ts_from_local_dt
from replica.exceptions import InvalidQsoError, QsoNotFoundError, UnsupportedImportError
from replica.merge import apply_mutation
from replica.persistence import SnapshotStore
from replica.store import ReplicaStore
from replica.tabular import export_csv, import_rows
from replica.transport import Transport

logger = logging.getLogger(__name__)

# form fields that are upper-cased on submit
_UPPER_FIELDS = ("callsign", "mode", "myGrid", "theirGrid")


class ReplicaService:
    """Entry points for one replica; owns no state beyond its collaborators."""

    def __init__(
        self,
        store: ReplicaStore,
        transport: Optional[Transport] = None,
        snapshot: Optional[SnapshotStore] = None,
        export_dir: Optional[Path] = None,
        delete_confirm_timeout: float = DELETE_CONFIRM_SECONDS,
    ):
        self.store = store
        self.transport = transport
        self.snapshot = snapshot
        self.export_dir = Path(export_dir) if export_dir else None
        self.delete_confirm_timeout = delete_confirm_timeout

    @property
    def has_transport(self) -> bool:
        return self.transport is not None

    @property
    def max_update_size(self) -> int:
        if self.transport is not None:
            return self.transport.max_update_size or MAX_UPDATE_SIZE_BYTES
        return MAX_UPDATE_SIZE_BYTES

    def startup(self) -> None:
        """
        Reset the store, then subscribe to the transport or, when there is
        none, restore the snapshot.
        """
        self.store.reset()

        if self.transport is not None:
            self.transport.set_update_listener(self.receive)
            logger.info("Replica started with live transport")
            return

        if self.snapshot is not None:
            self.store.replace_all(self.snapshot.load())
        logger.info(f"Replica started without transport ({len(self.store)} QSO(s) restored)")

    # -- delivery -----------------------------------------------------------

    def receive(self, update: Update) -> bool:
        """
        Apply a delivered update once per (sender, serial).

        Returns:
            True if the update changed the record set
        """
        if not self.store.tracker.check_and_mark(update.serial, update.sender):
            return False

        changed = apply_mutation(update.mutation, self.store)
        if changed:
            logger.debug(f"Applied update serial={update.serial} sender={update.sender} info={update.info!r}")
            if self.transport is None:
                self._save()
        return changed

    # -- local actions ------------------------------------------------------

    def _dispatch(self, mutation: Mutation, info: str) -> bool:
        if self.transport is not None:
            self.transport.send_update(Update.for_mutation(mutation, info), "")
            return False

        changed = apply_mutation(mutation, self.store)
        if changed:
            self._save()
        return changed

    def _save(self) -> None:
        if self.snapshot is not None:
            self.snapshot.save(self.store.records.values())

    def add_qso(self, qso: QsoRecord, info: Optional[str] = None) -> bool:
        """
        Add a new QSO.

        Returns:
            True if applied locally (no transport); False when handed to the
            transport or rejected as a duplicate
        """
        info = info or " ".join(f"QSO {qso.callsign} {qso.band} {qso.mode}".split())
        return self._dispatch(AddQso(qso), info)

    def edit_qso(self, qso: QsoRecord, info: Optional[str] = None) -> bool:
        return self._dispatch(EditQso(qso), info or f"Edited QSO {qso.callsign}")

    def delete_qso(self, qso_id: str, info: Optional[str] = None) -> bool:
        if not qso_id:
            return False
        return self._dispatch(DeleteQso(qso_id), info or "Deleted QSO")

    def add_qsos_batch(self, qsos: Sequence[QsoRecord], info: Optional[str] = None) -> bool:
        """
        Add many QSOs at once.

        With a transport the batch is split into bulk_add updates that each
        fit the transport's size limit, one update per chunk.
        """
        if not qsos:
            return False

        if self.transport is None:
            return self._dispatch(BulkAdd(tuple(qsos)), info or "")

        chunks = chunk_for_bulk_add(qsos, self.max_update_size)
        for chunk in chunks:
            self.transport.send_update(
                Update.for_mutation(BulkAdd(tuple(chunk)), info or f"Imported {len(chunk)} QSO(s)"),
                ""
            )
        logger.info(f"Sent {len(qsos)} QSO(s) in {len(chunks)} bulk_add update(s)")
        return False

    # -- form ---------------------------------------------------------------

    def submit(self, form: Dict[str, Any]) -> QsoRecord:
        """
        Save the QSO form: a new QSO, or an edit when an edit is in progress.

        Raises:
            InvalidQsoError: If callsign or dt is empty
        """
        values = {k: str(v).strip() for k, v in form.items() if v is not None}
        for key in _UPPER_FIELDS:
            if key in values:
                values[key] = values[key].upper()

        callsign = values.get("callsign", "")
        dt = values.get("dt", "")
        if not callsign or not dt:
            raise InvalidQsoError("Callsign and date/time are required")

        editing_id = self.store.editing_id
        qso = QsoRecord(
            id=editing_id or str(uuid.uuid4()),
            callsign=callsign,
            dt=dt,
            band=values.get("band", ""),
            freq=values.get("freq", ""),
            mode=values.get("mode", ""),
            setup=values.get("setup", ""),
            my_grid=values.get("myGrid", ""),
            their_grid=values.get("theirGrid", ""),
            rst_sent=values.get("rstS", ""),
            rst_received=values.get("rstR", ""),
            notes=values.get("notes", ""),
            ts=ts_from_local_dt(dt) or now_ms(),
        )

        if editing_id:
            self.edit_qso(qso)
        else:
            self.add_qso(qso)

        self.cancel_edit()
        return qso

    def begin_edit(self, qso_id: str) -> QsoRecord:
        """
        Mark a QSO as being edited.

        Raises:
            QsoNotFoundError: If no QSO with this id is present locally
        """
        qso = self.store.get(qso_id)
        if qso is None:
            raise QsoNotFoundError(f"QSO {qso_id} not found")
        self.store.editing_id = qso_id
        return qso

    def cancel_edit(self) -> None:
        self.store.editing_id = None
        self.store.clear_pending_delete()

    # -- two-step delete ----------------------------------------------------

    def request_delete(self, qso_id: str) -> str:
        """
        First call arms a confirmation for ``qso_id``; a second call for the
        same id before the timeout deletes it. Must run on the event loop.

        Returns:
            "deleted" or "pending"
        """
        store = self.store
        if store.pending_delete_id == qso_id:
            store.clear_pending_delete()
            self.delete_qso(qso_id)
            return "deleted"

        store.clear_pending_delete()
        store.pending_delete_id = qso_id
        loop = asyncio.get_running_loop()
        store.pending_delete_timer = loop.call_later(self.delete_confirm_timeout, self._expire_pending_delete, qso_id)
        return "pending"

    def _expire_pending_delete(self, qso_id: str) -> None:
        if self.store.pending_delete_id == qso_id:
            logger.debug(f"Delete confirmation for {qso_id} expired")
            self.store.pending_delete_id = None
            self.store.pending_delete_timer = None

    # -- import / export ----------------------------------------------------

    def import_csv(self, text: str, filename: Optional[str] = None) -> int:
        """
        Import QSOs from CSV text.

        Returns:
            Number of rows accepted (rows without callsign or dt are skipped)

        Raises:
            UnsupportedImportError: If ``filename`` is given and is not a .csv file
        """
        if filename is not None and not filename.lower().endswith(".csv"):
            raise UnsupportedImportError("Only CSV files are supported.")

        qsos = import_rows(text)
        self.add_qsos_batch(qsos, f"Imported {len(qsos)} QSO(s)")
        logger.info(f"Imported {len(qsos)} QSO(s)")
        return len(qsos)

    def export_csv(self) -> str:
        return export_csv(self.store.records.values())

    def share_export(self, filename: str = EXPORT_FILENAME) -> Optional[Path]:
        """
        Share the CSV export through the transport's file exchange, falling
        back to a file in the export directory.

        Returns:
            Path of the local file when the fallback was used, else None
        """
        text = self.export_csv()

        if self.transport is not None:
            try:
                if self.transport.send_file(filename, text, "Ham Log CSV export"):
                    return None
            except Exception as e:
                logger.warning(f"Sharing {filename} through transport failed: {e}, writing local file")

        return self._write_export(filename, text)

    def _write_export(self, filename: str, text: str) -> Optional[Path]:
        export_dir = self.export_dir or Path.cwd()
        path = export_dir / Path(filename).name
        try:
            export_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.warning(f"Failed to write export to {path}: {e}")
            return None
        logger.info(f"Exported CSV to {path}")
        return path

    def list_qsos(self, query: str = "") -> List[QsoRecord]:
        return self.store.search(query)
