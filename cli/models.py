"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class LogCommand:
    """Save a QSO (new, or the one being edited)."""

    callsign: str
    fields: tuple[tuple[str, str], ...] = ()
    command: Literal["log"] = "log"

    def to_form(self) -> dict[str, str]:
        """Form body with camelCase keys as the replica expects them."""
        form = dict(self.fields)
        form["callsign"] = self.callsign
        return form


@dataclass(frozen=True)
class ListCommand:
    """List QSOs, optionally filtered by search text."""

    query: str = ""
    command: Literal["list"] = "list"


@dataclass(frozen=True)
class EditCommand:
    """Start editing a QSO."""

    qso_id: str
    command: Literal["edit"] = "edit"


@dataclass(frozen=True)
class CancelCommand:
    """Leave edit mode."""

    command: Literal["cancel"] = "cancel"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a QSO (needs to be repeated to confirm)."""

    qso_id: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class ImportCommand:
    """Import QSOs from a CSV file."""

    path: str
    command: Literal["import"] = "import"


@dataclass(frozen=True)
class ExportCommand:
    """Export the log as CSV."""

    output_path: str | None = None
    command: Literal["export"] = "export"


CommandRequest = (
    LogCommand
    | ListCommand
    | EditCommand
    | CancelCommand
    | DeleteCommand
    | ImportCommand
    | ExportCommand
)
