"""Command parser for CLI input."""

import shlex

from cli.constants import LOG_FIELDS
from cli.models import (
    CancelCommand,
    CommandRequest,
    DeleteCommand,
    EditCommand,
    ExportCommand,
    ImportCommand,
    ListCommand,
    LogCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of Log/List/Edit/Cancel/Delete/Import/Export)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0].lower()

    if command_name == "log":
        return _parse_log(tokens[1:])
    elif command_name == "list":
        return ListCommand(query=" ".join(tokens[1:]))
    elif command_name == "edit":
        return EditCommand(qso_id=_single_id("edit", tokens[1:]))
    elif command_name == "cancel":
        if len(tokens) > 1:
            raise ParseError("cancel takes no arguments")
        return CancelCommand()
    elif command_name == "delete":
        return DeleteCommand(qso_id=_single_id("delete", tokens[1:]))
    elif command_name == "import":
        return _parse_import(tokens[1:])
    elif command_name == "export":
        return _parse_export(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_log(args: list[str]) -> LogCommand:
    """Parse 'log CALL [key=value ...]' command."""
    if not args:
        raise ParseError("log requires a callsign")

    callsign = args[0]
    if "=" in callsign:
        raise ParseError("log requires a callsign before any key=value pairs")

    fields: dict[str, str] = {}
    for arg in args[1:]:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ParseError(f"Expected key=value, got '{arg}'")
        field = LOG_FIELDS.get(key.lower())
        if field is None:
            raise ParseError(f"Unknown field: {key}")
        fields[field] = value

    return LogCommand(callsign=callsign, fields=tuple(fields.items()))


def _single_id(command: str, args: list[str]) -> str:
    if len(args) != 1:
        raise ParseError(f"{command} requires exactly 1 argument: <id>")
    return args[0]


def _parse_import(args: list[str]) -> ImportCommand:
    """Parse 'import <file.csv>' command."""
    if len(args) != 1:
        raise ParseError("import requires exactly 1 argument: <file.csv>")
    return ImportCommand(path=args[0])


def _parse_export(args: list[str]) -> ExportCommand:
    """Parse 'export [path]' command."""
    if len(args) > 1:
        raise ParseError("export takes at most 1 argument: [path]")
    return ExportCommand(output_path=args[0] if args else None)
