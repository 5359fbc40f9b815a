"""Custom completer for the Pocket QSO CLI with CSV file autocompletion."""

from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, IMPORT_FILE_EXTENSIONS, LOG_FIELDS


class QsoCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - key= completion for 'log' arguments after the callsign
    - CSV file completion from the current directory for 'import'
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]

        if command == "import":
            # only the first argument is a path
            arg_index = len(tokens) if is_typing_new_token else len(tokens) - 1
            if arg_index == 1:
                yield from self._complete_csv_files(current_word)
        elif command == "log":
            arg_index = len(tokens) if is_typing_new_token else len(tokens) - 1
            if arg_index >= 2 and "=" not in current_word:
                yield from self._complete_log_fields(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_log_fields(self, partial: str) -> Iterable[Completion]:
        partial_lower = partial.lower()
        for key in LOG_FIELDS:
            if key.startswith(partial_lower):
                yield Completion(f"{key}=", start_position=-len(partial))

    def _complete_csv_files(self, partial: str) -> Iterable[Completion]:
        """
        Complete CSV files in the current directory.

        Shows a message if no files are available.
        """
        available_files = sorted(
            item.name
            for item in Path.cwd().iterdir()
            if item.is_file() and item.name.lower().endswith(IMPORT_FILE_EXTENSIONS)
        )

        if not available_files:
            if not partial:
                yield Completion(
                    "",
                    start_position=0,
                    display="(no .csv files in current directory)",
                )
            return

        partial_lower = partial.lower()
        for name in available_files:
            if name.lower().startswith(partial_lower):
                yield Completion(name, start_position=-len(partial))
