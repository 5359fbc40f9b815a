"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["log", "list", "edit", "cancel", "delete", "import", "export", "clear", "exit", "help"]

# 'key=value' names accepted by 'log' -> form field
LOG_FIELDS = {
    "dt": "dt",
    "band": "band",
    "freq": "freq",
    "mode": "mode",
    "setup": "setup",
    "mygrid": "myGrid",
    "grid": "theirGrid",
    "theirgrid": "theirGrid",
    "rsts": "rstS",
    "rstr": "rstR",
    "notes": "notes",
}

STYLE = Style.from_dict(
    {
        "prompt": "#2E9AFE bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;46;154;254m"
GREEN = "\033[92m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
 ____            _        _      ___  ____   ___
|  _ \\ ___   ___| | _____| |_   / _ \\/ ___| / _ \\
| |_) / _ \\ / __| |/ / _ \\ __| | | | \\___ \\| | | |
|  __/ (_) | (__|   <  __/ |_  | |_| |___) | |_| |
|_|   \\___/ \\___|_|\\_\\___|\\__|  \\__\\_\\____/ \\___/
{RESET}"""

WELCOME_TITLE = "Pocket QSO CLI - shared ham radio log"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "qso> "

HELP_TEXT = """Available commands:
  log <CALL> [key=value ...]          Save a QSO (updates the QSO being edited, if any)
                                      keys: dt band freq mode setup mygrid grid rsts rstr notes
  list [search]                       List QSOs, newest first
  edit <id>                           Edit a QSO; the next 'log' saves the changes
  cancel                              Leave edit mode
  delete <id>                         Delete a QSO (repeat within a few seconds to confirm)
  import <file.csv>                   Import QSOs from a CSV file
  export [path]                       Export the log as CSV (default: hamlog.csv)
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Dates use YYYY-MM-DDTHH:MM local time; 'dt' defaults to now.
Examples:
  log DL1ABC band=20m freq=14.074 mode=FT8 rsts=-10 rstr=-12 grid=JO62
  log W1AW dt=2024-01-01T00:00 mode=CW notes="first of the year"
  list ft8
  delete 3f2c9c1e-...
  import hamlog.csv"""

IMPORT_FILE_EXTENSIONS = (".csv",)

DEFAULT_EXPORT_FILENAME = "hamlog.csv"
