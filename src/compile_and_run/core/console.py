"""
Status Console - colour-coded `***` status lines on top of rich
"""
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.text import Text


class Level(Enum):
    """Semantic level of a status line"""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


LEVEL_STYLES = {
    Level.INFO: "white",
    Level.SUCCESS: "green",
    Level.WARNING: "yellow",
    Level.ERROR: "red",
}


def format_status(level: Level, text: str) -> Text:
    """Build the styled `*** text` line for a level"""
    return Text(f"*** {text}", style=LEVEL_STYLES[level])


class StatusConsole:
    """
    Prints status lines and raw program output

    Colours are emitted only when the underlying console is a terminal,
    unless forced on or off with `color`.
    """

    def __init__(self, console: Optional[Console] = None, color: Optional[bool] = None):
        if console is None:
            if color is None:
                console = Console(highlight=False)
            elif color:
                console = Console(highlight=False, force_terminal=True)
            else:
                console = Console(highlight=False, no_color=True)
        self.console = console

    def status(self, level: Level, text: str) -> None:
        self.console.print(format_status(level, text), soft_wrap=True)

    def info(self, text: str) -> None:
        self.status(Level.INFO, text)

    def success(self, text: str) -> None:
        self.status(Level.SUCCESS, text)

    def warning(self, text: str) -> None:
        self.status(Level.WARNING, text)

    def error(self, text: str) -> None:
        self.status(Level.ERROR, text)

    def raw(self, text: str) -> None:
        """Print program output or diff text exactly as captured"""
        if not text:
            return
        # rich rendering would expand tabs and drop "\r"
        self.console.file.write(text if text.endswith("\n") else text + "\n")
        self.console.file.flush()

    def blank(self) -> None:
        self.console.print()
