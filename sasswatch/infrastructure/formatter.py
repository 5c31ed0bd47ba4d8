"""Terminal reporting of per-file compile results."""

from rich.console import Console
from rich.markup import escape


class Formatter:
    """
    Prints compile results for the person watching the terminal.

    Success lines are suppressed with ``hide_success``; errors are always shown.
    """

    def __init__(self, console: Console | None = None, hide_success: bool = False):
        self.console = console or Console(stderr=True)
        self.hide_success = hide_success

    def success(self, message: str) -> None:
        if self.hide_success:
            return
        self.console.print(f"[green]✔ Sass[/green] {escape(message)}")

    def error(self, message: str, detail: str = "") -> None:
        self.console.print(f"[red]✘ Sass[/red] {escape(message)}")
        if detail:
            self.console.print(escape(detail.rstrip()), style="red", highlight=False)
