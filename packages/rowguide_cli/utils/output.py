"""Output formatting for rowguide commands"""

import json
import sys
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Renders command results as JSON or as rich tables"""

    def __init__(self, json_mode: bool = False, console: Console | None = None):
        self.json_mode = json_mode
        self.console = console or Console()
        self.err_console = Console(stderr=True)

    def success(self, message: str, data: Dict[str, Any] | None = None) -> None:
        """Print a result; in human mode data is shown as a field/value grid"""
        if self.json_mode:
            self._emit({"status": "success", "message": message, "data": data})
            return

        self.console.print(f"[green]✓[/green] {message}")
        if data:
            grid = Table.grid(padding=(0, 2))
            grid.add_column(style="bold")
            grid.add_column()
            for key, value in data.items():
                grid.add_row(key.replace("_", " "), _format_value(value))
            self.console.print(grid)

    def error(self, message: str, details: str | None = None) -> None:
        """Print a failure to stderr"""
        if self.json_mode:
            self._emit({"status": "error", "message": message, "details": details}, stderr=True)
            return

        self.err_console.print(f"[red]✗[/red] {message}")
        if details:
            self.err_console.print(f"  {details}", markup=False)

    def steps(self, title: str, steps: List[Dict[str, Any]]) -> None:
        """Print serialized steps as a table (human mode only)"""
        if self.json_mode:
            return
        table = Table(title=title)
        table.add_column("#", justify="right")
        table.add_column("Count", justify="right")
        table.add_column("Description")
        for step in steps:
            table.add_row(str(step["id"]), str(step["count"]), step["description"])
        self.console.print(table)

    def info(self, message: str) -> None:
        """Print a progress note (human mode only)"""
        if not self.json_mode:
            self.console.print(f"[blue]ℹ[/blue] {message}")

    def _emit(self, payload: Dict[str, Any], stderr: bool = False) -> None:
        print(json.dumps(payload, indent=2), file=sys.stderr if stderr else sys.stdout)


def _format_value(value: Any) -> str:
    """Positions read as (row, step); mark maps as key=mark pairs"""
    if isinstance(value, dict):
        if set(value) == {"row", "step"}:
            return f"({value['row']}, {value['step']})"
        if not value:
            return "-"
        return ", ".join(f"{k}={v}" for k, v in value.items())
    if value is None:
        return "-"
    return str(value)
