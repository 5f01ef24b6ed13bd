"""Rich terminal output for task lists, task details, and command results."""

from __future__ import annotations

from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .task_engine.model import Task, TaskStatus
from .utils import _parse_iso

STATUS_STYLES = {
    TaskStatus.OPEN: "white",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.COMPLETED: "green",
    TaskStatus.ARCHIVED: "dim",
}

TITLE_COLUMN_WIDTH = 37


def truncate(text: str, max_length: int = TITLE_COLUMN_WIDTH) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def format_status(status: TaskStatus) -> Text:
    return Text(status.value, style=STATUS_STYLES.get(status, ""))


def format_timestamp(value: str) -> str:
    """Render an ISO timestamp as local ``YYYY-MM-DD HH:MM:SS``."""
    dt = _parse_iso(value)
    if dt is None:
        return value
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def build_task_table(tasks: list[Task]) -> Table:
    table = Table(show_lines=False)
    table.add_column("ID", justify="right", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Title", max_width=40, overflow="fold")
    table.add_column("Branch", max_width=35, overflow="fold")
    for task in tasks:
        table.add_row(
            str(task.id),
            format_status(task.status),
            truncate(task.title),
            task.branch or "-",
        )
    return table


def build_task_detail(task: Task) -> Panel:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_row("Title:", task.title)
    grid.add_row("Status:", format_status(task.status))
    grid.add_row("Branch:", task.branch or "-")
    grid.add_row("Created:", format_timestamp(task.created_at))
    grid.add_row("Updated:", format_timestamp(task.updated_at))

    body: list = [grid]
    if task.description:
        body.extend([Text(""), Text("Description:", style="bold"), Text(task.description)])
    return Panel(Group(*body), title=f"Task #{task.id}", title_align="left", expand=False)


class UIFormatter:
    """Print command results to the terminal.

    Normal output goes to *console*; errors go to *err_console* (stderr by default).
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def task_list(self, tasks: list[Task]) -> None:
        if not tasks:
            self.console.print("No tasks found.", soft_wrap=True)
            return
        self.console.print(build_task_table(tasks))

    def task_detail(self, task: Task) -> None:
        self.console.print(build_task_detail(task))

    def success(self, message: str) -> None:
        self.console.print(Text(f"✓ {message}", style="green"), soft_wrap=True)

    def info(self, message: str) -> None:
        self.console.print(Text(message), soft_wrap=True)

    def error(self, message: str) -> None:
        self.err_console.print(Text(f"✗ {message}", style="red"), soft_wrap=True)
