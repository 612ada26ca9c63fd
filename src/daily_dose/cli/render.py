# src/daily_dose/cli/render.py

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..tasks.date_resolver import to_iso
from ..tasks.task_models import TaskStatus
from ..tasks.task_query import TaskGroup

_STATUS_STYLE = {
    TaskStatus.TODO: "yellow",
    TaskStatus.IN_PROGRESS: "cyan",
    TaskStatus.DONE: "green",
    TaskStatus.BLOCKED: "red",
}


def build_tasks_table(groups: Sequence[TaskGroup], *, include_id: bool) -> Table:
    """
    One row per task. The date cell is filled only on the first row of a group.
    The last column is the task id, or its 1-based position within the day.
    """
    table = Table(box=box.ASCII, show_header=True, header_style="bold", padding=(0, 1))
    table.add_column("Date", no_wrap=True)
    table.add_column("Description", style="red", overflow="fold")
    table.add_column("Status", no_wrap=True)
    table.add_column("ID" if include_id else "Idx", no_wrap=True)

    for group in groups:
        for position, task in enumerate(group.tasks, start=1):
            table.add_row(
                to_iso(group.date) if position == 1 else "",
                Text(task.description),
                Text(task.status.label, style=_STATUS_STYLE.get(task.status, "")),
                task.id if include_id else str(position),
            )
    return table


def render_task_groups(
    groups: Sequence[TaskGroup],
    *,
    include_id: bool = False,
    console: Console | None = None,
    empty_message: str = "No tasks.",
) -> None:
    console = console or Console()
    if not groups:
        console.print(empty_message)
        return
    console.print(build_tasks_table(groups, include_id=include_id))
