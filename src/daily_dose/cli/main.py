# src/daily_dose/cli/main.py

"""
CLI entrypoint.

Parses arguments, configures logging, opens the task store for the duration of
one command, and renders the result.
"""

from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
from collections.abc import Callable, Sequence

from rich.console import Console

from .. import __version__
from ..config import Settings, get_settings
from ..errors import DailyDoseError
from ..tasks.date_resolver import EPOCH_YEAR, month_range, resolve_date, to_iso
from ..tasks.task_api import mark_by_index, unmark_by_index
from ..tasks.task_models import TaskStatus
from ..tasks.task_query import list_grouped
from ..tasks.task_store import TaskStore
from .bootstrap import configure_logging, open_store
from .render import render_task_groups

logger = logging.getLogger(__name__)

MAX_TASK_INDEX = 100


def _int_in_range(low: int, high: int | None = None) -> Callable[[str], int]:
    def parse(raw: str) -> int:
        try:
            value = int(raw)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from None
        if value < low or (high is not None and value > high):
            bounds = f"{low}..{high}" if high is not None else f">= {low}"
            raise argparse.ArgumentTypeError(f"{value} is not in range {bounds}")
        return value

    return parse


def _non_empty(raw: str) -> str:
    if not raw.strip():
        raise argparse.ArgumentTypeError("value must not be empty")
    return raw


def _add_date_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-d", "--day", type=_int_in_range(1, 31), help="day of month (1-31)")
    p.add_argument("-m", "--month", type=_int_in_range(1, 12), help="month (1-12)")
    p.add_argument("-y", "--year", type=_int_in_range(EPOCH_YEAR), help=f"year (>= {EPOCH_YEAR})")


def _say(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False)


# ---- command handlers ----


def cmd_list(args: argparse.Namespace, store: TaskStore, console: Console) -> int:
    start, end = month_range(args.month)
    groups = list_grouped(store, start, end, search=args.search, limit=args.limit)
    render_task_groups(
        groups,
        include_id=args.include_id,
        console=console,
        empty_message=f"No tasks between {to_iso(start)} and {to_iso(end)}.",
    )
    return 0


def cmd_show(args: argparse.Namespace, store: TaskStore, console: Console) -> int:
    day = resolve_date(year=args.year, month=args.month, day=args.day)
    groups = list_grouped(store, day)
    render_task_groups(
        groups,
        include_id=args.include_id,
        console=console,
        empty_message=f"No tasks for {to_iso(day)}.",
    )
    return 0


def cmd_add(args: argparse.Namespace, store: TaskStore, console: Console) -> int:
    day = resolve_date(year=args.year, month=args.month, day=args.day)
    task_id = store.insert(args.task, TaskStatus.TODO, day)
    _say(console, f"Added task {task_id} for {to_iso(day)}.")
    return 0


def cmd_update(args: argparse.Namespace, store: TaskStore, console: Console) -> int:
    store.update_description(args.id, args.task)
    _say(console, f"Updated task {args.id}.")
    return 0


def cmd_delete(args: argparse.Namespace, store: TaskStore, console: Console) -> int:
    store.delete(args.id)
    _say(console, f"Deleted task {args.id}.")
    return 0


def cmd_mark(args: argparse.Namespace, store: TaskStore, console: Console) -> int:
    task = mark_by_index(store, args.index)
    _say(console, f"Marked #{args.index} '{task.description}' as {task.status.label.lower()}.")
    return 0


def cmd_unmark(args: argparse.Namespace, store: TaskStore, console: Console) -> int:
    task = unmark_by_index(store, args.index)
    _say(console, f"Unmarked #{args.index} '{task.description}' ({task.status.label.lower()}).")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daily-dose", description="Record your daily dose of tasks."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    p = sub.add_parser("list", help="list tasks of a month, latest day first")
    p.add_argument("-m", "--month", type=_int_in_range(1, 12), help="month to list (1-12)")
    p.add_argument("-l", "--limit", type=_int_in_range(1), help="show at most this many days")
    p.add_argument("-s", "--search", type=_non_empty, help="only tasks containing this text")
    p.add_argument("--include-id", action="store_true", help="show task ids instead of indexes")
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("show", help="show tasks for a specific date")
    _add_date_args(p)
    p.add_argument("--include-id", action="store_true", help="show task ids instead of indexes")
    p.set_defaults(handler=cmd_show)

    p = sub.add_parser("add", help="add a task to today's or a specific date's list")
    p.add_argument("task", type=_non_empty, help="task description")
    _add_date_args(p)
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("update", help="update a task description by id")
    p.add_argument("task", type=_non_empty, help="new task description")
    p.add_argument("--id", required=True, type=_non_empty, help="task id to update")
    p.set_defaults(handler=cmd_update)

    p = sub.add_parser("delete", help="delete a task by id")
    p.add_argument("--id", required=True, type=_non_empty, help="task id to delete")
    p.set_defaults(handler=cmd_delete)

    p = sub.add_parser("mark", help="mark today's task at INDEX as done")
    p.add_argument("index", type=_int_in_range(1, MAX_TASK_INDEX), help="1-based task index")
    p.set_defaults(handler=cmd_mark)

    p = sub.add_parser("unmark", help="set today's task at INDEX back to todo")
    p.add_argument("index", type=_int_in_range(1, MAX_TASK_INDEX), help="1-based task index")
    p.set_defaults(handler=cmd_unmark)

    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    console: Console | None = None,
) -> int:
    args = build_parser().parse_args(argv)

    if settings is None:
        settings = get_settings()
    configure_logging(settings)
    console = console or Console()

    logger.debug("Running command=%s today=%s", args.command, to_iso(dt.date.today()))
    try:
        with open_store(settings) as store:
            return args.handler(args, store, console)
    except DailyDoseError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"{args.command} failed [{exc.kind}]: {exc}", file=sys.stderr)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
