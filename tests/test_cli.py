# tests/test_cli.py

from __future__ import annotations

import datetime as dt
import io
from dataclasses import replace

import pytest
from rich.console import Console

from daily_dose.cli.main import main
from daily_dose.config import Settings
from daily_dose.tasks.task_models import TaskStatus
from daily_dose.tasks.task_store import TaskStore


class CliRunner:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def __call__(self, *argv: str) -> tuple[int, str]:
        buf = io.StringIO()
        console = Console(file=buf, width=200, color_system=None)
        code = main(list(argv), settings=self.settings, console=console)
        return code, buf.getvalue()

    def tasks_today(self):
        with TaskStore(self.settings.db_path) as store:
            return store.fetch_exact(dt.date.today())


@pytest.fixture()
def cli(settings: Settings) -> CliRunner:
    return CliRunner(settings)


def test_add_and_show(cli: CliRunner) -> None:
    code, out = cli("add", "Write docs")
    assert code == 0
    assert "Added task" in out

    (task,) = cli.tasks_today()
    assert task.description == "Write docs"
    assert task.status is TaskStatus.TODO

    code, out = cli("show")
    assert code == 0
    assert "Write docs" in out
    assert "Idx" in out
    assert dt.date.today().isoformat() in out
    assert task.id not in out

    code, out = cli("show", "--include-id")
    assert task.id in out


def test_add_for_specific_date(cli: CliRunner) -> None:
    code, _ = cli("add", "Tax return", "-y", "2023", "-m", "3", "-d", "31")
    assert code == 0

    code, out = cli("show", "-y", "2023", "-m", "3", "-d", "31")
    assert "Tax return" in out
    assert "2023-03-31" in out


def test_invalid_date_is_reported_and_nothing_is_written(cli: CliRunner, capsys) -> None:
    code, _ = cli("add", "Never stored", "-m", "2", "-d", "30")
    assert code == 1
    assert "add failed [invalid_date]" in capsys.readouterr().err
    assert cli.tasks_today() == []


def test_mark_and_unmark_by_index(cli: CliRunner) -> None:
    cli("add", "first")
    cli("add", "second")

    code, out = cli("mark", "2")
    assert code == 0
    assert "second" in out
    assert [t.status for t in cli.tasks_today()] == [TaskStatus.TODO, TaskStatus.DONE]

    code, _ = cli("unmark", "2")
    assert code == 0
    assert [t.status for t in cli.tasks_today()] == [TaskStatus.TODO, TaskStatus.TODO]


def test_mark_index_beyond_today(cli: CliRunner, capsys) -> None:
    cli("add", "only one")
    code, _ = cli("mark", "3")
    assert code == 1
    assert "mark failed [not_found]" in capsys.readouterr().err
    assert [t.status for t in cli.tasks_today()] == [TaskStatus.TODO]


def test_update_and_delete_by_id(cli: CliRunner, capsys) -> None:
    cli("add", "draft")
    (task,) = cli.tasks_today()

    assert cli("update", "final", "--id", task.id)[0] == 0
    assert [t.description for t in cli.tasks_today()] == ["final"]

    assert cli("delete", "--id", task.id)[0] == 0
    assert cli.tasks_today() == []

    assert cli("delete", "--id", task.id)[0] == 1
    assert cli("update", "again", "--id", task.id)[0] == 1
    err = capsys.readouterr().err
    assert "delete failed [not_found]" in err
    assert "update failed [not_found]" in err


def test_list_current_month(cli: CliRunner) -> None:
    code, out = cli("list")
    assert code == 0
    assert "No tasks between" in out

    cli("add", "review PR")
    cli("add", "lunch")
    code, out = cli("list", "-s", "review")
    assert "review PR" in out
    assert "lunch" not in out

    code, out = cli("list", "-l", "1", "--include-id")
    assert "ID" in out
    assert "lunch" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["mark", "0"],
        ["mark", "101"],
        ["show", "-d", "32"],
        ["add", "x", "-m", "13"],
        ["add", "x", "-y", "1977"],
        ["list", "-l", "0"],
        ["add", "   "],
        ["delete"],
        [],
    ],
)
def test_argument_validation(cli: CliRunner, argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli(*argv)
    assert excinfo.value.code == 2


def test_storage_unavailable(settings: Settings, capsys) -> None:
    settings.data_dir.parent.mkdir(parents=True, exist_ok=True)
    settings.data_dir.write_text("not a directory", "utf-8")
    code = main(["show"], settings=settings, console=Console(file=io.StringIO()))
    assert code == 1
    assert "show failed [storage_unavailable]" in capsys.readouterr().err


def test_unwritable_log_file_falls_back_to_stderr(settings: Settings, capsys) -> None:
    logged = replace(settings, log_file_enabled=True)
    logged.log_file.mkdir(parents=True)

    code = main(["show"], settings=logged, console=Console(file=io.StringIO()))

    assert code == 0
    assert "Cannot write log file" in capsys.readouterr().err


def test_log_file_is_written(settings: Settings) -> None:
    logged = replace(settings, log_file_enabled=True, log_level="DEBUG")
    code = main(["add", "logged"], settings=logged, console=Console(file=io.StringIO()))

    assert code == 0
    assert "Task added" in logged.log_file.read_text("utf-8")
