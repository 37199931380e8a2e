"""Tests for the worklog CLI."""

import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

from markdown_worklogs.cli import app
from markdown_worklogs.config import INSERT_TIMESTAMP_ENV
from tests.unit.documents import CODE_BLOCK_DOC, NESTED_DOC, SIMPLE_DOC, SORTABLE_SORTED

runner = CliRunner()


def _write(tmp_path: Path, text: str, name: str = "log.md") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_todo_command_updates_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "# TODO foo\nbody\n")

    result = runner.invoke(app, ["-q", "todo", str(path), "--line", "2", "--no-timestamp"])

    assert result.exit_code == 0, result.output
    assert "1: # DONE foo" in result.output
    assert path.read_text(encoding="utf-8") == "# DONE foo\nbody\n"


def test_todo_command_writes_timestamp_by_default(tmp_path: Path) -> None:
    path = _write(tmp_path, "# TODO foo\n")

    result = runner.invoke(app, ["-q", "todo", str(path)])

    assert result.exit_code == 0, result.output
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "# DONE foo"
    assert re.fullmatch(r"  CLOSED: \[\d{4}-\d{1,2}-\d{1,2} \d{1,2}:\d{1,2}\]", lines[1])


def test_todo_command_honours_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(INSERT_TIMESTAMP_ENV, "off")
    path = _write(tmp_path, "# TODO foo\n")

    result = runner.invoke(app, ["-q", "todo", str(path)])

    assert result.exit_code == 0, result.output
    assert path.read_text(encoding="utf-8") == "# DONE foo\n"


def test_todo_down_and_dry_run(tmp_path: Path) -> None:
    path = _write(tmp_path, "# TODO foo\n")

    result = runner.invoke(app, ["-q", "todo", str(path), "--down", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "1: # foo" in result.output
    assert path.read_text(encoding="utf-8") == "# TODO foo\n"


def test_todo_without_header_leaves_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "intro\n# TODO later\n")

    result = runner.invoke(app, ["-q", "todo", str(path), "--line", "1"])

    assert result.exit_code == 0, result.output
    assert "No header" in result.output
    assert path.read_text(encoding="utf-8") == "intro\n# TODO later\n"


def test_missing_file_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["-q", "sort", str(tmp_path / "missing.md")])
    assert result.exit_code == 1


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["--line", "18", "--previous"], "9"),
        (["--line", "1"], "5"),
        (["--line", "1", "--top-level"], "9"),
        (["--line", "1", "--min-level", "3"], "24"),
        (["--line", "26", "--previous", "--level", "2"], "22"),
        (["--line", "26", "--parent"], "22"),
        (["--line", "3", "--sibling"], "9"),
    ],
)
def test_goto_command_prints_one_based_line(
    tmp_path: Path, args: list[str], expected: str
) -> None:
    path = _write(tmp_path, SIMPLE_DOC)

    result = runner.invoke(app, ["-q", "goto", str(path), *args])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == expected


def test_goto_not_found_exits_1(tmp_path: Path) -> None:
    path = _write(tmp_path, SIMPLE_DOC)
    result = runner.invoke(app, ["-q", "goto", str(path), "--line", "24"])
    assert result.exit_code == 1


def test_goto_rejects_conflicting_filters(tmp_path: Path) -> None:
    path = _write(tmp_path, SIMPLE_DOC)
    result = runner.invoke(app, ["-q", "goto", str(path), "--level", "1", "--parent"])
    assert result.exit_code == 2


def test_sort_command_whole_document(worklog_path: Path) -> None:
    result = runner.invoke(app, ["-q", "sort", str(worklog_path)])

    assert result.exit_code == 0, result.output
    assert "Moved 1 section(s)." in result.output
    assert worklog_path.read_text(encoding="utf-8") == SORTABLE_SORTED


def test_sort_command_current_section(tmp_path: Path) -> None:
    path = _write(tmp_path, NESTED_DOC)

    result = runner.invoke(app, ["-q", "sort", str(path), "--line", "7"])

    assert result.exit_code == 0, result.output
    assert path.read_text(encoding="utf-8").endswith("# Other\n## TODO stay\n## DONE keep\n")


def test_sort_dry_run_leaves_file(worklog_path: Path) -> None:
    before = worklog_path.read_text(encoding="utf-8")
    result = runner.invoke(app, ["-q", "sort", str(worklog_path), "--dry-run"])
    assert result.exit_code == 0, result.output
    assert worklog_path.read_text(encoding="utf-8") == before


def test_codeblock_command(tmp_path: Path) -> None:
    path = _write(tmp_path, CODE_BLOCK_DOC)

    content = runner.invoke(app, ["-q", "codeblock", str(path), "--line", "5"])
    span = runner.invoke(app, ["-q", "codeblock", str(path), "--line", "5", "--range"])
    outside = runner.invoke(app, ["-q", "codeblock", str(path), "--line", "1"])

    assert content.exit_code == 0, content.output
    assert content.output == 'def foo\n  "foo"\nend\n'
    assert span.output.strip() == "4-6"
    assert outside.exit_code == 1
