import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from monkey import monkey_cli


def test_run_monkey_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    status = monkey_cli.run_monkey(source="1 * 2 * 3;", is_string=True)
    assert status == 0
    assert capsys.readouterr().out.strip() == "((1 * 2) * 3)"


def test_run_monkey_file_input(
    monkey_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    status = monkey_cli.run_monkey(source=str(monkey_file))
    assert status == 0
    assert capsys.readouterr().out.strip() == "let x = ;((x * 2) + 1)"


def test_run_monkey_rejects_other_extensions(tmp_path: Path) -> None:
    path = tmp_path / "program.txt"
    path.write_text("1;")
    with pytest.raises(ValueError, match=r"\.monkey"):
        monkey_cli.run_monkey(source=str(path))


def test_run_monkey_reports_parse_errors(capsys: pytest.CaptureFixture[str]) -> None:
    status = monkey_cli.run_monkey(source="let = 5;", is_string=True)
    assert status == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[error] >>> parser errors:" in captured.err
    assert "\texpected next token to be IDENT, got = instead" in captured.err


def test_run_monkey_json(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="1 + 2;", is_string=True, as_json=True)
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "program"
    infix = data["children"][0]["children"][0]
    assert infix["kind"] == "infix"
    assert infix["value"] == "+"
    assert [c["value"] for c in infix["children"]] == [1, 2]


def test_run_monkey_trace(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="1 + 2;", is_string=True, trace=True)
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("BEGIN parse_expression_statement")
    assert out[-1] == "(1 + 2)"


def test_main_string_exits_with_status(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "+;"])
    with pytest.raises(SystemExit) as excinfo:
        monkey_cli.main()
    assert excinfo.value.code == 1
    assert "no prefix parse function for + found" in capsys.readouterr().err


def test_main_without_args_starts_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(sys, "argv", ["monkey"])
    monkeypatch.setattr(
        "monkey.monkey_repl.start_repl", lambda **kwargs: calls.append(kwargs)
    )
    monkey_cli.main()
    assert calls == [{}]


def test_main_repl_flag_passes_trace(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(sys, "argv", ["monkey", "--repl", "--trace"])
    monkeypatch.setattr(
        "monkey.monkey_repl.start_repl", lambda **kwargs: calls.append(kwargs)
    )
    monkey_cli.main()
    assert calls == [{"trace": True}]


def test_cli_subprocess(monkey_file: Path) -> None:
    result = subprocess.run(
        [sys.executable, "-m", "monkey.monkey_cli", str(monkey_file)],
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONPATH": str(Path(__file__).parents[1] / "src")},
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "let x = ;((x * 2) + 1)"


def test_cli_subprocess_path_mentioning_pytest(tmp_path: Path) -> None:
    path = tmp_path / "pytest_demo.monkey"
    path.write_text("1 * 2;", encoding="utf-8")
    result = subprocess.run(
        [sys.executable, "-m", "monkey.monkey_cli", str(path)],
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONPATH": str(Path(__file__).parents[1] / "src")},
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "(1 * 2)"
