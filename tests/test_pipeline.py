import io
import sys

import pytest

from labkit.procs.pipeline import (
    is_exit_command,
    main,
    parse_args,
    run_pipeline,
    split_pipeline,
)

PY = f'"{sys.executable}"'


@pytest.mark.parametrize("cmd,expected", [
    ("exit", True),
    ("q", True),
    ("quit", False),
    (" q", False),
    ("exit ", False),
])
def test_is_exit_command(cmd, expected):
    assert is_exit_command(cmd) is expected


@pytest.mark.parametrize("command,expected", [
    ("ls -l", ["ls", "-l"]),
    ('echo "hola mundo"', ["echo", "hola mundo"]),
    ("  a   b ", ["a", "b"]),
    ('echo "open', ["echo", "open"]),
    ("", []),
    ('"x"y', ["x", "y"]),
])
def test_parse_args(command, expected):
    assert parse_args(command) == expected


def test_split_pipeline_keeps_spaces():
    assert split_pipeline("a | b") == ["a ", " b"]


def test_split_pipeline_drops_empty_segments():
    assert split_pipeline("a||b|") == ["a", "b"]


def test_split_pipeline_empty_line():
    assert split_pipeline("") == []


def test_run_single_command(capfd):
    codes = run_pipeline(f'{PY} -c "print(1+1)"')
    assert codes == [0]
    assert capfd.readouterr().out.strip() == "2"


def test_run_two_stage_pipeline(capfd):
    line = (
        f'{PY} -c "print(\'abc\')" | '
        f'{PY} -c "import sys; sys.stdout.write(sys.stdin.read().upper())"'
    )
    codes = run_pipeline(line)
    assert codes == [0, 0]
    assert capfd.readouterr().out == "ABC\n"


def test_exit_codes_are_reported_in_order(capfd):
    line = f'{PY} -c "raise SystemExit(3)" | {PY} -c "pass"'
    assert run_pipeline(line) == [3, 0]


def test_missing_program_reports_execvp(capfd):
    codes = run_pipeline("no-such-program-for-this-shell-xyz")
    assert codes == [1]
    assert "execvp:" in capfd.readouterr().err


def test_failed_stage_gives_next_stage_empty_input(capfd):
    line = (
        "no-such-program-for-this-shell-xyz | "
        f'{PY} -c "import sys; print(len(sys.stdin.read()))"'
    )
    codes = run_pipeline(line)
    assert codes == [1, 0]
    assert capfd.readouterr().out.strip() == "0"


def test_main_quits_on_q(monkeypatch, capfd):
    monkeypatch.setattr(sys, "stdin", io.StringIO("q\n"))
    assert main([]) == 0
    assert capfd.readouterr().out == "Shell> "


def test_main_stops_at_end_of_input(monkeypatch, capfd):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main() == 0
    assert capfd.readouterr().out == "Shell> "


def test_main_runs_command_then_exits(monkeypatch, capfd):
    monkeypatch.setattr(sys, "stdin", io.StringIO(f'{PY} -c "print(42)"\nexit\n'))
    assert main([]) == 0
    out = capfd.readouterr().out
    assert out.count("Shell> ") == 2
    assert "42" in out