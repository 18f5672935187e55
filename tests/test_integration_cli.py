"""Integration tests for CLI functionality."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from polysolver_pkg import cli
from polysolver_pkg.cli import main_entry

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_cli_eval_human(capsys):
    assert main_entry(["-e", "2+2"]) == 0
    assert capsys.readouterr().out.strip() == "4"


def test_cli_positional_expression(capsys):
    assert main_entry(["equation(x^2-5x+6=0)"]) == 0
    assert capsys.readouterr().out.strip() == "x1 = 2, x2 = 3"


def test_cli_error_exit_code(capsys):
    assert main_entry(["-e", "1/0"]) == 1
    assert capsys.readouterr().out.strip() == "Error: Division by zero"


def test_cli_eval_json(capsys):
    assert main_entry(["-e", "equation2(x+y=5,x-y=1)", "--format", "json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is True
    assert data["type"] == "system"
    assert data["roots"] == ["3", "2"]
    assert data["input"] == "equation2(x+y=5,x-y=1)"


def test_cli_json_error(capsys):
    assert main_entry(["-e", "equation(5=0)", "--format", "json"]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is False
    assert data["error_code"] == "NO_VARIABLE"


def test_cli_fractions(capsys):
    assert main_entry(["--fractions", "-e", "1/4"]) == 0
    assert capsys.readouterr().out.strip() == "1/4"


def test_cli_precision(capsys):
    assert main_entry(["-p", "3", "-e", "1/3"]) == 0
    assert capsys.readouterr().out.strip() == "0.333"


def test_cli_numeric_method(capsys):
    assert main_entry(["--method", "numeric", "--format", "json", "-e", "equation(x^2-1=0)"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["method"] == "closed_form"
    assert data["iterations"] == 1


def test_cli_version(capsys):
    assert main_entry(["--version"]) == 0
    assert capsys.readouterr().out.strip() != ""


def test_cli_health_check(capsys):
    assert main_entry(["--health-check"]) == 0
    out = capsys.readouterr().out
    assert "SymPy" in out
    assert "Health check passed" in out


def test_repl_session(monkeypatch, capsys):
    lines = iter(["2+3", "", "equation(2x-3=7)", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert main_entry([]) == 0
    out = capsys.readouterr().out
    assert "5\n" in out
    assert "x = 5\n" in out
    assert out.rstrip().endswith("Goodbye.")


def test_repl_end_of_input(monkeypatch, capsys):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    cli.repl_loop()
    assert "Goodbye." in capsys.readouterr().out


def test_cli_log_file(tmp_path, capsys):
    log_file = tmp_path / "polysolver.log"
    assert main_entry(["--log-level", "DEBUG", "--log-file", str(log_file), "-e", "1/0"]) == 1
    capsys.readouterr()
    assert "DIVISION_BY_ZERO" in log_file.read_text()
    main_entry(["--log-level", "WARNING", "-e", "1"])


@pytest.mark.slow
def test_cli_module_entry_point():
    result = subprocess.run(
        [sys.executable, "-m", "polysolver_pkg", "--eval", "2+2"],
        capture_output=True,
        text=True,
        timeout=60,
        cwd=REPO_ROOT,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "4"
