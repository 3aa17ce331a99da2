import subprocess

import pytest

from sapf.catalog import generator
from sapf.catalog.cli import main as cli_main
from sapf.catalog.generator import capture_help_output, generate_catalog, sapf_command
from sapf.errors import SapfGenerationError


class _FakeRun:
    def __init__(self, stdout="", returncode=0, stderr="", exc=None):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.exc = exc
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(args, self.returncode, self.stdout, self.stderr)


def test_sapf_command(tmp_path):
    prelude = tmp_path / "prelude.txt"
    prelude.write_text("")
    assert sapf_command("sapf") == ["sapf"]
    assert sapf_command("sapf", str(prelude)) == ["sapf", "-p", str(prelude)]


def test_missing_prelude_is_an_error(tmp_path):
    with pytest.raises(SapfGenerationError, match="Prelude file not found"):
        sapf_command("sapf", str(tmp_path / "missing.txt"))


def test_capture_sends_helpall(monkeypatch, help_output):
    fake = _FakeRun(stdout=help_output)
    monkeypatch.setattr(generator.subprocess, "run", fake)
    assert capture_help_output("sapf") == help_output
    args, kwargs = fake.calls[0]
    assert args == ["sapf"]
    assert kwargs["input"] == "helpall\nquit\n"


def test_generate_catalog(monkeypatch, help_output):
    monkeypatch.setattr(generator.subprocess, "run", _FakeRun(stdout=help_output))
    assert generate_catalog("sapf").function_count() == 9


@pytest.mark.parametrize(
    "fake,message",
    [
        (_FakeRun(returncode=2, stderr="boom"), "exited with code 2"),
        (_FakeRun(exc=FileNotFoundError("sapf")), "binary not found"),
        (_FakeRun(exc=subprocess.TimeoutExpired("sapf", 1)), "did not finish"),
        (_FakeRun(exc=PermissionError("denied")), "Failed to run"),
        (_FakeRun(stdout="no marker here"), "No function definitions"),
    ]
)
def test_generation_failures(monkeypatch, fake, message):
    monkeypatch.setattr(generator.subprocess, "run", fake)
    with pytest.raises(SapfGenerationError, match=message):
        generate_catalog("sapf")


def test_cli_writes_language_file(monkeypatch, tmp_path, help_output, capsys):
    monkeypatch.setattr(generator.subprocess, "run", _FakeRun(stdout=help_output))
    monkeypatch.delenv("SAPF_PRELUDE_PATH", raising=False)
    out = tmp_path / "language.json"
    assert cli_main(["-b", "sapf", "-o", str(out)]) == 0
    printed = capsys.readouterr().out
    assert "math functions: 5 functions" in printed
    assert "Total functions: 9" in printed
    assert out.is_file()


def test_cli_reports_errors(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(generator.subprocess, "run", _FakeRun(exc=FileNotFoundError("sapf")))
    assert cli_main(["-b", "nosuch", "-p", "", "-o", str(tmp_path / "x.json")]) == 1
    assert "Error:" in capsys.readouterr().err
    assert not (tmp_path / "x.json").exists()
