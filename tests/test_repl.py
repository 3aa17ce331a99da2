import io
import threading

import pytest

from sapf.errors import SapfReplError
from sapf_lsp import repl as repl_module
from sapf_lsp.repl import ReplManager


class _FakeProc:
    def __init__(self, output=""):
        self.stdin = io.StringIO()
        self.stdout = io.StringIO(output)
        self.returncode = None
        self.terminated = False

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def wait(self, timeout=None):
        return self.returncode

    def kill(self):
        self.returncode = -9


@pytest.fixture
def fake_popen(monkeypatch):
    procs = []

    def popen(args, **kwargs):
        proc = _FakeProc(output="sapf> ok\n")
        proc.args = args
        procs.append(proc)
        return proc

    monkeypatch.setattr(repl_module.subprocess, "Popen", popen)
    return procs


def test_send_starts_once_and_writes_lines(fake_popen):
    repl = ReplManager("sapf")
    repl.send("1 2 + .")
    repl.send("stop\n")
    assert len(fake_popen) == 1
    assert fake_popen[0].stdin.getvalue() == "1 2 + .\nstop\n"


def test_output_is_forwarded(fake_popen):
    lines = []
    done = threading.Event()

    def on_output(line):
        lines.append(line)
        done.set()

    ReplManager("sapf", on_output=on_output).ensure()
    assert done.wait(2)
    assert lines == ["sapf> ok"]


def test_prelude_argument(fake_popen, tmp_path):
    prelude = tmp_path / "prelude.txt"
    prelude.write_text("")
    ReplManager("sapf", str(prelude)).ensure()
    assert fake_popen[0].args == ["sapf", "-p", str(prelude)]


def test_missing_prelude_warns_and_starts_without_it(fake_popen, tmp_path):
    warnings = []
    ReplManager("sapf", str(tmp_path / "missing.txt"), on_warning=warnings.append).ensure()
    assert fake_popen[0].args == ["sapf"]
    assert warnings and "Prelude file not found" in warnings[0]


def test_restarts_after_exit(fake_popen):
    repl = ReplManager("sapf")
    repl.ensure()
    fake_popen[0].returncode = 0
    assert not repl.running
    repl.ensure()
    assert len(fake_popen) == 2


def test_dispose(fake_popen):
    repl = ReplManager("sapf")
    repl.ensure()
    repl.dispose()
    assert fake_popen[0].terminated
    assert not repl.running
    repl.dispose()  # no process: nothing to do


def test_missing_binary(monkeypatch):
    def popen(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(repl_module.subprocess, "Popen", popen)
    with pytest.raises(SapfReplError, match="Failed to start SAPF"):
        ReplManager("nosuch-sapf").send("1")


def test_broken_pipe(fake_popen):
    repl = ReplManager("sapf")
    repl.ensure()
    fake_popen[0].stdin.close()
    with pytest.raises(SapfReplError, match="Failed to send code"):
        repl.send("1")
    assert not repl.running
