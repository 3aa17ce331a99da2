from __future__ import annotations

"""
REPL process management for sapf.

A ReplManager owns at most one sapf subprocess. It is started lazily on the
first `send`, fed code over stdin, and its output is forwarded line by line to
a callback from a daemon reader thread (stdout of the language server itself
is the LSP channel, so the REPL must never inherit it).
"""

import logging
import subprocess
import threading
from pathlib import Path
from typing import Callable, List, Optional

from sapf.errors import SapfReplError

logger = logging.getLogger(__name__)

OutputCallback = Callable[[str], None]

# Fixed commands understood by the sapf REPL
STANDARD_COMMANDS = ("stop", "clear", "cleard", "quit")


class ReplManager:
    def __init__(self, binary_path: str = "sapf", prelude_path: str = "",
                 on_output: Optional[OutputCallback] = None,
                 on_warning: Optional[OutputCallback] = None):
        self.binary_path = binary_path
        self.prelude_path = prelude_path
        self.on_output = on_output
        self.on_warning = on_warning
        self._proc: Optional[subprocess.Popen] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    def command(self) -> List[str]:
        args = [self.binary_path]
        if self.prelude_path:
            if Path(self.prelude_path).is_file():
                args += ["-p", self.prelude_path]
            else:
                self._warn(f"Prelude file not found: {self.prelude_path}")
        return args

    def ensure(self) -> subprocess.Popen:
        """Return the running REPL process, starting it if necessary."""
        with self._lock:
            if self.running:
                return self._proc
            args = self.command()
            logger.info("starting sapf REPL: %s", " ".join(args))
            try:
                proc = subprocess.Popen(
                    args,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    bufsize=1,
                )
            except OSError as ex:
                raise SapfReplError(f"Failed to start SAPF: {ex}") from ex
            self._proc = proc
            threading.Thread(target=self._pump_output, args=(proc,), daemon=True).start()
            return proc

    def send(self, code: str) -> None:
        proc = self.ensure()
        try:
            proc.stdin.write(code if code.endswith("\n") else code + "\n")
            proc.stdin.flush()
        except (BrokenPipeError, OSError, ValueError) as ex:
            with self._lock:
                self._proc = None
            raise SapfReplError(f"Failed to send code to SAPF: {ex}") from ex

    def dispose(self, timeout: float = 2.0) -> None:
        with self._lock:
            proc, self._proc = self._proc, None
        if proc is None:
            return
        try:
            if proc.stdin:
                proc.stdin.close()
        except OSError as ex:
            logger.debug("closing REPL stdin: %s", ex)
        if proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                proc.kill()
                proc.wait()
        logger.info("sapf REPL stopped")

    def _pump_output(self, proc: subprocess.Popen) -> None:
        for line in proc.stdout:
            if self.on_output is not None:
                self.on_output(line.rstrip("\n"))
        logger.debug("sapf REPL output closed (exit code %s)", proc.poll())

    def _warn(self, message: str) -> None:
        logger.warning(message)
        if self.on_warning is not None:
            self.on_warning(message)
