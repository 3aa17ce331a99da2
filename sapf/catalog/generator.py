from __future__ import annotations

"""
Regenerates the function catalog by asking the sapf binary for `helpall`.

This is the only place where catalog regeneration can fail: a missing prelude
file, a missing binary, a timeout or a non-zero exit all raise
SapfGenerationError. Nothing is persisted here.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from sapf.catalog.help_parser import parse_help_output
from sapf.errors import SapfGenerationError
from sapf.types.catalog import Catalog

logger = logging.getLogger(__name__)

HELP_SCRIPT = "helpall\nquit\n"
DEFAULT_TIMEOUT = 30.0


def sapf_command(binary_path: str, prelude_path: Optional[str] = None) -> List[str]:
    args = [binary_path]
    if prelude_path:
        if not Path(prelude_path).is_file():
            raise SapfGenerationError(f"Prelude file not found: {prelude_path}")
        args += ["-p", prelude_path]
    return args


def capture_help_output(binary_path: str, prelude_path: Optional[str] = None,
                        timeout: float = DEFAULT_TIMEOUT) -> str:
    args = sapf_command(binary_path, prelude_path)
    logger.info("running %s", " ".join(args))
    try:
        proc = subprocess.run(
            args,
            input=HELP_SCRIPT,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as ex:
        raise SapfGenerationError(f"sapf binary not found: {binary_path}") from ex
    except subprocess.TimeoutExpired as ex:
        raise SapfGenerationError(f"sapf did not finish within {timeout:g}s") from ex
    except OSError as ex:
        raise SapfGenerationError(f"Failed to run {binary_path}: {ex}") from ex

    if proc.returncode != 0:
        raise SapfGenerationError(
            f"Process exited with code {proc.returncode}. stderr: {proc.stderr.strip()}"
        )
    return proc.stdout


def generate_catalog(binary_path: str, prelude_path: Optional[str] = None,
                     timeout: float = DEFAULT_TIMEOUT) -> Catalog:
    output = capture_help_output(binary_path, prelude_path, timeout)
    catalog = parse_help_output(output)
    if catalog.function_count() == 0:
        raise SapfGenerationError("No function definitions found in sapf help output")
    logger.info("parsed %d functions in %d categories", catalog.function_count(), len(catalog))
    return catalog
