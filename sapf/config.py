from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Mapping, Optional

from sapf.brackets import DEFAULT_BRACKET_KIND, resolve_bracket_kind

logger = logging.getLogger(__name__)

# Resolve installation dir (sapf package directory)
_SAPF_DIR = Path(__file__).resolve().parent

# Defaults
DEFAULT_BINARY = "sapf"
DEFAULT_INDENT_SIZE = 2
DEFAULT_LANGUAGE_FILE = _SAPF_DIR / "catalog" / "language.json"
LOCAL_LANGUAGE_FILENAME = "language-local.json"
_DEFAULT_STORAGE_DIR = Path.home() / ".sapf"

INFO_LEVELS = ("off", "minimum", "full")


@dataclass(frozen=True)
class SapfConfig:
    binary_path: str = DEFAULT_BINARY
    prelude_path: str = ""
    storage_dir: Path = _DEFAULT_STORAGE_DIR
    code_block_brackets: str = DEFAULT_BRACKET_KIND
    indent_size: int = DEFAULT_INDENT_SIZE
    completion_info: str = "full"
    hover_info: str = "full"
    # messages for values that were rejected while building this config
    warnings: List[str] = field(default_factory=list, compare=False)

    @property
    def local_language_path(self) -> Path:
        return Path(self.storage_dir) / LOCAL_LANGUAGE_FILENAME

    @property
    def prelude_exists(self) -> bool:
        return bool(self.prelude_path) and Path(self.prelude_path).is_file()

    def with_settings(self, settings: Optional[Mapping[str, Any]]) -> "SapfConfig":
        """Overlay editor settings (camelCase keys, as sent by the client)."""
        if not settings:
            return self
        warnings: List[str] = []
        values = {}
        if settings.get("binaryPath"):
            values["binary_path"] = str(settings["binaryPath"])
        if "preludePath" in settings:
            values["prelude_path"] = str(settings["preludePath"] or "")
        if settings.get("storagePath"):
            values["storage_dir"] = Path(settings["storagePath"])
        if "codeBlockBrackets" in settings:
            values["code_block_brackets"] = _bracket_kind(settings["codeBlockBrackets"], warnings)
        if "indentSize" in settings:
            values["indent_size"] = _indent_size(settings["indentSize"], warnings)
        if "completionInfo" in settings:
            values["completion_info"] = _info_level("completionInfo", settings["completionInfo"], warnings)
        if "hoverInfo" in settings:
            values["hover_info"] = _info_level("hoverInfo", settings["hoverInfo"], warnings)
        return replace(self, warnings=[*self.warnings, *warnings], **values)


def _bracket_kind(value: Any, warnings: List[str]) -> str:
    kind = resolve_bracket_kind(value)
    if kind != value:
        warnings.append(f"Invalid bracket type: {value}, using '{kind}'")
    return kind


def _indent_size(value: Any, warnings: List[str]) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError):
        size = -1
    if size < 0:
        msg = f"Invalid indent size: {value}, using {DEFAULT_INDENT_SIZE}"
        logger.warning(msg)
        warnings.append(msg)
        return DEFAULT_INDENT_SIZE
    return size


def _info_level(name: str, value: Any, warnings: List[str]) -> str:
    if value in INFO_LEVELS:
        return value
    msg = f"Invalid {name} level: {value}, using 'full'"
    logger.warning(msg)
    warnings.append(msg)
    return "full"


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> SapfConfig:
    env = os.environ if environ is None else environ
    warnings: List[str] = []
    storage = env.get("SAPF_STORAGE_PATH")
    return SapfConfig(
        binary_path=env.get("SAPF_BINARY_PATH") or DEFAULT_BINARY,
        prelude_path=env.get("SAPF_PRELUDE_PATH", ""),
        storage_dir=Path(storage) if storage else _DEFAULT_STORAGE_DIR,
        code_block_brackets=_bracket_kind(env.get("SAPF_CODE_BLOCK_BRACKETS", DEFAULT_BRACKET_KIND), warnings),
        indent_size=_indent_size(env.get("SAPF_INDENT_SIZE", DEFAULT_INDENT_SIZE), warnings),
        warnings=warnings,
    )
