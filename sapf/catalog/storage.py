from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from sapf.catalog.keyword_index import KeywordIndex
from sapf.config import DEFAULT_LANGUAGE_FILE
from sapf.types.catalog import Catalog, LanguageData

logger = logging.getLogger(__name__)

JSON_INDENT = 2

PathLike = Union[str, Path]


def save_language_data(catalog: Catalog, path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # write beside the target first so a failed write never leaves half a file
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(catalog.to_language_data(), indent=JSON_INDENT, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path


def load_language_data(path: PathLike) -> LanguageData:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of categories")
    return data


def load_catalog(local_path: Optional[PathLike] = None) -> Catalog:
    """Load the local catalog if present and readable, else the bundled default."""
    if local_path is not None and Path(local_path).is_file():
        try:
            return Catalog.from_language_data(load_language_data(local_path))
        except (OSError, ValueError, AttributeError, TypeError) as ex:
            logger.warning("Failed to read %s (%s), falling back to default definitions", local_path, ex)
    return Catalog.from_language_data(load_language_data(DEFAULT_LANGUAGE_FILE))


def load_keyword_index(local_path: Optional[PathLike] = None) -> KeywordIndex:
    return KeywordIndex.from_catalog(load_catalog(local_path))
