from __future__ import annotations

"""
Flat, case-insensitive view of a Catalog used for hover and completion.

A KeywordIndex is never updated in place: regenerating or removing the
catalog builds a new index and the owner swaps its reference.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from sapf.types.catalog import Catalog, LanguageData
from sapf.types.function_entry import FunctionEntry

logger = logging.getLogger(__name__)


class KeywordIndex(Mapping[str, FunctionEntry]):
    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Dict[str, FunctionEntry]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_catalog(cls, catalog: Catalog) -> "KeywordIndex":
        """Index every entry under its lower-cased name.

        Names equal up to case (`N` and `n`) share one key; the entry listed
        last in the catalog wins and the collision is logged at debug level.
        """
        entries: Dict[str, FunctionEntry] = {}
        for entry in catalog.entries():
            key = entry.name.lower()
            shadowed = entries.get(key)
            if shadowed is not None:
                logger.debug("%r (%s) shadows %r (%s) in the keyword index",
                             entry.name, entry.category, shadowed.name, shadowed.category)
            entries[key] = entry
        return cls(entries)

    @classmethod
    def from_language_data(cls, data: LanguageData) -> "KeywordIndex":
        return cls.from_catalog(Catalog.from_language_data(data))

    def __getitem__(self, key: str) -> FunctionEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, word: str) -> Optional[FunctionEntry]:
        return self._entries.get(word.lower())

    def complete(self, prefix: str) -> List[FunctionEntry]:
        """Entries whose name starts with `prefix`, ignoring case."""
        prefix = prefix.lower()
        return [e for key, e in self._entries.items() if key.startswith(prefix)]

    def __repr__(self):
        return f"KeywordIndex({len(self._entries)} functions)"
