from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping

from sapf.types.function_entry import FunctionEntry

# Wire format of persisted catalogs:
#   {"<category>": {"items": {"<function name>": "<@tag (sig) description>"}}}
LanguageData = Dict[str, Dict[str, Dict[str, str]]]


@dataclass
class Catalog:
    """Functions grouped by category, in the order sapf lists them.

    Adding a name that already exists in a category replaces that entry in
    place, so repeated banners (or merging the same parse twice) never
    duplicate entries.
    """
    categories: Dict[str, List[FunctionEntry]] = field(default_factory=dict)

    def category(self, name: str) -> List[FunctionEntry]:
        return self.categories.setdefault(name, [])

    def add(self, entry: FunctionEntry) -> None:
        entries = self.category(entry.category)
        for i, existing in enumerate(entries):
            if existing.name == entry.name:
                entries[i] = entry
                return
        entries.append(entry)

    def merge(self, other: "Catalog") -> "Catalog":
        """Category union of both catalogs as a new Catalog; neither operand changes."""
        merged = Catalog({name: list(entries) for name, entries in self.categories.items()})
        for name, entries in other.categories.items():
            merged.category(name)
            for entry in entries:
                merged.add(entry)
        return merged

    def entries(self) -> Iterator[FunctionEntry]:
        for entries in self.categories.values():
            yield from entries

    def function_count(self) -> int:
        return sum(len(entries) for entries in self.categories.values())

    def __getitem__(self, name: str) -> List[FunctionEntry]:
        return self.categories[name]

    def __contains__(self, name: object) -> bool:
        return name in self.categories

    def __iter__(self) -> Iterator[str]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def to_language_data(self) -> LanguageData:
        return {
            name: {"items": {e.name: e.raw_description for e in entries}}
            for name, entries in self.categories.items()
        }

    @classmethod
    def from_language_data(cls, data: Mapping[str, Mapping[str, Mapping[str, str]]]) -> "Catalog":
        # Lazy import: the splitting rule lives with the catalog parsers
        from sapf.catalog.description import entry_from_raw

        catalog = cls()
        for category, body in data.items():
            catalog.category(category)
            for name, raw in (body.get("items") or {}).items():
                catalog.add(entry_from_raw(name, str(raw), category))
        return catalog
