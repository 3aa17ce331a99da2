from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FunctionEntry:
    name: str  # case preserved, as emitted by sapf
    signature: Optional[str]  # "(a b --> c)"
    special: Optional[str]  # e.g. "k", "ak"
    description: str
    category: str

    @property
    def raw_description(self) -> str:
        """The `@tag (sig) description` composite stored in catalog files."""
        parts = []
        if self.special is not None:
            parts.append(f"@{self.special}")
        if self.signature is not None:
            parts.append(self.signature)
        if self.description:
            parts.append(self.description)
        return " ".join(parts)

    @property
    def display_signature(self) -> str:
        special = f"{self.special} " if self.special is not None else ""
        return f"{self.name} {special}{self.signature or '(no signature)'}"
